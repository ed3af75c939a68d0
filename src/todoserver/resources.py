from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from todoserver.avatars import avatar_url_for
from todoserver.db.repos import DocumentRepository, TodoRepository, UserRepository
from todoserver.query import FilterField, FilterKind
from todoserver.schemas import StoredDocument, TodoDocument, UserDocument
from todoserver.validation import TODO_RULES, USER_RULES, FieldRule


@dataclass(frozen=True)
class ResourceDefinition:
    name: str
    collection: str
    repository: Callable[[AsyncSession], DocumentRepository[Any]]
    document: type[StoredDocument]
    filter_fields: tuple[FilterField, ...]
    default_sort: str
    rules: tuple[FieldRule, ...]
    # Adds server-derived fields to a validated record before insertion.
    derive: Callable[[dict[str, Any]], dict[str, Any]] | None = None


def _with_avatar(record: dict[str, Any]) -> dict[str, Any]:
    return {**record, "avatar": avatar_url_for(record["email"])}


TODOS = ResourceDefinition(
    name="todo",
    collection="todos",
    repository=TodoRepository,
    document=TodoDocument,
    filter_fields=(
        FilterField("category", FilterKind.exact),
        FilterField("status", FilterKind.boolean),
    ),
    default_sort="owner",
    rules=TODO_RULES,
)

USERS = ResourceDefinition(
    name="user",
    collection="users",
    repository=UserRepository,
    document=UserDocument,
    filter_fields=(
        FilterField("age", FilterKind.integer),
        FilterField("company", FilterKind.pattern),
        FilterField("role", FilterKind.exact),
    ),
    default_sort="name",
    rules=USER_RULES,
    derive=_with_avatar,
)
