from __future__ import annotations

import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import Column, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from todoserver.db.models import Base
from todoserver.errors import StoreUnavailable
from todoserver.query import MATCH_ALL, AllOf, Clause, Contains, Equals, OrderingDirective

ModelT = TypeVar("ModelT", bound=Base)

# Documents expose the primary key under this name.
ID_FIELD = "_id"


@contextmanager
def store_call() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreUnavailable() from exc


class DocumentRepository(Generic[ModelT]):  # noqa: UP046
    """Find/insert/delete over one table, addressed by document field names."""

    def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    def column_for(self, field: str) -> Column[Any] | None:
        name = "id" if field == ID_FIELD else field
        return self.model.__table__.columns.get(name)

    def _clause(self, clause: Clause) -> ColumnElement[bool]:
        column = self.column_for(clause.field)
        if column is None:
            raise ValueError(f"{self.model.__tablename__} has no field {clause.field!r}")
        if isinstance(clause, Contains):
            if clause.ignore_case:
                return column.icontains(clause.value, autoescape=True)
            return column.contains(clause.value, autoescape=True)
        if isinstance(clause, Equals):
            return column == clause.value
        raise TypeError(f"unsupported clause {clause!r}")

    def _order_by(self, ordering: OrderingDirective) -> list[ColumnElement[Any]]:
        id_column = self.model.__table__.c.id
        columns = [id_column]
        # Unknown fields sort like a missing document field: all equal.
        column = self.column_for(ordering.field)
        if column is not None and column is not id_column:
            columns.insert(0, column)
        if ordering.descending:
            return [c.desc() for c in columns]
        return [c.asc() for c in columns]

    async def find(
        self,
        predicate: AllOf = MATCH_ALL,
        ordering: OrderingDirective | None = None,
    ) -> list[ModelT]:
        stmt = select(self.model).where(*(self._clause(c) for c in predicate.clauses))
        if ordering is not None:
            stmt = stmt.order_by(*self._order_by(ordering))
        with store_call():
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def find_one(self, id_: uuid.UUID) -> ModelT | None:
        with store_call():
            return await self.session.get(self.model, id_)

    async def insert_one(self, values: Mapping[str, Any]) -> uuid.UUID:
        obj = self.model(**values)
        with store_call():
            self.session.add(obj)
            await self.session.flush()  # assigns the id
            await self.session.commit()
        return obj.id

    async def delete_one(self, id_: uuid.UUID) -> int:
        stmt = delete(self.model).where(self.model.__table__.c.id == id_)
        with store_call():
            result = await self.session.execute(stmt)
            await self.session.commit()
        return result.rowcount or 0
