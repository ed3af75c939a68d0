"""Turn list-request query parameters into a store predicate and ordering.

The predicate types here are store-agnostic; the repository layer decides how
each clause is expressed in SQL.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from todoserver.errors import BadFilterValue
from todoserver.validation import MAX_STORED_INTEGER, MIN_STORED_INTEGER

SORT_BY_PARAM = "sortby"
SORT_ORDER_PARAM = "sortorder"
DESCENDING_TOKEN = "desc"

# ASCII digits only; int() alone also accepts "1_000" and other scripts.
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Equals:
    field: str
    value: object


@dataclass(frozen=True)
class Contains:
    """Literal substring match; the store escapes any pattern characters."""

    field: str
    value: str
    ignore_case: bool = True


Clause = Equals | Contains


@dataclass(frozen=True)
class AllOf:
    clauses: tuple[Clause, ...] = ()


MATCH_ALL = AllOf()


@dataclass(frozen=True)
class OrderingDirective:
    field: str
    descending: bool = False


class FilterKind(enum.StrEnum):
    exact = "exact"
    boolean = "boolean"
    integer = "integer"
    pattern = "pattern"


@dataclass(frozen=True)
class FilterField:
    name: str
    kind: FilterKind


def _parse_boolean(param: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise BadFilterValue(param, raw, "true or false")


def _parse_integer(param: str, raw: str) -> int:
    text = raw.strip()
    if _INTEGER_PATTERN.fullmatch(text) is None:
        raise BadFilterValue(param, raw, "an integer")
    value = int(text)
    if not MIN_STORED_INTEGER <= value <= MAX_STORED_INTEGER:
        raise BadFilterValue(param, raw, "a 64-bit integer")
    return value


_CLAUSE_BUILDERS: dict[FilterKind, Callable[[str, str], Clause]] = {
    FilterKind.exact: lambda name, raw: Equals(name, raw),
    FilterKind.boolean: lambda name, raw: Equals(name, _parse_boolean(name, raw)),
    FilterKind.integer: lambda name, raw: Equals(name, _parse_integer(name, raw)),
    FilterKind.pattern: lambda name, raw: Contains(name, raw),
}


def build_filter(params: Mapping[str, str], fields: Sequence[FilterField]) -> AllOf:
    """AND together one clause per recognised parameter.

    Parameters that are not in ``fields`` are ignored. Raises
    :class:`BadFilterValue` when a recognised value does not parse.
    """
    clauses = [
        _CLAUSE_BUILDERS[field.kind](field.name, params[field.name])
        for field in fields
        if field.name in params
    ]
    if not clauses:
        return MATCH_ALL
    return AllOf(tuple(clauses))


def resolve_ordering(
    sort_by: str | None,
    sort_order: str | None,
    *,
    default_field: str,
) -> OrderingDirective:
    # Anything other than exactly "desc" sorts ascending.
    return OrderingDirective(
        field=sort_by if sort_by else default_field,
        descending=sort_order == DESCENDING_TOKEN,
    )


def ordering_from_params(params: Mapping[str, str], *, default_field: str) -> OrderingDirective:
    return resolve_ordering(
        params.get(SORT_BY_PARAM),
        params.get(SORT_ORDER_PARAM),
        default_field=default_field,
    )
