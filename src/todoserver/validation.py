from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from todoserver.errors import ValidationFailed

USER_ROLES = ("admin", "editor", "viewer")

# Signed 64-bit range of the store's INTEGER columns.
MIN_STORED_INTEGER = -(2**63)
MAX_STORED_INTEGER = 2**63 - 1

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9_!#$%&'*+/=?`{|}~^.-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+$")


@dataclass(frozen=True)
class FieldRule:
    field: str
    check: Callable[[Any], bool]
    message: str


def is_non_blank(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_non_empty(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_positive_integer(value: Any) -> bool:
    # bool is an int subclass; JSON true must not count as age 1.
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 < value <= MAX_STORED_INTEGER
    )


def is_user_role(value: Any) -> bool:
    return isinstance(value, str) and value in USER_ROLES


def is_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


TODO_RULES: tuple[FieldRule, ...] = (
    FieldRule("owner", is_non_blank, "Todo must have a non-empty owner"),
    FieldRule("status", is_boolean, "Todo must have a legal status"),
    FieldRule("body", is_non_empty, "Todo must have a non-empty body"),
    FieldRule("category", is_non_empty, "Todo must have a non-empty category"),
)

USER_RULES: tuple[FieldRule, ...] = (
    FieldRule("name", is_non_blank, "User must have a non-empty name"),
    FieldRule("email", is_email, "User must have a legal email"),
    FieldRule("age", is_positive_integer, "User's age must be greater than zero"),
    FieldRule("role", is_user_role, "User must have a legal role"),
    FieldRule("company", is_non_empty, "User must have a non-empty company"),
)


def collect_violations(candidate: Mapping[str, Any], rules: Sequence[FieldRule]) -> list[str]:
    return [rule.message for rule in rules if not rule.check(candidate.get(rule.field))]


def validate(candidate: object, rules: Sequence[FieldRule]) -> dict[str, Any]:
    """Return the ruled fields of ``candidate`` or raise :class:`ValidationFailed`.

    Every rule is evaluated so the caller sees all problems at once. Fields
    without a rule are dropped from the result.
    """
    if not isinstance(candidate, Mapping):
        raise ValidationFailed(["Request body must be a JSON object"])

    violations = collect_violations(candidate, rules)
    if violations:
        raise ValidationFailed(violations)
    return {rule.field: candidate[rule.field] for rule in rules}
