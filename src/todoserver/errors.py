"""Error kinds raised by the resource controllers.

Every error carries the HTTP status it maps to; the web layer translates them
into ``{"detail": ...}`` responses without knowing the individual kinds.
"""

from __future__ import annotations

from collections.abc import Sequence


class ResourceError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class MalformedId(ResourceError):
    status_code = 400

    def __init__(self, resource: str, raw_id: str) -> None:
        self.raw_id = raw_id
        super().__init__(f"The requested {resource} id wasn't a legal id.")


class NotFound(ResourceError):
    status_code = 404

    def __init__(self, resource: str) -> None:
        super().__init__(f"The requested {resource} was not found.")


class BadFilterValue(ResourceError):
    status_code = 400

    def __init__(self, param: str, value: str, expected: str) -> None:
        self.param = param
        self.value = value
        super().__init__(f"Query parameter '{param}' must be {expected}, got {value!r}.")


class ValidationFailed(ResourceError):
    status_code = 400

    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = list(violations)
        super().__init__("; ".join(self.violations))


class StoreUnavailable(ResourceError):
    status_code = 503
    detail = "The data store is unavailable; try again later."
