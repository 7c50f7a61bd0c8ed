from __future__ import annotations

from typing import Any, Optional


class TeamSnapError(Exception):
    """Base error for client failures."""


class TeamSnapParseError(TeamSnapError):
    pass


class TeamSnapHTTPError(TeamSnapError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_text = response_text


class ClientNotInitializedError(TeamSnapError, RuntimeError):
    """Raised when root links are requested before initialize() succeeded."""


class RelationNotFoundError(TeamSnapError, LookupError):
    def __init__(self, rel: str):
        super().__init__(f"No href found for rel: {rel}")
        self.rel = rel


class FieldError(TeamSnapError):
    """
    Base for data extraction failures.
    `fallback` is the zero value for the requested type; it is never a
    partially converted value.
    """

    def __init__(self, message: str, *, name: str, fallback: Any = None):
        super().__init__(message)
        self.name = name
        self.fallback = fallback


class FieldNotFoundError(FieldError, LookupError):
    def __init__(self, name: str, *, fallback: Any = None):
        super().__init__(
            f"No match found for data element {name!r}",
            name=name,
            fallback=fallback,
        )


class FieldConversionError(FieldError, ValueError):
    def __init__(self, name: str, *, value: Any, target: str, fallback: Any = None):
        super().__init__(
            f"Unable to convert data element {name!r} "
            f"({type(value).__name__}) to {target}",
            name=name,
            fallback=fallback,
        )
        self.value = value
        self.target = target


__all__ = [
    "TeamSnapError",
    "TeamSnapParseError",
    "TeamSnapHTTPError",
    "ClientNotInitializedError",
    "RelationNotFoundError",
    "FieldError",
    "FieldNotFoundError",
    "FieldConversionError",
]
