from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .core import links as _links
from .core.errors import FieldConversionError, FieldNotFoundError
from .utils.time_parser import TimestampParseError, parse_rfc3339

# Base-10 literal, optional sign, ASCII digits only (no spaces or underscores)
INT_LITERAL_RE = re.compile(r"[+-]?[0-9]+")
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class ZeroFilledModel(BaseModel):
    """
    JSON null leaves a field at its zero value (empty string or list)
    instead of failing validation.
    """

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        keep = cls.nullable_fields
        return {k: v for k, v in data.items() if v is not None or k in keep}


class Link(ZeroFilledModel):
    rel: str = ""
    href: str = ""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Data(ZeroFilledModel):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"value"})

    name: str = ""
    # str | bool | int | float | None, or whatever shape the server sent
    value: Any = None


class BaseLinkedModel(ZeroFilledModel):
    """Any Collection+JSON object carrying a `links` array."""

    links: List[Link] = Field(default_factory=list)

    def link_href(self, rel: str) -> str:
        return _links.find_href(self.links, rel)

    def find_link(self, rel: str) -> Optional[Link]:
        return _links.find_link(self.links, rel)

    @property
    def rels(self) -> List[str]:
        return _links.rels(self.links)


class Item(BaseLinkedModel):
    href: str = ""
    data: List[Data] = Field(default_factory=list)

    def data_value(self, name: str) -> Any:
        """
        Raw value of the first data entry named `name`.
        Raises FieldNotFoundError if the item has no such entry.
        """
        return self._lookup(name, fallback="")

    def data_value_string(self, name: str) -> str:
        """
        Value rendered as text:
        - strings as-is, booleans as "true"/"false", null as ""
        - numbers truncated toward zero, e.g. 3.7 -> "3"
        """
        value = self._lookup(name, fallback="")

        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(_truncate(name, value, target="str", fallback=""))
        if value is None:
            return ""
        raise FieldConversionError(name, value=value, target="str", fallback="")

    def data_value_int(self, name: str) -> int:
        """
        Value as an integer: base-10 strings within 32-bit range, or numbers
        truncated toward zero. Booleans and null are not integers.
        """
        value = self._lookup(name, fallback=0)

        if isinstance(value, bool) or value is None:
            raise FieldConversionError(name, value=value, target="int", fallback=0)
        if isinstance(value, (int, float)):
            return _truncate(name, value, target="int", fallback=0)
        if isinstance(value, str):
            return _parse_int32(name, value)
        raise FieldConversionError(name, value=value, target="int", fallback=0)

    def data_value_time(self, name: str) -> datetime:
        """
        Value parsed as an RFC 3339 timestamp.
        On failure the error's fallback is the current time, a placeholder
        only.
        """
        value = self._lookup(name, fallback=_now())

        if isinstance(value, str):
            try:
                return parse_rfc3339(value)
            except TimestampParseError as exc:
                raise FieldConversionError(
                    name, value=value, target="datetime", fallback=_now()
                ) from exc
        raise FieldConversionError(
            name, value=value, target="datetime", fallback=_now()
        )

    def _lookup(self, name: str, *, fallback: Any) -> Any:
        for entry in self.data:
            if entry.name == name:
                return entry.value
        raise FieldNotFoundError(name, fallback=fallback)


class Collection(BaseLinkedModel):
    version: str = ""
    href: str = ""
    rel: str = ""
    items: List[Item] = Field(default_factory=list)


class Response(BaseModel):
    collection: Collection

    model_config = ConfigDict(extra="ignore")

    @property
    def items(self) -> List[Item]:
        return self.collection.items

    @property
    def links(self) -> List[Link]:
        return self.collection.links


def _truncate(name: str, value: float, *, target: str, fallback: Any) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        raise FieldConversionError(
            name, value=value, target=target, fallback=fallback
        )
    return int(value)


def _parse_int32(name: str, text: str) -> int:
    if not INT_LITERAL_RE.fullmatch(text):
        raise FieldConversionError(name, value=text, target="int", fallback=0)
    try:
        parsed = int(text, 10)
    except ValueError as exc:
        # digit strings past the interpreter's int conversion limit
        raise FieldConversionError(
            name, value=text, target="int", fallback=0
        ) from exc
    if not INT32_MIN <= parsed <= INT32_MAX:
        raise FieldConversionError(name, value=text, target="int", fallback=0)
    return parsed


def _now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["Link", "Data", "BaseLinkedModel", "Item", "Collection", "Response"]
