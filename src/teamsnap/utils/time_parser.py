from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

# e.g. "2023-01-01T00:00:00Z", "2023-01-01T08:30:00.25+02:00"
RFC3339_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)


class TimestampParseError(ValueError):
    """Raised when a string is not an RFC 3339 timestamp."""


def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp into a timezone-aware datetime.

    Rules:
    - Uppercase "T" separator and an explicit offset ("Z" or +hh:mm) are required.
    - Fractional seconds of any length are accepted; digits past microseconds
      are dropped.
    - Offsets keep their fixed zone; "Z" maps to UTC.
    """
    if not isinstance(value, str):
        raise TimestampParseError(f"Expected a string, got {type(value).__name__}.")

    match = RFC3339_RE.fullmatch(value)
    if not match:
        raise TimestampParseError(f"{value!r} is not an RFC 3339 timestamp.")

    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    tz = _parse_offset(match.group("offset"))
    try:
        return datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            int(fraction),
            tzinfo=tz,
        )
    except ValueError as exc:
        # out-of-range components, e.g. month 13 or second 60
        raise TimestampParseError(f"{value!r} is out of range: {exc}") from exc


def format_rfc3339(value: datetime) -> str:
    """Inverse of parse_rfc3339 for aware datetimes; UTC renders as "Z"."""
    if value.tzinfo is None:
        raise TimestampParseError("Naive datetimes have no RFC 3339 form.")
    text = value.isoformat(timespec="microseconds" if value.microsecond else "seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _parse_offset(token: str) -> timezone:
    if token == "Z":
        return timezone.utc
    sign = -1 if token[0] == "-" else 1
    hours, minutes = int(token[1:3]), int(token[4:6])
    if hours > 23 or minutes > 59:
        raise TimestampParseError(f"Invalid UTC offset {token!r}.")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))
