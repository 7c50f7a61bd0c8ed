"""teamsnap package exports."""

from .client import BearerAuth, TeamSnapClient
from .core.config import ROOT_URL, MissingAuthTokenError, TeamSnapConfig
from .core.errors import (
    ClientNotInitializedError,
    FieldConversionError,
    FieldError,
    FieldNotFoundError,
    RelationNotFoundError,
    TeamSnapError,
    TeamSnapHTTPError,
    TeamSnapParseError,
)
from .core.links import find_href, find_link, rels
from .core.logging import setup_logging
from .models import Collection, Data, Item, Link, Response
from .utils.time_parser import TimestampParseError, format_rfc3339, parse_rfc3339

__all__ = [
    # Client
    "TeamSnapClient",
    "BearerAuth",
    "TeamSnapConfig",
    "ROOT_URL",
    # Models
    "Response",
    "Collection",
    "Item",
    "Data",
    "Link",
    # Exceptions
    "TeamSnapError",
    "TeamSnapParseError",
    "TeamSnapHTTPError",
    "ClientNotInitializedError",
    "RelationNotFoundError",
    "FieldError",
    "FieldNotFoundError",
    "FieldConversionError",
    "MissingAuthTokenError",
    "TimestampParseError",
    # Link utilities
    "find_link",
    "find_href",
    "rels",
    # Time utilities
    "parse_rfc3339",
    "format_rfc3339",
    # Logging
    "setup_logging",
]
