"""Transport-free core of teamsnap: errors, link resolution, config, logging."""

from .config import (
    ROOT_URL,
    MissingAuthTokenError,
    TeamSnapConfig,
    load_env_config,
)
from .errors import (
    ClientNotInitializedError,
    FieldConversionError,
    FieldError,
    FieldNotFoundError,
    RelationNotFoundError,
    TeamSnapError,
    TeamSnapHTTPError,
    TeamSnapParseError,
)
from .links import find_href, find_link, rels
from .logging import LogfmtFormatter, setup_logging
from .observability import log_event

__all__ = [
    # Exceptions
    "TeamSnapError",
    "TeamSnapParseError",
    "TeamSnapHTTPError",
    "ClientNotInitializedError",
    "RelationNotFoundError",
    "FieldError",
    "FieldNotFoundError",
    "FieldConversionError",
    # Link resolution
    "find_link",
    "find_href",
    "rels",
    # Config helpers
    "ROOT_URL",
    "MissingAuthTokenError",
    "TeamSnapConfig",
    "load_env_config",
    # Logging
    "LogfmtFormatter",
    "setup_logging",
    "log_event",
]
