from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

# LogRecord attributes; passing any of these in `extra` raises KeyError.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Structured event on the `teamsnap.observability` logger (or `logger`).
    Fields go into `extra`; ones that would clobber LogRecord attributes are
    dropped.
    """
    log = logger or logging.getLogger("teamsnap.observability")
    log.log(level, event, extra={"event": event, **_clean_fields(fields)})


def log_api_call(
    *,
    method: str,
    url: str,
    rel: Optional[str],
    started: float,
    status: Optional[int] = None,
    error: Optional[BaseException] = None,
) -> None:
    """
    One `api_call` event per round trip. `started` is a perf_counter()
    reading; a transport failure logs status="exception" and its type.
    """
    fields: Dict[str, Any] = {
        "method": method,
        "url": url,
        "rel": rel,
        "duration_ms": int((time.perf_counter() - started) * 1000),
    }
    if error is not None:
        fields["status"] = "exception"
        fields["error_type"] = type(error).__name__
    else:
        fields["status"] = status
    log_event("api_call", **fields)


__all__ = ["log_event", "log_api_call", "RESERVED_LOG_KEYS"]
