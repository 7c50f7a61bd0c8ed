import logging
from typing import Any

LOG_EXTRA_FIELDS = (
    "method",
    "url",
    "rel",
    "status",
    "duration_ms",
    "error_type",
    "version",
    "links",
    "available",
)


class LogfmtFormatter(logging.Formatter):
    """Small logfmt-style formatter that tolerates missing extras."""

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info:
            kv.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        # rel lists, e.g. available=me,teams,events
        if isinstance(val, (list, tuple)):
            val = ",".join(str(v) for v in val)
        if isinstance(val, bool):
            return "true" if val else "false"
        if isinstance(val, (int, float)):
            return str(val)
        s = str(val)
        if not s or " " in s or "=" in s or '"' in s:
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO", logger_name: str = "teamsnap") -> None:
    """
    Attach a logfmt handler to the library logger.
    Calling it twice replaces the handler instead of stacking a second one.
    """

    log = logging.getLogger(logger_name)
    for h in list(log.handlers):
        if isinstance(h.formatter, LogfmtFormatter):
            log.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    log.addHandler(handler)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
