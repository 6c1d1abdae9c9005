"""Structured Logging — formatters and root setup for the employee API.

Invariants:
    - Every line carries timestamp, level, logger name, and message
    - Upstream call fields (operation, resource_id, attempt, delay_ms, upstream_status)
      and handler fields (error_code, path) are surfaced when set, in both formats
    - setup_logging is idempotent: re-running replaces its own handler, never stacks
    - httpx request lines are held at WARNING: the client logs each upstream call itself

Design Decisions:
    - Formatters on stdlib logging: no extra dependency for log shipping
    - json for production, text (key=value suffix) for local runs; chosen by LOG_FORMAT
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

EXTRA_FIELDS = (
    "operation", "resource_id", "attempt", "delay_ms",
    "upstream_status", "error_code", "path",
)

_QUIET_LOGGERS = ("httpx", "httpcore")


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line with the upstream call fields appended as key=value."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if not extras:
            return line
        head, sep, tail = line.partition("\n")
        suffix = " ".join(f"{k}={v}" for k, v in extras.items())
        return f"{head} [{suffix}]{sep}{tail}"


class _AppHandler(logging.StreamHandler):
    """Marker subclass so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the app handler on the root logger; fmt is "json" or "text"."""
    handler = _AppHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    for existing in [h for h in logging.root.handlers if isinstance(h, _AppHandler)]:
        logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
