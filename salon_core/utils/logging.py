"""
Logging Configuration

Root logger setup: JSON lines in production, plain text elsewhere.

Call sites attach request context through ``extra`` (tenant_id, admin_id,
request_id, path); the JSON formatter lifts those keys to the top level so
log queries can filter on them.
"""
import logging
import sys
from typing import Any, Dict
import json
from datetime import datetime, timezone

# Context keys lifted into JSON output when a record carries them
CONTEXT_FIELDS = ("tenant_id", "admin_id", "request_id", "event_type", "reason", "path", "method")

# Attribute names LogRecord owns; passing them via ``extra`` raises KeyError
_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(
            (key, getattr(record, key)) for key in CONTEXT_FIELDS if hasattr(record, key)
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure application logging.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON lines instead of plain text

    NOTE: Replaces any handlers already on the root logger.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level.upper())
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JSONFormatter() if json_format else logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    )
    root_logger.addHandler(handler)

    for noisy, level in (
        ("uvicorn.access", logging.WARNING),
        ("sqlalchemy.engine", logging.WARNING),
        ("passlib", logging.ERROR),
    ):
        logging.getLogger(noisy).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_security_event(event_type: str, details: Dict[str, Any], logger: logging.Logger) -> None:
    """
    Record an authentication or authorization decision worth alerting on.

    Event types:
    - failed_login: bad credentials (reason says which check failed)
    - login_throttled: too many failed attempts for one email
    - role_denied: authenticated caller below the route's minimum role
    - tenant_isolation_violation: tenant route reached without a tenant

    Detail keys that clash with LogRecord attributes are prefixed with
    ``detail_`` instead of breaking the log call.
    """
    extra = {"security_event": True, "event_type": event_type}
    for key, value in details.items():
        extra[f"detail_{key}" if key in _RESERVED else key] = value

    logger.warning(f"SECURITY EVENT: {event_type}", extra=extra)
