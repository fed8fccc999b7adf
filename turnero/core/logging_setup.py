from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

from turnero.core.config import LOG_LEVEL
from turnero.core.request_context import current_request_context

_SECRET_KEYS = ("password", "secret", "admin_session", "token")
_SECRET_PATTERN = re.compile(
    r"((?:%s)\s*[:=]\s*)([^\s\",};]+)" % "|".join(_SECRET_KEYS),
    re.IGNORECASE,
)
_EXTRA_FIELDS = ("endpoint", "method", "status_code", "professional_id", "appointment_ids")


def mask_sensitive(value: str) -> str:
    return _SECRET_PATTERN.sub(r"\1***", value)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, enriched with the current request context."""

    def format(self, record: logging.LogRecord) -> str:
        context = current_request_context()
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": mask_sensitive(record.getMessage()),
            "request_id": getattr(record, "request_id", None) or context.request_id,
            "tenant_id": getattr(record, "tenant_id", None) or context.tenant_id,
            "admin_id": getattr(record, "admin_id", None) or context.admin_id,
            "duration_ms": getattr(record, "duration_ms", None),
        }
        entry.update(
            {field: getattr(record, field) for field in _EXTRA_FIELDS if getattr(record, field, None) is not None}
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class _JsonStreamHandler(logging.StreamHandler):
    pass


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install the JSON handler on the root logger; calling it again replaces it."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _JsonStreamHandler)]:
        root.removeHandler(existing)

    handler = _JsonStreamHandler()
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "alembic"):
        logging.getLogger(name).setLevel(level)
