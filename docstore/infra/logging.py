"""JSON process logging for the document server and the uvicorn loop it runs."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra={"event": ...}`` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - logging interface name
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        payload.update({key: value for key, value in record.__dict__.items() if key not in _RESERVED})
        return json.dumps(payload, default=str)


def configure_logging(default_level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """Send service and uvicorn records through one JSON handler.

    The audit trail in ``log.txt`` is written separately by
    :class:`docstore.infra.storage.AuditLog`; this covers process diagnostics
    only. ``LOG_LEVEL`` overrides ``default_level``, and ``DOCSTORE_ACCESS_LOG=0``
    silences per-request access lines.
    """

    level = getattr(logging, os.getenv("LOG_LEVEL", default_level).upper(), logging.INFO)

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    if os.getenv("DOCSTORE_ACCESS_LOG", "1") == "0":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


__all__ = ["JsonFormatter", "configure_logging"]
