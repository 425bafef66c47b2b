from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from sepa_debit import config

_EXTRA_KEYS = ("service", "message_id", "schema", "batch_id", "reference")


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        # Propagate extra attributes (message_id, schema, batch_id, etc.)
        for key in _EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        return json.dumps(payload, separators=(",", ":"))


class _ServiceFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


def configure_logging(
    fmt: str | None = None,
    *,
    level: str | None = None,
    service_name: str | None = None,
    stream: Any = None,
) -> None:
    """Configure root logger with plain text or JSON output.

    Args:
        fmt: 'json' or 'text'. Defaults to LOG_FORMAT env or 'text'.
        level: log level name. Defaults to LOG_LEVEL env or 'INFO'.
        service_name: optional service label to inject into every log line.
        stream: output stream, stderr unless given. Keeps stdout free for
            the rendered XML when used from the CLI.
    """

    fmt = (fmt or config.LOG_FORMAT).lower()
    root = logging.getLogger()
    root.setLevel((level or config.LOG_LEVEL).upper())

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
        )
    if service_name:
        handler.addFilter(_ServiceFilter(service_name))
    root.addHandler(handler)
