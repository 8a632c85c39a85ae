"""JSON logging for the dispatch command.

Each record becomes one JSON line on stderr; stdout is left to the selection
prompt and the command's own output. Dispatch context passed via `extra=`
(repository, workflow, ref, ...) is lifted to top-level keys.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO, Any

# `extra=` keys the dispatcher logs with, in output order.
CONTEXT_FIELDS: tuple[str, ...] = (
    "repo",
    "workflow_id",
    "workflow_name",
    "ref",
    "branch",
    "workflows_root",
    "authenticated_discovery",
    "count",
    "total",
    "dispatchable",
    "command",
)

# HTTP stacks that log every request at DEBUG.
QUIET_LOGGERS: tuple[str, ...] = ("github", "urllib3", "requests")


class JsonFormatter(logging.Formatter):
    """Render a record as `{timestamp, level, logger, message, <context>..., exception?}`."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, stream: IO[str] | None = None) -> None:
    """Send all logging through a single JSON handler at `level` (from LOG_LEVEL)."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.INFO))
