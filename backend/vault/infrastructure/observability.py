"""Structured Logging — JSON log lines carrying exchange identifiers.

Invariants:
    - Every line has timestamp, level, logger and message
    - Exchange identifiers (account_id, character_id, operation, error_code,
      receipt_id, path) are emitted only when the record carries them
    - setup_logging replaces root handlers, so repeated startups never duplicate lines

Design Decisions:
    - Stdlib logging with a small JSON formatter: no logging dependency
    - error_extra() is the single place that turns a VaultError into log fields
"""

import json
import logging
from datetime import datetime, timezone

from vault.core.errors import VaultError

EXTRA_FIELDS = (
    "account_id", "character_id", "operation", "error_code",
    "receipt_id", "path",
)
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, record.__dict__[key])
            for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def error_extra(error: VaultError, **fields) -> dict:
    """Log extras for a failed exchange: error code plus whatever context is known."""
    extra = {
        "error_code": error.code,
        "operation": error.context.operation,
        "account_id": error.context.account_id,
        "character_id": error.context.character_id,
    }
    extra.update(fields)
    return {k: v for k, v in extra.items() if v is not None}


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Engine echo is per-statement; too noisy for exchange logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
