"""Process-wide logging setup.

``LOG_FORMAT=text`` gives one human-readable line per record;
``LOG_FORMAT=json`` gives one JSON object per line for log shippers.
Only the ``ps.*`` loggers follow ``LOG_LEVEL``; uvicorn access lines and
SQLAlchemy engine chatter are kept at WARNING.
"""

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

TEXT_LINE = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"


class JsonLineFormatter(logging.Formatter):
    """Render a record as a single JSON object (UTC ISO timestamp)."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _logger(level: str) -> dict[str, Any]:
    return {"handlers": ["stderr"], "level": level, "propagate": False}


def build_logging_config(level: str = "INFO", fmt: str = "text") -> dict[str, Any]:
    formatter: dict[str, Any] = (
        {"()": JsonLineFormatter} if fmt.lower() == "json" else {"format": TEXT_LINE}
    )
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"ps": formatter},
        "handlers": {
            "stderr": {"class": "logging.StreamHandler", "formatter": "ps"},
        },
        "loggers": {
            "ps": _logger(level),
            "uvicorn": _logger(level),
            "uvicorn.access": _logger("WARNING"),
            "sqlalchemy.engine": _logger("WARNING"),
        },
    }


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    logging.config.dictConfig(build_logging_config(level, fmt))
