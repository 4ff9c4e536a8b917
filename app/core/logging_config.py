"""Logging setup for the File Vault application."""

import json
import logging
import sys
from datetime import datetime, timezone

from app.core.config import LogFormatEnum, settings


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level=None, log_format=None) -> None:
    """
    Configures the root logger for the application.
    Call once at startup; repeated calls replace the existing handler.
    """
    level = level or settings.log_level
    log_format = log_format or settings.log_format

    handler = logging.StreamHandler(sys.stdout)
    if log_format == LogFormatEnum.json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - [%(levelname)s] - %(message)s")
        )

    logging.basicConfig(level=getattr(level, "value", level), handlers=[handler], force=True)
    # Silence noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
