"""
Unit tests for logging setup.
"""

import json
import logging

from app.core.config import LogFormatEnum, LogLevelEnum
from app.core.logging_config import JsonFormatter, setup_logging


class TestJsonFormatter:
    def test_formats_record_as_json(self):
        record = logging.LogRecord(
            "app.test", logging.WARNING, __file__, 1, "stored %s", ("x",), None
        )

        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "WARNING"
        assert payload["logger"] == "app.test"
        assert payload["message"] == "stored x"
        assert "timestamp" in payload


class TestSetupLogging:
    def test_applies_level_and_format(self):
        root = logging.getLogger()
        previous_handlers, previous_level = root.handlers[:], root.level
        try:
            setup_logging(LogLevelEnum.DEBUG, LogFormatEnum.json)

            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[-1].formatter, JsonFormatter)
        finally:
            root.handlers[:] = previous_handlers
            root.setLevel(previous_level)
