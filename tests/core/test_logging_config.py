"""
Logging Setup Tests.

Scenarios:
- One stdout handler at the requested level
- JSON lines stay valid whatever the message holds
- Unknown levels fall back to INFO
"""

import json
import logging
import sys

import pytest

from core.logging_config import JsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def make_record(message, *args, exc_info=None):
    return logging.LogRecord("kucoin", logging.INFO, __file__, 1, message, args, exc_info)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_single_stdout_handler(self, restore_root_logger):
        logger = setup_logging(level="debug")

        assert logger.name == "exchange_services"
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1

    def test_json_format(self, restore_root_logger):
        setup_logging(log_format="json")
        formatter = restore_root_logger.handlers[0].formatter

        line = json.loads(formatter.format(make_record("[kucoin] ready")))

        assert line["level"] == "INFO"
        assert line["logger"] == "kucoin"
        assert line["message"] == "[kucoin] ready"

    def test_text_format(self, restore_root_logger):
        setup_logging(log_format="text")
        formatter = restore_root_logger.handlers[0].formatter

        assert not isinstance(formatter, JsonFormatter)
        assert "| INFO     | kucoin | [kucoin] ready" in formatter.format(make_record("[kucoin] ready"))

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging(level="chatty")

        assert restore_root_logger.level == logging.INFO


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_quotes_and_newlines_stay_valid(self):
        record = make_record('[yobit] rejected: %s', 'Invalid pair "btc_eth"\nretry later')

        line = json.loads(JsonFormatter().format(record))

        assert line["message"] == '[yobit] rejected: Invalid pair "btc_eth"\nretry later'

    def test_exception_included(self):
        try:
            raise ValueError("bad body")
        except ValueError:
            record = make_record("[kucoin] failed", exc_info=sys.exc_info())

        line = json.loads(JsonFormatter().format(record))

        assert "ValueError: bad body" in line["exception"]
