# tests/test_logging_config.py
"""Tests for logging setup."""

import io
import logging

import pytest

from vita.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_vita_logger():
    logger = logging.getLogger("vita")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    logger.handlers[:] = []
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestSetupLogging:
    def test_formats_records(self):
        stream = io.StringIO()
        setup_logging(logging.INFO, stream=stream)

        logging.getLogger("vita.repository").info("Search returned %d result(s)", 2)

        line = stream.getvalue().strip()
        assert "| INFO     | vita.repository | Search returned 2 result(s)" in line

    def test_level_filters(self):
        stream = io.StringIO()
        setup_logging(logging.WARNING, stream=stream)

        logging.getLogger("vita.pipeline").info("hidden")

        assert stream.getvalue() == ""

    def test_repeat_calls_do_not_duplicate_handlers(self):
        logger = setup_logging(logging.INFO, stream=io.StringIO())
        setup_logging(logging.DEBUG, stream=io.StringIO())

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
