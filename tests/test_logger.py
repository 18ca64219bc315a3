"""Tests for logger functionality."""

import logging

from minolrx.logger import ColorFormatter, get_logger


def test_logger_set_level():
    """Test setting log level via string."""
    from minolrx import logger

    logger.set_log_level("DEBUG")
    assert logger.logger.level == 10
    logger.set_log_level(logging.INFO)
    assert logger.logger.level == 20


def test_get_logger_adds_single_handler():
    first = get_logger("minolrx.test")
    second = get_logger("minolrx.test")

    assert first is second
    assert len(second.handlers) == 1
    assert isinstance(second.handlers[0].formatter, ColorFormatter)


def test_color_formatter():
    record = logging.LogRecord(
        "minolrx", logging.WARNING, __file__, 1, "sync lost", None, None
    )
    text = ColorFormatter().format(record)

    assert text.startswith(ColorFormatter.YELLOW)
    assert text.endswith(ColorFormatter.RESET)
    assert "[WARNING]" in text
    assert "sync lost" in text
