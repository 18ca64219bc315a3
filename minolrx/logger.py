"""
Logging utilities for the minolrx package.

This module provides a colorized logger used to trace frame recovery
(sync search, length checks, checksum verification) while debugging a
receiver chain.
"""

import logging
import sys


class ColorFormatter(logging.Formatter):
    """
    Logging formatter that adds ANSI color codes to the log levels.
    """

    CYAN = "\x1b[36;20m"
    GREEN = "\x1b[32;20m"
    YELLOW = "\x1b[33;20m"
    RED = "\x1b[31;20m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"
    FORMAT = "%(asctime)s [%(levelname)s] [%(name)s/%(filename)s] %(message)s"

    LEVEL_COLORS = {
        logging.DEBUG: CYAN,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        log_color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        formatter = logging.Formatter(
            f"{log_color}{self.FORMAT}{self.RESET}",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        return formatter.format(record)


def get_logger(name: str = "minolrx") -> logging.Logger:
    """
    Returns a logger instance for the decoder.

    A StreamHandler with the colorized formatter is attached only the first
    time a given logger is requested.

    Args:
        name: Name of the logger.

    Returns:
        A configured logging.Logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ColorFormatter())
        logger.addHandler(handler)

    return logger


# Default logger for the package
logger = get_logger()


def set_log_level(level):
    """
    Sets the log level for the minolrx logger.

    Args:
        level: logging.DEBUG, logging.INFO, etc. or string "DEBUG", "INFO", etc.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logger.setLevel(level)
