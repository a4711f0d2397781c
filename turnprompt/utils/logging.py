"""
Logging setup for turnprompt.

Exposes the package-wide ``logger``. The level is read from the
TURNPROMPT_LOG_LEVEL environment variable (defaults to WARNING).
"""

import logging
import os

LOGGER_NAME = "turnprompt"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Create (once) and return the named logger with a stream handler attached."""
    _logger = logging.getLogger(name)
    if not _logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _logger.addHandler(handler)

    level_name = os.getenv("TURNPROMPT_LOG_LEVEL", "WARNING").upper()
    _logger.setLevel(getattr(logging, level_name, logging.WARNING))
    return _logger


logger = get_logger()
