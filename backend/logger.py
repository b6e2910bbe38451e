"""Shared application logger for the DocuIntel backend."""

import logging
import sys

LOGGER_NAME = "docuintel"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    """Configure and return the root backend logger.

    Handlers are attached once; repeated calls only adjust the level.

    Args:
        level: Logging level for the backend logger

    Returns:
        Configured logger instance
    """
    _logger = logging.getLogger(LOGGER_NAME)
    _logger.setLevel(level)

    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _logger.addHandler(handler)

    return _logger


logger = setup_logger()
