"""
Logging Configuration
Sets up the ``meshrefine`` logger for applications embedding the library.
"""
import logging
import sys
from typing import Optional

from meshrefine.config import LOG_LEVEL


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'meshrefine' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG). Defaults to ``config.LOG_LEVEL``.
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = LOG_LEVEL

    logger = logging.getLogger("meshrefine")
    logger.setLevel(level)

    # Avoid duplicate output when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
