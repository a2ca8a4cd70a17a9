"""
Tube Joint Studio - Logging Configuration
Sets up the shared logger namespace for the application.
"""

import logging
import sys

LOGGER_NAME = "tubejoint"


def get_logger(name):
    """Return a child of the application logger for a module name."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(level=logging.INFO, log_file=None):
    """
    Configure the 'tubejoint' logger.

    Args:
        level: Logging level, either an int (logging.DEBUG) or a name ("DEBUG")
        log_file: Optional path to also write logs to
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers when called more than once
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

    logger.info("Logging initialized.")
    return logger
