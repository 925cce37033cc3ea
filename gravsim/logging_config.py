#!/usr/bin/env python3
"""Logging configuration for Gravity Sim."""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOGGER_NAME = "gravsim"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Calling this again replaces the handlers installed by a previous call
    instead of stacking duplicates.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); INFO if None
        log_file: Optional path of a rotating log file

    Returns:
        The configured "gravsim" logger
    """
    numeric_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=1048576,  # 1MB
            backupCount=3,
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
