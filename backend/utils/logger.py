"""
Logging utilities
"""

import logging
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).parent.parent))
from config import settings


def configure_logging(log_file: str = "backend.log") -> logging.Logger:
    """
    Setup the root logger with console and file handlers.

    Args:
        log_file: Log file name (relative to LOGS_DIR), used when LOG_TO_FILE is on

    Returns:
        Configured root logger
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, settings.LOG_LEVEL))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    # Format
    formatter = logging.Formatter(settings.LOG_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if settings.LOG_TO_FILE:
        file_path = settings.LOGS_DIR / log_file
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
