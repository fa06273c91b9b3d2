"""Logging configuration for Reminder Messenger."""

import logging
import sys
from datetime import datetime

from config import LOG_DIR, LOG_LEVEL

# Third-party loggers whose warnings belong in our log file
# (apscheduler reports skipped ticks, discord reports gateway trouble)
LIBRARY_LOGGERS = ("apscheduler", "discord")


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Set up logging to a dated reminders file and, on a terminal, the console."""
    logger = logging.getLogger("reminder_messenger")
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    log_file = LOG_DIR / f"reminders-{datetime.now().strftime('%Y-%m-%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    handlers = [file_handler]

    # Console handler (only when attached to a terminal)
    if sys.stdout is not None and sys.stdout.isatty():
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    for name in LIBRARY_LOGGERS:
        library_logger = logging.getLogger(name)
        library_logger.setLevel(logging.WARNING)
        library_logger.addHandler(file_handler)

    return logger


# Global logger instance
logger = setup_logging()
