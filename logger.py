"""Logging configuration for Quandary.

Sets up logging to both a dated log file and the console.
"""

import logging
from datetime import date
from config import Config

LOGGER_NAME = "quandary"


class ConsoleFormatter(logging.Formatter):
    """Plain messages for command output, level-prefixed for warnings and errors."""

    def __init__(self):
        super().__init__("%(message)s")
        self._flagged = logging.Formatter("%(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return self._flagged.format(record)
        return super().format(record)


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = ConsoleFormatter()

    # File handler - logs to quandary-{date}.log
    log_file_path = config.log_dir / f"quandary-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The quandary logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
