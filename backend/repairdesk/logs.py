"""Package-wide logger shared by handlers and the RPC facade."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOGGER_NAME = "repairdesk"
LOG_FILE_NAME = "repairdesk.log"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """Attach console (and optionally rotating file) handlers to the package logger.

    Calling this more than once is harmless: handlers are only attached the
    first time, later calls just adjust the level.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if logger.handlers:
        return logger

    formatter = _build_formatter()

    if log_dir:
        try:
            directory = Path(log_dir)
            directory.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                directory / LOG_FILE_NAME,
                maxBytes=1_000_000,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except (OSError, PermissionError) as exc:
            print(
                f"Warning: unable to initialize log file in '{log_dir}': {exc}",
                file=sys.stderr,
            )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


log = logging.getLogger(LOGGER_NAME)
