# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Updated: 2026-02-02
# Description: logging_utils.py
# -----------------------------------------------------------------------------
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog

BASE_LOGGER_NAME = "product_search"

_DATEFMT = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

_MESSAGE_COLORS = {
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "light_red",
    "CRITICAL": "red",
}


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "y", "on")


def _console_handler() -> logging.Handler:
    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=(
                "%(log_color)s%(asctime)s [%(levelname)s] "
                "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
            ),
            datefmt=_DATEFMT,
            log_colors=_LEVEL_COLORS,
            secondary_log_colors={"message": _MESSAGE_COLORS},
            style="%",
        )
    )
    return handler


def _file_handler() -> logging.Handler:
    """Size-rotated plain-text log; enabled with PS_LOG_TO_FILE=1."""
    log_path = Path(os.getenv("PS_LOG_FILE", "./logs/product_search.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=int(os.getenv("PS_LOG_MAX_BYTES", str(5 * 1024 * 1024))),  # 5MB
        backupCount=int(os.getenv("PS_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
            datefmt=_DATEFMT,
        )
    )
    return handler


def _create_logger(full_name: str) -> logging.Logger:
    """
    Configure a named logger once: coloured console output, optional
    rotating file, level from PS_LOG_LEVEL. Later calls return it as is.
    """
    logger = logging.getLogger(full_name)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    if _flag("PS_LOG_TO_FILE", "0"):
        logger.addHandler(_file_handler())

    level_name = os.getenv("PS_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Generic logger that does not include a class name.
    """
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _create_logger(full_name)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Returns a logger whose name includes module + class, e.g.:

      product_search.loader.BatchLoader.BatchLoader
      product_search.cache.CacheCoordinator.CacheCoordinator
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return get_logger(f"{module}.{classname}")
