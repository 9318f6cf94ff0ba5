"""
Logging Configuration Module.

This module provides the central logging configuration dictionary for the
application. Every handler carries the PHI sanitizing filter so that no
personal identifier from free-text answers is written in plain text.
"""

import copy
import logging
import logging.config
from pathlib import Path
from typing import Any

from app.core.constants import DETAILED_LOG_FORMAT, LOG_DATE_FORMAT, LOG_FORMAT

# Base configuration; handler levels and file paths are filled in by build_logging_config
LOGGING_CONFIG_BASE: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": LOG_FORMAT,
            "datefmt": LOG_DATE_FORMAT,
        },
        "detailed": {
            "format": DETAILED_LOG_FORMAT,
            "datefmt": LOG_DATE_FORMAT,
        },
    },
    "filters": {
        "phi_sanitizer": {
            "()": "app.core.utils.logging.PHISanitizingFilter",
        },
        "request_context": {
            "()": "app.core.utils.logging.RequestContextFilter",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "standard",
            "filters": ["phi_sanitizer", "request_context"],
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "app": {
            "level": "INFO",
            "handlers": ["console"],
            "propagate": False,
        },
        "uvicorn": {
            "level": "INFO",
            "handlers": ["console"],
            "propagate": False,
        },
        "httpx": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False,
        },
    },
}


def build_logging_config(
    level: str = "INFO",
    log_to_file: bool = False,
    log_dir: str = "logs",
) -> dict[str, Any]:
    """
    Build a ``dictConfig`` dictionary for the given settings.

    Args:
        level: Level name for application loggers and handlers
        log_to_file: Whether to add rotating file handlers
        log_dir: Directory for log files

    Returns:
        A fresh configuration dictionary
    """
    config = copy.deepcopy(LOGGING_CONFIG_BASE)
    config["handlers"]["console"]["level"] = level
    for name in ("app", "uvicorn"):
        config["loggers"][name]["level"] = level

    if log_to_file:
        config["handlers"]["file_handler"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "detailed",
            "filters": ["phi_sanitizer", "request_context"],
            "filename": str(Path(log_dir) / "app.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 10,
            "encoding": "utf8",
        }
        config["handlers"]["error_file_handler"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filters": ["phi_sanitizer", "request_context"],
            "filename": str(Path(log_dir) / "error.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 10,
            "encoding": "utf8",
        }
        for logger_config in config["loggers"].values():
            logger_config["handlers"] = ["console", "file_handler", "error_file_handler"]

    return config


LOGGING_CONFIG = build_logging_config()


def setup_logging(config: dict[str, Any] | None = None) -> None:
    """
    Configure the logging system with the provided configuration or default.

    Args:
        config: Optional logging configuration dictionary to use instead of the default
    """
    if config is None:
        config = LOGGING_CONFIG

    # Create log directories for any file handlers
    for handler in config["handlers"].values():
        filename = handler.get("filename")
        if filename:
            Path(filename).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(config)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured successfully")
