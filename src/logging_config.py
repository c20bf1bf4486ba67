"""Centralized logging configuration for Music Tutor.

All modules obtain their loggers through :func:`get_logger` so that the
per-subsystem levels configured here apply uniformly.
"""

import logging
import logging.config
import sys
from typing import Any, Dict, Optional

from .config import get_config


def get_logging_config(level_override: Optional[str] = None) -> Dict[str, Any]:
    """Get the logging configuration dictionary.

    Args:
        level_override: Level applied to the console handler, the root logger
            and every subsystem logger in place of the configured levels

    Returns:
        Dictionary suitable for logging.config.dictConfig()
    """
    config = get_config()
    subsystem_levels = {
        "src.tutor.audio": config.logging.audio_log_level,
        "src.tutor.audio_adapters": config.logging.audio_log_level,
        "src.tutor.notation": config.logging.notation_log_level,
        "src.tutor.notation_adapters": config.logging.notation_log_level,
        "src.tutor.navigator": config.logging.lesson_log_level,
        "src.tutor.lessons": config.logging.lesson_log_level,
        "src.chat": config.logging.chat_log_level,
    }
    if level_override:
        level_override = level_override.upper()
        subsystem_levels = {name: level_override for name in subsystem_levels}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": config.logging.format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level_override or "WARNING",
                "formatter": "standard",
                "stream": sys.stderr,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "detailed",
                "filename": config.logging.log_file,
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
            },
        },
        "loggers": {
            name: {
                "level": level,
                "handlers": ["console", "file"],
                "propagate": False,
            }
            for name, level in subsystem_levels.items()
        },
        "root": {
            "level": level_override or config.logging.level,
            "handlers": ["console", "file"],
        },
    }


def setup_logging(
    log_config: Optional[Dict[str, Any]] = None, level: Optional[str] = None
) -> None:
    """Set up logging configuration for the application.

    Args:
        log_config: Optional custom logging configuration. If None, uses default.
        level: Optional level overriding every configured level
    """
    if log_config is None:
        log_config = get_logging_config(level_override=level)

    logging.config.dictConfig(log_config)

    logger = logging.getLogger(__name__)
    logger.info("Logging configuration initialized")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name, typically __name__ from the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
