"""
Logging configuration for the minion tracker.

Provides structured logging with different formatting for development,
testing, and production. Application loggers live under the ``minion``
hierarchy.
"""

import logging
import logging.config
import os
import sys
from typing import Dict, Any


def get_log_level() -> str:
    """Get the log level from environment variables."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_logging_config() -> Dict[str, Any]:
    """
    Get the logging configuration dictionary.

    Returns a configuration usable with logging.config.dictConfig().
    Production uses JSON output so log shippers can index the ``extra``
    fields; everything else gets human-readable lines.
    """
    log_level = get_log_level()
    environment = os.getenv("ENVIRONMENT", "development").lower()

    if environment == "production":
        formatter_class = "pythonjsonlogger.json.JsonFormatter"
        formatter_format = "%(asctime)s %(name)s %(levelname)s %(message)s"
    else:
        formatter_class = "logging.Formatter"
        formatter_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    app_logger = {
        "level": log_level,
        "handlers": ["console", "error_console"],
        "propagate": False,
    }

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "class": formatter_class,
                "format": formatter_format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "class": formatter_class,
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "default",
                "stream": sys.stdout,
            },
            "error_console": {
                "class": "logging.StreamHandler",
                "level": "ERROR",
                "formatter": "detailed",
                "stream": sys.stderr,
            },
        },
        "loggers": {
            # Application loggers
            "minion": dict(app_logger),
            "minion.api": dict(app_logger),
            "minion.core": dict(app_logger),
            "minion.database": dict(app_logger),
            "minion.store": dict(app_logger),
            # Third-party loggers
            "sqlalchemy.engine": {
                "level": "WARNING",  # Reduce SQLAlchemy verbosity
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["console", "error_console"],
        },
    }

    return config


def setup_logging() -> None:
    """
    Configure logging for the application.

    Call once at startup, before any other logging occurs.
    """
    config = get_logging_config()
    logging.config.dictConfig(config)

    logger = logging.getLogger("minion.logging")
    logger.info(
        "Logging configured",
        extra={
            "log_level": get_log_level(),
            "environment": os.getenv("ENVIRONMENT", "development"),
        },
    )


# Module path -> logger name under the "minion" hierarchy
_MODULE_LOGGERS = {
    "minion_tracker.core.database": "minion.database",
}

# Package component -> logger name, for modules not listed above
_COMPONENT_LOGGERS = {
    "api": "minion.api",
    "core": "minion.core",
    "services": "minion.store",
}


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: The logger name, typically __name__ from the calling module

    Returns:
        A configured logger instance
    """
    if not name.startswith("minion."):
        if name in _MODULE_LOGGERS:
            name = _MODULE_LOGGERS[name]
        elif name.startswith("minion_tracker."):
            # minion_tracker.services.minion_store -> minion.store
            component = name.split(".")[1]
            name = _COMPONENT_LOGGERS.get(component, f"minion.{component}")
        else:
            name = f"minion.{name}"

    return logging.getLogger(name)
