"""
Logging configuration for the hotel booking backend.
Provides console logging (coloured in development, JSON on request)
and an optional rotating file handler.
"""

import logging
import logging.config
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from hiltim.config.settings import Settings, settings as default_settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def __init__(self, *args, environment: str = "development", **kwargs):
        super().__init__(*args, **kwargs)
        self.environment = environment

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["environment"] = self.environment

        # Bookkeeping fields passed through `extra=`
        for key in ("booking_id", "user_id", "operation", "record_count", "storage"):
            if hasattr(record, key):
                log_record[key] = getattr(record, key)


def build_logging_config(config: Settings) -> Dict[str, Any]:
    """Create the dictConfig dictionary for the given settings"""
    if config.LOG_FORMAT == "json":
        console_formatter = "json"
    elif config.is_development():
        console_formatter = "colored"
    else:
        console_formatter = "standard"

    handlers: Dict[str, Any] = {
        "console": {
            "level": "DEBUG" if config.DEBUG else config.LOG_LEVEL,
            "class": "logging.StreamHandler",
            "formatter": console_formatter,
        },
    }
    if config.LOG_TO_FILE:
        handlers["file"] = {
            "level": "INFO",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": os.path.join(config.LOG_DIR, "hiltim.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "formatter": "json" if config.LOG_FORMAT == "json" else "standard",
            "encoding": "utf8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            },
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(timestamp)s %(level)s %(logger)s %(message)s",
                "environment": config.ENVIRONMENT,
            },
            "colored": {
                "()": "colorlog.ColoredFormatter",
                "format": "%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "log_colors": {
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            },
        },
        "handlers": handlers,
        "loggers": {
            "hiltim": {
                "handlers": list(handlers),
                "level": config.LOG_LEVEL,
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "uvicorn": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """Configure application logging"""
    config = config or default_settings
    if config.LOG_TO_FILE:
        os.makedirs(config.LOG_DIR, exist_ok=True)
    logging.config.dictConfig(build_logging_config(config))
    logger = logging.getLogger("hiltim")
    logger.info(f"Logging initialized with level: {config.LOG_LEVEL}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger with context"""
    return logging.getLogger(name)
