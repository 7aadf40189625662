"""
Logging configuration for the Sera cart engine

Console output for development, a rotating JSON log file for analysis, and
structlog routed through the standard library so both styles share handlers.
"""

import logging
import logging.handlers
import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from sera_cart.infrastructure.configuration.config import Settings, get_config

MAIN_LOG_FILE = "sera_cart.log"
MAX_LOG_FILE_SIZE = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """
    Setup logging for the cart engine

    Features:
    - Plain console output outside production
    - Rotating JSON log file with cart-specific fields
    - structlog bound to the standard library handlers
    """
    config = config or get_config()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.log_level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    if config.environment != "production":
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(console_handler)

    if config.json_logs:
        logs_dir = Path(config.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        app_handler = logging.handlers.RotatingFileHandler(
            logs_dir / MAIN_LOG_FILE,
            maxBytes=MAX_LOG_FILE_SIZE,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        app_handler.setFormatter(CartJsonFormatter())
        app_handler.setLevel(logging.INFO)
        root_logger.addHandler(app_handler)

    _configure_structlog()

    logger = logging.getLogger(__name__)
    logger.info(
        "Cart logging configured",
        extra={"environment": config.environment, "log_level": config.log_level},
    )
    return root_logger


def _configure_structlog():
    """Configure structlog to hand events to the standard library"""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_structured_logger(name: str):
    """Get a structlog logger bound to the given name"""
    return structlog.get_logger(name)


class CartJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with cart-specific fields"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["process_id"] = os.getpid()

        if hasattr(record, "identity_key"):
            log_record["identity_key"] = record.identity_key

        if hasattr(record, "operation_time"):
            log_record["operation_time_ms"] = record.operation_time


class PerformanceLogger:
    """Context manager for performance logging"""

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None, details: Optional[Dict[str, Any]] = None):
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger(__name__)
        self.details = details or {}
        self.start_time = 0.0
        self.duration_ms = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(
            "Starting operation: %s",
            self.operation_name,
            extra={"operation": self.operation_name, **self.details},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is None:
            self.logger.debug(
                "Completed operation: %s",
                self.operation_name,
                extra={
                    "operation": self.operation_name,
                    "operation_time": self.duration_ms,
                    "success": True,
                    **self.details,
                },
            )
        else:
            self.logger.error(
                "Failed operation: %s",
                self.operation_name,
                extra={
                    "operation": self.operation_name,
                    "operation_time": self.duration_ms,
                    "success": False,
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val) if exc_val else None,
                    **self.details,
                },
            )
        return False
