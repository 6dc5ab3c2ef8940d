"""
Catalog Service Logging Module
==============================
Structured JSON logging for the catalog service components.
"""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

# LogRecord attributes that are never copied into the JSON payload
_RESERVED_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class CatalogJSONFormatter(logging.Formatter):
    """JSON formatter for catalog service structured logging"""

    def __init__(self, exclude_fields: Optional[List[str]] = None):
        super().__init__()
        self.exclude_fields = set(exclude_fields or [])

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "service": "catalog_service",
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRIBUTES or key in self.exclude_fields:
                continue
            log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def _rotating_file_handler(
    path: Path,
    level: int,
    formatter: logging.Formatter,
    max_file_size: int,
    backup_count: int,
) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=max_file_size, backupCount=backup_count)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_catalog_logging(
    service_name: str = "catalog_service",
    log_level: str = "INFO",
    enable_file_logging: bool = False,
    log_dir: Optional[str] = None,
    max_file_size: int = 50 * 1024 * 1024,  # 50MB
    backup_count: int = 5,
    exclude_fields: Optional[List[str]] = None,
) -> logging.Logger:
    """
    Configure the named logger of a catalog service component.

    Output always goes to stdout as JSON. With ``enable_file_logging`` the
    same records are also written to ``<log_dir>/<name>.log`` and errors to
    ``<log_dir>/<name>_errors.log``, both size-rotated.
    Calling it again for the same name replaces the handlers.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = CatalogJSONFormatter(exclude_fields=exclude_fields)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    handlers[0].setLevel(level)
    handlers[0].setFormatter(formatter)

    if enable_file_logging:
        directory = Path(log_dir) if log_dir else Path(__file__).parent.parent / "logs"
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _rotating_file_handler(
                directory / f"{service_name}.log",
                level,
                formatter,
                max_file_size,
                backup_count,
            )
        )
        handlers.append(
            _rotating_file_handler(
                directory / f"{service_name}_errors.log",
                logging.ERROR,
                formatter,
                max_file_size,
                backup_count,
            )
        )

    logger = logging.getLogger(service_name)
    logger.setLevel(level)
    logger.handlers[:] = handlers

    logger.debug(
        "Catalog Service logging configured",
        extra={
            "component": service_name,
            "log_level": logging.getLevelName(level),
            "file_logging": enable_file_logging,
            "handlers": len(handlers),
        },
    )
    return logger
