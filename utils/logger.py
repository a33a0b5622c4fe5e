"""
Centralized logging configuration for VoxQuery.

Every module logs through ``get_logger(__name__)``. Records are written as one
JSON object per line so that provider calls, fallbacks and summarizer
decisions can be followed request by request:

- ``app.log``   INFO and above
- ``error.log`` ERROR and above
- ``debug.log`` everything, only when LOG_LEVEL=DEBUG
- stderr       optional, ERROR and above (LOG_TO_CONSOLE=true)

Structured fields go through ``extra={"extra_fields": {...}}``.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class LoggerConfig:
    """
    Process-wide logger setup.

    Settings are read from the environment when ``setup_logging`` runs, so
    tests can point LOG_DIR somewhere else or turn file output off entirely.
    """

    MAX_BYTES = 10 * 1024 * 1024  # 10MB per file
    BACKUP_COUNT = 5

    _initialized = False

    @classmethod
    def setup_logging(cls) -> None:
        """
        Install handlers on the root logger. Safe to call more than once;
        only the first call has an effect.
        """
        if cls._initialized:
            return

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_to_file = os.getenv("LOG_TO_FILE", "true").lower() == "true"
        log_to_console = os.getenv("LOG_TO_CONSOLE", "false").lower() == "true"

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level, logging.INFO))
        root_logger.handlers.clear()

        json_formatter = JsonFormatter()

        if log_to_file:
            log_dir.mkdir(parents=True, exist_ok=True)

            app_handler = logging.handlers.RotatingFileHandler(
                log_dir / "app.log",
                maxBytes=cls.MAX_BYTES,
                backupCount=cls.BACKUP_COUNT,
                encoding="utf-8",
            )
            app_handler.setLevel(logging.INFO)
            app_handler.setFormatter(json_formatter)
            root_logger.addHandler(app_handler)

            error_handler = logging.handlers.RotatingFileHandler(
                log_dir / "error.log",
                maxBytes=cls.MAX_BYTES,
                backupCount=cls.BACKUP_COUNT,
                encoding="utf-8",
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(json_formatter)
            root_logger.addHandler(error_handler)

            if log_level == "DEBUG":
                debug_handler = logging.handlers.RotatingFileHandler(
                    log_dir / "debug.log",
                    maxBytes=cls.MAX_BYTES,
                    backupCount=cls.BACKUP_COUNT,
                    encoding="utf-8",
                )
                debug_handler.setLevel(logging.DEBUG)
                debug_handler.setFormatter(json_formatter)
                root_logger.addHandler(debug_handler)

        if log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.ERROR)
            console_handler.setFormatter(
                logging.Formatter(
                    fmt="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            root_logger.addHandler(console_handler)

        cls._initialized = True

        logging.getLogger(__name__).info(
            "Logging system initialized",
            extra={
                "extra_fields": {
                    "log_level": log_level,
                    "log_dir": str(log_dir),
                    "file_logging": log_to_file,
                    "console_logging": log_to_console,
                }
            },
        )

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._initialized:
            cls.setup_logging()
        return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Example:
        >>> from utils.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Fallback used", extra={"extra_fields": {"provider": "firecrawl"}})
    """
    return LoggerConfig.get_logger(name)
