# launchpad_indexer/core/logging.py
"""
Centralized logging system for the indexer.

Provides:
- IndexerLogger: Global logging configuration
- LoggingMixin: Consistent logging behavior for classes
- Utility functions: Context logging helpers
"""

import json
import logging
import sys
from datetime import datetime
from logging import DEBUG, INFO, WARNING, ERROR, CRITICAL
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = 'launchpad_indexer'

RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


class IndexerFormatter(logging.Formatter):
    def __init__(self, include_context: bool = False, structured: bool = False):
        self.include_context = include_context
        self.structured = structured
        super().__init__()

    def _context(self, record: logging.LogRecord) -> dict:
        return {k: v for k, v in record.__dict__.items() if k not in RESERVED_ATTRS}

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        context = self._context(record) if self.include_context else {}

        if self.structured:
            entry = {
                'timestamp': timestamp,
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage(),
            }
            if context:
                entry['context'] = context
            if record.exc_info:
                entry['exception'] = self.formatException(record.exc_info)
            return json.dumps(entry, separators=(',', ':'), default=str)

        base_msg = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"
        if context:
            base_msg = f"{base_msg} | {' '.join(f'{k}={v}' for k, v in context.items())}"
        if record.exc_info:
            base_msg = f"{base_msg}\n{self.formatException(record.exc_info)}"
        return base_msg


class IndexerLogger:
    """Global logging configuration and management"""

    _configured = False
    _log_dir: Optional[Path] = None
    _log_level = logging.INFO

    @classmethod
    def configure(cls,
                  log_dir: Optional[Path] = None,
                  log_level: str = "INFO",
                  console_enabled: bool = True,
                  file_enabled: bool = False,
                  structured_format: bool = False) -> None:

        if cls._configured:
            return

        cls._log_dir = log_dir
        cls._log_level = getattr(logging, log_level.upper(), logging.INFO)

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(cls._log_level)
        root_logger.handlers.clear()

        formatter = IndexerFormatter(include_context=True, structured=structured_format)

        if console_enabled:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(cls._log_level)
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        if file_enabled and log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_dir / 'indexer.log')
            file_handler.setLevel(cls._log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

            error_handler = logging.FileHandler(log_dir / 'indexer_errors.log')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)
            root_logger.addHandler(error_handler)

        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()
        cls._configured = False

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._configured:
            cls.configure()

        if not name.startswith(ROOT_LOGGER_NAME):
            name = f'{ROOT_LOGGER_NAME}.{name}'

        return logging.getLogger(name)


# === Utility Functions ===

def get_class_logger(cls_instance) -> logging.Logger:
    module = cls_instance.__class__.__module__
    class_name = cls_instance.__class__.__name__

    prefix = f'{ROOT_LOGGER_NAME}.'
    if module.startswith(prefix):
        module = module[len(prefix):]

    return IndexerLogger.get_logger(f"{module}.{class_name}")


def log_with_context(logger: logging.Logger, level: int, message: str, exc_info=None, **context) -> None:
    if logger.isEnabledFor(level):
        if exc_info is True:
            exc_info = sys.exc_info()
        record = logger.makeRecord(
            logger.name, level, "", 0, message, (), exc_info
        )
        for key, value in context.items():
            setattr(record, key, value)
        logger.handle(record)


# === LoggingMixin for Classes ===

class LoggingMixin:
    """
    Mixin to add consistent logging behavior to any class.

    Provides convenient logging methods that automatically:
    - Create class-specific loggers
    - Support structured context logging
    """

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_class_logger(self)
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, WARNING, message, **context)

    def log_error(self, message: str, **context) -> None:
        log_with_context(self.logger, ERROR, message, **context)

    def log_critical(self, message: str, **context) -> None:
        log_with_context(self.logger, CRITICAL, message, **context)


__all__ = [
    'IndexerLogger', 'IndexerFormatter', 'LoggingMixin',
    'get_class_logger', 'log_with_context',
    'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL',
]
