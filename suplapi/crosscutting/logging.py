import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Context variables for correlation
channel_var: ContextVar[Optional[int]] = ContextVar('channel', default=None)
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

LIBRARY_LOGGER = 'suplapi'


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        channel = channel_var.get()
        request_id = request_id_var.get()
        if channel is not None:
            log_entry['channel'] = channel
        if request_id:
            log_entry['requestId'] = request_id

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        fields = getattr(record, 'fields', None)
        if fields:
            log_entry['fields'] = fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class CorrelationContext:
    """Context manager for correlation data."""

    def __init__(self, channel: Optional[int] = None, request_id: Optional[str] = None):
        self.channel = channel
        self.request_id = request_id
        self._tokens = []

    def __enter__(self):
        if self.channel is not None:
            self._tokens.append((channel_var, channel_var.set(self.channel)))
        if self.request_id is not None:
            self._tokens.append((request_id_var, request_id_var.set(self.request_id)))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None) -> logging.Logger:
    """Setup structured logging for the library logger."""
    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    logger.handlers.clear()

    formatter = StructuredFormatter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LIBRARY_LOGGER) -> logging.Logger:
    """Get logger under the library namespace."""
    return logging.getLogger(name)


def log_with_fields(logger: logging.Logger, level: str, message: str,
                    fields: Optional[Dict[str, Any]] = None, exc_info=None, **kwargs):
    """Log message with additional fields."""
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return

    merged = dict(fields or {})
    merged.update(kwargs)
    logger.log(levelno, message, exc_info=exc_info, extra={'fields': merged} if merged else None)


def log_error(logger: logging.Logger, message: str, error: BaseException,
              level: str = 'ERROR', **kwargs):
    """Log error with exception details."""
    log_with_fields(logger, level, message, {
        'error_type': type(error).__name__,
        'error_message': str(error),
        **kwargs
    }, exc_info=(type(error), error, error.__traceback__))
