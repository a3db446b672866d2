"""
Structured logging configuration for the checkout persistence layer.

Records are emitted as single-line JSON documents so they can be shipped
as-is to ELK, CloudWatch Insights or Datadog.
"""

import logging
import logging.handlers
import os
import re
import sys
import json
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from contextvars import ContextVar

# Context variables for request tracking
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)


class StructuredFormatter(logging.Formatter):
    """JSON structured logging formatter"""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "@timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": os.getenv('SERVICE_NAME', 'checkout'),
            "environment": os.getenv('ENVIRONMENT', 'development'),
        }

        trace_context = self._get_trace_context(record)
        if trace_context:
            log_obj["trace"] = trace_context

        log_obj["location"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
            "module": record.module
        }

        if record.exc_info:
            log_obj["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info)
            }

        # Add custom fields from extra
        if hasattr(record, 'extra_fields'):
            log_obj["custom"] = record.extra_fields

        return json.dumps(log_obj, default=str)

    def _get_trace_context(self, record: logging.LogRecord) -> Optional[Dict[str, Any]]:
        request_id = getattr(record, 'request_id', None) or request_id_var.get()
        correlation_id = getattr(record, 'correlation_id', None) or correlation_id_var.get()

        context = {}
        if request_id:
            context["request_id"] = request_id
        if correlation_id:
            context["correlation_id"] = correlation_id
        return context or None


class SecurityFilter(logging.Filter):
    """Redacts connection credentials from log messages"""

    SENSITIVE_PATTERN = re.compile(r"\b(password|secret|token)\b[=: ]*\S+", re.IGNORECASE)

    def filter(self, record: logging.LogRecord) -> bool:
        if not isinstance(record.msg, str):
            return True
        # Redact the rendered message so secrets passed as %-args are covered too
        record.msg = self.SENSITIVE_PATTERN.sub(r"\1=***REDACTED***", record.getMessage())
        record.args = None
        return True


def setup_logging(
    service_name: str,
    level: str = "INFO",
    enable_console: bool = True,
    enable_file: bool = False,
    log_file: Optional[str] = None
) -> None:
    """
    Setup structured logging

    Args:
        service_name: Name reported in every record
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Enable console output
        enable_file: Enable file output
        log_file: Path to log file
    """
    os.environ['SERVICE_NAME'] = service_name

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    root_logger.handlers = []

    formatter = StructuredFormatter()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(SecurityFilter())
        root_logger.addHandler(console_handler)

    if enable_file and log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SecurityFilter())
        root_logger.addHandler(file_handler)

    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('aiosqlite').setLevel(logging.WARNING)

    root_logger.info(
        "Logging initialized",
        extra={
            'extra_fields': {
                'service': service_name,
                'level': level,
                'handlers': {
                    'console': enable_console,
                    'file': enable_file
                }
            }
        }
    )


class LoggerAdapter(logging.LoggerAdapter):
    """Injects the current request context into every record"""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get('extra') or {})

        request_id = request_id_var.get()
        if request_id:
            extra['request_id'] = request_id

        correlation_id = correlation_id_var.get()
        if correlation_id:
            extra['correlation_id'] = correlation_id

        kwargs['extra'] = extra
        return msg, kwargs


def get_logger(name: str) -> LoggerAdapter:
    """
    Get a logger instance with request context support

    Args:
        name: Logger name (usually __name__)
    """
    return LoggerAdapter(logging.getLogger(name), {})


def set_request_context(
    request_id: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> None:
    """Bind tracing identifiers to the current context"""
    if request_id:
        request_id_var.set(request_id)
    if correlation_id:
        correlation_id_var.set(correlation_id)


def generate_request_id() -> str:
    """Generate a unique request ID"""
    return str(uuid.uuid4())
