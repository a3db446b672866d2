"""Shared core utilities.

Provides the structured logging used across the checkout packages.
"""

from .logging_config import (
    setup_logging,
    get_logger,
    set_request_context,
    generate_request_id,
    LoggerAdapter,
    StructuredFormatter,
    SecurityFilter,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_context",
    "generate_request_id",
    "LoggerAdapter",
    "StructuredFormatter",
    "SecurityFilter",
]
