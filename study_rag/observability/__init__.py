"""
Observability module.

Provides process logging configuration, structured logging helpers
and request logging middleware.
"""

from study_rag.observability.logger import configure_logging, get_logger
from study_rag.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_exception_with_context",
    "log_with_context",
    "safe_log_value",
]
