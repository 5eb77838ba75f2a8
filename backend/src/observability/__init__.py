"""Observability module for the catalog core.

Provides structured logging and correlation IDs.
"""

from .logging_config import configure_logging, JSONFormatter, CorrelationIDFilter
from .correlation import (
    correlation_id_var,
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
    generate_correlation_id,
    correlation_scope,
    with_correlation_id,
)

__all__ = [
    # Logging
    "configure_logging",
    "JSONFormatter",
    "CorrelationIDFilter",
    # Correlation ID
    "correlation_id_var",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "generate_correlation_id",
    "correlation_scope",
    "with_correlation_id",
]
