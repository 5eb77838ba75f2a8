"""Correlation ID management for log correlation.

An outer layer (HTTP handler, job runner) may set a correlation ID for the
current operation. Catalog service operations open their own scope when
none is set. Every log line emitted while an ID is set carries it.
"""

import functools
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator, Optional, TypeVar

F = TypeVar("F", bound=Callable)

# Context variable for correlation_id (async-safe)
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new unique correlation ID.

    Returns:
        str: UUID v4 correlation ID
    """
    return str(uuid.uuid4())


def get_correlation_id() -> str:
    """Get current correlation ID from context.

    Returns:
        str: Current correlation ID or "no-correlation-id" if not set
    """
    return correlation_id_var.get() or "no-correlation-id"


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Set correlation ID in current context, generating one if not given.

    Returns:
        str: The correlation ID now in effect
    """
    correlation_id = correlation_id or generate_correlation_id()
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    correlation_id_var.set(None)


@contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Run a block under a correlation ID.

    An ID already set by an outer layer is kept. Otherwise the given ID (or
    a generated one) is set for the block and removed when it exits.

    Usage:
        with correlation_scope() as cid:
            logger.info("tagged with cid")
    """
    existing = correlation_id_var.get()
    if existing is not None and correlation_id is None:
        yield existing
        return

    token = correlation_id_var.set(correlation_id or generate_correlation_id())
    try:
        yield correlation_id_var.get()
    finally:
        correlation_id_var.reset(token)


def with_correlation_id(func: F) -> F:
    """Decorator running each call inside correlation_scope()."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with correlation_scope():
            return func(*args, **kwargs)

    return wrapper
