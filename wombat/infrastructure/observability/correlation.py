"""Correlation ID management for tracing one user action across services.

A correlation ID lives in a ContextVar so it survives await points inside a
single task. The negotiation client opens a fresh correlation scope for
every action it forwards and every snapshot it processes, so the action
service, the checkpoint trigger and the store stub all log under one ID.

Usage:
    with correlation_scope():
        await service.agree_problem(problem_id, uid)

    # In structlog configuration
    processors = [..., correlation_id_processor, ...]
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string means "no correlation scope open"
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Get the current correlation ID, or "" when none is set."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in the current context."""
    _correlation_id.set(correlation_id)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block.

    An already-open scope is reused unless an explicit ID is given, so a
    service called from inside a client action keeps the caller's ID.

    Args:
        correlation_id: ID to bind; generated when omitted.

    Yields:
        The correlation ID in effect inside the block.
    """
    current = _correlation_id.get()
    effective = correlation_id or current or generate_correlation_id()
    token = _correlation_id.set(effective)
    try:
        yield effective
    finally:
        _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the current correlation_id to every entry.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with correlation_id added when one is set.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
