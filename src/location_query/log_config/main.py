"""Logging configuration and utilities."""

import secrets
from typing import Any

import structlog


def get_context_logger(name: str) -> structlog.BoundLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


class QueryContext:
    """Context manager binding per-call fields into the structlog context.

    A short ``request_id`` is generated unless one is passed in, so every log
    line emitted during one ``set_query`` call can be correlated.
    """

    def __init__(self, operation: str, **context: Any):
        """Initialize with context variables.

        Args:
            operation: Operation name (e.g., "set_query")
            **context: Additional context key-value pairs
        """
        context.setdefault("request_id", secrets.token_hex(6))
        self.context = {"operation": operation, **context}

    @property
    def request_id(self) -> str:
        return self.context["request_id"]

    def __enter__(self) -> "QueryContext":
        """Enter context."""
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context."""
        structlog.contextvars.unbind_contextvars(*self.context.keys())


__all__ = [
    "get_context_logger",
    "QueryContext",
]
