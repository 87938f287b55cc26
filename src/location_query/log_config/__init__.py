"""Logging configuration package."""

from .main import QueryContext, get_context_logger


__all__ = [
    "get_context_logger",
    "QueryContext",
]
