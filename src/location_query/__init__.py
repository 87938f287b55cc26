"""
Location Query Package

Merges caller-supplied query fields with the query already present in the
current address and replaces the address with the canonical result.

This package provides:
- set_query: Main entry point, computes and writes the new address
- build_query_suffix: Pure pipeline returning the new address suffix
- LocationSnapshot / LocationWriter: Read and write sides of the address
- SetQueryConfig: Per-call options

Usage:
    from location_query import InMemoryLocation, set_query

    location = InMemoryLocation("https://example.com/list?page=2#top")
    set_query({"tag": ["a", "b"]}, snapshot=location.snapshot(), writer=location)
    # location.href == "https://example.com/list?tag=a&tag=b&page=2#top"
"""

from .config import SetQueryConfig, resolve_config
from .exceptions import (
    LocationError,
    LocationQueryException,
    LocationWriteError,
    QueryConfigError,
    QueryConfigNotFoundError,
    QueryConfigValidationError,
)
from .location import (
    CallbackLocationWriter,
    HistoryEntry,
    InMemoryLocation,
    LocationSnapshot,
    LocationWriter,
    read_query,
)
from .merger import merge_queries
from .normalizer import normalize_query
from .serializer import build_suffix, serialize_query
from .settings import QuerySettings, get_settings, reload_settings
from .setter import build_query_suffix, set_query
from .types import CollisionPolicy, EmptySequence, FieldMap, Scalar, Sequence, Value

__version__ = "1.0.0"

__all__ = [
    # Entry points
    "set_query",
    "build_query_suffix",
    # Pipeline stages
    "normalize_query",
    "merge_queries",
    "serialize_query",
    "build_suffix",
    # Location
    "LocationSnapshot",
    "LocationWriter",
    "InMemoryLocation",
    "CallbackLocationWriter",
    "HistoryEntry",
    "read_query",
    # Types
    "Scalar",
    "Sequence",
    "EmptySequence",
    "Value",
    "FieldMap",
    "CollisionPolicy",
    # Configuration
    "SetQueryConfig",
    "resolve_config",
    "QuerySettings",
    "get_settings",
    "reload_settings",
    # Exceptions
    "LocationQueryException",
    "QueryConfigError",
    "QueryConfigValidationError",
    "QueryConfigNotFoundError",
    "LocationError",
    "LocationWriteError",
    # Package metadata
    "__version__",
]
