"""
Query Setter

Public entry points: ``build_query_suffix`` runs the normalize, merge and
serialize pipeline against a location snapshot; ``set_query`` additionally
hands the result to a location writer.
"""

from typing import Any, Mapping

from .config import SetQueryConfig, resolve_config
from .location import LocationSnapshot, LocationWriter
from .log_config import QueryContext, get_context_logger
from .merger import merge_queries
from .normalizer import normalize_query
from .serializer import build_suffix, serialize_query


logger = get_context_logger("query_setter")

QueryOptions = SetQueryConfig | dict[str, Any] | None


def build_query_suffix(
    query: Mapping[str, Any] | None,
    options: QueryOptions = None,
    snapshot: LocationSnapshot | None = None,
) -> str:
    """Compute the address suffix for a query update without writing it.

    Args:
        query: Raw fields to set; None behaves like an empty mapping
        options: SetQueryConfig, options dictionary, or None for settings defaults
        snapshot: Current location; None means an empty location at path ""

    Returns:
        Address suffix, "?query[#fragment]" or "path[#fragment]"

    Examples:
        >>> snap = LocationSnapshot.from_href("/list?page=2#top")
        >>> build_query_suffix({"sort": "name"}, snapshot=snap)
        '?sort=name&page=2#top'
        >>> build_query_suffix({"sort": ""}, {"isSaveOld": False}, snap)
        '/list#top'
    """
    config = resolve_config(options)
    snapshot = snapshot or LocationSnapshot()

    local = normalize_query(query)
    logger.debug("query.normalized", fields=list(local))

    merged = merge_queries(
        local,
        snapshot.query if config.is_save_old else {},
        is_save_old=config.is_save_old,
        collision_policy=config.collision_policy,
    )
    logger.debug("query.merged", fields=list(merged), is_save_old=config.is_save_old)

    query_string = serialize_query(merged, config.is_save_empty_fields)
    fragment = snapshot.fragment if config.is_save_hash else None
    suffix = build_suffix(query_string, fragment, snapshot.path)
    logger.debug("query.serialized", suffix=suffix)
    return suffix


def set_query(
    query: Mapping[str, Any] | None,
    options: QueryOptions = None,
    *,
    snapshot: LocationSnapshot,
    writer: LocationWriter,
    title: str | None = None,
) -> None:
    """Replace the current address with one carrying the given query.

    Args:
        query: Raw fields to set; list values become repeated keys
        options: SetQueryConfig, options dictionary, or None for settings defaults
        snapshot: Location read at call time
        writer: Capability that replaces the address
        title: New navigation title, None keeps the current one

    Examples:
        >>> from location_query import InMemoryLocation
        >>> location = InMemoryLocation("https://example.com/list?page=2#top")
        >>> set_query({"page": 3}, snapshot=location.snapshot(), writer=location)
        >>> location.href
        'https://example.com/list?page=3#top'
    """
    with QueryContext("set_query"):
        suffix = build_query_suffix(query, options, snapshot)
        writer.replace(suffix, title)
        logger.info("query.set", suffix=suffix)


__all__ = ["build_query_suffix", "set_query"]
