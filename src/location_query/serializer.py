"""
Query Serializer

Renders a merged FieldMap into a percent-encoded query string and builds the
address suffix handed to the location writer.
"""

from .helpers import encode_uri_component, is_truthy
from .types import EmptySequence, FieldMap, Sequence


# Key skipped outright; it can only come from a malformed query
AMPERSAND_KEY = "&"


def serialize_query(merged: FieldMap, is_save_empty_fields: bool = False) -> str:
    """Render a FieldMap as ``key=value`` pairs joined by ``&``.

    Sequences expand to one pair per element. Unless ``is_save_empty_fields``
    is set, pairs with a falsy value are dropped. Pairs with an empty key are
    always dropped.

    Args:
        merged: FieldMap to render, in iteration order
        is_save_empty_fields: Keep pairs whose value is empty or falsy

    Returns:
        Query string without the leading "?"

    Examples:
        >>> from location_query.types import Scalar, Sequence
        >>> serialize_query({"q": Scalar("a b"), "tag": Sequence(("x", "y"))})
        'q=a%20b&tag=x&tag=y'
    """
    pairs: list[str] = []
    for key, value in merged.items():
        if key == AMPERSAND_KEY or not key:
            continue

        if isinstance(value, EmptySequence):
            continue
        items = value.values if isinstance(value, Sequence) else (value.value,)
        encoded_key = encode_uri_component(key)
        for item in items:
            if is_save_empty_fields or is_truthy(item):
                pairs.append(f"{encoded_key}={encode_uri_component(item)}")

    return "&".join(pairs)


def build_suffix(query_string: str, fragment: str | None, path: str) -> str:
    """Build the address suffix for the location writer.

    Args:
        query_string: Serialized query without "?"
        fragment: Fragment to keep, or None
        path: Current address without query and fragment

    Returns:
        "?query[#fragment]" when there is a query, "path[#fragment]" otherwise
    """
    hash_part = f"#{fragment}" if fragment else ""
    if query_string:
        return f"?{query_string}{hash_part}"
    return f"{path}{hash_part}"


__all__ = ["AMPERSAND_KEY", "serialize_query", "build_suffix"]
