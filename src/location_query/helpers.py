"""
Location Query Helpers Module

Small collection and string utilities shared by the normalizer, merger and
serializer: the array predicate, emptiness check, deep-flatten, dedup,
truthiness and URI component encoding.
"""

import math
from typing import Any, Iterable
from urllib.parse import quote

from .types import EmptySequence, Sequence


# Characters encodeURIComponent leaves untouched besides alphanumerics
URI_COMPONENT_SAFE = "-_.!~*'()"


def is_array(value: Any) -> bool:
    """Check whether a value is treated as a sequence of query values.

    Strings and bytes are scalars even though they are iterable.
    """
    return isinstance(value, (list, tuple, Sequence, EmptySequence))


def is_empty(value: Any) -> bool:
    """Check whether a mapping or collection holds nothing.

    Args:
        value: Mapping, collection or None

    Returns:
        True for None or zero-length values
    """
    if value is None:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False


def flatten_deep(values: Iterable[Any]) -> list[Any]:
    """Recursively flatten arbitrarily nested arrays.

    Args:
        values: Possibly nested list/tuple structure

    Returns:
        Flat list of leaves in depth-first order

    Examples:
        >>> flatten_deep([["a"], ["b", ["c"]]])
        ['a', 'b', 'c']
    """
    result: list[Any] = []
    stack = [iter(values)]
    while stack:
        for item in stack[-1]:
            if is_array(item):
                stack.append(iter(item))
                break
            result.append(item)
        else:
            stack.pop()
    return result


def uniq(values: Iterable[Any]) -> list[Any]:
    """Drop later duplicates, keeping first-occurrence order."""
    seen = set()
    result = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def is_truthy(value: Any) -> bool:
    """Truthiness as query values see it.

    None, False, zero, NaN and the empty string are falsy. Any other object
    is truthy, including the string "0" and empty containers.
    """
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (str, int, float)):
        return bool(value)
    return True


def to_query_string(value: Any) -> str:
    """Stringify a primitive query value.

    Args:
        value: Scalar value

    Returns:
        "" for None, "true"/"false" for booleans, str() otherwise
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_uri_component(value: Any) -> str:
    """Percent-encode a key or value the way encodeURIComponent does.

    Args:
        value: Value to encode, stringified first

    Returns:
        UTF-8 percent-encoded string
    """
    return quote(to_query_string(value), safe=URI_COMPONENT_SAFE)


__all__ = [
    "URI_COMPONENT_SAFE",
    "is_array",
    "is_empty",
    "flatten_deep",
    "uniq",
    "is_truthy",
    "to_query_string",
    "encode_uri_component",
]
