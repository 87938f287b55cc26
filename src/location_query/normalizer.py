"""Normalization of caller-supplied query fields."""

from typing import Any, Mapping

from .helpers import flatten_deep, is_array, to_query_string, uniq
from .types import EmptySequence, FieldMap, Scalar, Sequence, Value


def normalize_value(value: Any) -> Value:
    """Wrap one raw field value in the tagged value union.

    Arrays are deep-flattened, each leaf is stringified and later duplicates
    are dropped. An array with no leaves becomes ``EmptySequence`` so the key
    stays present without rendering anything.

    Args:
        value: Raw value, or an already tagged Scalar/Sequence

    Returns:
        Scalar or Sequence
    """
    if isinstance(value, (Scalar, Sequence, EmptySequence)):
        return value
    if is_array(value):
        leaves = uniq(_leaf_string(leaf) for leaf in flatten_deep(value))
        return Sequence(tuple(leaves)) if leaves else EmptySequence()
    return Scalar(value)


def _leaf_string(leaf: Any) -> str:
    if isinstance(leaf, Scalar):
        leaf = leaf.value
    return to_query_string(leaf)


def normalize_query(query: Mapping[str, Any] | None) -> FieldMap:
    """Turn the caller's raw field map into a canonical FieldMap.

    The input mapping is never mutated; None gives an empty map.

    Examples:
        >>> normalize_query({"page": 2, "tag": [["a"], ["b", "a"]]})
        {'page': Scalar(value=2), 'tag': Sequence(values=('a', 'b'))}
    """
    if not query:
        return {}
    return {key: normalize_value(value) for key, value in query.items()}


__all__ = ["normalize_value", "normalize_query"]
