"""
Query Merger

Combines the normalized new fields with the query already present in the
location. Keys keep the position of their first appearance: new fields
first, then keys that only exist in the old query.
"""

from itertools import chain

from .helpers import is_empty, to_query_string, uniq
from .log_config import get_context_logger
from .types import CollisionPolicy, EmptySequence, FieldMap, Scalar, Sequence, Value


logger = get_context_logger("query_merger")


def _as_strings(value: Value) -> list[str]:
    if isinstance(value, EmptySequence):
        return []
    if isinstance(value, Sequence):
        return list(value.values)
    return [to_query_string(value.value)]


def combine_values(current: Value, incoming: Value) -> Value:
    """Combine two values of one key into a de-duplicated Sequence.

    Scalars count as one-element sequences and EmptySequence as none.
    Two identical scalars stay a scalar.

    Args:
        current: Value that comes first in the result
        incoming: Value appended after it

    Returns:
        Combined value
    """
    if isinstance(current, Scalar) and isinstance(incoming, Scalar) and current == incoming:
        return current
    values = uniq(_as_strings(current) + _as_strings(incoming))
    return Sequence(tuple(values)) if values else EmptySequence()


def merge_queries(
    local: FieldMap,
    old: FieldMap,
    is_save_old: bool = True,
    collision_policy: CollisionPolicy = CollisionPolicy.KEEP_NEW,
) -> FieldMap:
    """Merge new fields with the existing query.

    Entries of ``local`` then ``old`` are folded in order into one dict:

    - key already merged and absent from ``old``: values are combined
    - key already merged and present in ``old``: with ``KEEP_NEW`` the merged
      value is left alone; with ``COMBINE`` the old values are put in front
      of the new ones
    - otherwise the entry's value is taken as is

    Args:
        local: Normalized new fields
        old: Query read from the current location
        is_save_old: When False, ``old`` is ignored
        collision_policy: Treatment of keys present in both maps

    Returns:
        New merged FieldMap; inputs are not modified
    """
    if not is_save_old or is_empty(old):
        return dict(local)

    merged: FieldMap = {}
    collisions = 0
    for key, value in chain(local.items(), old.items()):
        in_merged = key in merged
        in_old = key in old

        if in_merged and not in_old:
            merged[key] = combine_values(merged[key], value)
        elif in_merged and in_old:
            collisions += 1
            if collision_policy is CollisionPolicy.COMBINE:
                merged[key] = combine_values(value, merged[key])
        else:
            merged[key] = value

    if collisions:
        logger.debug(
            "query.collisions",
            collisions=collisions,
            collision_policy=collision_policy.value,
        )
    return merged


__all__ = ["combine_values", "merge_queries"]
