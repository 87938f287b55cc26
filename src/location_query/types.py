"""Type definitions for the location query package."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class Scalar:
    """Single primitive value of a query field."""

    value: Any = None


@dataclass(frozen=True)
class Sequence:
    """Ordered, de-duplicated, non-empty list of string values for a query field.

    Rendered as repeated ``key=value`` pairs.
    """

    values: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("Sequence requires at least one value")
        if len(set(self.values)) != len(self.values):
            raise ValueError(f"Sequence values must be unique: {self.values!r}")

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class EmptySequence:
    """Array value with no elements.

    Keeps its key present in the field map while contributing no
    ``key=value`` pairs, whatever the empty-field setting.
    """

    def __iter__(self):
        return iter(())

    def __len__(self) -> int:
        return 0


class CollisionPolicy(str, Enum):
    """How the merger treats a key present in both the new and the old query."""

    KEEP_NEW = "keep_new"  # New value wins, old value is dropped
    COMBINE = "combine"  # Old and new values survive as one sequence


Value = Union[Scalar, Sequence, EmptySequence]

# Ordered key -> value mapping; dict preserves insertion order.
FieldMap = dict[str, Value]


__all__ = ["Scalar", "Sequence", "EmptySequence", "CollisionPolicy", "Value", "FieldMap"]
