"""
Location Reading and Writing

Provides the read side (query reader and ``LocationSnapshot``) and the write
side (``LocationWriter`` capability) of the current address. The query
pipeline only ever sees a snapshot and hands its result to a writer, so it
stays independent of where the address actually lives.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable
from urllib.parse import urljoin

import httpx

from .exceptions import LocationWriteError
from .helpers import uniq
from .log_config import get_context_logger
from .types import FieldMap, Scalar, Sequence


def split_href(href: str) -> tuple[str, str, str | None]:
    """Split an address into path, search and fragment.

    The fragment is the text between the first ``#`` and any second ``#``,
    returned verbatim.

    Args:
        href: Absolute or relative address

    Returns:
        Tuple of (path, search without "?", fragment or None)

    Examples:
        >>> split_href("https://example.com/list?page=2#top")
        ('https://example.com/list', 'page=2', 'top')
    """
    before_hash, _, after_hash = href.partition("#")
    fragment = after_hash.split("#")[0] if "#" in href else None
    path, _, search = before_hash.partition("?")
    return path, search, fragment or None


def read_query(href: str) -> FieldMap:
    """Read the query of an address into a FieldMap.

    A key that occurs once becomes a Scalar string; a repeated key becomes a
    de-duplicated Sequence in first-occurrence order. Blank values are kept.

    Args:
        href: Absolute or relative address

    Returns:
        FieldMap in the order keys first appear
    """
    _, search, _ = split_href(href)
    if not search:
        return {}

    grouped: dict[str, list[str]] = {}
    for key, value in httpx.QueryParams(search).multi_items():
        grouped.setdefault(key, []).append(value)

    query: FieldMap = {}
    for key, values in grouped.items():
        if len(values) == 1:
            query[key] = Scalar(values[0])
        else:
            query[key] = Sequence(tuple(uniq(values)))
    return query


@dataclass(frozen=True)
class LocationSnapshot:
    """Read-only view of the current address taken at call time.

    Attributes:
        query: Current query as a FieldMap
        fragment: Current fragment without the leading "#", or None
        path: Address before the query and fragment
    """

    query: FieldMap = field(default_factory=dict)
    fragment: str | None = None
    path: str = ""

    @classmethod
    def from_href(cls, href: str) -> "LocationSnapshot":
        """Create a snapshot by reading an address.

        Examples:
            >>> snap = LocationSnapshot.from_href("/search?q=cats#results")
            >>> snap.path, snap.fragment
            ('/search', 'results')
        """
        path, _, fragment = split_href(href)
        return cls(query=read_query(href), fragment=fragment, path=path)


class LocationWriter(ABC):
    """
    Abstract capability that replaces the current address.

    Implementations must replace the current entry rather than add a new one,
    and must not reload anything.
    """

    @abstractmethod
    def replace(self, suffix: str, title: str | None = None) -> None:
        """Replace the current address.

        Args:
            suffix: Either "?query[#fragment]" or a bare path with optional fragment
            title: New navigation title, None keeps the current one
        """
        pass


@dataclass(frozen=True)
class HistoryEntry:
    """One navigation history entry."""

    href: str
    title: str = ""


class InMemoryLocation(LocationWriter):
    """
    Address held in memory, usable as both the snapshot source and the writer.

    Examples:
        >>> location = InMemoryLocation("https://example.com/list?page=2#top")
        >>> location.replace("?page=3#top")
        >>> location.href
        'https://example.com/list?page=3#top'
    """

    def __init__(self, href: str = "", title: str = ""):
        self.entries: list[HistoryEntry] = [HistoryEntry(href=href, title=title)]
        self.logger = get_context_logger("in_memory_location")

    @property
    def href(self) -> str:
        return self.entries[-1].href

    @property
    def title(self) -> str:
        return self.entries[-1].title

    def snapshot(self) -> LocationSnapshot:
        """Take a snapshot of the current address."""
        return LocationSnapshot.from_href(self.href)

    def replace(self, suffix: str, title: str | None = None) -> None:
        """Resolve the suffix against the current address and replace it."""
        previous = self.href
        if suffix:
            new_href = urljoin(previous, suffix)
        else:
            new_href = split_href(previous)[0]

        self.entries[-1] = HistoryEntry(
            href=new_href,
            title=self.title if title is None else title,
        )
        self.logger.info(
            "location.replaced",
            previous_href=previous,
            href=new_href,
        )

    def __repr__(self) -> str:
        return f"InMemoryLocation(href={self.href!r}, title={self.title!r})"


class CallbackLocationWriter(LocationWriter):
    """
    Writer forwarding the suffix to a callable.

    Useful for wiring the result into a web framework response or a
    browser bridge.

    Examples:
        >>> writer = CallbackLocationWriter(lambda suffix, title: print(suffix))
        >>> writer.replace("?page=1")
        ?page=1
    """

    def __init__(self, callback: Callable[[str, str | None], None]):
        self.callback = callback
        self.logger = get_context_logger("callback_location_writer")

    def replace(self, suffix: str, title: str | None = None) -> None:
        try:
            self.callback(suffix, title)
        except Exception as e:
            self.logger.error(
                "location.replace_failed",
                suffix=suffix,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise LocationWriteError(
                "Location writer callback failed",
                suffix=suffix,
                writer_error=e,
            ) from e


__all__ = [
    "split_href",
    "read_query",
    "LocationSnapshot",
    "LocationWriter",
    "HistoryEntry",
    "InMemoryLocation",
    "CallbackLocationWriter",
]
