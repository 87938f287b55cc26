"""Pytest configuration and shared fixtures for location query tests."""

import os
import sys
from pathlib import Path

import pytest


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from location_query.location import InMemoryLocation, LocationSnapshot
from location_query.settings import get_settings


# ==================== Isolation ====================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run each test without LOCATION_QUERY_* env vars or a stray YAML file."""
    for name in list(os.environ):
        if name.upper().startswith("LOCATION_QUERY_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ==================== Location Fixtures ====================


@pytest.fixture
def documented_href() -> str:
    """Address whose query collides with the documented merge example."""
    return "https://example.com/?test=value&field=test"


@pytest.fixture
def hashed_href() -> str:
    """Address carrying both a query and a fragment."""
    return "https://example.com/catalog?page=2#someHash"


@pytest.fixture
def location(hashed_href) -> InMemoryLocation:
    """In-memory location starting at the hashed address."""
    return InMemoryLocation(hashed_href, title="Catalog")


@pytest.fixture
def empty_snapshot() -> LocationSnapshot:
    """Snapshot of a bare path with no query or fragment."""
    return LocationSnapshot.from_href("https://example.com/catalog")


@pytest.fixture
def make_snapshot():
    """Build a snapshot from an address."""

    def _make(href: str) -> LocationSnapshot:
        return LocationSnapshot.from_href(href)

    return _make
