#!/usr/bin/env python3
"""Example showing query updates against an in-memory location with JSON logs."""

import sys
from pathlib import Path

import structlog

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from location_query import CollisionPolicy, InMemoryLocation, SetQueryConfig, set_query


# Configure structlog for JSON output
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
)


def main() -> None:
    location = InMemoryLocation("https://shop.example.com/catalog?page=2#results", title="Catalog")

    # New fields win over the old query, keys only in the old query survive
    set_query({"tag": ["shoes", ["boots", "shoes"]]}, snapshot=location.snapshot(), writer=location)
    print(location.href)

    # Both values of a colliding key survive as repeated pairs
    combine = SetQueryConfig(collision_policy=CollisionPolicy.COMBINE)
    set_query({"page": 3}, combine, snapshot=location.snapshot(), writer=location)
    print(location.href)

    # Dropping the old query and the fragment
    set_query(
        {"q": "red boots"},
        {"isSaveOld": False, "isSaveHash": False},
        snapshot=location.snapshot(),
        writer=location,
        title="Search",
    )
    print(location.href, location.title)

    # Clearing everything leaves the bare path
    set_query({"q": ""}, {"isSaveOld": False}, snapshot=location.snapshot(), writer=location)
    print(location.href)


if __name__ == "__main__":
    main()
