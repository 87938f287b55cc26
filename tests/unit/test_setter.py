"""Unit tests for the public query setter."""

from unittest.mock import MagicMock

import pytest
import structlog
from structlog.testing import capture_logs

from location_query.config import SetQueryConfig
from location_query.location import CallbackLocationWriter, InMemoryLocation, LocationSnapshot
from location_query.setter import build_query_suffix, set_query
from location_query.types import CollisionPolicy


class TestBuildQuerySuffix:
    """Test the pure pipeline."""

    def test_scalars_without_old_query(self, empty_snapshot):
        query = {"a": "1", "b": "", "c": 0, "d": None, "e": "x y"}

        suffix = build_query_suffix(query, {"isSaveOld": False}, empty_snapshot)

        assert suffix == "?a=1&e=x%20y"

    def test_scalars_saving_empty_fields(self, empty_snapshot):
        query = {"a": "1", "b": "", "c": 0, "d": None, "e": "x y"}

        suffix = build_query_suffix(
            query, {"isSaveOld": False, "isSaveEmptyFields": True}, empty_snapshot
        )

        assert suffix == "?a=1&b=&c=0&d=&e=x%20y"

    def test_array_deduplicated(self, empty_snapshot):
        assert build_query_suffix({"test": ["12", "34", "12"]}, snapshot=empty_snapshot) == (
            "?test=12&test=34"
        )

    def test_nested_arrays_flattened(self, empty_snapshot):
        assert build_query_suffix({"test": [["a"], ["b", "a"]]}, snapshot=empty_snapshot) == (
            "?test=a&test=b"
        )

    def test_fragment_preserved_by_default(self, make_snapshot):
        snapshot = make_snapshot("/page?test=value#someHash")

        assert build_query_suffix({"test": "value"}, snapshot=snapshot) == "?test=value#someHash"

    def test_fragment_removed(self, make_snapshot):
        snapshot = make_snapshot("/page?test=value#someHash")

        assert build_query_suffix({"test": "value"}, {"isSaveHash": False}, snapshot) == (
            "?test=value"
        )

    def test_clearing_query_keeps_path_and_fragment(self, make_snapshot):
        snapshot = make_snapshot("https://example.com/p?old=1#h")

        suffix = build_query_suffix({"a": "", "b": None}, {"isSaveOld": False}, snapshot)

        assert suffix == "https://example.com/p#h"

    def test_clearing_query_without_fragment(self, make_snapshot):
        snapshot = make_snapshot("https://example.com/p?old=1#h")

        suffix = build_query_suffix(
            {"a": ""}, {"isSaveOld": False, "isSaveHash": False}, snapshot
        )

        assert suffix == "https://example.com/p"

    def test_none_query_with_save_old_keeps_old_query(self, make_snapshot):
        snapshot = make_snapshot("/p?page=2")

        assert build_query_suffix(None, snapshot=snapshot) == "?page=2"

    def test_merge_with_disjoint_old_query(self, make_snapshot):
        snapshot = make_snapshot("/p?other=1")

        suffix = build_query_suffix({"field": "test"}, {"isSaveOld": True}, snapshot)

        assert suffix == "?field=test&other=1"
        assert suffix.count("field=") == 1
        assert suffix.count("other=") == 1

    def test_documented_example_keep_new(self, make_snapshot):
        snapshot = make_snapshot("/?test=value&field=test")

        assert build_query_suffix({"test": "field"}, snapshot=snapshot) == (
            "?test=field&field=test"
        )

    def test_documented_example_combine(self, make_snapshot):
        snapshot = make_snapshot("/?test=value&field=test")
        options = SetQueryConfig(collision_policy=CollisionPolicy.COMBINE)

        assert build_query_suffix({"test": "field"}, options, snapshot) == (
            "?test=value&test=field&field=test"
        )

    def test_repeated_old_keys_survive(self, make_snapshot):
        snapshot = make_snapshot("/p?tag=a&tag=b")

        assert build_query_suffix({"page": 1}, snapshot=snapshot) == "?page=1&tag=a&tag=b"

    def test_no_snapshot(self):
        assert build_query_suffix({"a": "1"}) == "?a=1"
        assert build_query_suffix({}) == ""

    def test_empty_array_overrides_old_value(self, make_snapshot):
        snapshot = make_snapshot("/p?tag=a&page=2")

        assert build_query_suffix({"tag": []}, snapshot=snapshot) == "?page=2"

    def test_empty_array_renders_nothing_when_saving_empty_fields(self, empty_snapshot):
        suffix = build_query_suffix(
            {"tag": [], "a": "1"},
            {"isSaveOld": False, "isSaveEmptyFields": True},
            empty_snapshot,
        )

        assert suffix == "?a=1"

    def test_empty_array_with_combine_keeps_old_values(self, make_snapshot):
        snapshot = make_snapshot("/p?tag=a&page=2")
        options = {"collisionPolicy": "combine", "isSaveEmptyFields": True}

        assert build_query_suffix({"tag": []}, options, snapshot) == "?tag=a&page=2"

    def test_none_array_leaves_dropped(self, empty_snapshot):
        assert build_query_suffix({"tag": ["a", None]}, snapshot=empty_snapshot) == "?tag=a"

    def test_settings_defaults_apply(self, make_snapshot, monkeypatch):
        monkeypatch.setenv("LOCATION_QUERY_IS_SAVE_OLD", "false")
        snapshot = make_snapshot("/p?page=2")

        assert build_query_suffix({"a": "1"}, snapshot=snapshot) == "?a=1"


class TestSetQuery:
    """Test writing the computed address."""

    def test_replaces_location(self, location):
        set_query({"sort": "name"}, snapshot=location.snapshot(), writer=location)

        assert location.href == "https://example.com/catalog?sort=name&page=2#someHash"
        assert location.title == "Catalog"
        assert len(location.entries) == 1

    def test_documented_example_on_location(self, documented_href):
        location = InMemoryLocation(documented_href)

        set_query({"test": "field"}, snapshot=location.snapshot(), writer=location)

        assert location.href == "https://example.com/?test=field&field=test"

    def test_clearing_query(self, location):
        set_query(
            {"page": ""},
            {"isSaveOld": False},
            snapshot=location.snapshot(),
            writer=location,
        )

        assert location.href == "https://example.com/catalog#someHash"

    def test_title_passed_to_writer(self, location):
        set_query({"a": "1"}, snapshot=location.snapshot(), writer=location, title="Filtered")

        assert location.title == "Filtered"

    def test_idempotent_without_saving_old(self, location):
        options = {"isSaveOld": False}

        set_query({"a": ["1", "2"]}, options, snapshot=location.snapshot(), writer=location)
        first = location.href
        set_query({"a": ["1", "2"]}, options, snapshot=location.snapshot(), writer=location)

        assert location.href == first == "https://example.com/catalog?a=1&a=2#someHash"

    def test_merge_history_accumulates_with_combine(self, location):
        options = {"isSaveOld": True, "collisionPolicy": "combine"}

        set_query({"page": "3"}, options, snapshot=location.snapshot(), writer=location)
        set_query({"page": "4"}, options, snapshot=location.snapshot(), writer=location)

        assert location.href == "https://example.com/catalog?page=2&page=3&page=4#someHash"

    def test_writer_called_once(self, empty_snapshot):
        callback = MagicMock()

        set_query({"a": "1"}, snapshot=empty_snapshot, writer=CallbackLocationWriter(callback))

        callback.assert_called_once_with("?a=1", None)

    def test_logs_bound_to_operation(self, empty_snapshot):
        seen = {}

        def callback(suffix, title):
            seen.update(structlog.contextvars.get_contextvars())

        set_query({"a": "1"}, snapshot=empty_snapshot, writer=CallbackLocationWriter(callback))

        assert seen["operation"] == "set_query"
        assert len(seen["request_id"]) == 12
        assert "operation" not in structlog.contextvars.get_contextvars()

    def test_logs_result(self, empty_snapshot):
        with capture_logs() as logs:
            set_query({"a": "1"}, snapshot=empty_snapshot, writer=MagicMock())

        assert {"event": "query.set", "suffix": "?a=1", "log_level": "info"} in logs

    def test_requires_keyword_snapshot_and_writer(self, location):
        with pytest.raises(TypeError):
            set_query({"a": "1"}, None, location.snapshot(), location)
