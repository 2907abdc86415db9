"""Tests for store path and tree helpers."""

import pytest

from arthub.store import SERVER_TIMESTAMP, InvalidKeyError, child_path, validate_key
from arthub.store.paths import (
    apply_event,
    get_at,
    normalize,
    resolve_server_values,
    set_at,
    split_path,
)


class TestKeys:
    def test_split_ignores_empty_segments(self):
        assert split_path("/invitations//e1/u1/") == ["invitations", "e1", "u1"]

    @pytest.mark.parametrize("key", ["", "a.b", "a/b", "a$", "a#", "a[0]"])
    def test_invalid_keys_are_rejected(self, key: str):
        with pytest.raises(InvalidKeyError):
            validate_key(key)

    def test_child_path_joins_valid_keys(self):
        assert child_path("counters", "a1", "views") == "counters/a1/views"

    def test_child_path_rejects_injected_separator(self):
        with pytest.raises(InvalidKeyError):
            child_path("accounts", "u1/role")


class TestTreeWrites:
    def test_set_creates_intermediate_nodes(self):
        tree = set_at(None, ["a", "b", "c"], 1)
        assert tree == {"a": {"b": {"c": 1}}}

    def test_delete_prunes_empty_parents(self):
        tree = {"a": {"b": {"c": 1}}, "x": 2}
        tree = set_at(tree, ["a", "b", "c"], None)
        assert tree == {"x": 2}

    def test_deleting_last_value_empties_root(self):
        assert set_at({"a": 1}, ["a"], None) is None

    def test_normalize_turns_lists_into_keyed_objects(self):
        assert normalize(["x", None, "y"]) == {"0": "x", "2": "y"}

    def test_get_returns_a_copy(self):
        tree = {"a": {"b": 1}}
        value = get_at(tree, ["a"])
        value["b"] = 2
        assert tree["a"]["b"] == 1

    def test_get_missing_path_is_none(self):
        assert get_at({"a": 1}, ["a", "b"]) is None


class TestServerValues:
    def test_placeholder_resolves_to_given_clock(self):
        value = {"timestamp": SERVER_TIMESTAMP, "nested": {"at": SERVER_TIMESTAMP}}
        assert resolve_server_values(value, 42) == {"timestamp": 42, "nested": {"at": 42}}

    def test_other_values_are_untouched(self):
        assert resolve_server_values({"timestamp": 7}, 42) == {"timestamp": 7}


class TestStreamEvents:
    def test_put_replaces_subtree(self):
        mirror = apply_event({"e1": {"u1": {"status": "pending"}}}, "put", ["e1", "u1"], {"status": "accepted"})
        assert mirror == {"e1": {"u1": {"status": "accepted"}}}

    def test_patch_merges_children(self):
        mirror = {"e1": {"u1": {"status": "pending", "email": "a@b.c"}}}
        mirror = apply_event(mirror, "patch", ["e1"], {"u1/status": "rejected"})
        assert mirror == {"e1": {"u1": {"status": "rejected", "email": "a@b.c"}}}

    def test_put_at_root_replaces_everything(self):
        assert apply_event({"old": 1}, "put", [], {"new": 2}) == {"new": 2}
