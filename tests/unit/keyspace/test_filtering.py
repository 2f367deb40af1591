"""Tests for the loaded key set and client-side search narrowing."""

from __future__ import annotations

import unittest
from unittest import mock

from lazyredis.keyspace import KeyCounts, KeyFilter, LoadInProgressError, filter_keys
from tests.fake_store import FakeStore


class FilterKeysTests(unittest.TestCase):
    def test_empty_term_returns_all_keys_in_order(self) -> None:
        keys = ["b", "a", "c"]
        result = filter_keys(keys, "")
        self.assertEqual(result, keys)
        self.assertIsNot(result, keys)

    def test_match_is_case_insensitive_substring(self) -> None:
        keys = ["User:1", "session:USER", "order:1", "customer"]
        self.assertEqual(filter_keys(keys, "user"), ["User:1", "session:USER"])
        self.assertEqual(filter_keys(keys, "ORDER"), ["order:1"])

    def test_no_match_returns_empty(self) -> None:
        self.assertEqual(filter_keys(["a", "b"], "zzz"), [])


class KeyFilterTests(unittest.TestCase):
    def test_load_then_filter_scenario(self) -> None:
        key_filter = KeyFilter(FakeStore.with_strings("user:1", "user:2", "order:1"))

        key_filter.load("*")
        self.assertEqual(key_filter.all_keys, ["order:1", "user:1", "user:2"])

        self.assertEqual(key_filter.filter("user"), ["user:1", "user:2"])
        self.assertEqual(key_filter.counts(), KeyCounts(total=3, filtered=2))
        self.assertTrue(key_filter.counts().is_filtered)

    def test_reload_keeps_search_term_applied(self) -> None:
        store = FakeStore.with_strings("user:1", "order:1")
        key_filter = KeyFilter(store)
        key_filter.load()
        key_filter.filter("user")

        store.data["user:2"] = ("string", "x")
        key_filter.load("*")

        self.assertEqual(key_filter.search_term, "user")
        self.assertEqual(key_filter.filtered_keys, ["user:1", "user:2"])

    def test_load_records_pattern(self) -> None:
        key_filter = KeyFilter(FakeStore.with_strings("user:1", "order:1"))
        key_filter.load("order:*")
        self.assertEqual(key_filter.pattern, "order:*")
        self.assertEqual(key_filter.all_keys, ["order:1"])

    def test_failed_load_leaves_state_unchanged(self) -> None:
        store = FakeStore.with_strings("user:1", "order:1")
        key_filter = KeyFilter(store)
        key_filter.load("*")
        key_filter.filter("user")

        store.fail_scan = ConnectionError("down")
        with self.assertRaises(ConnectionError):
            key_filter.load("other:*")

        self.assertEqual(key_filter.pattern, "*")
        self.assertEqual(key_filter.all_keys, ["order:1", "user:1"])
        self.assertEqual(key_filter.filtered_keys, ["user:1"])
        self.assertFalse(key_filter.is_loading)

    def test_overlapping_load_is_rejected(self) -> None:
        client = mock.Mock()
        key_filter = KeyFilter(client)

        def reentrant_scan(*_args, **_kwargs):
            with self.assertRaises(LoadInProgressError):
                key_filter.load("*")
            return 0, ["a"]

        client.scan.side_effect = reentrant_scan
        key_filter.load("*")

        self.assertEqual(key_filter.all_keys, ["a"])
        self.assertFalse(key_filter.is_loading)

    def test_clear_filter_restores_all_keys(self) -> None:
        key_filter = KeyFilter(FakeStore.with_strings("a", "b"))
        key_filter.load()
        key_filter.filter("a")
        self.assertEqual(key_filter.clear_filter(), ["a", "b"])
        self.assertEqual(key_filter.search_term, "")
        self.assertFalse(key_filter.counts().is_filtered)

    def test_remove_key_is_idempotent(self) -> None:
        key_filter = KeyFilter(FakeStore.with_strings("user:1", "user:2", "order:1"))
        key_filter.load()
        key_filter.filter("user")

        key_filter.remove_key("user:1")
        key_filter.remove_key("user:1")
        key_filter.remove_key("missing")

        self.assertEqual(key_filter.all_keys, ["order:1", "user:2"])
        self.assertEqual(key_filter.filtered_keys, ["user:2"])

    def test_remove_keys_updates_both_lists(self) -> None:
        key_filter = KeyFilter(FakeStore.with_strings("user:1", "user:2", "order:1"))
        key_filter.load()
        key_filter.filter("user")

        key_filter.remove_keys(["user:1", "user:2"])

        self.assertEqual(key_filter.all_keys, ["order:1"])
        self.assertEqual(key_filter.filtered_keys, [])
        self.assertEqual(key_filter.counts().total, 1)

    def test_toggle_tree_mode(self) -> None:
        key_filter = KeyFilter(FakeStore())
        self.assertFalse(key_filter.is_tree_mode())
        self.assertTrue(key_filter.toggle_tree_mode())
        self.assertTrue(key_filter.is_tree_mode())
        self.assertFalse(key_filter.toggle_tree_mode())


if __name__ == "__main__":
    unittest.main()
