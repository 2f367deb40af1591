"""Tests for value-pane text and TTL formatting."""

from __future__ import annotations

import json
import unittest
from unittest import mock

from lazyredis.ansi import strip_ansi
from lazyredis.store.values import (
    colorize_json_value,
    fetch_key_info,
    format_ttl,
    format_ttl_details,
    ttl_message,
)
from tests.fake_store import FakeStore


class FormatTTLTests(unittest.TestCase):
    def test_no_expiration(self) -> None:
        info = format_ttl(-1)
        self.assertEqual(info.display, "No expiration")
        self.assertFalse(info.has_expiration)
        self.assertTrue(info.exists)

    def test_missing_key(self) -> None:
        info = format_ttl(-2)
        self.assertEqual(info.display, "Key does not exist")
        self.assertFalse(info.exists)

    def test_hours_minutes_seconds(self) -> None:
        self.assertEqual(format_ttl(3661).display, "1h 1m 1s")
        self.assertEqual(format_ttl(59).display, "0h 0m 59s")
        self.assertEqual(format_ttl(90061).display, "25h 1m 1s")

    def test_details_include_raw_seconds(self) -> None:
        self.assertEqual(format_ttl_details(3661), "3661 seconds\n(1h 1m 1s)")
        self.assertEqual(format_ttl_details(-1), "No expiration")


class TTLMessageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = FakeStore.with_strings("session:1", "config")
        self.store.ttls["session:1"] = 120

    def test_expiring_key(self) -> None:
        self.assertEqual(ttl_message(self.store, "session:1"), "Key: session:1\n\nTTL: 120 seconds\n(0h 2m 0s)")

    def test_persistent_key(self) -> None:
        self.assertEqual(ttl_message(self.store, "config"), "Key: config\n\nNo expiration set")

    def test_missing_key(self) -> None:
        self.assertEqual(ttl_message(self.store, "gone"), "Key: gone\n\nKey does not exist")


class FetchKeyInfoTests(unittest.TestCase):
    def setUp(self) -> None:
        store = FakeStore()
        store.data.update(
            {
                "greeting": ("string", "hello"),
                "queue": ("list", ["a", "b"]),
                "tags": ("set", ["red", "blue"]),
                "board": ("zset", {"alice": 10, "bob": 2.5}),
                "user:1": ("hash", {"name": "Ada", "role": "admin"}),
                "stream": ("stream", None),
            }
        )
        store.ttls["greeting"] = 3661
        self.store = store

    def test_string(self) -> None:
        self.assertEqual(fetch_key_info(self.store, "greeting"), "Type: STRING | TTL: 1h 1m 1s\n\nhello")

    def test_list(self) -> None:
        self.assertEqual(
            fetch_key_info(self.store, "queue"),
            "Type: LIST (2 items) | TTL: No expiration\n\n[0] a\n[1] b",
        )

    def test_set_members_are_sorted(self) -> None:
        self.assertEqual(
            fetch_key_info(self.store, "tags"),
            "Type: SET (2 members) | TTL: No expiration\n\nblue\nred",
        )

    def test_sorted_set(self) -> None:
        self.assertEqual(
            fetch_key_info(self.store, "board"),
            "Type: SORTED SET (2 members) | TTL: No expiration\n\n2.5: bob\n10: alice",
        )

    def test_hash(self) -> None:
        self.assertEqual(
            fetch_key_info(self.store, "user:1"),
            "Type: HASH (2 fields) | TTL: No expiration\n\nname: Ada\nrole: admin",
        )

    def test_unsupported_type(self) -> None:
        self.assertEqual(
            fetch_key_info(self.store, "stream"),
            "Type: STREAM | TTL: No expiration\n\nUnsupported type",
        )

    def test_store_errors_become_value_text(self) -> None:
        client = mock.Mock()
        client.type.side_effect = ConnectionError("socket closed")
        self.assertEqual(fetch_key_info(client, "x"), "Error fetching value: socket closed")

    def test_json_string_is_pretty_printed_when_colorized(self) -> None:
        self.store.data["doc"] = ("string", '{"b": [1, 2], "a": "x"}')

        plain = fetch_key_info(self.store, "doc")
        colored = fetch_key_info(self.store, "doc", colorize=True)

        self.assertTrue(plain.endswith('\n\n{"b": [1, 2], "a": "x"}'))
        body = colored.split("\n\n", 1)[1]
        self.assertEqual(strip_ansi(body), json.dumps({"b": [1, 2], "a": "x"}, indent=2))


class ColorizeJsonValueTests(unittest.TestCase):
    def test_non_container_values_are_left_alone(self) -> None:
        self.assertIsNone(colorize_json_value("42"))
        self.assertIsNone(colorize_json_value("plain text"))
        self.assertIsNone(colorize_json_value("{not json"))
        self.assertIsNone(colorize_json_value(""))

    def test_unknown_style_still_highlights(self) -> None:
        result = colorize_json_value("[1]", style="no-such-style")
        self.assertIsNotNone(result)
        self.assertEqual(strip_ansi(result or ""), "[\n  1\n]")


if __name__ == "__main__":
    unittest.main()
