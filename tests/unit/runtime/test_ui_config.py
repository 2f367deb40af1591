"""Tests for UI preference persistence.

Covers pane-width and theme keys, and that malformed config data is
safely ignored on load.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyredis.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_left_pane_percent_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("lazyredis.runtime.config.CONFIG_PATH", config_path):
                config.save_left_pane_percent(120, 42)
                self.assertEqual(config.load_left_pane_percent(), 35.0)

    def test_left_pane_percent_is_clamped_when_saved(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyredis.runtime.config.CONFIG_PATH", config_path):
                config.save_left_pane_percent(100, 0)
                self.assertEqual(config.load_left_pane_percent(), 1.0)
                config.save_left_pane_percent(0, 10)
                self.assertEqual(config.load_left_pane_percent(), 1.0)

    def test_invalid_values_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyredis.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"left_pane_percent": True, "theme": "  "})
                self.assertIsNone(config.load_left_pane_percent())
                self.assertIsNone(config.load_theme_name())
                config.save_config({"left_pane_percent": 150})
                self.assertIsNone(config.load_left_pane_percent())

    def test_malformed_file_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2", encoding="utf-8")
            with mock.patch("lazyredis.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_theme_name_round_trip_preserves_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyredis.runtime.config.CONFIG_PATH", config_path):
                config.save_left_pane_percent(100, 30)
                config.save_theme_name("ocean")
                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertEqual(config.load_left_pane_percent(), 30.0)

    def test_write_errors_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("x", encoding="utf-8")
            with mock.patch("lazyredis.runtime.config.CONFIG_PATH", blocker / "config.json"):
                config.save_theme_name("ocean")
                self.assertIsNone(config.load_theme_name())


if __name__ == "__main__":
    unittest.main()
