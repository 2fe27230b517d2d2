from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydu import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_wrap_selection_round_trips_and_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("lazydu.config.CONFIG_PATH", config_path):
                self.assertFalse(config.load_wrap_selection())
                config.save_config({"theme": "ocean"})

                config.save_wrap_selection(True)

                self.assertTrue(config.load_wrap_selection())
                self.assertEqual(config.load_config(), {"theme": "ocean", "wrap_selection": True})

    def test_malformed_config_reads_as_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("lazydu.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertFalse(config.load_strict_scan())
                self.assertIsNone(config.load_theme_name())

            config_path.write_text("[1, 2]", encoding="utf-8")
            with mock.patch("lazydu.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_typed_loaders_ignore_wrong_types(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazydu.config.CONFIG_PATH", config_path):
                config.save_config(
                    {"wrap_selection": "yes", "strict_scan": 1, "theme": "   ", "max_scan_tasks": True}
                )
                self.assertFalse(config.load_wrap_selection())
                self.assertFalse(config.load_strict_scan())
                self.assertIsNone(config.load_theme_name())
                self.assertIsNone(config.load_max_scan_tasks())

                config.save_config({"strict_scan": True, "theme": " ocean ", "max_scan_tasks": 3})
                self.assertTrue(config.load_strict_scan())
                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertEqual(config.load_max_scan_tasks(), 3)

                config.save_config({"max_scan_tasks": 0})
                self.assertIsNone(config.load_max_scan_tasks())

    def test_save_errors_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("file, not dir", encoding="utf-8")
            with mock.patch("lazydu.config.CONFIG_PATH", blocker / "config.json"):
                config.save_wrap_selection(True)
                self.assertFalse(config.load_wrap_selection())


if __name__ == "__main__":
    unittest.main()
