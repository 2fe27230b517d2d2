"""Tests for rotating file logging setup."""

from __future__ import annotations

import logging
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path

from lazydu.logs import configure_logging, parse_level


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        package_logger = logging.getLogger("lazydu")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

    def test_parse_level(self) -> None:
        self.assertEqual(parse_level(None), logging.WARNING)
        self.assertEqual(parse_level("debug"), logging.DEBUG)
        self.assertEqual(parse_level(logging.ERROR), logging.ERROR)
        self.assertEqual(parse_level("nonsense"), logging.WARNING)

    def test_messages_from_submodules_reach_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "lazydu.log"
            configure_logging("INFO", log_file)

            logging.getLogger("lazydu.size_tree.scan").info("scan finished: %s", "/data")
            logging.getLogger("lazydu.size_tree.scan").debug("hidden detail")
            for handler in logging.getLogger("lazydu").handlers:
                handler.flush()

            text = log_file.read_text(encoding="utf-8")
            self.assertIn("scan finished: /data", text)
            self.assertNotIn("hidden detail", text)
            self.tearDown()

    def test_reconfigure_replaces_own_handler_only(self) -> None:
        package_logger = logging.getLogger("lazydu")
        foreign = logging.NullHandler()
        package_logger.addHandler(foreign)
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging("INFO", Path(tmp) / "a.log")
            configure_logging("DEBUG", Path(tmp) / "b.log")

            file_handlers = [h for h in package_logger.handlers if isinstance(h, RotatingFileHandler)]
            self.assertEqual(len(file_handlers), 1)
            self.assertTrue(file_handlers[0].baseFilename.endswith("b.log"))
            self.assertIn(foreign, package_logger.handlers)
            self.assertEqual(package_logger.level, logging.DEBUG)
            self.assertFalse(package_logger.propagate)
            self.tearDown()

    def test_unwritable_log_path_falls_back_to_null_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("not a directory", encoding="utf-8")

            package_logger = configure_logging("INFO", blocker / "lazydu.log")

            self.assertEqual(len(package_logger.handlers), 1)
            self.assertIsInstance(package_logger.handlers[0], logging.NullHandler)
            package_logger.info("still harmless")


if __name__ == "__main__":
    unittest.main()
