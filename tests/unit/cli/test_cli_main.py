"""CLI argument, config merge, and start-directory validation tests.

Verifies how ``lazydu.cli.main`` picks the directory to scan and which
options reach the browser.
"""

from __future__ import annotations

import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest import mock

from lazydu import cli
from lazydu.size_tree import ScanError


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("lazydu.cli.configure_logging")
        self.configure_logging = patcher.start()
        self.addCleanup(patcher.stop)
        config_patcher = mock.patch("lazydu.cli.config.load_config", return_value={})
        config_patcher.start()
        self.addCleanup(config_patcher.stop)


class CliDefaultPathTests(CliTestCase):
    def test_main_defaults_to_current_working_directory_when_no_path_arg(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                with mock.patch.object(sys, "argv", ["lazydu"]), mock.patch("lazydu.cli.run_browser") as run_browser:
                    cli.main()
            finally:
                os.chdir(previous_cwd)

            run_browser.assert_called_once()
            (path,) = run_browser.call_args.args
            self.assertEqual(path.resolve(), root)
            self.assertEqual(
                run_browser.call_args.kwargs,
                {
                    "theme_name": None,
                    "no_color": False,
                    "wrap_selection": False,
                    "max_tasks": None,
                    "strict": False,
                },
            )

    def test_main_uses_explicit_path_argument_over_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            target = root / "target"
            target.mkdir()

            with mock.patch("lazydu.cli.run_browser") as run_browser:
                cli.main([str(target)], default_path=root / "unused")

            (path,) = run_browser.call_args.args
            self.assertEqual(path.resolve(), target)


class CliValidationTests(CliTestCase):
    def test_missing_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            with mock.patch("lazydu.cli.run_browser") as run_browser:
                with self.assertRaises(SystemExit) as caught:
                    cli.main([str(missing)])

        self.assertEqual(caught.exception.code, f"Path not found: {missing}")
        run_browser.assert_not_called()

    def test_file_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(SystemExit) as caught:
                cli.main([str(target)])

        self.assertEqual(caught.exception.code, f"Not a directory: {target}")

    def test_unreadable_directory_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazydu.cli.os.access", return_value=False):
                with self.assertRaises(SystemExit) as caught:
                    cli.main([tmp])

        self.assertEqual(caught.exception.code, f"Cannot read directory: {tmp}")

    def test_two_positional_arguments_are_a_usage_error(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as caught:
                cli.main(["a", "b"])

        self.assertEqual(caught.exception.code, 2)

    def test_jobs_must_be_positive(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as caught:
                cli.main(["--jobs", "0"])

        self.assertEqual(caught.exception.code, 2)


class CliOptionTests(CliTestCase):
    def test_cli_options_reach_browser(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazydu.cli.run_browser") as run_browser:
                cli.main([tmp, "--wrap", "--theme", "ocean", "--no-color", "--jobs", "3", "--strict"])

        self.assertEqual(
            run_browser.call_args.kwargs,
            {
                "theme_name": "ocean",
                "no_color": True,
                "wrap_selection": True,
                "max_tasks": 3,
                "strict": True,
            },
        )

    def test_config_supplies_defaults_and_cli_wins(self) -> None:
        persisted = {"wrap_selection": True, "theme": "ocean", "max_scan_tasks": 5, "strict_scan": True}
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazydu.cli.config.load_config", return_value=persisted), mock.patch(
                "lazydu.cli.run_browser"
            ) as run_browser:
                cli.main([tmp, "--clamp", "--jobs", "2"])

        kwargs = run_browser.call_args.kwargs
        self.assertFalse(kwargs["wrap_selection"])
        self.assertEqual(kwargs["max_tasks"], 2)
        self.assertEqual(kwargs["theme_name"], "ocean")
        self.assertTrue(kwargs["strict"])

    def test_print_mode_skips_browser(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazydu.cli.print_listing") as print_listing, mock.patch(
                "lazydu.cli.run_browser"
            ) as run_browser:
                cli.main([tmp, "--print", "--jobs", "2"])

        run_browser.assert_not_called()
        path, scanner = print_listing.call_args.args
        self.assertEqual(path, Path(tmp))
        self.assertEqual(scanner.admission.max_tasks, 2)

    def test_logging_options_forwarded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "run.log"
            with mock.patch("lazydu.cli.run_browser"):
                cli.main([tmp, "--log-level", "DEBUG", "--log-file", str(log_file)])

        self.configure_logging.assert_called_once_with("DEBUG", log_file)

    def test_strict_scan_failure_becomes_exit_message(self) -> None:
        error = ScanError(Path("/data/bad"), OSError(5, "Input/output error"))
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazydu.cli.run_browser", side_effect=error):
                with self.assertRaises(SystemExit) as caught:
                    cli.main([tmp, "--strict"])

        self.assertEqual(caught.exception.code, "failed to scan /data/bad: Input/output error")


if __name__ == "__main__":
    unittest.main()
