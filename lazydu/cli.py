"""Command-line front door for lazydu.

Parses CLI options, validates the starting directory, and merges persisted
config. Then dispatches into the interactive browser or the plain listing.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from . import config
from .logs import LEVEL_NAMES, configure_logging
from .runtime import print_listing, run_browser
from .runtime.app import build_scanner
from .size_tree import ScanError
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydu",
        description="Measure a directory tree and browse it by size in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to scan. Defaults to current directory.")
    wrap_group = parser.add_mutually_exclusive_group()
    wrap_group.add_argument(
        "--wrap",
        dest="wrap_selection",
        action="store_true",
        default=None,
        help="Wrap selection around at the ends of the list.",
    )
    wrap_group.add_argument(
        "--clamp",
        dest="wrap_selection",
        action="store_false",
        default=None,
        help="Stop selection at the ends of the list (default).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--jobs",
        type=_positive_int,
        default=None,
        help="Maximum concurrent scan tasks (default: number of CPUs).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Abort the scan on unreadable entries instead of skipping them.",
    )
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the listing and exit.")
    parser.add_argument("--log-level", choices=LEVEL_NAMES, default=None, help="Log level (default: WARNING).")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    return parser


def resolve_start_directory(raw_path: str | None, default_path: Path | None = None) -> Path:
    """Validate the starting directory, exiting with a message when unusable."""
    if raw_path is None:
        path = default_path if default_path is not None else Path.cwd()
    else:
        path = Path(raw_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    if not os.access(path, os.R_OK | os.X_OK):
        raise SystemExit(f"Cannot read directory: {path}")
    return path


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch lazydu on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    root = resolve_start_directory(args.path, default_path)
    configure_logging(args.log_level, args.log_file)

    wrap_selection = args.wrap_selection if args.wrap_selection is not None else config.load_wrap_selection()
    strict = args.strict if args.strict is not None else config.load_strict_scan()
    max_tasks = args.jobs if args.jobs is not None else config.load_max_scan_tasks()
    theme_name = args.theme if args.theme is not None else config.load_theme_name()

    try:
        if args.print_only:
            print_listing(root, build_scanner(max_tasks, strict))
            return
        run_browser(
            root,
            theme_name=theme_name,
            no_color=args.no_color,
            wrap_selection=wrap_selection,
            max_tasks=max_tasks,
            strict=strict,
        )
    except ScanError as exc:
        logger.error("%s", exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
