"""Runtime composition layer for lazydu.

Builds the scanner, runs the initial scan behind the placeholder, hands the
tree to the navigation engine, and starts the browser loop.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from ..config import save_wrap_selection
from ..navigation import NavigationEngine
from ..render import build_rows
from ..size_tree import ConcurrentScanner, ScanErrorPolicy, ScanResult, SizeTree
from ..format import prettify_size
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .background_scan import BackgroundScan
from .loop import RuntimeLoopTiming, run_browser_loop, run_scanning_loop
from .state import BrowserState

logger = logging.getLogger(__name__)


def build_scanner(max_tasks: int | None, strict: bool) -> ConcurrentScanner:
    policy = ScanErrorPolicy.STRICT if strict else ScanErrorPolicy.TOLERANT
    return ConcurrentScanner(max_tasks, policy=policy)


def build_engine(
    result: ScanResult,
    root: Path,
    scanner: ConcurrentScanner,
    wrap_selection: bool,
) -> NavigationEngine:
    """Turn a finished scan into the engine that owns the tree from now on."""
    return NavigationEngine(
        SizeTree.from_scan(result.root),
        root,
        scanner,
        wrap_selection=wrap_selection,
        warnings=result.warnings,
    )


def print_listing(root: Path, scanner: ConcurrentScanner, out: TextIO | None = None) -> int:
    """Scan ``root`` synchronously and print its size-sorted children.

    Returns the number of unreadable paths reported by the scan.
    """
    stream = out if out is not None else sys.stdout
    result = scanner.scan(root)
    tree = SizeTree.from_scan(result.root)
    stream.write(f"{root.resolve()}  {prettify_size(tree.root.size)}\n")
    for row in build_rows(tree.children_sorted(tree.root), tree.root.size):
        stream.write(row.plain_text() + "\n")
    for warning in result.warnings:
        stream.write(f"warning: {warning.path}: {warning.message}\n")
    return len(result.warnings)


def run_browser(
    root: Path,
    *,
    theme_name: str | None = None,
    no_color: bool = False,
    wrap_selection: bool = False,
    max_tasks: int | None = None,
    strict: bool = False,
    timing: RuntimeLoopTiming | None = None,
    persist_wrap: Callable[[bool], None] = save_wrap_selection,
) -> None:
    """Scan ``root`` and browse it interactively.

    Falls back to printing the listing when stdin or stdout is not a TTY.
    """
    scanner = build_scanner(max_tasks, strict)
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        print_listing(root, scanner)
        return

    theme = resolve_theme(theme_name, no_color=no_color)
    loop_timing = timing or RuntimeLoopTiming()
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd=stdin_fd, stdout_fd=sys.stdout.fileno())
    background = BackgroundScan(scanner.scan, root)

    logger.info("starting browser at %s (pid %d)", root, os.getpid())
    with terminal.raw_mode():
        background.start()
        result = run_scanning_loop(background, terminal, stdin_fd, root, theme, loop_timing)
        if result is None:
            logger.info("quit during initial scan")
            return
        engine = build_engine(result, root, scanner, wrap_selection)
        run_browser_loop(
            engine,
            BrowserState(),
            terminal,
            stdin_fd,
            theme,
            loop_timing,
            on_wrap_toggled=persist_wrap,
        )


__all__ = ["build_engine", "build_scanner", "print_listing", "run_browser"]
