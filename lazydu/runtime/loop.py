"""Interactive loops for the scanning placeholder and the size browser.

Both loops are wiring only: scanning, navigation, and rendering live in their
own modules and are passed in so the loops stay easy to drive from tests.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..input import QUIT_KEYS, BrowserKeyContext, build_browser_registry, handle_browser_key, read_key
from ..navigation import NavigationEngine
from ..render import (
    BrowserFrame,
    adjust_list_start,
    build_rows,
    list_view_rows,
    next_dot_position,
    render_browser,
    render_scanning,
)
from ..size_tree import ScanResult
from ..terminal import TerminalController
from ..ui_theme import UITheme
from .background_scan import BackgroundScan
from .state import BrowserState


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    scan_frame_seconds: float = 0.05
    idle_poll_seconds: float = 0.25
    status_message_seconds: float = 4.0


def run_scanning_loop(
    scan: BackgroundScan,
    terminal: TerminalController,
    stdin_fd: int,
    root: Path,
    theme: UITheme,
    timing: RuntimeLoopTiming,
) -> ScanResult | None:
    """Animate the placeholder until the scan finishes.

    Returns ``None`` when the user quits before the scan completes.
    """
    dot_pos, forward = 0, True
    frame_ms = max(1, int(timing.scan_frame_seconds * 1000))
    while True:
        columns, lines = terminal.size()
        render_scanning(root, dot_pos, columns, lines, theme)
        dot_pos, forward = next_dot_position(dot_pos, forward)
        key = read_key(stdin_fd, timeout_ms=frame_ms)
        if key in QUIT_KEYS:
            return None
        result = scan.poll()
        if result is not None:
            return result


def _set_status(state: BrowserState, message: str, timing: RuntimeLoopTiming) -> None:
    state.status_message = message
    state.status_message_until = time.monotonic() + timing.status_message_seconds
    state.dirty = True


def _rescan_status(result: ScanResult) -> str:
    if result.warnings:
        return f"rescanned ({len(result.warnings)} unreadable)"
    return "rescanned"


def run_browser_loop(
    engine: NavigationEngine,
    state: BrowserState,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    timing: RuntimeLoopTiming,
    on_wrap_toggled: Callable[[bool], None] | None = None,
) -> None:
    """Run the browser until a quit key is read.

    Each key is fully handled, including any blocking rescan, before the
    frame is redrawn and the next key is read.
    """

    def current_frame() -> BrowserFrame:
        columns, lines = terminal.size()
        directory = engine.current_directory()
        rows = build_rows(engine.tree.children_sorted(directory), directory.size)
        visible_rows = list_view_rows(lines, state.show_help)
        state.list_start = adjust_list_start(engine.selected_index, state.list_start, visible_rows, len(rows))
        return BrowserFrame(
            path=engine.absolute_path(),
            total_size=directory.size,
            rows=rows,
            selected_index=engine.selected_index,
            list_start=state.list_start,
            width=columns,
            height=lines,
            wrap_selection=engine.wrap_selection,
            warning_count=len(engine.warnings),
            status_message=state.status_message,
            show_help=state.show_help,
            theme=theme,
        )

    def page_size() -> int:
        return max(1, terminal.size()[1] // 4)

    def rescan_current() -> None:
        _set_status(state, "rescanning...", timing)
        render_browser(current_frame())
        result = engine.rescan()
        _set_status(state, _rescan_status(result), timing)

    def toggle_wrap() -> None:
        engine.set_wrap_selection(not engine.wrap_selection)
        if on_wrap_toggled is not None:
            on_wrap_toggled(engine.wrap_selection)
        _set_status(state, "wrap-around on" if engine.wrap_selection else "wrap-around off", timing)

    def toggle_help() -> None:
        state.show_help = not state.show_help

    registry = build_browser_registry(
        BrowserKeyContext(
            engine=engine,
            state=state,
            page_size=page_size,
            rescan_current=rescan_current,
            toggle_wrap=toggle_wrap,
            toggle_help=toggle_help,
        )
    )
    last_size: tuple[int, int] | None = None
    last_path: tuple[str, ...] = tuple(engine.current_path)
    idle_ms = max(1, int(timing.idle_poll_seconds * 1000))

    while True:
        size = terminal.size()
        if size != last_size:
            last_size = size
            state.dirty = True
        if state.status_message and time.monotonic() >= state.status_message_until:
            state.status_message = ""
            state.dirty = True
        if tuple(engine.current_path) != last_path:
            last_path = tuple(engine.current_path)
            state.list_start = 0
        if state.dirty:
            render_browser(current_frame())
            state.dirty = False

        key = read_key(stdin_fd, timeout_ms=idle_ms)
        if not key:
            continue
        if handle_browser_key(key, registry, state):
            return


__all__ = ["RuntimeLoopTiming", "run_browser_loop", "run_scanning_loop"]
