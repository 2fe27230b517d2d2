"""Rendering for the size browser and the scanning placeholder.

Row content is built from ``(name, node)`` pairs and written as one composed
ANSI frame per redraw. Frame builders return lines so they can be tested
without a terminal; ``render_*`` functions write them to stdout.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..ansi import clip_ansi_line, display_width, pad_ansi_line, sanitize_name
from ..format import format_bar, format_size, prettify_size
from ..size_tree import DirectoryNode, SizeNode
from ..ui_theme import DEFAULT_THEME, UITheme
from .help import help_panel_lines, help_panel_row_count

SCANNING_DOT_POSITIONS = 6
CHROME_ROWS = 2


@dataclass(frozen=True)
class DisplayRow:
    """Pre-formatted cells for one listing row."""

    size_text: str
    bar: str
    name: str
    is_dir: bool

    def plain_text(self) -> str:
        return f"{self.size_text}{self.bar}{self.name}{'/' if self.is_dir else ''}"


@dataclass
class BrowserFrame:
    """Everything the browser view needs for one redraw."""

    path: Path
    total_size: int
    rows: list[DisplayRow]
    selected_index: int
    list_start: int
    width: int
    height: int
    wrap_selection: bool = False
    warning_count: int = 0
    status_message: str = ""
    show_help: bool = False
    theme: UITheme = DEFAULT_THEME


def build_rows(entries: Sequence[tuple[str, SizeNode]], parent_size: int) -> list[DisplayRow]:
    """Format size column, proportion bar, and name for each entry."""
    return [
        DisplayRow(
            size_text=format_size(node.size),
            bar=format_bar(node.size, parent_size),
            name=sanitize_name(name),
            is_dir=isinstance(node, DirectoryNode),
        )
        for name, node in entries
    ]


def list_view_rows(height: int, show_help: bool) -> int:
    """Return how many listing rows fit between header, help, and status."""
    return max(1, height - CHROME_ROWS - help_panel_row_count(height, show_help))


def adjust_list_start(selected_index: int, list_start: int, visible_rows: int, count: int) -> int:
    """Scroll the listing just enough to keep ``selected_index`` visible."""
    if selected_index < list_start:
        list_start = selected_index
    elif selected_index >= list_start + visible_rows:
        list_start = selected_index - visible_rows + 1
    return max(0, min(list_start, max(0, count - visible_rows)))


def format_row(row: DisplayRow, theme: UITheme) -> str:
    name_color = theme.directory if row.is_dir else theme.file
    suffix = "/" if row.is_dir else ""
    return (
        f"{theme.size}{row.size_text}{theme.reset}"
        f"{theme.bar}{row.bar}{theme.reset}"
        f"{name_color}{row.name}{suffix}{theme.reset}"
    )


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text
    # Keep reverse video active across internal resets.
    return theme.reverse + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = clip_ansi_line(left_text, left_limit)
    gap = " " * (usable - display_width(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _header_line(path: Path, total_size: int | None, width: int, theme: UITheme) -> str:
    total = f"  {prettify_size(total_size)}" if total_size is not None else ""
    text = (
        f"{theme.header} lazydu {theme.reset} "
        f"{theme.header_path}{sanitize_name(str(path))}{theme.reset}{total}"
    )
    return clip_ansi_line(text, max(1, width - 1))


def build_browser_lines(frame: BrowserFrame) -> list[str]:
    """Compose the browser frame as ``frame.height`` display lines."""
    theme = frame.theme
    width = max(1, frame.width)
    line_width = max(1, width - 1)
    help_rows = help_panel_row_count(frame.height, frame.show_help)
    visible_rows = list_view_rows(frame.height, frame.show_help)

    lines = [_header_line(frame.path, frame.total_size, width, theme)]
    for offset in range(visible_rows):
        idx = frame.list_start + offset
        if not frame.rows and offset == 0:
            lines.append(clip_ansi_line("  (empty directory)", line_width))
            continue
        if idx >= len(frame.rows):
            lines.append("")
            continue
        text = format_row(frame.rows[idx], theme)
        if idx == frame.selected_index:
            lines.append(selected_with_ansi(pad_ansi_line(text, line_width), theme))
        else:
            lines.append(clip_ansi_line(text, line_width))

    help_lines = help_panel_lines(theme)
    for row in range(help_rows):
        lines.append(clip_ansi_line(help_lines[row], line_width) if row < len(help_lines) else "")

    count = len(frame.rows)
    position = f"{frame.selected_index + 1}/{count}" if count else "0/0"
    status_parts = [f"{count} items", position, "wrap" if frame.wrap_selection else "clamp"]
    if frame.warning_count:
        status_parts.append(f"{frame.warning_count} unreadable")
    if frame.status_message:
        status_parts.append(frame.status_message)
    status = build_status_line(" " + "  ".join(status_parts), width)
    lines.append(f"{theme.status}{status}\033[0m")
    return lines


def scanning_message(dot_pos: int) -> str:
    """Return the bouncing-dots scanning label for ``dot_pos``."""
    pos = max(0, min(dot_pos, SCANNING_DOT_POSITIONS))
    return "Scanning" + " " * pos + "..." + " " * (SCANNING_DOT_POSITIONS - pos)


def next_dot_position(dot_pos: int, forward: bool) -> tuple[int, bool]:
    """Advance the scanning animation, bouncing between both ends."""
    if dot_pos >= SCANNING_DOT_POSITIONS:
        forward = False
    elif dot_pos <= 0:
        forward = True
    return dot_pos + (1 if forward else -1), forward


def build_scanning_lines(path: Path, dot_pos: int, width: int, height: int, theme: UITheme) -> list[str]:
    """Compose the placeholder shown while the initial scan runs."""
    width = max(1, width)
    lines = [_header_line(path, None, width, theme)]
    body_rows = max(1, height - 1)
    message = scanning_message(dot_pos)
    pad = max(0, (width - 1 - len(message)) // 2)
    message_row = body_rows // 2
    for row in range(body_rows):
        if row == message_row:
            lines.append(clip_ansi_line(f"{' ' * pad}{theme.scanning}{message}{theme.reset}", width - 1))
        else:
            lines.append("")
    return lines


def _write_frame(lines: list[str]) -> None:
    out = ["\033[H\033[J"]
    for idx, line in enumerate(lines):
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
        if idx < len(lines) - 1:
            out.append("\r\n")
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


def render_browser(frame: BrowserFrame) -> None:
    _write_frame(build_browser_lines(frame))


def render_scanning(path: Path, dot_pos: int, width: int, height: int, theme: UITheme) -> None:
    _write_frame(build_scanning_lines(path, dot_pos, width, height, theme))


__all__ = [
    "BrowserFrame",
    "DisplayRow",
    "adjust_list_start",
    "build_browser_lines",
    "build_rows",
    "build_scanning_lines",
    "build_status_line",
    "list_view_rows",
    "next_dot_position",
    "render_browser",
    "render_scanning",
    "scanning_message",
]
