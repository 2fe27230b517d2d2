"""ANSI-aware width measurement and clipping for rendered rows.

Escape sequences are carried through untouched and never count toward width.
Wide East Asian characters take two columns; control characters in names are
replaced so they cannot move the cursor.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one printable character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return visible column width of ``text`` ignoring escape sequences."""
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def sanitize_name(name: str) -> str:
    """Make a path component safe to print.

    Control characters become ``?``. Surrogate-escaped bytes from undecodable
    file names are shown as U+FFFD.
    """
    cleaned = _CONTROL_RE.sub("?", name)
    return cleaned.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    idx = 0
    while idx < len(text):
        if text[idx] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, idx)
            if match is not None:
                out.append(match.group(0))
                idx = match.end()
                continue
        width = char_display_width(text[idx])
        if col + width > max_cols:
            break
        out.append(text[idx])
        col += width
        idx += 1
    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "pad_ansi_line",
    "sanitize_name",
]
