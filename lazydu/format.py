"""Stateless presentation helpers for size columns and proportion bars."""

from __future__ import annotations

import math

SIZE_UNITS: tuple[str, ...] = ("", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
SIZE_COLUMN_WIDTH = 8
BAR_CELLS = 8
BAR_GLYPHS = " ▏▎▍▌▋▊▉█"
FULL_BLOCK = BAR_GLYPHS[-1]


def prettify_size(num_bytes: int) -> str:
    """Return ``num_bytes`` as a compact 1024-based string.

    Values below 1024 print as a bare integer; larger values carry one
    decimal and a unit suffix, e.g. ``1.5kB``.
    """
    if num_bytes < 1024:
        return str(max(0, num_bytes))
    value = float(num_bytes)
    exponent = 0
    while value >= 1024.0 and exponent < len(SIZE_UNITS) - 1:
        value /= 1024.0
        exponent += 1
    return f"{value:.1f}{SIZE_UNITS[exponent]}"


def format_size(num_bytes: int) -> str:
    """Return the right-aligned size column for one row."""
    return prettify_size(num_bytes).rjust(SIZE_COLUMN_WIDTH)


def format_bar(child_bytes: int, parent_bytes: int) -> str:
    """Return a bracketed 8-cell bar showing ``child_bytes / parent_bytes``.

    Whole eighths are drawn as full blocks followed by one partial-cell glyph
    at 1/64 resolution; the remainder is padded with spaces.
    """
    if parent_bytes <= 0:
        fraction = 0.0
    else:
        fraction = min(1.0, max(0.0, child_bytes / parent_bytes))
    full_cells = math.floor(fraction * BAR_CELLS)
    if full_cells >= BAR_CELLS:
        bar = FULL_BLOCK * BAR_CELLS
    else:
        partial_index = round((fraction - full_cells / BAR_CELLS) * 64)
        partial = BAR_GLYPHS[max(0, min(partial_index, len(BAR_GLYPHS) - 1))]
        bar = FULL_BLOCK * full_cells + partial + " " * (BAR_CELLS - full_cells - 1)
    return f" [{bar}] "


__all__ = [
    "BAR_CELLS",
    "SIZE_COLUMN_WIDTH",
    "format_bar",
    "format_size",
    "prettify_size",
]
