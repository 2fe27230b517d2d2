"""Help panel content for the browser view."""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme

HELP_BINDINGS: tuple[tuple[str, str], ...] = (
    ("j/k Up/Down", "move selection"),
    ("l Right Enter", "open directory"),
    ("h Left", "back to parent"),
    ("g/G Home/End", "first / last entry"),
    ("Ctrl+D/U PgDn/PgUp", "page down / up"),
    ("r", "rescan current directory"),
    ("w", "toggle wrap-around selection"),
    ("?", "toggle this help"),
    ("q", "quit"),
)


def help_panel_lines(theme: UITheme | None = None) -> list[str]:
    """Return styled help rows, heading first."""
    active = theme or DEFAULT_THEME
    key_width = max(len(keys) for keys, _ in HELP_BINDINGS)
    lines = [f"{active.help_heading}KEYS{active.reset}"]
    for keys, description in HELP_BINDINGS:
        lines.append(f"{active.help_key}{keys.ljust(key_width)}{active.reset}  {description}")
    return lines


def help_panel_row_count(max_lines: int, show_help: bool) -> int:
    """Return rows reserved for help, leaving at least three rows for the list."""
    if not show_help:
        return 0
    return max(0, min(len(HELP_BINDINGS) + 1, max_lines - 3))


__all__ = ["HELP_BINDINGS", "help_panel_lines", "help_panel_row_count"]
