"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the browser chrome and size rows.
``--no-color`` always maps to the plain palette.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    header: str
    header_path: str
    size: str
    bar: str
    directory: str
    file: str
    status: str
    warning: str
    scanning: str
    help_heading: str
    help_key: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    header="\033[1;38;5;81m",
    header_path="\033[1m",
    size="\033[38;5;109m",
    bar="\033[38;5;44m",
    directory="\033[1;34m",
    file="\033[38;5;252m",
    status="\033[7m",
    warning="\033[38;5;214m",
    scanning="\033[1;38;5;81m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    header="\033[1;38;5;45m",
    header_path="\033[1;38;5;153m",
    size="\033[38;5;73m",
    bar="\033[38;5;39m",
    directory="\033[1;38;5;45m",
    file="\033[38;5;252m",
    status="\033[7;38;5;31m",
    warning="\033[38;5;215m",
    scanning="\033[1;38;5;39m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="\033[7m",
    header="",
    header_path="",
    size="",
    bar="",
    directory="",
    file="",
    status="\033[7m",
    warning="",
    scanning="",
    help_heading="",
    help_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
