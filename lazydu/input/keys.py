"""Browser key bindings on top of the navigation engine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..navigation import NavigationEngine
from ..runtime.state import BrowserState
from .key_registry import KeyComboBinding, KeyComboRegistry

QUIT_KEYS: tuple[str, ...] = ("q", "Q", "CTRL_C")


@dataclass(frozen=True)
class BrowserKeyContext:
    """Engine, view state, and runtime callbacks used by key handlers."""

    engine: NavigationEngine
    state: BrowserState
    page_size: Callable[[], int]
    rescan_current: Callable[[], None]
    toggle_wrap: Callable[[], None]
    toggle_help: Callable[[], None]


def build_browser_registry(context: BrowserKeyContext) -> KeyComboRegistry:
    """Bind every browser command to its key tokens."""
    engine = context.engine

    def action(operation: Callable[[], object]) -> Callable[[], bool]:
        def run() -> bool:
            operation()
            return False

        return run

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(QUIT_KEYS, lambda: True),
        KeyComboBinding(("j", "DOWN"), action(lambda: engine.move_selection(1))),
        KeyComboBinding(("k", "UP"), action(lambda: engine.move_selection(-1))),
        KeyComboBinding(("h", "LEFT"), action(engine.exit)),
        KeyComboBinding(("l", "RIGHT", "ENTER"), action(engine.enter)),
        KeyComboBinding(("g", "HOME"), action(engine.jump_first)),
        KeyComboBinding(("G", "END"), action(engine.jump_last)),
        KeyComboBinding(
            ("CTRL_D", "CTRL_F", "PAGE_DOWN"),
            action(lambda: engine.page_move(1, context.page_size())),
        ),
        KeyComboBinding(
            ("CTRL_U", "CTRL_B", "PAGE_UP"),
            action(lambda: engine.page_move(-1, context.page_size())),
        ),
        KeyComboBinding(("r",), action(context.rescan_current)),
        KeyComboBinding(("w",), action(context.toggle_wrap)),
        KeyComboBinding(("?",), action(context.toggle_help)),
    )


def handle_browser_key(key: str, registry: KeyComboRegistry, state: BrowserState) -> bool:
    """Dispatch one key and return ``True`` when the browser should quit."""
    if not registry.has(key):
        return False
    state.dirty = True
    return bool(registry.dispatch(key))


__all__ = [
    "BrowserKeyContext",
    "QUIT_KEYS",
    "build_browser_registry",
    "handle_browser_key",
]
