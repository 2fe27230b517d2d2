from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BrowserState:
    """View-only state of the browser; navigation state lives in the engine."""

    list_start: int = 0
    show_help: bool = False
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True
