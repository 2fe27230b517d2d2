"""Input-layer public API for key decoding and browser key handling.

Exports are split between low-level terminal decoding (``read_key``) and the
key bindings used by the runtime loop.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import BrowserKeyContext, QUIT_KEYS, build_browser_registry, handle_browser_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "read_key",
    "KeyComboBinding",
    "KeyComboRegistry",
    "BrowserKeyContext",
    "QUIT_KEYS",
    "build_browser_registry",
    "handle_browser_key",
]
