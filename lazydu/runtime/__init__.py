"""Public runtime orchestration entry points.

This package groups the interactive browser bootstrap (``run_browser``) and
the lower-level loops used by tests and composition code.
"""

from __future__ import annotations


def run_browser(*args, **kwargs):
    """Lazily import the browser entrypoint to avoid package-import cycles."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


def print_listing(*args, **kwargs):
    """Lazily import the non-interactive listing printer."""
    from .app import print_listing as _print_listing

    return _print_listing(*args, **kwargs)


__all__ = ["print_listing", "run_browser"]
