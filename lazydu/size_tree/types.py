"""Datatypes for scanned size trees and arena-backed tree nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ScannedFile:
    """Detached scan result for one non-directory entry."""

    size: int


@dataclass(frozen=True)
class ScannedDirectory:
    """Detached scan result for one directory and its recursive contents.

    ``children`` iterates in ascending name order. ``size`` already includes
    ``own_size`` plus every child's size.
    """

    size: int
    own_size: int
    children: dict[str, "ScannedEntry"] = field(default_factory=dict)


ScannedEntry = ScannedDirectory | ScannedFile


@dataclass(frozen=True)
class ScanWarning:
    """Non-fatal problem observed while scanning ``path``."""

    path: Path
    message: str


@dataclass
class FileNode:
    size: int


@dataclass
class DirectoryNode:
    """Arena directory node.

    ``children`` maps names to node ids in ascending name order. ``cursor``
    remembers the selection to restore when the directory is re-entered.
    """

    size: int
    own_size: int
    children: dict[str, int] = field(default_factory=dict)
    cursor: int = 0

    def clamped_cursor(self) -> int:
        """Return ``cursor`` clamped into the valid child index range."""
        if not self.children:
            return 0
        return max(0, min(self.cursor, len(self.children) - 1))


SizeNode = DirectoryNode | FileNode


__all__ = [
    "ScannedFile",
    "ScannedDirectory",
    "ScannedEntry",
    "ScanWarning",
    "FileNode",
    "DirectoryNode",
    "SizeNode",
]
