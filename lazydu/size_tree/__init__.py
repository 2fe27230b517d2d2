"""Domain model for measured directory trees.

This package contains the non-UI core:
- scanned-entry and arena-node datatypes
- the concurrent filesystem scanner with a shared admission gate
- the arena-backed size tree with path lookup and size ordering
"""

from __future__ import annotations

from .types import (
    DirectoryNode,
    FileNode,
    ScannedDirectory,
    ScannedEntry,
    ScannedFile,
    ScanWarning,
    SizeNode,
)
from .scan import (
    ConcurrentScanner,
    ScanAdmission,
    ScanError,
    ScanErrorPolicy,
    ScanResult,
    default_max_tasks,
)
from .tree import SizeTree, SizeTreeError, TreeNotADirectoryError, TreeNotFoundError

__all__ = [
    "DirectoryNode",
    "FileNode",
    "ScannedDirectory",
    "ScannedEntry",
    "ScannedFile",
    "ScanWarning",
    "SizeNode",
    "ConcurrentScanner",
    "ScanAdmission",
    "ScanError",
    "ScanErrorPolicy",
    "ScanResult",
    "default_max_tasks",
    "SizeTree",
    "SizeTreeError",
    "TreeNotADirectoryError",
    "TreeNotFoundError",
]
