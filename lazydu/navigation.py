"""Navigation engine over a scanned size tree.

Tracks the viewed directory as a path of names from the scan root plus a
selection index into that directory's size-sorted children. This module has
no UI concerns; the runtime loop calls one operation per key and re-renders.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .size_tree import (
    DirectoryNode,
    ScanResult,
    ScanWarning,
    SizeNode,
    SizeTree,
    SizeTreeError,
)

logger = logging.getLogger(__name__)


class Scanner(Protocol):
    def scan(self, root: Path | str) -> ScanResult: ...


def clamp_index(index: int, count: int) -> int:
    """Clamp ``index`` into ``[0, count - 1]``; empty listings pin to 0."""
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


class NavigationEngine:
    """Owns the size tree after the initial scan and mediates all access.

    ``selected_index`` is stored into a directory's cursor whenever that
    directory is left (by entering a child or exiting to the parent) and read
    back, clamped, whenever it becomes current again.
    """

    def __init__(
        self,
        tree: SizeTree,
        root_path: Path,
        scanner: Scanner,
        *,
        wrap_selection: bool = False,
        warnings: Sequence[ScanWarning] = (),
    ) -> None:
        self.tree = tree
        self.root_path = Path(root_path)
        self.scanner = scanner
        self.wrap_selection = wrap_selection
        self.current_path: list[str] = []
        self.selected_index = 0
        self.warnings: list[ScanWarning] = list(warnings)

    def current_directory(self) -> DirectoryNode:
        return self.tree.resolve_directory(self.current_path)

    def entries(self) -> list[tuple[str, SizeNode]]:
        return self.tree.children_sorted(self.current_directory())

    def child_count(self) -> int:
        return len(self.current_directory().children)

    def selected_entry(self) -> tuple[str, SizeNode] | None:
        entries = self.entries()
        if not entries:
            return None
        return entries[clamp_index(self.selected_index, len(entries))]

    def absolute_path(self) -> Path:
        """Return the canonical filesystem path of the viewed directory."""
        return self.root_path.joinpath(*self.current_path).resolve()

    def set_wrap_selection(self, enabled: bool) -> None:
        self.wrap_selection = bool(enabled)

    def move_selection(self, delta: int) -> None:
        """Move selection by ``delta`` under the active clamp/wrap policy."""
        count = self.child_count()
        if count == 0:
            return
        if self.wrap_selection:
            self.selected_index = (self.selected_index + delta) % count
        else:
            self.selected_index = clamp_index(self.selected_index + delta, count)

    def page_move(self, direction: int, page_size: int) -> None:
        """Move by whole pages; paging always clamps at either end."""
        count = self.child_count()
        if count == 0:
            return
        step = max(1, page_size)
        self.selected_index = clamp_index(self.selected_index + direction * step, count)

    def jump_first(self) -> None:
        self.selected_index = 0

    def jump_last(self) -> None:
        count = self.child_count()
        if count == 0:
            return
        self.selected_index = count - 1

    def enter(self) -> bool:
        """Descend into the selected child when it is a directory."""
        current = self.current_directory()
        entries = self.tree.children_sorted(current)
        if not entries:
            return False
        index = clamp_index(self.selected_index, len(entries))
        name, node = entries[index]
        if not isinstance(node, DirectoryNode):
            return False
        current.cursor = index
        self.current_path.append(name)
        self.selected_index = node.clamped_cursor()
        return True

    def exit(self) -> bool:
        """Return to the parent directory; no-op at the scan root."""
        if not self.current_path:
            return False
        self.current_directory().cursor = self.selected_index
        self.current_path.pop()
        self.selected_index = self.current_directory().clamped_cursor()
        return True

    def rescan(self, path: Sequence[str] | None = None) -> ScanResult:
        """Rebuild the subtree at ``path`` (default: current directory) in place.

        Blocks until the scanner finishes. The replacement directory's cursor
        starts at 0 and ``selected_index`` is clamped to the new child count.
        """
        target = list(self.current_path if path is None else path)
        self.tree.resolve_directory(target)
        filesystem_path = self.root_path.joinpath(*target)
        logger.info("rescan: %s", filesystem_path)
        result = self.scanner.scan(filesystem_path)
        self.tree.replace_subtree(target, result.root)

        prefix = tuple(target)
        self.warnings = [
            warning
            for warning in self.warnings
            if not _is_within(warning.path, filesystem_path)
        ]
        self.warnings.extend(result.warnings)

        if tuple(self.current_path[: len(prefix)]) != prefix:
            return result
        try:
            self.tree.resolve_directory(self.current_path)
        except SizeTreeError:
            logger.warning(
                "rescan: %s vanished, showing %s",
                self.root_path.joinpath(*self.current_path),
                filesystem_path,
            )
            self.current_path = target
            self.selected_index = 0
        self.selected_index = clamp_index(self.selected_index, self.child_count())
        return result


def _is_within(path: Path, ancestor: Path) -> bool:
    try:
        path.relative_to(ancestor)
    except ValueError:
        return False
    return True


__all__ = ["NavigationEngine", "Scanner", "clamp_index"]
