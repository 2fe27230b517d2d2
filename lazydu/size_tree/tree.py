"""Arena-backed size tree with path lookup and size-ordered listings.

Nodes live in one dict keyed by stable integer ids. Directories map child
names to ids, so swapping one subtree during a rescan never invalidates ids
held for unrelated parts of the tree.
"""

from __future__ import annotations

from collections.abc import Sequence

from .types import DirectoryNode, FileNode, ScannedDirectory, ScannedEntry, ScannedFile, SizeNode


class SizeTreeError(Exception):
    """Base class for size-tree lookup failures."""


class TreeNotFoundError(SizeTreeError, LookupError):
    """Raised when a path does not address a node in the tree."""


class TreeNotADirectoryError(SizeTreeError):
    """Raised when a directory-only operation reaches a file node."""


def _display_path(path: Sequence[str]) -> str:
    return "/" + "/".join(path)


class SizeTree:
    """Recursive size tree whose root is always an unnamed directory."""

    def __init__(self, root_own_size: int = 0) -> None:
        self._nodes: dict[int, SizeNode] = {}
        self._next_id = 0
        self.root_id = self._allocate(DirectoryNode(size=root_own_size, own_size=root_own_size))

    @classmethod
    def from_scan(cls, scanned: ScannedDirectory) -> SizeTree:
        """Build a tree whose root is the ingested ``scanned`` directory."""
        tree = cls()
        del tree._nodes[tree.root_id]
        tree.root_id = tree._ingest(scanned)
        return tree

    def _allocate(self, node: SizeNode) -> int:
        node_id = self._next_id
        self._next_id += 1
        self._nodes[node_id] = node
        return node_id

    def _ingest(self, scanned: ScannedEntry) -> int:
        """Allocate nodes for ``scanned`` and return the id of its top node.

        Walks with an explicit stack; children keep their name order.
        """
        if isinstance(scanned, ScannedFile):
            return self._allocate(FileNode(size=scanned.size))
        top = DirectoryNode(size=scanned.size, own_size=scanned.own_size)
        top_id = self._allocate(top)
        stack: list[tuple[DirectoryNode, ScannedDirectory]] = [(top, scanned)]
        while stack:
            node, source = stack.pop()
            for name, child in source.children.items():
                if isinstance(child, ScannedFile):
                    node.children[name] = self._allocate(FileNode(size=child.size))
                    continue
                child_node = DirectoryNode(size=child.size, own_size=child.own_size)
                node.children[name] = self._allocate(child_node)
                stack.append((child_node, child))
        return top_id

    def _free(self, node_id: int) -> None:
        stack = [node_id]
        while stack:
            node = self._nodes.pop(stack.pop())
            if isinstance(node, DirectoryNode):
                stack.extend(node.children.values())

    @property
    def root(self) -> DirectoryNode:
        root = self._nodes[self.root_id]
        assert isinstance(root, DirectoryNode)
        return root

    def node(self, node_id: int) -> SizeNode:
        return self._nodes[node_id]

    def node_count(self) -> int:
        return len(self._nodes)

    def resolve_id(self, path: Sequence[str]) -> int:
        """Return the id of the node addressed by ``path`` from the root.

        Raises ``TreeNotFoundError`` when a component is missing or when a
        file would have to be descended through.
        """
        node_id = self.root_id
        for depth, name in enumerate(path):
            node = self._nodes[node_id]
            if not isinstance(node, DirectoryNode):
                raise TreeNotFoundError(f"cannot descend through file: {_display_path(path[:depth])}")
            child_id = node.children.get(name)
            if child_id is None:
                raise TreeNotFoundError(f"no such entry: {_display_path(path[: depth + 1])}")
            node_id = child_id
        return node_id

    def resolve(self, path: Sequence[str]) -> SizeNode:
        return self._nodes[self.resolve_id(path)]

    def resolve_directory(self, path: Sequence[str]) -> DirectoryNode:
        """Resolve ``path`` and require the result to be a directory."""
        node = self.resolve(path)
        if not isinstance(node, DirectoryNode):
            raise TreeNotADirectoryError(f"not a directory: {_display_path(path)}")
        return node

    def children_sorted(self, node: SizeNode) -> list[tuple[str, SizeNode]]:
        """Return ``(name, node)`` pairs ordered by size, largest first.

        Children are stored in name order and the sort is stable, so entries
        of equal size keep ascending name order between renders.
        """
        if not isinstance(node, DirectoryNode):
            raise TreeNotADirectoryError("children requested for a file node")
        pairs = [(name, self._nodes[child_id]) for name, child_id in node.children.items()]
        pairs.sort(key=lambda pair: pair[1].size, reverse=True)
        return pairs

    @staticmethod
    def aggregate_size(node: SizeNode) -> int:
        return node.size

    def replace_subtree(self, path: Sequence[str], scanned: ScannedDirectory) -> DirectoryNode:
        """Swap the directory at ``path`` for ``scanned`` and fix ancestor sizes.

        The replacement starts with cursor 0. Old node ids are released and
        every ancestor's aggregate size is shifted by the size delta.
        """
        old = self.resolve_directory(path)
        delta = scanned.size - old.size

        ancestor_ids = [self.root_id]
        for name in path[:-1]:
            ancestor = self._nodes[ancestor_ids[-1]]
            assert isinstance(ancestor, DirectoryNode)
            ancestor_ids.append(ancestor.children[name])

        new_id = self._ingest(scanned)
        if not path:
            self._free(self.root_id)
            self.root_id = new_id
        else:
            parent = self._nodes[ancestor_ids[-1]]
            assert isinstance(parent, DirectoryNode)
            old_id = parent.children[path[-1]]
            parent.children[path[-1]] = new_id
            self._free(old_id)
            for ancestor_id in ancestor_ids:
                self._nodes[ancestor_id].size += delta

        replacement = self._nodes[new_id]
        assert isinstance(replacement, DirectoryNode)
        return replacement


__all__ = [
    "SizeTree",
    "SizeTreeError",
    "TreeNotFoundError",
    "TreeNotADirectoryError",
]
