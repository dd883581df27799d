"""Tree builder turning flat listings into ordered forests."""
from typing import Dict, Iterable, List

from ...exceptions import DuplicatePathError
from ...path import StoragePath
from ..models import PathEntry, TreeNode, sort_nodes


class TreeBuilder:
    """Builds a directory forest from a flat list of path entries."""

    def build(self, entries: Iterable[PathEntry]) -> List[TreeNode]:
        """
        Build the forest.

        Directories are registered by full path first, then every entry
        (directories before files) is attached to its parent. Entries
        whose parent is absent from the listing, e.g. after a
        non-recursive fetch, land at the forest root. Children are
        sorted recursively, so the same input always yields the same
        structure.

        Raises:
            DuplicatePathError: If a directory path appears twice
        """
        entries = list(entries)
        folders: Dict[StoragePath, TreeNode] = {}

        for entry in entries:
            if not entry.is_directory:
                continue
            key = entry.path
            if key in folders:
                raise DuplicatePathError(entry.full_path)
            folders[key] = TreeNode(entry)

        forest: List[TreeNode] = []
        directories = [e for e in entries if e.is_directory]
        files = [e for e in entries if not e.is_directory]

        for entry in directories + files:
            path = entry.path
            node = folders[path] if entry.is_directory else TreeNode(entry)
            parent = folders.get(path.parent) if len(path) > 1 else None
            if parent is None:
                forest.append(node)
            else:
                parent.children.append(node)

        sort_nodes(forest)
        return forest
