"""Tree node model for hierarchical listings."""
import unicodedata
from enum import Enum
from typing import Dict, Any, List, Optional, Iterator, Tuple

from .path_entry import PathEntry


class ExpansionState(Enum):
    """Expansion state of directory and shortcut nodes."""
    COLLAPSED = 'collapsed'
    LOADING = 'loading'
    EXPANDED = 'expanded'


def collation_key(name: str) -> Tuple[str, str, str, str]:
    """
    Multi-level collation key for a name.

    Compares base letters first (accents and case ignored, so ``é``
    sorts with ``e``), then accents, then case with lowercase first.
    The raw name breaks any remaining tie.
    """
    decomposed = unicodedata.normalize('NFKD', name)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), decomposed.casefold(), decomposed.swapcase(), name)


def sort_key(node: 'TreeNode') -> Tuple[int, Tuple[str, str, str, str]]:
    """Ordering used for every child list: directories first, then collated name."""
    return (0 if node.is_directory else 1, collation_key(node.name))


class TreeNode:
    """Node in a reconstructed directory tree."""

    def __init__(
        self,
        metadata: PathEntry,
        children: Optional[List['TreeNode']] = None,
        expansion_state: ExpansionState = ExpansionState.COLLAPSED
    ):
        self.metadata = metadata
        self.children: List['TreeNode'] = children or []
        self.expansion_state = expansion_state

    @property
    def full_path(self) -> str:
        return self.metadata.full_path

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def is_directory(self) -> bool:
        return self.metadata.is_directory

    @property
    def is_shortcut(self) -> bool:
        return self.metadata.is_shortcut

    def sort_children(self, recursive: bool = True):
        """Sort children in place."""
        sort_nodes(self.children, recursive)

    def walk(self) -> Iterator['TreeNode']:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, full_path: str) -> Optional['TreeNode']:
        """Find a descendant (or self) by full path."""
        for node in self.walk():
            if node.full_path == full_path:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert node (and subtree) to dictionary."""
        return {
            'metadata': self.metadata.to_dict(),
            'expansion_state': self.expansion_state.value,
            'children': [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        kind = 'dir' if self.is_directory else 'file'
        if self.is_shortcut:
            kind = 'shortcut'
        return f"TreeNode({self.full_path!r}, {kind}, children={len(self.children)})"


def sort_nodes(nodes: List[TreeNode], recursive: bool = True):
    """Sort a node list in place, optionally descending into children."""
    nodes.sort(key=sort_key)
    if recursive:
        for node in nodes:
            if node.children:
                sort_nodes(node.children, recursive)
