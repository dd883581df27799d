"""
Lazy shortcut expansion.

A shortcut's content is only listed when the user opens it. Expansion
results are cached per shortcut path for the lifetime of one explorer
session and survive top-level refreshes until explicitly invalidated.
"""
import asyncio
from typing import Dict, List, Optional, Set

from ...logging import get_logger
from ...path import StoragePath
from ..models import PathEntry, TreeNode, ExpansionState
from ..protocols import PathLister
from .tree_builder import TreeBuilder


class ShortcutExpansionCache:
    """Shortcut full path -> last fetched (re-anchored) child entries."""

    def __init__(self):
        self._entries: Dict[str, List[PathEntry]] = {}

    def get(self, full_path: str) -> Optional[List[PathEntry]]:
        return self._entries.get(full_path)

    def put(self, full_path: str, entries: List[PathEntry]):
        self._entries[full_path] = list(entries)

    def invalidate(self, full_path: str):
        self._entries.pop(full_path, None)

    def clear(self):
        self._entries.clear()

    def __contains__(self, full_path: str) -> bool:
        return full_path in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def anchor_entry(shortcut_path: StoragePath, entry: PathEntry) -> PathEntry:
    """
    Re-anchor an entry listed inside a shortcut into the parent tree.

    Entries already under the shortcut path are kept, relative ones are
    prefixed with it.
    """
    path = entry.path
    if path.is_relative_to(shortcut_path) and len(path) > len(shortcut_path):
        return entry
    return entry.with_path(str(shortcut_path.join(path)))


class ShortcutExpander:
    """
    Expands shortcut nodes on demand.

    Concurrent expansions of different shortcuts run independently; a
    second request for a shortcut that is still loading awaits the
    in-flight fetch instead of issuing another one. The fetch is
    shielded from caller cancellation.
    """

    def __init__(
        self,
        lister: PathLister,
        workspace_id: str,
        cache: Optional[ShortcutExpansionCache] = None,
        builder: Optional[TreeBuilder] = None,
        recursive: bool = True
    ):
        """
        Initialize expander.

        Args:
            lister: Listing capability used for the scoped fetch
            workspace_id: Workspace the tree belongs to
            cache: Expansion cache (a fresh one if not provided)
            builder: Tree builder used to shape the spliced children
            recursive: List shortcut content recursively
        """
        self._lister = lister
        self._workspace_id = workspace_id
        self._cache = cache if cache is not None else ShortcutExpansionCache()
        self._builder = builder or TreeBuilder()
        self._recursive = recursive
        self._in_flight: Dict[str, asyncio.Task] = {}
        self._expanded: Set[str] = set()
        self._logger = get_logger('lakepy.storage.shortcuts')

    @property
    def cache(self) -> ShortcutExpansionCache:
        return self._cache

    def is_loading(self, full_path: str) -> bool:
        return full_path in self._in_flight

    async def expand(self, node: TreeNode) -> None:
        """
        Expand a shortcut node in place.

        Plain directories are left untouched. Cancelling one caller
        does not cancel the shared fetch other callers are waiting on.

        Raises:
            LakeException: If the scoped listing fails; the node is back
                in the Collapsed state
        """
        if not node.is_shortcut or node.expansion_state is ExpansionState.EXPANDED:
            return

        key = node.full_path
        task = self._in_flight.get(key)
        if task is None:
            cached = self._cache.get(key)
            if cached is not None:
                self._splice(node, cached)
                return

            node.expansion_state = ExpansionState.LOADING
            task = asyncio.ensure_future(self._load(node))
            self._in_flight[key] = task
            task.add_done_callback(lambda done, key=key: self._finish(key, done))

        await asyncio.shield(task)

        # Node may be a rebuilt copy of the one being loaded
        if node.expansion_state is not ExpansionState.EXPANDED and key in self._cache:
            self._splice(node, self._cache.get(key))

    def _finish(self, key: str, task: asyncio.Task):
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        if not task.cancelled():
            # Mark retrieved; callers that were cancelled never see it
            task.exception()

    async def _load(self, node: TreeNode):
        shortcut_path = node.metadata.path
        self._logger.debug(f"Loading shortcut content for {node.full_path}")
        try:
            entries = await self._lister.list(
                self._workspace_id,
                node.full_path,
                recursive=self._recursive,
                include_shortcut_metadata=True
            )
            anchored = [anchor_entry(shortcut_path, entry) for entry in entries]
            self._splice(node, anchored)
        except BaseException as e:
            node.expansion_state = ExpansionState.COLLAPSED
            node.children = []
            self._logger.error(f"Failed to expand shortcut {node.full_path}: {e!r}")
            raise
        self._cache.put(node.full_path, anchored)

    def _splice(self, node: TreeNode, entries: List[PathEntry]):
        node.children = self._builder.build(entries)
        node.expansion_state = ExpansionState.EXPANDED
        self._expanded.add(node.full_path)

    def collapse(self, node: TreeNode):
        """Collapse a node; its cached content is kept."""
        if node.expansion_state is ExpansionState.LOADING:
            return
        node.children = []
        node.expansion_state = ExpansionState.COLLAPSED
        self._expanded.discard(node.full_path)

    def restore(self, forest: List[TreeNode]):
        """Re-apply cached expansions to a freshly built forest."""
        pending = list(forest)
        while pending:
            node = pending.pop()
            key = node.full_path
            if node.is_shortcut and key in self._expanded and key in self._cache:
                self._splice(node, self._cache.get(key))
            pending.extend(node.children)

    def invalidate(self, full_path: str):
        """Drop the cached content of one shortcut."""
        self._cache.invalidate(full_path)

    def reset(self):
        """Forget every cached expansion."""
        self._cache.clear()
        self._expanded.clear()

    async def wait_idle(self):
        """Wait until no expansion is in flight."""
        while True:
            pending = [task for task in self._in_flight.values() if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)
