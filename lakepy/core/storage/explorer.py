"""
Explorer session.

One tree-rendering session over a directory: the fetched forest, the
shortcut expansion cache and the load state that a UI renders from.
"""
from typing import List, Optional

from ..exceptions import LakeException
from ..logging import get_logger
from .hierarchy import TreeBuilder, ShortcutExpander
from .models import TreeNode, LoadState, NotLoaded, Loaded, LoadFailed
from .protocols import PathLister


class ExplorerSession:
    """
    Stateful view of one directory tree.

    Example:
        >>> session = ExplorerSession(fetcher, workspace_id, "item/Files/")
        >>> state = await session.refresh()
        >>> await session.expand("item/Files/MyShortcut")
    """

    def __init__(
        self,
        lister: PathLister,
        workspace_id: str,
        directory: str,
        recursive: bool = True,
        builder: Optional[TreeBuilder] = None,
        expander: Optional[ShortcutExpander] = None
    ):
        self._lister = lister
        self._workspace_id = workspace_id
        self._directory = directory
        self._recursive = recursive
        self._builder = builder or TreeBuilder()
        self._expander = expander or ShortcutExpander(lister, workspace_id, builder=self._builder)
        self._state: LoadState = NotLoaded()
        self._logger = get_logger('lakepy.storage.explorer')

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def directory(self) -> str:
        return self._directory

    @property
    def expander(self) -> ShortcutExpander:
        return self._expander

    @property
    def forest(self) -> List[TreeNode]:
        """Current forest, empty unless loaded."""
        if isinstance(self._state, Loaded):
            return self._state.data
        return []

    async def refresh(self) -> LoadState:
        """
        Refetch and rebuild the tree.

        In-flight shortcut expansions finish first. Shortcuts that were
        expanded before are re-expanded from the cache.

        Returns:
            Loaded(forest) or LoadFailed(error)
        """
        await self._expander.wait_idle()
        try:
            entries = await self._lister.list(
                self._workspace_id,
                self._directory,
                recursive=self._recursive
            )
            forest = self._builder.build(entries)
        except LakeException as e:
            self._logger.error(f"Loading {self._directory} failed: {e}")
            self._state = LoadFailed(e)
            return self._state

        self._expander.restore(forest)
        self._state = Loaded(forest)
        return self._state

    def find(self, full_path: str) -> Optional[TreeNode]:
        """Find a node anywhere in the current forest."""
        for root in self.forest:
            node = root.find(full_path)
            if node is not None:
                return node
        return None

    def _require(self, full_path: str) -> TreeNode:
        node = self.find(full_path)
        if node is None:
            raise KeyError(f"No node at {full_path}")
        return node

    async def expand(self, full_path: str) -> TreeNode:
        """Expand the shortcut at ``full_path``."""
        node = self._require(full_path)
        await self._expander.expand(node)
        return node

    def collapse(self, full_path: str) -> TreeNode:
        node = self._require(full_path)
        self._expander.collapse(node)
        return node

    def invalidate(self, full_path: str):
        """Force the next expansion of a shortcut to refetch."""
        self._expander.invalidate(full_path)

    def reset(self):
        """Back to NotLoaded with an empty cache."""
        self._expander.reset()
        self._state = NotLoaded()
