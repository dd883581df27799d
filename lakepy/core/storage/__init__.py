"""Storage module: DFS read/write protocols, listings and trees."""
from .models import (
    PathEntry,
    FileMetadata,
    TableMetadata,
    TreeNode,
    ExpansionState,
    DeleteResult,
    LoadState,
    NotLoaded,
    Loaded,
    LoadFailed,
)
from .protocols import DFSTransport, PathLister, StorageCapability
from .services import StorageWriter, StorageReader, PathMetadataFetcher, ItemCatalog
from .hierarchy import TreeBuilder, ShortcutExpander, ShortcutExpansionCache
from .explorer import ExplorerSession

__all__ = [
    'PathEntry',
    'FileMetadata',
    'TableMetadata',
    'TreeNode',
    'ExpansionState',
    'DeleteResult',
    'LoadState',
    'NotLoaded',
    'Loaded',
    'LoadFailed',
    'DFSTransport',
    'PathLister',
    'StorageCapability',
    'StorageWriter',
    'StorageReader',
    'PathMetadataFetcher',
    'ItemCatalog',
    'TreeBuilder',
    'ShortcutExpander',
    'ShortcutExpansionCache',
    'ExplorerSession',
]
