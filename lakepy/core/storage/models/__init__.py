"""Storage data models."""
from .path_entry import PathEntry, FileMetadata, TableMetadata
from .tree_node import TreeNode, ExpansionState, sort_nodes, sort_key, collation_key
from .results import DeleteResult, LoadState, NotLoaded, Loaded, LoadFailed

__all__ = [
    'PathEntry',
    'FileMetadata',
    'TableMetadata',
    'TreeNode',
    'ExpansionState',
    'sort_nodes',
    'sort_key',
    'collation_key',
    'DeleteResult',
    'LoadState',
    'NotLoaded',
    'Loaded',
    'LoadFailed',
]
