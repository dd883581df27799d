"""
lakepy - Async Python client for DFS hierarchical storage.

Usage:
    >>> from lakepy import LakeClient
    >>>
    >>> async with LakeClient(token) as lake:
    ...     forest = await lake.get_tree(workspace_id, f"{item_id}/Files/")
    ...     for node in forest:
    ...         print(node)
"""
import logging
from .client import LakeClient, ItemStorage

# Configuration
from .core.api import (
    APIConfig,
    SSLConfig,
    TimeoutConfig,
    WriteConfig,
    AsyncDFSClient,
    AccessTokenProvider,
    StaticTokenProvider,
    OperationPoller,
    OperationState,
)

# Paths
from .core.path import StoragePath, PathNamespace

# Storage
from .core.storage import (
    PathEntry,
    FileMetadata,
    TableMetadata,
    TreeNode,
    ExpansionState,
    DeleteResult,
    NotLoaded,
    Loaded,
    LoadFailed,
    TreeBuilder,
    ShortcutExpander,
    ShortcutExpansionCache,
    ExplorerSession,
    StorageCapability,
)

# Errors
from .core.exceptions import (
    LakeException,
    NetworkFailure,
    HttpStatusError,
    NotFound,
    TimeoutExceeded,
    OperationFailedError,
    DuplicatePathError,
    InvalidContentError,
    MalformedResponseError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for lakepy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'lakepy',
        'lakepy.api',
        'lakepy.client',
        'lakepy.storage',
        'lakepy.operations',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'LakeClient',
    'ItemStorage',
    'APIConfig',
    'SSLConfig',
    'TimeoutConfig',
    'WriteConfig',
    'AsyncDFSClient',
    'AccessTokenProvider',
    'StaticTokenProvider',
    'OperationPoller',
    'OperationState',
    'StoragePath',
    'PathNamespace',
    'PathEntry',
    'FileMetadata',
    'TableMetadata',
    'TreeNode',
    'ExpansionState',
    'DeleteResult',
    'NotLoaded',
    'Loaded',
    'LoadFailed',
    'TreeBuilder',
    'ShortcutExpander',
    'ShortcutExpansionCache',
    'ExplorerSession',
    'StorageCapability',
    'LakeException',
    'NetworkFailure',
    'HttpStatusError',
    'NotFound',
    'TimeoutExceeded',
    'OperationFailedError',
    'DuplicatePathError',
    'InvalidContentError',
    'MalformedResponseError',
    'setup_logging',
]
