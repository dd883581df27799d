"""DFS API module."""
from .auth import AccessTokenProvider, StaticTokenProvider
from .config import APIConfig, SSLConfig, TimeoutConfig, WriteConfig
from .async_client import AsyncDFSClient, DFSResponse, render_query
from .operations import OperationPoller, OperationState

__all__ = [
    # Client
    'AsyncDFSClient',
    'DFSResponse',
    'render_query',

    # Auth
    'AccessTokenProvider',
    'StaticTokenProvider',

    # Configuration
    'APIConfig',
    'SSLConfig',
    'TimeoutConfig',
    'WriteConfig',

    # Long-running operations
    'OperationPoller',
    'OperationState',
]
