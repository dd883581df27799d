"""
Protocol definitions for the storage layer.

Components receive the narrowest capability they need instead of an
open-ended platform handle.
"""
from typing import Protocol, Dict, List, Optional, Union, runtime_checkable

from ..api.async_client import DFSResponse, QueryParams
from .models import PathEntry


class DFSTransport(Protocol):
    """Protocol for the raw request channel (AsyncDFSClient implements it)."""

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[QueryParams] = None,
        data: Optional[Union[bytes, str]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> DFSResponse:
        ...


class PathLister(Protocol):
    """Protocol for directory listing (PathMetadataFetcher implements it)."""

    async def list(
        self,
        workspace_id: str,
        directory: str,
        recursive: bool = False,
        include_shortcut_metadata: bool = True
    ) -> List[PathEntry]:
        """
        List entries under a directory.

        Args:
            workspace_id: Workspace containing the directory
            directory: Workspace-relative directory path
            recursive: Include all descendants
            include_shortcut_metadata: Annotate shortcuts with accountType

        Returns:
            Flat list of entries
        """
        ...


@runtime_checkable
class StorageCapability(Protocol):
    """
    Everything a UI layer needs from storage, and nothing more.

    LakeClient implements this protocol.
    """

    async def fetch_token(self) -> str: ...

    async def list_paths(
        self,
        workspace_id: str,
        directory: str,
        recursive: bool = False,
        include_shortcut_metadata: bool = True
    ) -> List[PathEntry]: ...

    async def read_bytes(self, path: str) -> bytes: ...

    async def write_bytes(self, path: str, data: bytes) -> None: ...
