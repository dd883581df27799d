"""
LakeClient - High-level async client for DFS hierarchical storage.

Example:
    >>> async with LakeClient(StaticTokenProvider(token)) as lake:
    ...     path = LakeClient.file_path(workspace_id, item_id, "notes.txt")
    ...     await lake.write(path, "hello")
    ...     print(await lake.read(path))
"""
from pathlib import Path
from typing import Optional, List, Union

import aiofiles

from .core.api import AsyncDFSClient, APIConfig, AccessTokenProvider, StaticTokenProvider
from .core.path import PathNamespace, StoragePath, FILES_FOLDER, TABLES_FOLDER
from .core.storage import (
    PathEntry,
    FileMetadata,
    TableMetadata,
    TreeNode,
    DeleteResult,
    StorageWriter,
    StorageReader,
    PathMetadataFetcher,
    ItemCatalog,
    TreeBuilder,
    ExplorerSession,
)
from .core.logging import get_logger


class LakeClient:
    """
    High-level async client.

    Implements StorageCapability (fetch_token, list_paths, read_bytes,
    write_bytes) on top of the write/read/list services.

    With custom configuration:
        >>> config = APIConfig.with_proxy("http://proxy:8080")
        >>> lake = LakeClient(provider, config=config)
    """

    def __init__(
        self,
        token_provider: Union[AccessTokenProvider, str],
        *,
        config: Optional[APIConfig] = None,
        api: Optional[AsyncDFSClient] = None
    ):
        """
        Initialize client.

        Args:
            token_provider: Token provider, or a raw token string
            config: Optional API configuration
            api: Optional pre-built transport (tests, shared sessions)
        """
        if isinstance(token_provider, str):
            token_provider = StaticTokenProvider(token_provider)

        self._config = config or APIConfig.default()
        self._token_provider = token_provider
        self._api = api or AsyncDFSClient(token_provider, self._config)
        self._writer = StorageWriter(self._api, self._config.write)
        self._reader = StorageReader(self._api)
        self._fetcher = PathMetadataFetcher(self._api)
        self._catalog = ItemCatalog(self._fetcher)
        self._builder = TreeBuilder()
        self._logger = get_logger('lakepy.client')

    async def __aenter__(self) -> 'LakeClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying HTTP session."""
        close = getattr(self._api, 'close', None)
        if close is not None:
            await close()

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def fetcher(self) -> PathMetadataFetcher:
        return self._fetcher

    # Path helpers

    file_path = staticmethod(PathNamespace.file_path)
    table_path = staticmethod(PathNamespace.table_path)
    item_path = staticmethod(PathNamespace.item_path)

    # StorageCapability

    async def fetch_token(self) -> str:
        return await self._token_provider.get_token()

    async def list_paths(
        self,
        workspace_id: str,
        directory: str,
        recursive: bool = False,
        include_shortcut_metadata: bool = True
    ) -> List[PathEntry]:
        """List flat path metadata under a workspace-relative directory."""
        return await self._fetcher.list(workspace_id, directory, recursive, include_shortcut_metadata)

    async def read_bytes(self, path: str) -> bytes:
        return await self._reader.read_bytes(path)

    async def write_bytes(self, path: str, data: bytes) -> None:
        await self._writer.write_bytes(path, data)

    # Write / read

    async def write(self, path: str, content: str, is_binary: bool = False) -> None:
        """Write text, or base64 content when is_binary is set (not atomic)."""
        await self._writer.write(path, content, is_binary)

    async def write_text(self, path: str, content: str) -> None:
        await self._writer.write(path, content, is_binary=False)

    async def write_base64(self, path: str, content: str) -> None:
        await self._writer.write(path, content, is_binary=True)

    async def read(self, path: str, binary: bool = False) -> str:
        """Read text, or base64 of the raw bytes when binary is set."""
        return await self._reader.read(path, binary)

    async def read_text(self, path: str) -> str:
        return await self._reader.read(path)

    async def read_base64(self, path: str) -> str:
        return await self._reader.read(path, binary=True)

    async def exists(self, path: str) -> bool:
        return await self._reader.exists(path)

    async def delete(self, path: str) -> DeleteResult:
        return await self._reader.delete(path)

    async def create_folder(self, folder_path: str) -> str:
        """Create a folder through a placeholder file; returns its path."""
        return await self._writer.create_folder(folder_path)

    # Local files

    async def upload_file(self, local_path: Union[str, Path], remote_path: str) -> int:
        """
        Upload a local file.

        Returns:
            Number of bytes written
        """
        local_path = Path(local_path)
        if not local_path.is_file():
            raise FileNotFoundError(f"File not found: {local_path}")

        async with aiofiles.open(local_path, 'rb') as f:
            data = await f.read()

        await self._writer.write_bytes(remote_path, data)
        self._logger.info(f"Uploaded {local_path} to {remote_path} ({len(data)} bytes)")
        return len(data)

    async def download_file(self, remote_path: str, local_path: Union[str, Path]) -> Path:
        """Download a file to a local path."""
        local_path = Path(local_path)
        data = await self._reader.read_bytes(remote_path)
        async with aiofiles.open(local_path, 'wb') as f:
            await f.write(data)
        self._logger.info(f"Downloaded {remote_path} to {local_path} ({len(data)} bytes)")
        return local_path

    # Trees

    async def get_tree(
        self,
        workspace_id: str,
        directory: str,
        recursive: bool = True
    ) -> List[TreeNode]:
        """Fetch a directory and build its forest (shortcuts unexpanded)."""
        entries = await self._fetcher.list(workspace_id, directory, recursive)
        return self._builder.build(entries)

    def explorer(self, workspace_id: str, directory: str, recursive: bool = True) -> ExplorerSession:
        """Create a fresh explorer session with its own shortcut cache."""
        return ExplorerSession(self._fetcher, workspace_id, directory, recursive, builder=self._builder)

    # Catalog

    async def list_files(self, workspace_id: str, item_id: str) -> List[FileMetadata]:
        return await self._catalog.list_files(workspace_id, item_id)

    async def list_tables(self, workspace_id: str, item_id: str) -> List[TableMetadata]:
        return await self._catalog.list_tables(workspace_id, item_id)

    async def list_directory(self, workspace_id: str, item_id: str, directory_path: str) -> List[FileMetadata]:
        return await self._catalog.list_directory(workspace_id, item_id, directory_path)

    def item(self, workspace_id: str, item_id: str) -> 'ItemStorage':
        """Bind a wrapper to one item."""
        return ItemStorage(self, workspace_id, item_id)


class ItemStorage:
    """
    Client bound to one workspace/item pair.

    Names are relative to the item's Files folder unless stated otherwise.
    """

    def __init__(self, client: LakeClient, workspace_id: str, item_id: str):
        self._client = client
        self.workspace_id = workspace_id
        self.item_id = item_id

    def path(self, relative_path: str) -> str:
        """Item path for ``Files/...`` or ``Tables/...`` style relative paths."""
        return PathNamespace.item_path(self.workspace_id, self.item_id, relative_path)

    def file_path(self, name: str) -> str:
        return PathNamespace.file_path(self.workspace_id, self.item_id, name)

    def table_path(self, name: str) -> str:
        return PathNamespace.table_path(self.workspace_id, self.item_id, name)

    async def write_text(self, name: str, content: str) -> str:
        path = self.file_path(name)
        await self._client.write_text(path, content)
        return path

    async def write_base64(self, name: str, content: str) -> str:
        path = self.file_path(name)
        await self._client.write_base64(path, content)
        return path

    async def read_text(self, name: str) -> str:
        return await self._client.read_text(self.file_path(name))

    async def read_base64(self, name: str) -> str:
        return await self._client.read_base64(self.file_path(name))

    async def exists(self, name: str) -> bool:
        return await self._client.exists(self.file_path(name))

    async def delete(self, name: str) -> DeleteResult:
        return await self._client.delete(self.file_path(name))

    async def create_folder(self, name: str) -> str:
        return await self._client.create_folder(self.file_path(name))

    async def list_files(self) -> List[FileMetadata]:
        return await self._client.list_files(self.workspace_id, self.item_id)

    async def list_tables(self) -> List[TableMetadata]:
        return await self._client.list_tables(self.workspace_id, self.item_id)

    def explorer(self, folder: str = FILES_FOLDER) -> ExplorerSession:
        """Explorer session over the item's Files or Tables folder."""
        if folder not in (FILES_FOLDER, TABLES_FOLDER):
            raise ValueError(f"Unknown item folder: {folder}")
        directory = f"{StoragePath((self.item_id, folder))}/"
        return self._client.explorer(self.workspace_id, directory)
