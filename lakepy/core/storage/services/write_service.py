"""
Write protocol service.

Uploads content with the DFS create -> append -> flush sequence.

The sequence is not atomic. A failure after create leaves an empty
file, a failure between append and flush leaves uncommitted data.
Callers must treat a write as non-idempotent and retry the whole
sequence, never resume it. One writer per path at a time.
"""
import base64
import binascii
from typing import Optional

from ...api.config import WriteConfig
from ...logging import get_logger
from ...exceptions import LakeException, InvalidContentError
from ...path import StoragePath
from ..protocols import DFSTransport


def decode_base64(content: str) -> bytes:
    """
    Decode caller supplied base64 into raw bytes.

    Raises:
        InvalidContentError: If content is not valid base64
    """
    try:
        return base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidContentError(f"Binary content is not valid base64: {e}") from e


class StorageWriter:
    """
    Handles the three-phase DFS write.

    Responsibilities:
    - Create the (empty) file
    - Append the payload at offset 0 in a single call
    - Flush at the exact byte length of the payload
    """

    def __init__(self, transport: DFSTransport, config: Optional[WriteConfig] = None):
        """
        Initialize writer.

        Args:
            transport: Request channel
            config: Write policy (defaults: no cleanup on failure)
        """
        self._transport = transport
        self._config = config or WriteConfig()
        self._logger = get_logger('lakepy.storage.write')

    async def write(self, path: str, content: str, is_binary: bool = False) -> None:
        """
        Write text or base64-encoded binary content to a path.

        Args:
            path: Storage path (workspace/item/Files/...)
            content: Text, or base64 string when is_binary is set
            is_binary: Decode content from base64 before appending

        Raises:
            InvalidContentError: If binary content is not valid base64
            LakeException: If any protocol phase fails
        """
        # Decode up front so malformed input never creates a file
        data = decode_base64(content) if is_binary else content.encode('utf-8')
        await self.write_bytes(path, data)

    async def write_bytes(self, path: str, data: bytes) -> None:
        """
        Write raw bytes to a path.

        An empty payload only creates the file.
        """
        await self._create(path)

        if not data:
            self._logger.debug(f"Created empty file {path}")
            return

        try:
            await self._append(path, data)
            await self._flush(path, len(data))
        except LakeException:
            if self._config.cleanup_on_failure:
                await self._cleanup(path)
            raise

        self._logger.debug(f"Wrote {len(data)} bytes to {path}")

    async def create_folder(self, folder_path: str) -> str:
        """
        Materialize a folder by writing an empty placeholder file inside it.

        Returns:
            Path of the placeholder file
        """
        placeholder = str(StoragePath.parse(folder_path).join(self._config.placeholder_name))
        await self.write_bytes(placeholder, b'')
        return placeholder

    async def _create(self, path: str):
        try:
            await self._transport.request('PUT', path, params=[('resource', 'file')], data=b'')
        except LakeException as e:
            self._logger.error(f"Creating file failed for {path}: {e}")
            raise
        self._logger.debug(f"Created file {path}")

    async def _append(self, path: str, data: bytes):
        try:
            await self._transport.request(
                'PATCH',
                path,
                params=[('position', 0), ('action', 'append')],
                data=data,
                headers={'Content-Type': 'application/octet-stream'}
            )
        except LakeException as e:
            self._logger.error(f"Append failed for {path}: {e}")
            raise

    async def _flush(self, path: str, length: int):
        try:
            await self._transport.request(
                'PATCH',
                path,
                params=[('position', length), ('action', 'flush')]
            )
        except LakeException as e:
            self._logger.error(f"Flush at {length} failed for {path}: {e}")
            raise

    async def _cleanup(self, path: str):
        try:
            await self._transport.request('DELETE', path, params=[('recursive', True)])
            self._logger.warning(f"Removed partially written file {path}")
        except LakeException as e:
            self._logger.error(f"Cleanup of partially written file {path} failed: {e}")
