"""
Read, existence and delete operations.

Failures stay distinguishable: a missing path raises NotFound, an error
status raises HttpStatusError and a transport problem raises
NetworkFailure. Only exists() maps 404 to a value.
"""
import base64

from ...logging import get_logger
from ...exceptions import LakeException, NotFound
from ..models import DeleteResult
from ..protocols import DFSTransport


class StorageReader:
    """Single-request read side of the DFS protocol."""

    def __init__(self, transport: DFSTransport):
        self._transport = transport
        self._logger = get_logger('lakepy.storage.read')

    async def read_bytes(self, path: str) -> bytes:
        """
        Fetch the raw content of a file.

        Raises:
            NotFound: If the file does not exist
            HttpStatusError: On any other error status
            NetworkFailure: If the request never completed
        """
        try:
            response = await self._transport.request('GET', path)
        except LakeException as e:
            self._logger.error(f"Read failed for {path}: {e}")
            raise
        self._logger.debug(f"Read {len(response.body)} bytes from {path}")
        return response.body

    async def read(self, path: str, binary: bool = False) -> str:
        """
        Read a file as UTF-8 text, or as base64 when ``binary`` is set.

        Args:
            path: Storage path
            binary: Return the raw bytes base64-encoded

        Returns:
            File content
        """
        data = await self.read_bytes(path)
        if binary:
            return base64.b64encode(data).decode('ascii')
        return data.decode('utf-8')

    async def exists(self, path: str) -> bool:
        """
        Check whether a file exists.

        Returns:
            True on 200, False on 404

        Raises:
            HttpStatusError: On any other status
            NetworkFailure: If the request never completed
        """
        try:
            await self._transport.request('HEAD', path, params=[('resource', 'file')])
        except NotFound:
            return False
        except LakeException as e:
            self._logger.warning(f"Existence check failed for {path}: {e}")
            raise
        return True

    async def delete(self, path: str) -> DeleteResult:
        """
        Delete a file or directory (recursively).

        Returns:
            DeleteResult carrying the failure instead of raising it
        """
        try:
            await self._transport.request('DELETE', path, params=[('recursive', True)])
        except LakeException as e:
            self._logger.error(f"Delete failed for {path}: {e}")
            return DeleteResult(path=path, error=e)
        self._logger.debug(f"Deleted {path}")
        return DeleteResult(path=path)
