"""Path metadata listing service."""
from typing import List

from ...logging import get_logger
from ...exceptions import LakeException, MalformedResponseError
from ..models import PathEntry
from ..protocols import DFSTransport


class PathMetadataFetcher:
    """
    Lists flat path metadata under a directory.

    Shortcut entries carry their accountType but never their target's
    content; listing a shortcut's content takes a second call scoped to
    the shortcut's own path.
    """

    def __init__(self, transport: DFSTransport):
        self._transport = transport
        self._logger = get_logger('lakepy.storage.list')

    async def list(
        self,
        workspace_id: str,
        directory: str,
        recursive: bool = False,
        include_shortcut_metadata: bool = True
    ) -> List[PathEntry]:
        """
        List entries under ``directory``.

        Args:
            workspace_id: Workspace (DFS filesystem) to query
            directory: Workspace-relative directory, e.g. ``itemId/Files/``
            recursive: Include all descendants
            include_shortcut_metadata: Annotate shortcuts with accountType

        Returns:
            Entries in server order, names uninterpreted

        Raises:
            LakeException: If the request fails
            MalformedResponseError: If the body is not a DFS path listing
        """
        params = [
            ('recursive', recursive),
            ('resource', 'filesystem'),
            ('directory', directory),
            ('getShortcutMetadata', include_shortcut_metadata),
        ]
        try:
            response = await self._transport.request('GET', f"{workspace_id}/", params=params)
        except LakeException as e:
            self._logger.error(f"Listing {directory} in {workspace_id} failed: {e}")
            raise

        try:
            payload = response.json()
            entries = [PathEntry.from_dict(item) for item in payload.get('paths') or []]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            self._logger.error(f"Unreadable listing for {directory} in {workspace_id}: {e!r}")
            raise MalformedResponseError(
                f"Unexpected listing response for {directory}: {e!r}",
                f"{workspace_id}/"
            ) from e

        self._logger.debug(f"Listed {len(entries)} entries under {directory}")
        return entries
