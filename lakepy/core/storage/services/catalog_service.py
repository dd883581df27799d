"""
Item catalog helpers.

Caller-level conventions on top of the raw listing: files relative to
an item's Files folder, and tables discovered through their delta log
directory or through ADLS shortcuts.
"""
from typing import List

from ...path import StoragePath, PathNamespace, FILES_FOLDER, TABLES_FOLDER
from ..models import PathEntry, FileMetadata, TableMetadata
from ..protocols import PathLister

DELTA_LOG_DIRECTORY = '_delta_log'
TABLE_SHORTCUT_ACCOUNT_TYPES = ('ADLS', 'ExternalADLS')


def is_table_entry(entry: PathEntry) -> bool:
    """True for delta log directories and ADLS shortcuts."""
    if entry.path.ends_with(DELTA_LOG_DIRECTORY):
        return True
    return entry.is_shortcut and entry.account_type in TABLE_SHORTCUT_ACCOUNT_TYPES


def to_table_metadata(entry: PathEntry) -> TableMetadata:
    """
    Derive table metadata from a table entry.

    ``item/Tables/name`` is a plain table, ``item/Tables/schema/name`` a
    schema-qualified one.
    """
    path = entry.path
    if path.ends_with(DELTA_LOG_DIRECTORY):
        path = path.parent

    schema = path.segments[2] if len(path) == 4 else None
    return TableMetadata(name=path.name, path=f"{path}/", schema=schema)


def to_file_metadata(entry: PathEntry, directory: str, prefix: str = FILES_FOLDER) -> FileMetadata:
    """Express an entry relative to the listed directory."""
    path = entry.path
    relative = path.relative_to(directory) if path.is_relative_to(directory) else path
    return FileMetadata(
        prefix=prefix,
        name=path.name,
        path=str(relative),
        is_directory=entry.is_directory,
        is_shortcut=entry.is_shortcut
    )


class ItemCatalog:
    """Lists files and tables of one item through a PathLister."""

    def __init__(self, lister: PathLister):
        self._lister = lister

    async def list_files(self, workspace_id: str, item_id: str) -> List[FileMetadata]:
        """All entries under the item's Files folder, recursively."""
        directory = PathNamespace.files_directory(item_id)
        entries = await self._lister.list(workspace_id, directory, recursive=True)
        return [to_file_metadata(entry, directory) for entry in entries]

    async def list_tables(self, workspace_id: str, item_id: str) -> List[TableMetadata]:
        """Tables under the item's Tables folder."""
        directory = PathNamespace.tables_directory(item_id)
        entries = await self._lister.list(workspace_id, directory, recursive=True)
        return [to_table_metadata(entry) for entry in entries if is_table_entry(entry)]

    async def list_directory(
        self,
        workspace_id: str,
        item_id: str,
        directory_path: str
    ) -> List[FileMetadata]:
        """
        Non-recursive listing of any path inside an item.

        Works for plain folders and for shortcuts alike.

        Args:
            directory_path: Item-relative path, e.g. ``Files/MyShortcut/sub``
        """
        directory = str(StoragePath((item_id,)).join(directory_path))
        entries = await self._lister.list(workspace_id, directory, recursive=False)

        first = StoragePath.parse(directory_path).segments[:1]
        prefix = first[0] if first else FILES_FOLDER
        if prefix not in (FILES_FOLDER, TABLES_FOLDER):
            prefix = FILES_FOLDER
        return [to_file_metadata(entry, directory, prefix) for entry in entries]
