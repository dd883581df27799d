"""
Listing models.

PathEntry is one row of a DFS directory listing; FileMetadata and
TableMetadata are the item-relative views the catalog helpers derive
from it.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from ...path import StoragePath


def _as_bool(value: Any) -> bool:
    # DFS serializes flags as "true"/"false" strings
    if isinstance(value, str):
        return value.lower() == 'true'
    return bool(value)


@dataclass(frozen=True)
class PathEntry:
    """
    One entry from a directory listing.

    Attributes:
        full_path: Workspace-relative path of the entry
        is_directory: Entry is a directory
        is_shortcut: Entry is a shortcut into another storage location
        account_type: Target storage kind, set only for shortcuts
    """
    full_path: str
    is_directory: bool = False
    is_shortcut: bool = False
    account_type: Optional[str] = None

    @property
    def path(self) -> StoragePath:
        return StoragePath.parse(self.full_path)

    @property
    def name(self) -> str:
        return self.path.name

    def with_path(self, full_path: str) -> 'PathEntry':
        """Copy with a different full_path."""
        return replace(self, full_path=full_path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PathEntry':
        """Create from a raw DFS ``paths`` element."""
        is_shortcut = _as_bool(data.get('isShortcut', False))
        return cls(
            full_path=data['name'],
            is_directory=_as_bool(data.get('isDirectory', False)),
            is_shortcut=is_shortcut,
            account_type=data.get('accountType') if is_shortcut else None
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'name': self.full_path,
            'isDirectory': self.is_directory,
            'isShortcut': self.is_shortcut,
        }
        if self.account_type is not None:
            result['accountType'] = self.account_type
        return result


@dataclass(frozen=True)
class FileMetadata:
    """
    Entry below an item folder, with its path relative to that folder.

    Attributes:
        prefix: Item folder (``Files`` or ``Tables``)
        name: Last path segment
        path: Path relative to the listed directory
        is_directory: Entry is a directory
        is_shortcut: Entry is a shortcut
    """
    prefix: str
    name: str
    path: str
    is_directory: bool = False
    is_shortcut: bool = False


@dataclass(frozen=True)
class TableMetadata:
    """
    Table found under an item's Tables folder.

    Attributes:
        name: Table name
        path: Workspace-relative table path with trailing separator
        schema: Schema name for schema-qualified tables
        prefix: Always ``Tables``
    """
    name: str
    path: str
    schema: Optional[str] = None
    prefix: str = 'Tables'
