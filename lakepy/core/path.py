"""
Storage path values and the canonical item namespace.

Every path in the lake has the form
``{workspace_id}/{item_id}/{Files|Tables}/{relative_path}``. StoragePath
keeps a path as a tuple of segments so joining, taking the parent and
re-anchoring never fall back to substring arithmetic.
"""
from typing import Iterable, Tuple, Union

SEPARATOR = '/'
FILES_FOLDER = 'Files'
TABLES_FOLDER = 'Tables'


class StoragePath:
    """Immutable, hashable sequence of path segments."""

    __slots__ = ('_segments',)

    def __init__(self, segments: Iterable[str] = ()):
        self._segments: Tuple[str, ...] = tuple(s for s in segments if s)

    @classmethod
    def parse(cls, path: Union[str, 'StoragePath']) -> 'StoragePath':
        """Parse a separator-delimited string, dropping empty segments."""
        if isinstance(path, StoragePath):
            return path
        return cls(path.split(SEPARATOR))

    @property
    def segments(self) -> Tuple[str, ...]:
        return self._segments

    @property
    def name(self) -> str:
        """Last segment, or empty string for the empty path."""
        return self._segments[-1] if self._segments else ''

    @property
    def parent(self) -> 'StoragePath':
        """All segments but the last."""
        return StoragePath(self._segments[:-1])

    def join(self, *parts: Union[str, 'StoragePath']) -> 'StoragePath':
        """Append one or more strings or paths to this path."""
        segments = list(self._segments)
        for part in parts:
            segments.extend(StoragePath.parse(part).segments)
        return StoragePath(segments)

    def __truediv__(self, other: Union[str, 'StoragePath']) -> 'StoragePath':
        return self.join(other)

    def is_relative_to(self, other: Union[str, 'StoragePath']) -> bool:
        """True when ``other`` is a strict or equal prefix of this path."""
        prefix = StoragePath.parse(other).segments
        return self._segments[:len(prefix)] == prefix

    def relative_to(self, other: Union[str, 'StoragePath']) -> 'StoragePath':
        """
        Strip ``other`` from the front of this path.

        Raises:
            ValueError: If this path does not start with ``other``
        """
        prefix = StoragePath.parse(other).segments
        if self._segments[:len(prefix)] != prefix:
            raise ValueError(f"{self} is not under {SEPARATOR.join(prefix)}")
        return StoragePath(self._segments[len(prefix):])

    def ends_with(self, *tail: str) -> bool:
        return len(tail) <= len(self._segments) and self._segments[len(self._segments) - len(tail):] == tail

    def __len__(self) -> int:
        return len(self._segments)

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __eq__(self, other) -> bool:
        if isinstance(other, StoragePath):
            return self._segments == other._segments
        if isinstance(other, str):
            return self._segments == StoragePath.parse(other)._segments
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._segments)

    def __str__(self) -> str:
        return SEPARATOR.join(self._segments)

    def __repr__(self) -> str:
        return f"StoragePath('{self}')"


class PathNamespace:
    """Pure helpers computing canonical storage paths."""

    @staticmethod
    def item_path(workspace_id: str, item_id: str, relative_path: str) -> str:
        """Generic ``{workspace_id}/{item_id}/{relative_path}`` form."""
        return str(StoragePath((workspace_id, item_id)).join(relative_path))

    @staticmethod
    def file_path(workspace_id: str, item_id: str, name: str) -> str:
        """Path of a file in the item's Files folder."""
        return PathNamespace.item_path(workspace_id, item_id, f"{FILES_FOLDER}/{name}")

    @staticmethod
    def table_path(workspace_id: str, item_id: str, name: str) -> str:
        """Path of a table in the item's Tables folder."""
        return PathNamespace.item_path(workspace_id, item_id, f"{TABLES_FOLDER}/{name}")

    @staticmethod
    def files_directory(item_id: str) -> str:
        """Listing directory for an item's files (workspace-relative)."""
        return f"{item_id}/{FILES_FOLDER}/"

    @staticmethod
    def tables_directory(item_id: str) -> str:
        """Listing directory for an item's tables (workspace-relative)."""
        return f"{item_id}/{TABLES_FOLDER}/"
