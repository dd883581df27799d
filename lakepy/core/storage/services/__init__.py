"""Storage services."""
from .write_service import StorageWriter, decode_base64
from .read_service import StorageReader
from .metadata_service import PathMetadataFetcher
from .catalog_service import (
    ItemCatalog,
    is_table_entry,
    to_table_metadata,
    to_file_metadata,
    DELTA_LOG_DIRECTORY,
)

__all__ = [
    'StorageWriter',
    'StorageReader',
    'PathMetadataFetcher',
    'ItemCatalog',
    'decode_base64',
    'is_table_entry',
    'to_table_metadata',
    'to_file_metadata',
    'DELTA_LOG_DIRECTORY',
]
