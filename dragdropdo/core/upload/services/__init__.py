"""Upload services module."""
from .file_service import SourceValidator, AsyncSourceReader
from .part_service import PartUploader, normalize_etag

__all__ = [
    'SourceValidator',
    'AsyncSourceReader',
    'PartUploader',
    'normalize_etag',
]
