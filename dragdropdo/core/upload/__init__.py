"""
Upload module for dragdropdo multipart uploads.

Negotiates presigned URLs, splits the source into parts, uploads them in
order and finalizes the upload.
"""
from .coordinator import UploadCoordinator
from .models import (
    UploadSource,
    UploadConfig,
    UploadResult,
    UploadProgress,
    UploadPart,
    PresignedUpload,
)
from .protocols import (
    ChunkingStrategy,
    ApiClientProtocol,
    SourceReaderProtocol,
    PartUploaderProtocol,
)

__all__ = [
    'UploadCoordinator',
    'UploadSource',
    'UploadConfig',
    'UploadResult',
    'UploadProgress',
    'UploadPart',
    'PresignedUpload',
    'ChunkingStrategy',
    'ApiClientProtocol',
    'SourceReaderProtocol',
    'PartUploaderProtocol',
]
