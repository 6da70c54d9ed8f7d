"""Upload models."""
from .upload_models import (
    SourceKind,
    UploadSource,
    PresignedUpload,
    UploadPart,
    UploadResult,
    UploadProgress,
    UploadConfig,
    completion_payload,
)

__all__ = [
    'SourceKind',
    'UploadSource',
    'PresignedUpload',
    'UploadPart',
    'UploadResult',
    'UploadProgress',
    'UploadConfig',
    'completion_payload',
]
