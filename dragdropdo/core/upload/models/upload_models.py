"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
import math
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ...api.wire import pick
from ...exceptions import ValidationError


class SourceKind(str, Enum):
    PATH = 'path'
    BYTES = 'bytes'


@dataclass(frozen=True)
class UploadSource:
    """
    What to upload: a filesystem path or an in-memory buffer.

    Anything else (streams, open file objects...) is rejected by `of`.

    Example:
        >>> UploadSource.of(b"hello").kind
        <SourceKind.BYTES: 'bytes'>
    """
    kind: SourceKind
    path: Optional[Path] = None
    data: Optional[bytes] = None

    @classmethod
    def of(cls, source: Union[str, os.PathLike, bytes, bytearray, memoryview, 'UploadSource']) -> 'UploadSource':
        """Build a source from a path or a bytes-like object."""
        if isinstance(source, UploadSource):
            return source
        if isinstance(source, (str, os.PathLike)):
            return cls(kind=SourceKind.PATH, path=Path(source))
        if isinstance(source, (bytes, bytearray, memoryview)):
            return cls(kind=SourceKind.BYTES, data=bytes(source))
        raise ValidationError(
            "Stream uploads are not supported. Please use a file path or bytes.",
            details={'source_type': type(source).__name__}
        )


@dataclass(frozen=True)
class PresignedUpload:
    """
    Answer of the upload negotiation call.

    Attributes:
        file_key: Key of the file on the service
        presigned_urls: One transfer location per part
        upload_id: Multipart session id (variant dependent)
        object_name: Storage object name, echoed back on completion
    """
    file_key: str
    presigned_urls: Tuple[str, ...]
    upload_id: Optional[str] = None
    object_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PresignedUpload':
        """Create from an API response (snake_case or camelCase)."""
        return cls(
            file_key=pick(data, 'file_key') or '',
            presigned_urls=tuple(pick(data, 'presigned_urls') or ()),
            upload_id=pick(data, 'upload_id'),
            object_name=pick(data, 'object_name'),
        )


@dataclass(frozen=True)
class UploadPart:
    """
    One contiguous byte range of the source.

    Attributes:
        part_number: 1-indexed part number
        start: First byte (inclusive)
        end: Last byte (exclusive)
        url: Presigned transfer location
        etag: Integrity token returned by the upload server, quotes stripped
    """
    part_number: int
    start: int
    end: int
    url: str
    etag: Optional[str] = None

    @property
    def size(self) -> int:
        """Returns part size."""
        return self.end - self.start

    def to_dict(self) -> Dict[str, Any]:
        """Entry of the complete-upload request."""
        return {'etag': self.etag, 'part_number': self.part_number}


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload (the file handle).

    Attributes:
        file_key: Key to reference the file in operations
        presigned_urls: Transfer locations used during the upload
        upload_id: Multipart session id, if the service issued one
        object_name: Storage object name, if the service issued one
        parts: Uploaded parts in part-number order
    """
    file_key: str
    presigned_urls: Tuple[str, ...] = ()
    upload_id: Optional[str] = None
    object_name: Optional[str] = None
    parts: Tuple[UploadPart, ...] = ()

    @property
    def file_size(self) -> int:
        return sum(part.size for part in self.parts)


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        current_part: Part just finished (1-indexed)
        total_parts: Number of parts
        bytes_uploaded: Bytes uploaded so far
        total_bytes: Total source size
    """
    current_part: int
    total_parts: int
    bytes_uploaded: int = 0
    total_bytes: int = 0

    @property
    def percentage(self) -> int:
        """Upload progress as a whole percentage (half rounds up)."""
        if self.total_bytes == 0:
            return 100 if self.current_part >= self.total_parts else 0
        return math.floor(self.bytes_uploaded / self.total_bytes * 100 + 0.5)

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.current_part >= self.total_parts


@dataclass
class UploadConfig:
    """
    Configuration for one upload.

    Attributes:
        source: Path or bytes to upload
        file_name: Name reported to the service
        mime_type: Content type (guessed from file_name when omitted)
        parts: Requested part count (clamped to the allowed range)
    """
    source: UploadSource
    file_name: str
    mime_type: Optional[str] = None
    parts: Optional[int] = None

    def __post_init__(self):
        """Validate and normalize config."""
        if not self.file_name:
            raise ValidationError("file_name is required")
        self.source = UploadSource.of(self.source)
        if self.parts is not None and not isinstance(self.parts, int):
            raise ValidationError(f"parts must be an integer, got {type(self.parts).__name__}")

    def negotiation_payload(self, size: int, part_count: int, mime_type: str) -> Dict[str, Any]:
        """Body of the upload negotiation request."""
        return {
            'file_name': self.file_name,
            'size': size,
            'mime_type': mime_type,
            'parts': part_count,
        }


def completion_payload(
    presigned: PresignedUpload,
    parts: List[UploadPart]
) -> Dict[str, Any]:
    """Body of the complete-upload request, parts sorted by part number."""
    payload = {
        'file_key': presigned.file_key,
        'upload_id': presigned.upload_id,
        'parts': [part.to_dict() for part in sorted(parts, key=lambda p: p.part_number)],
    }
    if presigned.object_name:
        payload['object_name'] = presigned.object_name
    return payload
