"""
Source validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
import aiofiles

from ..models import SourceKind, UploadSource
from ...exceptions import ValidationError
from ...logging import get_logger


class SourceValidator:
    """
    Validates upload sources before anything is sent.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get source size
    """

    def size_of(self, source: UploadSource) -> int:
        """
        Validate a source and return its size.

        Args:
            source: Path or bytes source

        Returns:
            Size in bytes

        Raises:
            ValidationError: If the path is missing or not a regular file
        """
        if source.kind is SourceKind.BYTES:
            return len(source.data)

        path = source.path
        if not path.exists():
            raise ValidationError(f"File not found: {path}")

        if not path.is_file():
            raise ValidationError(f"Path is not a file: {path}")

        return path.stat().st_size


class AsyncSourceReader(SourceValidator):
    """
    Asynchronous source reader.

    Uses aiofiles for non-blocking I/O. The whole source is loaded once;
    parts are sliced from memory.
    """

    def __init__(self):
        """Initialize source reader."""
        self._logger = get_logger('dragdropdo.upload.file')

    async def read_all(self, source: UploadSource) -> bytes:
        """
        Read an entire source.

        Args:
            source: Path or bytes source

        Returns:
            Source contents

        Raises:
            ValidationError: If the file cannot be read
        """
        if source.kind is SourceKind.BYTES:
            return source.data

        try:
            async with aiofiles.open(source.path, 'rb') as f:
                data = await f.read()
        except OSError as e:
            self._logger.error(f"Failed to read {source.path}: {e}")
            raise ValidationError(f"Cannot read file: {source.path}", details=e) from e

        self._logger.debug(f"Read {source.path} ({len(data)} bytes)")
        return data
