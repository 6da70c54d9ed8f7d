"""
Protocol definitions for upload module.

Defines the seams the coordinator depends on, so tests and callers can
swap the transport, the source reader or the chunking algorithm.
"""
from typing import Protocol, Dict, Any, List, Tuple, Mapping, Optional


class ChunkingStrategy(Protocol):
    """Protocol for file chunking strategies."""

    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate chunk boundaries for a file.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of (start, end) tuples representing chunk boundaries
        """
        ...


class ApiClientProtocol(Protocol):
    """What the upload subsystem needs from the API transport."""

    async def request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None
    ) -> Any:
        ...

    async def put_part(self, url: str, data: bytes, content_type: str) -> Mapping[str, str]:
        ...


class SourceReaderProtocol(Protocol):
    """Protocol for reading an upload source."""

    def size_of(self, source) -> int:
        """Byte size of the source, validating it exists."""
        ...

    async def read_all(self, source) -> bytes:
        """Whole source contents."""
        ...


class PartUploaderProtocol(Protocol):
    """Protocol for part upload operations."""

    async def upload_part(self, part, data: bytes, content_type: str):
        """
        Upload one part.

        Returns:
            The part with its integrity token filled in
        """
        ...
