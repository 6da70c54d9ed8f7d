"""
Chunking strategies for multipart uploads.

The service sizes an upload by part count: the client asks for N presigned
URLs and splits the source into N contiguous ranges.
"""
import math
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple


DEFAULT_CHUNK_SIZE = 5 * 1024 * 1024  # 5 MiB
MIN_PARTS = 1
MAX_PARTS = 100


def compute_part_count(
    file_size: int,
    requested_parts: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """
    Number of parts for an upload.

    Uses `requested_parts` when given, otherwise one part per `chunk_size`
    bytes; the result is clamped to [MIN_PARTS, MAX_PARTS].
    """
    parts = requested_parts if requested_parts else math.ceil(file_size / chunk_size)
    return max(MIN_PARTS, min(parts, MAX_PARTS))


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """Calculate chunk boundaries."""
        pass


class PartCountChunkingStrategy(BaseChunkingStrategy):
    """
    Splits a file into a fixed number of equal-or-smaller parts.

    Every range is ceil(size / part_count) bytes long except possibly the
    last one. When there are more parts than bytes the trailing ranges are
    empty, the service still expects one PUT per presigned URL.

    Example:
        >>> PartCountChunkingStrategy(3).calculate_chunks(10)
        [(0, 4), (4, 8), (8, 10)]
    """

    def __init__(self, part_count: int):
        """
        Initialize with part count.

        Args:
            part_count: Number of ranges to produce
        """
        if part_count < MIN_PARTS:
            raise ValueError("Part count must be positive")
        self.part_count = part_count

    def chunk_size(self, file_size: int) -> int:
        return math.ceil(file_size / self.part_count)

    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate part boundaries for a file.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of (start, end) tuples, exactly `part_count` long
        """
        size = self.chunk_size(file_size)
        chunks = []

        for i in range(self.part_count):
            start = min(i * size, file_size)
            end = min(start + size, file_size)
            chunks.append((start, end))

        return chunks
