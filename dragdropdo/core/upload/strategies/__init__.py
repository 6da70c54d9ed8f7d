"""Upload strategies module."""
from .chunking import (
    BaseChunkingStrategy,
    PartCountChunkingStrategy,
    compute_part_count,
    DEFAULT_CHUNK_SIZE,
    MIN_PARTS,
    MAX_PARTS,
)

__all__ = [
    'BaseChunkingStrategy',
    'PartCountChunkingStrategy',
    'compute_part_count',
    'DEFAULT_CHUNK_SIZE',
    'MIN_PARTS',
    'MAX_PARTS',
]
