"""MIME type lookup by file extension."""
from pathlib import PurePath
from typing import Dict, Optional

DEFAULT_MIME_TYPE = 'application/octet-stream'

MIME_TYPES: Dict[str, str] = {
    '.pdf': 'application/pdf',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.webp': 'image/webp',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.xls': 'application/vnd.ms-excel',
    '.xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    '.zip': 'application/zip',
    '.txt': 'text/plain',
    '.mp4': 'video/mp4',
    '.mp3': 'audio/mpeg',
}


def lookup_mime_type(extension: str) -> Optional[str]:
    """Returns the MIME type for an extension ('.pdf' or 'pdf'), or None."""
    ext = extension.lower()
    if ext and not ext.startswith('.'):
        ext = f'.{ext}'
    return MIME_TYPES.get(ext)


def guess_mime_type(file_name: str) -> str:
    """Guess MIME type from a file name, falling back to octet-stream."""
    return lookup_mime_type(PurePath(file_name).suffix) or DEFAULT_MIME_TYPE
