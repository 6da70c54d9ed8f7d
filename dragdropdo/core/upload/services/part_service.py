"""
Part upload service.

Handles uploading individual parts to presigned URLs.
"""
import dataclasses
import time
from typing import Mapping, Optional

from ..models import UploadPart
from ..protocols import ApiClientProtocol
from ...exceptions import UploadError
from ...logging import get_logger


def normalize_etag(value: Optional[str]) -> Optional[str]:
    """Strip surrounding quote characters from an ETag header value."""
    if value is None:
        return None
    etag = value.strip().strip('"').strip("'")
    return etag or None


class PartUploader:
    """
    Uploads parts to their presigned URLs.

    Responsibilities:
    - PUT part bytes with the source content type
    - Capture the ETag of every part
    - Enforce the ETag when the protocol variant needs one
    """

    def __init__(self, api_client: ApiClientProtocol, require_etag: bool = True):
        """
        Initialize part uploader.

        Args:
            api_client: Transport used for the PUT requests
            require_etag: Fail when the upload server returns no ETag
        """
        self._api = api_client
        self._require_etag = require_etag
        self._logger = get_logger('dragdropdo.upload.part')

    async def upload_part(self, part: UploadPart, data: bytes, content_type: str) -> UploadPart:
        """
        Upload a single part.

        Args:
            part: Part to upload (range and URL)
            data: Part bytes
            content_type: MIME type of the whole source

        Returns:
            The part with its ETag filled in

        Raises:
            UploadError: If the ETag is required and missing
            APIError / NetworkError: If the PUT fails
        """
        size_kb = len(data) / 1024
        upload_start = time.time()
        self._logger.debug(f"Uploading part {part.part_number} ({size_kb:.1f} KB)")

        headers = await self._api.put_part(part.url, data, content_type)
        etag = normalize_etag(self._get_etag(headers))

        if etag is None and self._require_etag:
            self._logger.error(f"No ETag returned for part {part.part_number}")
            raise UploadError(
                f"Missing ETag for part {part.part_number}",
                details={'part_number': part.part_number}
            )

        upload_time = time.time() - upload_start
        speed_kbps = (size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(
            f"Part {part.part_number} uploaded in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)"
        )
        return dataclasses.replace(part, etag=etag)

    @staticmethod
    def _get_etag(headers: Mapping[str, str]) -> Optional[str]:
        # aiohttp headers are case-insensitive, plain mappings are not
        for name in ('ETag', 'etag', 'Etag'):
            value = headers.get(name)
            if value is not None:
                return value
        return None
