"""
Upload coordinator.

Orchestrates the multipart upload: negotiate presigned URLs, PUT every
part in order, then finalize. Depends on protocols, not concretions.
"""
import time
from typing import Any, Callable, List, Optional

from .models import (
    PresignedUpload,
    UploadConfig,
    UploadPart,
    UploadProgress,
    UploadResult,
    completion_payload,
)
from .protocols import ApiClientProtocol, ChunkingStrategy, PartUploaderProtocol, SourceReaderProtocol
from .services import AsyncSourceReader, PartUploader
from .strategies import PartCountChunkingStrategy, compute_part_count
from ..exceptions import DragdropdoError, UploadError
from ..logging import get_logger
from ..mime import guess_mime_type
from ..utils import notify

logger = get_logger('dragdropdo.upload')

ProgressCallback = Callable[[UploadProgress], Any]


class UploadCoordinator:
    """
    Coordinates the file upload process.

    Parts are uploaded sequentially in part-number order; one failed part
    aborts the whole upload and nothing is retried.

    Example:
        >>> coordinator = UploadCoordinator(api_client)
        >>> result = await coordinator.upload(
        ...     UploadConfig(source="report.pdf", file_name="report.pdf")
        ... )
        >>> result.file_key
    """

    def __init__(
        self,
        api_client: ApiClientProtocol,
        require_completion: bool = True,
        file_reader: Optional[SourceReaderProtocol] = None,
        chunking_factory: Optional[Callable[[int], ChunkingStrategy]] = None,
        part_uploader: Optional[PartUploaderProtocol] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            api_client: API transport
            require_completion: Require ETags and finalize with complete-upload
            file_reader: Source reader implementation
            chunking_factory: Builds the chunking strategy for a part count
            part_uploader: Part upload implementation
            progress_callback: Default callback for progress updates
        """
        self._api = api_client
        self._require_completion = require_completion
        self._reader = file_reader or AsyncSourceReader()
        self._chunking_factory = chunking_factory or PartCountChunkingStrategy
        self._part_uploader = part_uploader or PartUploader(
            api_client, require_etag=require_completion
        )
        self._progress_callback = progress_callback

    async def upload(
        self,
        config: UploadConfig,
        progress_callback: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """
        Execute the complete upload process.

        Args:
            config: Upload configuration
            progress_callback: Called after every part (overrides the default)

        Returns:
            Upload result with the file key

        Raises:
            ValidationError: If the source is missing or unreadable
            UploadError: If the multipart sequence fails
            APIError / NetworkError: If negotiation or a part PUT fails
        """
        on_progress = progress_callback or self._progress_callback

        file_size = self._reader.size_of(config.source)
        part_count = compute_part_count(file_size, config.parts)
        mime_type = config.mime_type or guess_mime_type(config.file_name)

        file_size_mb = file_size / (1024 * 1024)
        logger.info(
            f"Starting upload: {config.file_name} ({file_size_mb:.2f} MB, "
            f"{part_count} parts, {mime_type})"
        )

        try:
            presigned = await self._negotiate(config, file_size, part_count, mime_type)
            data = await self._reader.read_all(config.source)
            parts = await self._upload_parts(presigned, data, mime_type, on_progress)
        except DragdropdoError:
            raise
        except Exception as e:
            logger.error(f"Upload of {config.file_name} failed: {e}")
            raise UploadError(f"Upload failed: {e}", details=e) from e

        if self._require_completion:
            await self._complete(presigned, parts)

        logger.info(f"Upload finished: {config.file_name} -> {presigned.file_key}")

        return UploadResult(
            file_key=presigned.file_key,
            presigned_urls=presigned.presigned_urls,
            upload_id=presigned.upload_id,
            object_name=presigned.object_name,
            parts=tuple(parts),
        )

    async def _negotiate(
        self,
        config: UploadConfig,
        file_size: int,
        part_count: int,
        mime_type: str
    ) -> PresignedUpload:
        """Request presigned URLs for every part."""
        logger.debug("Requesting presigned URLs")
        result = await self._api.request(
            'POST',
            '/upload',
            config.negotiation_payload(file_size, part_count, mime_type)
        )

        if not isinstance(result, dict):
            raise UploadError("Unexpected upload negotiation response", details=result)

        presigned = PresignedUpload.from_dict(result)

        if not presigned.file_key:
            raise UploadError("Upload negotiation returned no file key", details=result)

        if len(presigned.presigned_urls) != part_count:
            raise UploadError(
                f"Mismatch: requested {part_count} parts but received "
                f"{len(presigned.presigned_urls)} presigned URLs",
                details=result
            )

        if self._require_completion and not presigned.upload_id:
            raise UploadError("Upload negotiation returned no upload id", details=result)

        return presigned

    async def _upload_parts(
        self,
        presigned: PresignedUpload,
        data: bytes,
        mime_type: str,
        on_progress: Optional[ProgressCallback]
    ) -> List[UploadPart]:
        """Upload every part in order, reporting progress after each one."""
        total_bytes = len(data)
        chunks = self._chunking_factory(len(presigned.presigned_urls)).calculate_chunks(total_bytes)
        total = len(chunks)

        uploaded_bytes = 0
        uploaded: List[UploadPart] = []
        started = time.time()

        for index, ((start, end), url) in enumerate(zip(chunks, presigned.presigned_urls)):
            part = UploadPart(part_number=index + 1, start=start, end=end, url=url)

            try:
                part = await self._part_uploader.upload_part(part, data[start:end], mime_type)
            except Exception as e:
                logger.error(f"Part {part.part_number}/{total} failed: {e}")
                raise

            uploaded.append(part)
            uploaded_bytes += part.size

            await notify(on_progress, UploadProgress(
                current_part=part.part_number,
                total_parts=total,
                bytes_uploaded=uploaded_bytes,
                total_bytes=total_bytes,
            ))

        elapsed = time.time() - started
        logger.info(f"All parts uploaded: {total} parts in {elapsed:.2f}s")
        return uploaded

    async def _complete(self, presigned: PresignedUpload, parts: List[UploadPart]) -> None:
        """Finalize the multipart upload."""
        logger.debug(f"Completing upload {presigned.upload_id}")
        try:
            await self._api.request('POST', '/complete-upload', completion_payload(presigned, parts))
        except Exception as e:
            logger.error(f"Completing upload of {presigned.file_key} failed: {e}")
            raise UploadError(f"Failed to complete upload: {e}", details=e) from e
