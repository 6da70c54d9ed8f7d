"""
Dragdropdo - High-level async client for the dragdropdo Business API.

Example:
    >>> async with Dragdropdo(api_key="your-api-key") as client:
    ...     upload = await client.upload_file("report.pdf", "report.pdf")
    ...     operation = await client.convert([upload.file_key], "png")
    ...     status = await client.poll_status(operation.main_task_id)
    ...     print(status.download_links)
"""
import os
from typing import Any, Callable, Dict, List, Optional, Union

import aiohttp

from .core.api import AsyncAPIClient, ClientConfig, ProtocolVariant
from .core.logging import get_logger
from .core.operations import Action, OperationResult, OperationService, SupportedOperation
from .core.status import DEFAULT_INTERVAL, DEFAULT_TIMEOUT, OperationStatus, StatusPoller
from .core.upload import UploadConfig, UploadCoordinator, UploadProgress, UploadResult, UploadSource

Source = Union[str, os.PathLike, bytes, bytearray, memoryview, UploadSource]
Notes = Optional[Dict[str, str]]


class Dragdropdo:
    """
    High-level async client: upload files, run operations, poll status.

    Usage:
        >>> client = Dragdropdo(api_key="key", base_url="https://api-dev.dragdropdo.com")
        >>> try:
        ...     result = await client.upload_file(b"hello", "hello.txt")
        ... finally:
        ...     await client.close()

    With custom configuration:
        >>> config = ClientConfig(api_key="key", variant=ProtocolVariant.D3)
        >>> async with Dragdropdo(config=config) as client:
        ...     ...
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        *,
        variant: Union[ProtocolVariant, str, None] = None,
        config: Optional[ClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the client.

        Args:
            api_key: API key (required unless `config` is given)
            base_url: API base URL (trailing slash stripped)
            timeout: Request timeout in seconds (default 30)
            headers: Extra headers for every API call
            variant: Protocol variant of the deployment
            config: Complete configuration, overrides the other arguments
            session: Optional shared aiohttp session

        Raises:
            ValidationError: If no API key is available
        """
        if config is None:
            kwargs: Dict[str, Any] = {'api_key': api_key or '', 'base_url': base_url}
            if timeout is not None:
                kwargs['timeout'] = timeout
            if headers:
                kwargs['headers'] = dict(headers)
            if variant is not None:
                kwargs['variant'] = ProtocolVariant(variant)
            config = ClientConfig(**kwargs)

        self._config = config
        self._logger = get_logger('dragdropdo.client')
        self._api = AsyncAPIClient(config, session=session)
        self._uploader = UploadCoordinator(
            self._api,
            require_completion=config.variant.requires_completion
        )
        self._operations = OperationService(self._api)
        self._poller = StatusPoller(self._api)

    @classmethod
    def from_env(cls, **kwargs) -> 'Dragdropdo':
        """Create a client configured from DRAGDROPDO_* environment variables."""
        return cls(config=ClientConfig.from_env(**kwargs))

    @property
    def config(self) -> ClientConfig:
        return self._config

    # =========================================================================
    # Context manager
    # =========================================================================

    async def __aenter__(self) -> 'Dragdropdo':
        await self._api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        await self._api.close()

    # =========================================================================
    # Uploads
    # =========================================================================

    async def upload_file(
        self,
        file: Source,
        file_name: str,
        mime_type: Optional[str] = None,
        parts: Optional[int] = None,
        on_progress: Optional[Callable[[UploadProgress], Any]] = None
    ) -> UploadResult:
        """
        Upload a file with a multipart upload.

        Args:
            file: File path or bytes
            file_name: Name reported to the service
            mime_type: Content type (guessed from file_name when omitted)
            parts: Number of parts (default: one per 5 MiB, 1..100)
            on_progress: Called after every uploaded part

        Returns:
            UploadResult whose file_key is used in operations

        Example:
            >>> result = await client.upload_file(
            ...     "/path/to/file.pdf", "document.pdf",
            ...     on_progress=lambda p: print(f"{p.percentage}%")
            ... )
        """
        config = UploadConfig(
            source=file,
            file_name=file_name,
            mime_type=mime_type,
            parts=parts
        )
        return await self._uploader.upload(config, progress_callback=on_progress)

    # =========================================================================
    # Operations
    # =========================================================================

    async def check_supported_operation(
        self,
        ext: str,
        action: Optional[Union[Action, str]] = None,
        parameters: Optional[Dict[str, Any]] = None
    ) -> SupportedOperation:
        """
        Check if an operation is supported for a file extension.

        Example:
            >>> info = await client.check_supported_operation("pdf", "compress")
            >>> info.parameters.get("compression_value")
        """
        return await self._operations.check_supported_operation(ext, action, parameters)

    async def create_operation(
        self,
        action: Union[Action, str],
        file_keys: List[str],
        parameters: Optional[Dict[str, Any]] = None,
        notes: Notes = None
    ) -> OperationResult:
        """
        Create a file operation.

        Example:
            >>> op = await client.create_operation(
            ...     "convert", ["file-key-123"], {"convert_to": "png"}
            ... )
            >>> op.main_task_id
        """
        return await self._operations.create_operation(action, file_keys, parameters, notes)

    async def convert(self, file_keys: List[str], convert_to: str, notes: Notes = None) -> OperationResult:
        """Convert files to a different format."""
        return await self._operations.convert(file_keys, convert_to, notes)

    async def compress(
        self,
        file_keys: List[str],
        compression_value: str = 'recommended',
        notes: Notes = None
    ) -> OperationResult:
        """Compress files."""
        return await self._operations.compress(file_keys, compression_value, notes)

    async def merge(self, file_keys: List[str], notes: Notes = None) -> OperationResult:
        """Merge multiple files."""
        return await self._operations.merge(file_keys, notes)

    async def zip(self, file_keys: List[str], notes: Notes = None) -> OperationResult:
        """Create a ZIP archive from files."""
        return await self._operations.zip(file_keys, notes)

    async def share(self, file_keys: List[str], notes: Notes = None) -> OperationResult:
        """Share files (generate shareable links)."""
        return await self._operations.share(file_keys, notes)

    async def lock_pdf(self, file_keys: List[str], password: str, notes: Notes = None) -> OperationResult:
        """Lock PDF with password."""
        return await self._operations.lock_pdf(file_keys, password, notes)

    async def unlock_pdf(self, file_keys: List[str], password: str, notes: Notes = None) -> OperationResult:
        """Unlock PDF with password."""
        return await self._operations.unlock_pdf(file_keys, password, notes)

    async def reset_pdf_password(
        self,
        file_keys: List[str],
        old_password: str,
        new_password: str,
        notes: Notes = None
    ) -> OperationResult:
        """Reset PDF password."""
        return await self._operations.reset_pdf_password(file_keys, old_password, new_password, notes)

    # =========================================================================
    # Status
    # =========================================================================

    async def get_status(self, main_task_id: str, file_task_id: Optional[str] = None) -> OperationStatus:
        """
        Get operation status once.

        Example:
            >>> status = await client.get_status("task-123", "file-task-456")
        """
        return await self._poller.get_status(main_task_id, file_task_id)

    async def poll_status(
        self,
        main_task_id: str,
        file_task_id: Optional[str] = None,
        interval: float = DEFAULT_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
        on_update: Optional[Callable[[OperationStatus], Any]] = None
    ) -> OperationStatus:
        """
        Poll operation status until completion or failure.

        Args:
            main_task_id: Tracking id returned by an operation
            file_task_id: Optional file task id
            interval: Seconds between checks (default 2)
            timeout: Seconds before giving up (default 300)
            on_update: Called with every status update

        Raises:
            PollTimeoutError: If the operation is still running after `timeout`

        Example:
            >>> status = await client.poll_status(
            ...     op.main_task_id,
            ...     on_update=lambda s: print(s.operation_status.value)
            ... )
            >>> if status.is_completed:
            ...     print(status.download_links)
        """
        return await self._poller.poll(
            main_task_id,
            file_task_id,
            interval=interval,
            timeout=timeout,
            on_update=on_update
        )
