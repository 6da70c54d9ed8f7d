"""
dragdropdo - Async Python client for the dragdropdo Business API.

Usage:
    >>> from dragdropdo import Dragdropdo
    >>>
    >>> async with Dragdropdo(api_key="your-api-key") as client:
    ...     upload = await client.upload_file("doc.pdf", "doc.pdf")
    ...     op = await client.compress([upload.file_key])
    ...     status = await client.poll_status(op.main_task_id)
"""
from .client import Dragdropdo

# Configuration
from .core.api import (
    ClientConfig,
    ProtocolVariant,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncAPIClient,
)

# Errors
from .core.exceptions import (
    ErrorKind,
    DragdropdoError,
    ValidationError,
    APIError,
    UploadError,
    PollTimeoutError,
    NetworkError,
)

# Models
from .core.upload import UploadResult, UploadProgress, UploadPart, UploadSource
from .core.operations import Action, OperationResult, SupportedOperation
from .core.status import TaskStatus, FileTaskStatus, OperationStatus
from .core.logging import setup_logging

# Backward compatibility alias
D3Client = Dragdropdo

__version__ = '1.0.0'

__all__ = [
    'Dragdropdo',
    'D3Client',
    'ClientConfig',
    'ProtocolVariant',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'ErrorKind',
    'DragdropdoError',
    'ValidationError',
    'APIError',
    'UploadError',
    'PollTimeoutError',
    'NetworkError',
    'UploadResult',
    'UploadProgress',
    'UploadPart',
    'UploadSource',
    'Action',
    'OperationResult',
    'SupportedOperation',
    'TaskStatus',
    'FileTaskStatus',
    'OperationStatus',
    'setup_logging',
]
