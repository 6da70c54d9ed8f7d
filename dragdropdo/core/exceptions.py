"""
Custom exceptions for dragdropdo client operations.

Every error raised by the client derives from DragdropdoError and carries a
`kind` discriminant, so callers can branch on `err.kind` instead of chains of
isinstance checks.
"""
from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Closed set of error kinds raised by the client."""
    CLIENT = 'client'
    VALIDATION = 'validation'
    API = 'api'
    UPLOAD = 'upload'
    TIMEOUT = 'timeout'
    NETWORK = 'network'


class DragdropdoError(Exception):
    """Base exception for all dragdropdo errors."""

    kind: ErrorKind = ErrorKind.CLIENT

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[Any] = None,
        details: Any = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status_code: HTTP status code (if available)
            code: Service error code (if available)
            details: Structured details, raw response body or original error
        """
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code!r}, code={self.code!r})"
        )


class ValidationError(DragdropdoError):
    """Caller-supplied arguments are missing or malformed. Raised before any request."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message, status_code=400, details=details)


class APIError(DragdropdoError):
    """The service answered with a non-success status."""

    kind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: int,
        code: Optional[Any] = None,
        details: Any = None
    ) -> None:
        super().__init__(message, status_code=status_code, code=code, details=details)


class UploadError(DragdropdoError):
    """Failure specific to the multipart upload sequence."""

    kind = ErrorKind.UPLOAD

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message, details=details)


class PollTimeoutError(DragdropdoError):
    """Status polling exceeded its budget without reaching a terminal state."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str = "Operation timed out", timeout: Optional[float] = None) -> None:
        self.timeout = timeout
        super().__init__(message)


class NetworkError(DragdropdoError):
    """Transport failure with no response from the service."""

    kind = ErrorKind.NETWORK
