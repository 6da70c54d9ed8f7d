"""Operation status models."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..api.wire import pick


class TaskStatus(str, Enum):
    """Status of an operation or of one of its files."""
    QUEUED = 'queued'
    RUNNING = 'running'
    COMPLETED = 'completed'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.COMPLETED, TaskStatus.FAILED)


@dataclass(frozen=True)
class FileTaskStatus:
    """
    Status of one file inside an operation.

    `download_link` is set once the file is completed, `error_code` and
    `error_message` once it failed.
    """
    file_key: str
    status: TaskStatus
    download_link: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FileTaskStatus':
        return cls(
            file_key=pick(data, 'file_key') or '',
            status=TaskStatus(pick(data, 'status')),
            download_link=pick(data, 'download_link'),
            error_code=pick(data, 'error_code'),
            error_message=pick(data, 'error_message'),
        )


@dataclass(frozen=True)
class OperationStatus:
    """
    Status of an operation as reported by the service.

    The overall status is taken verbatim from the service, no aggregation
    over the file entries happens client side.
    """
    operation_status: TaskStatus
    files_data: Tuple[FileTaskStatus, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OperationStatus':
        """Create from an API response (snake_case or camelCase)."""
        files = pick(data, 'files_data') or ()
        return cls(
            operation_status=TaskStatus(pick(data, 'operation_status')),
            files_data=tuple(FileTaskStatus.from_dict(f) for f in files),
        )

    @property
    def is_terminal(self) -> bool:
        return self.operation_status.is_terminal

    @property
    def is_completed(self) -> bool:
        return self.operation_status is TaskStatus.COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.operation_status is TaskStatus.FAILED

    @property
    def download_links(self) -> List[str]:
        """Download links of every completed file."""
        return [f.download_link for f in self.files_data if f.download_link]
