"""Operation status fetching and polling."""
from .models import TaskStatus, FileTaskStatus, OperationStatus
from .poller import StatusPoller, DEFAULT_INTERVAL, DEFAULT_TIMEOUT

__all__ = [
    'TaskStatus',
    'FileTaskStatus',
    'OperationStatus',
    'StatusPoller',
    'DEFAULT_INTERVAL',
    'DEFAULT_TIMEOUT',
]
