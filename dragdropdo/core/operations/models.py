"""Operation request and response models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..api.wire import compact, pick


class Action(str, Enum):
    """Actions the service can run on uploaded files."""
    CONVERT = 'convert'
    COMPRESS = 'compress'
    MERGE = 'merge'
    ZIP = 'zip'
    CREATE_ZIP = 'create_zip'
    SHARE = 'share'
    LOCK = 'lock'
    UNLOCK = 'unlock'
    RESET_PASSWORD = 'reset_password'


@dataclass(frozen=True)
class OperationResult:
    """
    Result of creating an operation.

    Attributes:
        main_task_id: Tracking id to poll
    """
    main_task_id: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OperationResult':
        return cls(main_task_id=pick(data, 'main_task_id'))


@dataclass(frozen=True)
class SupportedOperation:
    """
    Capability check answer.

    Attributes:
        supported: Whether the action (or any action) is supported
        ext: Normalized extension
        action: Action that was checked, if any
        available_actions: Actions available for the extension
        parameters: Action specific parameters (e.g. convert_to targets)
    """
    supported: bool
    ext: str
    action: Optional[str] = None
    available_actions: Tuple[str, ...] = ()
    parameters: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SupportedOperation':
        return cls(
            supported=bool(pick(data, 'supported', False)),
            ext=pick(data, 'ext') or '',
            action=pick(data, 'action'),
            available_actions=tuple(pick(data, 'available_actions') or ()),
            parameters=dict(pick(data, 'parameters') or {}),
        )


def operation_payload(
    action: str,
    file_keys: List[str],
    parameters: Optional[Dict[str, Any]] = None,
    notes: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """Body of the create-operation request."""
    return compact({
        'action': action,
        'file_keys': list(file_keys),
        'parameters': parameters,
        'notes': notes,
    })
