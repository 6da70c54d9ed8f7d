"""
Operation service.

Shapes the capability-check and create-operation requests. The convenience
methods only fill in the action and its parameters.
"""
from typing import Any, Dict, List, Optional, Union

from .models import Action, OperationResult, SupportedOperation, operation_payload
from ..api.wire import compact
from ..exceptions import DragdropdoError, ValidationError
from ..logging import get_logger

Notes = Optional[Dict[str, str]]


class OperationService:
    """Creates processing operations on uploaded files."""

    def __init__(self, api_client):
        self._api = api_client
        self._logger = get_logger('dragdropdo.operations')

    async def check_supported_operation(
        self,
        ext: str,
        action: Optional[Union[Action, str]] = None,
        parameters: Optional[Dict[str, Any]] = None
    ) -> SupportedOperation:
        """
        Check whether an action is supported for a file extension.

        Args:
            ext: File extension (e.g. 'pdf')
            action: Optional action to check (e.g. 'convert')
            parameters: Optional parameters to validate (e.g. {'convert_to': 'png'})

        Returns:
            SupportedOperation with available actions and parameters

        Raises:
            ValidationError: If ext is empty
        """
        if not ext:
            raise ValidationError("Extension (ext) is required")

        payload = compact({
            'ext': ext,
            'action': action.value if isinstance(action, Action) else action,
            'parameters': parameters,
        })
        result = await self._api.request('POST', '/supported-operation', payload)
        try:
            return SupportedOperation.from_dict(result)
        except (TypeError, AttributeError) as e:
            raise DragdropdoError(
                f"Failed to check supported operation: {e}", details=result
            ) from e

    async def create_operation(
        self,
        action: Union[Action, str],
        file_keys: List[str],
        parameters: Optional[Dict[str, Any]] = None,
        notes: Notes = None
    ) -> OperationResult:
        """
        Create a file operation (convert, compress, merge, zip...).

        Args:
            action: Action to perform
            file_keys: Keys returned by uploads
            parameters: Action specific parameters
            notes: Optional user metadata

        Returns:
            OperationResult with the main task id

        Raises:
            ValidationError: If action or file_keys are missing
        """
        if not action:
            raise ValidationError("Action is required")
        if not file_keys:
            raise ValidationError("At least one file key is required")

        action_name = action.value if isinstance(action, Action) else action
        self._logger.info(f"Creating {action_name} operation for {len(file_keys)} file(s)")

        result = await self._api.request(
            'POST', '/do', operation_payload(action_name, file_keys, parameters, notes)
        )
        try:
            operation = OperationResult.from_dict(result)
        except (TypeError, AttributeError) as e:
            raise DragdropdoError(f"Failed to create operation: {e}", details=result) from e

        if not operation.main_task_id:
            raise DragdropdoError("Failed to create operation: no mainTaskId in response", details=result)

        self._logger.debug(f"Operation {action_name} created: {operation.main_task_id}")
        return operation

    async def convert(self, file_keys: List[str], convert_to: str, notes: Notes = None) -> OperationResult:
        """Convert files to a different format."""
        return await self.create_operation(Action.CONVERT, file_keys, {'convert_to': convert_to}, notes)

    async def compress(
        self,
        file_keys: List[str],
        compression_value: str = 'recommended',
        notes: Notes = None
    ) -> OperationResult:
        """Compress files."""
        return await self.create_operation(
            Action.COMPRESS, file_keys, {'compression_value': compression_value}, notes
        )

    async def merge(self, file_keys: List[str], notes: Notes = None) -> OperationResult:
        """Merge multiple files."""
        return await self.create_operation(Action.MERGE, file_keys, notes=notes)

    async def zip(self, file_keys: List[str], notes: Notes = None) -> OperationResult:
        """Create a ZIP archive from files."""
        return await self.create_operation(Action.ZIP, file_keys, notes=notes)

    async def share(self, file_keys: List[str], notes: Notes = None) -> OperationResult:
        """Generate shareable links."""
        return await self.create_operation(Action.SHARE, file_keys, notes=notes)

    async def lock_pdf(self, file_keys: List[str], password: str, notes: Notes = None) -> OperationResult:
        """Lock PDFs with a password."""
        return await self.create_operation(Action.LOCK, file_keys, {'password': password}, notes)

    async def unlock_pdf(self, file_keys: List[str], password: str, notes: Notes = None) -> OperationResult:
        """Unlock password protected PDFs."""
        return await self.create_operation(Action.UNLOCK, file_keys, {'password': password}, notes)

    async def reset_pdf_password(
        self,
        file_keys: List[str],
        old_password: str,
        new_password: str,
        notes: Notes = None
    ) -> OperationResult:
        """Change the password of protected PDFs."""
        return await self.create_operation(
            Action.RESET_PASSWORD,
            file_keys,
            {'old_password': old_password, 'new_password': new_password},
            notes
        )
