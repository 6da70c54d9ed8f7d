"""
Operation status polling.

`StatusPoller.poll` is a plain loop: check the budget, fetch, notify, stop
on a terminal status, otherwise sleep for the interval. There is no
cancellation token; cancelling the awaiting task stops the loop at its
next suspension point.
"""
import asyncio
from typing import Any, Callable, Optional

from .models import OperationStatus
from ..exceptions import DragdropdoError, PollTimeoutError, ValidationError
from ..logging import get_logger
from ..utils import notify

DEFAULT_INTERVAL = 2.0
DEFAULT_TIMEOUT = 300.0

StatusCallback = Callable[[OperationStatus], Any]


class StatusPoller:
    """
    Fetches and polls operation status.

    Example:
        >>> poller = StatusPoller(api_client)
        >>> status = await poller.poll("task-123", interval=1.0, timeout=60)
        >>> status.download_links
    """

    def __init__(self, api_client):
        """
        Initialize the poller.

        Args:
            api_client: API transport exposing `request`
        """
        self._api = api_client
        self._logger = get_logger('dragdropdo.status')

    async def get_status(
        self,
        main_task_id: str,
        file_task_id: Optional[str] = None
    ) -> OperationStatus:
        """
        Fetch the current status of an operation once.

        Args:
            main_task_id: Tracking id returned when the operation was created
            file_task_id: Optional id of a single file task

        Raises:
            ValidationError: If main_task_id is empty
            APIError / NetworkError: If the request fails
        """
        if not main_task_id:
            raise ValidationError("main_task_id is required")

        path = f"/status/{main_task_id}"
        if file_task_id:
            path += f"/{file_task_id}"

        result = await self._api.request('GET', path)
        try:
            return OperationStatus.from_dict(result)
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            raise DragdropdoError(f"Failed to get status: {e}", details=result) from e

    async def poll(
        self,
        main_task_id: str,
        file_task_id: Optional[str] = None,
        interval: float = DEFAULT_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
        on_update: Optional[StatusCallback] = None
    ) -> OperationStatus:
        """
        Poll until the operation completes or fails.

        The budget is checked before every request, so a poll never runs
        longer than `timeout` plus one interval and one request.

        Args:
            main_task_id: Tracking id of the operation
            file_task_id: Optional id of a single file task
            interval: Seconds to wait between requests
            timeout: Seconds after which polling gives up
            on_update: Called with every fetched status, terminal one included

        Returns:
            The terminal status (completed or failed)

        Raises:
            PollTimeoutError: If the budget is exhausted first
            ValidationError / APIError / NetworkError: Propagated unchanged
        """
        loop = asyncio.get_running_loop()
        started = loop.time()
        attempt = 0

        while True:
            elapsed = loop.time() - started
            if elapsed > timeout:
                self._logger.warning(f"Polling {main_task_id} timed out after {timeout}s")
                raise PollTimeoutError(f"Polling timed out after {timeout}s", timeout=timeout)

            attempt += 1
            status = await self.get_status(main_task_id, file_task_id)
            self._logger.debug(
                f"Poll #{attempt} for {main_task_id}: {status.operation_status.value} "
                f"({elapsed:.1f}s elapsed)"
            )

            await notify(on_update, status)

            if status.is_terminal:
                self._logger.info(f"Operation {main_task_id} {status.operation_status.value}")
                return status

            await asyncio.sleep(interval)
