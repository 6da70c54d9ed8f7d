"""Tests for status models and the status poller."""
import asyncio
import time

import pytest
from unittest.mock import AsyncMock, Mock

from dragdropdo.core.exceptions import (
    APIError,
    DragdropdoError,
    NetworkError,
    PollTimeoutError,
    ValidationError,
)
from dragdropdo.core.status import OperationStatus, StatusPoller, TaskStatus


def status(operation_status, file_status=None, **file_fields):
    """Unwrapped status body as returned by the transport."""
    return {
        'operationStatus': operation_status,
        'filesData': [{
            'fileKey': 'file-key-123',
            'status': file_status or operation_status,
            **file_fields,
        }],
    }


@pytest.fixture
def api():
    api = Mock()
    api.request = AsyncMock()
    return api


class TestOperationStatus:
    """Test suite for status models."""

    def test_from_camel_case(self):
        result = OperationStatus.from_dict(
            status('completed', downloadLink='https://files.d3.com/output.png')
        )

        assert result.operation_status is TaskStatus.COMPLETED
        assert result.is_terminal and result.is_completed
        assert result.files_data[0].file_key == 'file-key-123'
        assert result.download_links == ['https://files.d3.com/output.png']

    def test_from_snake_case(self):
        result = OperationStatus.from_dict({
            'operation_status': 'failed',
            'files_data': [{
                'file_key': 'k',
                'status': 'failed',
                'error_code': 'E42',
                'error_message': 'Corrupt file',
            }],
        })

        assert result.is_failed
        assert result.files_data[0].error_code == 'E42'
        assert result.files_data[0].error_message == 'Corrupt file'
        assert result.download_links == []

    @pytest.mark.parametrize("value,terminal", [
        ('queued', False), ('running', False), ('completed', True), ('failed', True),
    ])
    def test_terminal_states(self, value, terminal):
        assert TaskStatus(value).is_terminal is terminal

    def test_no_files(self):
        result = OperationStatus.from_dict({'operationStatus': 'queued'})

        assert result.files_data == ()


class TestGetStatus:
    """Test suite for StatusPoller.get_status."""

    @pytest.mark.asyncio
    async def test_main_task(self, api):
        api.request.return_value = status('running')

        result = await StatusPoller(api).get_status('task-123')

        assert result.operation_status is TaskStatus.RUNNING
        api.request.assert_awaited_once_with('GET', '/status/task-123')

    @pytest.mark.asyncio
    async def test_file_task(self, api):
        api.request.return_value = status('queued')

        await StatusPoller(api).get_status('task-123', 'file-task-456')

        api.request.assert_awaited_once_with('GET', '/status/task-123/file-task-456')

    @pytest.mark.asyncio
    async def test_missing_main_task_id(self, api):
        with pytest.raises(ValidationError, match="main_task_id is required"):
            await StatusPoller(api).get_status('')

        api.request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_status_value(self, api):
        api.request.return_value = status('exploded')

        with pytest.raises(DragdropdoError, match="Failed to get status"):
            await StatusPoller(api).get_status('task-123')

    @pytest.mark.asyncio
    async def test_api_error_propagates(self, api):
        api.request.side_effect = APIError("Not found", status_code=404)

        with pytest.raises(APIError) as exc_info:
            await StatusPoller(api).get_status('task-123')

        assert exc_info.value.status_code == 404


class TestPoll:
    """Test suite for StatusPoller.poll."""

    @pytest.mark.asyncio
    async def test_polls_until_completed(self, api):
        api.request.side_effect = [status('queued'), status('running'), status('completed')]
        updates = []

        result = await StatusPoller(api).poll('task-123', interval=0.01, on_update=updates.append)

        assert result.is_completed
        assert api.request.await_count == 3
        assert [u.operation_status for u in updates] == [
            TaskStatus.QUEUED, TaskStatus.RUNNING, TaskStatus.COMPLETED
        ]
        assert updates[-1] is result

    @pytest.mark.asyncio
    async def test_failed_is_terminal(self, api):
        api.request.side_effect = [
            status('running'),
            status('failed', error_code='E1', errorMessage='Conversion failed'),
        ]

        result = await StatusPoller(api).poll('task-123', interval=0.01)

        assert result.is_failed
        assert result.files_data[0].error_message == 'Conversion failed'
        assert api.request.await_count == 2

    @pytest.mark.asyncio
    async def test_immediately_terminal(self, api):
        api.request.return_value = status('completed')

        await StatusPoller(api).poll('task-123', interval=10)

        api.request.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_file_task_path(self, api):
        api.request.return_value = status('completed')

        await StatusPoller(api).poll('task-123', 'file-task-456', interval=0.01)

        api.request.assert_awaited_once_with('GET', '/status/task-123/file-task-456')

    @pytest.mark.asyncio
    async def test_async_callback(self, api):
        api.request.side_effect = [status('running'), status('completed')]
        callback = AsyncMock()

        await StatusPoller(api).poll('task-123', interval=0.01, on_update=callback)

        assert callback.await_count == 2

    @pytest.mark.asyncio
    async def test_timeout(self, api):
        api.request.return_value = status('running')

        with pytest.raises(PollTimeoutError, match="timed out") as exc_info:
            await StatusPoller(api).poll('task-123', interval=0.05, timeout=0.2)

        assert exc_info.value.timeout == 0.2
        assert 1 <= api.request.await_count <= 6

    @pytest.mark.asyncio
    async def test_timeout_window(self, api):
        """Gives up once the budget is spent, at most one interval late."""
        api.request.return_value = status('running')

        started = time.monotonic()
        with pytest.raises(PollTimeoutError, match="1.0s"):
            await StatusPoller(api).poll('task-123', interval=0.2, timeout=1.0)
        elapsed = time.monotonic() - started

        assert 1.0 <= elapsed <= 1.3
        assert 5 <= api.request.await_count <= 6

    @pytest.mark.asyncio
    async def test_error_stops_polling(self, api):
        api.request.side_effect = [status('running'), NetworkError("Network error")]
        updates = []

        with pytest.raises(NetworkError):
            await StatusPoller(api).poll('task-123', interval=0.01, on_update=updates.append)

        assert len(updates) == 1
        assert api.request.await_count == 2

    @pytest.mark.asyncio
    async def test_cancellation(self, api):
        api.request.return_value = status('running')
        poller = StatusPoller(api)

        task = asyncio.ensure_future(poller.poll('task-123', interval=0.05, timeout=10))
        await asyncio.sleep(0.12)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
