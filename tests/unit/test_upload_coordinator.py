"""Tests for the upload coordinator."""
from dataclasses import replace

import pytest
from unittest.mock import AsyncMock, Mock

from dragdropdo.core.exceptions import APIError, NetworkError, UploadError, ValidationError
from dragdropdo.core.upload import UploadConfig, UploadCoordinator, UploadProgress


def make_api(file_key="file-key-123", upload_id="upload-id-456", urls=None, etags=None):
    """API mock answering the negotiate and complete calls."""
    urls = urls if urls is not None else ["https://upload.d3.com/part1"]
    negotiation = {'file_key': file_key, 'presigned_urls': urls}
    if upload_id:
        negotiation['upload_id'] = upload_id

    api = Mock()
    api.request = AsyncMock(side_effect=[
        negotiation,
        {'message': 'Upload completed successfully', 'file_key': file_key},
    ])
    etags = etags or [f'"etag-part-{i + 1}"' for i in range(len(urls))]
    api.put_part = AsyncMock(side_effect=[{'ETag': etag} for etag in etags])
    return api


class TestUploadCoordinator:
    """Test suite for UploadCoordinator."""

    @pytest.mark.asyncio
    async def test_upload_bytes_single_part(self):
        api = make_api()
        coordinator = UploadCoordinator(api)

        result = await coordinator.upload(UploadConfig(source=b"hello world", file_name="hello.txt"))

        assert result.file_key == "file-key-123"
        assert result.upload_id == "upload-id-456"
        assert [p.etag for p in result.parts] == ["etag-part-1"]

        method, path, body = api.request.await_args_list[0].args
        assert (method, path) == ('POST', '/upload')
        assert body == {'file_name': 'hello.txt', 'size': 11, 'mime_type': 'text/plain', 'parts': 1}

        api.put_part.assert_awaited_once_with("https://upload.d3.com/part1", b"hello world", "text/plain")

    @pytest.mark.asyncio
    async def test_parts_uploaded_in_order(self):
        urls = ["u1", "u2", "u3"]
        api = make_api(urls=urls)
        coordinator = UploadCoordinator(api)

        result = await coordinator.upload(
            UploadConfig(source=b"0123456789", file_name="a.bin", parts=3)
        )

        put_calls = api.put_part.await_args_list
        assert [c.args[0] for c in put_calls] == urls
        assert [c.args[1] for c in put_calls] == [b"0123", b"4567", b"89"]
        assert [c.args[2] for c in put_calls] == ["application/octet-stream"] * 3
        assert [p.part_number for p in result.parts] == [1, 2, 3]

        method, path, body = api.request.await_args_list[1].args
        assert (method, path) == ('POST', '/complete-upload')
        assert body == {
            'file_key': 'file-key-123',
            'upload_id': 'upload-id-456',
            'parts': [
                {'etag': 'etag-part-1', 'part_number': 1},
                {'etag': 'etag-part-2', 'part_number': 2},
                {'etag': 'etag-part-3', 'part_number': 3},
            ],
        }

    @pytest.mark.asyncio
    async def test_explicit_mime_type(self):
        api = make_api()

        await UploadCoordinator(api).upload(
            UploadConfig(source=b"x", file_name="a.bin", mime_type="image/png")
        )

        assert api.put_part.await_args.args[2] == "image/png"

    @pytest.mark.asyncio
    async def test_mismatch_fails_before_any_put(self):
        api = make_api(urls=["u1"])
        coordinator = UploadCoordinator(api)

        with pytest.raises(UploadError, match="requested 2 parts but received 1"):
            await coordinator.upload(UploadConfig(source=b"0123456789", file_name="a.bin", parts=2))

        api.put_part.assert_not_awaited()
        assert api.request.await_count == 1

    @pytest.mark.asyncio
    async def test_missing_upload_id(self):
        api = make_api(upload_id=None)

        with pytest.raises(UploadError, match="upload id"):
            await UploadCoordinator(api).upload(UploadConfig(source=b"x", file_name="a.bin"))

        api.put_part.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_file_key(self):
        api = make_api(file_key="")

        with pytest.raises(UploadError, match="no file key"):
            await UploadCoordinator(api).upload(UploadConfig(source=b"x", file_name="a.bin"))

    @pytest.mark.asyncio
    async def test_missing_source_file(self, tmp_path):
        api = make_api()

        with pytest.raises(ValidationError, match="File not found"):
            await UploadCoordinator(api).upload(
                UploadConfig(source=tmp_path / "missing.pdf", file_name="missing.pdf")
            )

        api.request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_progress_is_monotonic(self):
        api = make_api(urls=["u1", "u2", "u3", "u4"])
        updates = []

        await UploadCoordinator(api).upload(
            UploadConfig(source=b"x" * 1000, file_name="a.bin", parts=4),
            progress_callback=updates.append
        )

        assert len(updates) == 4
        assert all(isinstance(u, UploadProgress) for u in updates)
        assert [u.current_part for u in updates] == [1, 2, 3, 4]
        sent = [u.bytes_uploaded for u in updates]
        assert sent == sorted(set(sent))
        assert updates[-1].bytes_uploaded == updates[-1].total_bytes == 1000
        assert updates[-1].percentage == 100
        assert [u.percentage for u in updates] == [25, 50, 75, 100]

    @pytest.mark.asyncio
    async def test_async_progress_callback(self):
        api = make_api()
        callback = AsyncMock()

        await UploadCoordinator(api).upload(
            UploadConfig(source=b"abc", file_name="a.bin"), progress_callback=callback
        )

        callback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_default_progress_callback(self):
        api = make_api()
        callback = Mock()

        await UploadCoordinator(api, progress_callback=callback).upload(
            UploadConfig(source=b"abc", file_name="a.bin")
        )

        callback.assert_called_once()

    @pytest.mark.asyncio
    async def test_failed_part_aborts_upload(self):
        api = make_api(urls=["u1", "u2", "u3"])
        api.put_part.side_effect = [{'ETag': '"e1"'}, APIError("Forbidden", status_code=403)]

        with pytest.raises(APIError) as exc_info:
            await UploadCoordinator(api).upload(
                UploadConfig(source=b"0123456789", file_name="a.bin", parts=3)
            )

        assert exc_info.value.status_code == 403
        assert api.put_part.await_count == 2
        assert api.request.await_count == 1

    @pytest.mark.asyncio
    async def test_network_error_passes_through(self):
        api = make_api()
        api.put_part.side_effect = NetworkError("Network error")

        with pytest.raises(NetworkError):
            await UploadCoordinator(api).upload(UploadConfig(source=b"abc", file_name="a.bin"))

    @pytest.mark.asyncio
    async def test_missing_etag_names_part(self):
        api = make_api(urls=["u1", "u2"])
        api.put_part.side_effect = [{'ETag': '"e1"'}, {}]

        with pytest.raises(UploadError, match="part 2"):
            await UploadCoordinator(api).upload(
                UploadConfig(source=b"0123456789", file_name="a.bin", parts=2)
            )

    @pytest.mark.asyncio
    async def test_unknown_error_wrapped(self):
        api = make_api()
        original = RuntimeError("boom")
        api.put_part.side_effect = original

        with pytest.raises(UploadError, match="Upload failed: boom") as exc_info:
            await UploadCoordinator(api).upload(UploadConfig(source=b"abc", file_name="a.bin"))

        assert exc_info.value.__cause__ is original
        assert exc_info.value.details is original

    @pytest.mark.asyncio
    async def test_completion_failure_wrapped(self):
        api = make_api()
        cause = APIError("Invalid parts", status_code=400)
        api.request.side_effect = [
            {'file_key': 'k', 'upload_id': 'u', 'presigned_urls': ['u1']},
            cause,
        ]

        with pytest.raises(UploadError, match="Failed to complete upload") as exc_info:
            await UploadCoordinator(api).upload(UploadConfig(source=b"abc", file_name="a.bin"))

        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_without_completion_step(self):
        """Legacy deployments need neither ETags nor a complete call."""
        api = make_api(upload_id=None)
        api.put_part.side_effect = [{}]

        result = await UploadCoordinator(api, require_completion=False).upload(
            UploadConfig(source=b"abc", file_name="a.bin")
        )

        assert result.file_key == "file-key-123"
        assert result.parts[0].etag is None
        assert api.request.await_count == 1

    @pytest.mark.asyncio
    async def test_custom_part_uploader(self):
        api = make_api(urls=["u1", "u2"])
        part_uploader = Mock()
        part_uploader.upload_part = AsyncMock(
            side_effect=lambda part, data, content_type: replace(part, etag=f"custom-{part.part_number}")
        )

        result = await UploadCoordinator(api, part_uploader=part_uploader).upload(
            UploadConfig(source=b"0123456789", file_name="a.bin", parts=2)
        )

        assert part_uploader.upload_part.await_count == 2
        api.put_part.assert_not_awaited()
        assert [p.etag for p in result.parts] == ["custom-1", "custom-2"]
        completion = api.request.await_args_list[1].args[2]
        assert [p['etag'] for p in completion['parts']] == ["custom-1", "custom-2"]

    @pytest.mark.asyncio
    async def test_upload_from_path(self, sample_file):
        api = make_api(urls=["u1", "u2"])

        result = await UploadCoordinator(api).upload(
            UploadConfig(source=sample_file, file_name="sample.pdf", parts=2)
        )

        put_calls = api.put_part.await_args_list
        assert [c.args[1] for c in put_calls] == [b"0123456789", b"ABCDEFGHIJ"]
        assert put_calls[0].args[2] == "application/pdf"
        assert result.file_size == 20
