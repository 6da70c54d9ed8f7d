"""
Async dragdropdo API client.

Thin transport over aiohttp: authenticated JSON calls against the API and
unauthenticated PUTs against presigned upload URLs. Every failure leaves
this module as a DragdropdoError subclass.
"""
import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional

import aiohttp

from .config import ClientConfig
from .wire import unwrap
from ..exceptions import APIError, DragdropdoError, NetworkError
from ..logging import get_logger


class AsyncAPIClient:
    """
    Asynchronous dragdropdo API client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling (one session shared by every call)
    - Uniform error mapping to the client's error taxonomy

    Example:
        >>> config = ClientConfig(api_key="key")
        >>> async with AsyncAPIClient(config) as api:
        ...     result = await api.request('GET', '/status/task-123')
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize async API client.

        Args:
            config: Client configuration
            session: Optional shared session (not closed by this client)
        """
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False

        self._logger = get_logger('dragdropdo.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> ClientConfig:
        """Get current configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> 'AsyncAPIClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._closed:
            raise DragdropdoError("Client is closed")

        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._connector = None

    def _proxy(self) -> Optional[str]:
        return self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

    async def request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make an authenticated API call.

        Args:
            method: HTTP method
            path: API path relative to the configured prefix (e.g. '/upload')
            json_body: Optional JSON payload

        Returns:
            Response body with the {"data": ...} envelope removed

        Raises:
            DragdropdoError: The request body cannot be encoded as JSON
            APIError: Service answered with a non-success status
            NetworkError: No response was received
        """
        url = self._config.api_url(path)
        try:
            body = json.dumps(json_body) if json_body is not None else None
        except (TypeError, ValueError) as e:
            self._logger.error(f"{method} {url}: cannot encode request body: {e}")
            raise DragdropdoError(f"Request error: {e}", details=e) from e

        session = await self._ensure_session()

        self._logger.debug(f"{method} {url}")
        if body:
            self._logger.debug(f"Request data: {body[:300]}")

        try:
            async with session.request(
                method,
                url,
                data=body,
                headers=self._config.get_request_headers(),
                proxy=self._proxy()
            ) as response:
                text = await response.text()
                self._logger.debug(f"Response {response.status}: {text[:1000]}")
                payload = self._parse_body(text)

                if not 200 <= response.status < 300:
                    raise self._api_error(response.status, payload)

                return unwrap(payload)
        except DragdropdoError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"{method} {url} failed: {e!r}")
            raise NetworkError(
                f"Network error: No response received from server ({e})",
                details=e
            ) from e

    async def put_part(
        self,
        url: str,
        data: bytes,
        content_type: str
    ) -> Mapping[str, str]:
        """
        Upload raw bytes to a presigned URL.

        Presigned URLs carry their own authorization, so no API headers are sent.

        Returns:
            Response headers (ETag lives here)
        """
        session = await self._ensure_session()

        try:
            async with session.request(
                'PUT',
                url,
                data=data,
                headers={'Content-Type': content_type},
                proxy=self._proxy(),
                timeout=self._config.timeouts.to_aiohttp_part_timeout()
            ) as response:
                if not 200 <= response.status < 300:
                    text = await response.text()
                    raise self._api_error(response.status, self._parse_body(text))
                return response.headers
        except DragdropdoError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"Network error: No response received from upload server ({e})",
                details=e
            ) from e

    @staticmethod
    def _parse_body(text: str) -> Any:
        """Parse a JSON body; non-JSON bodies are returned as text."""
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError:
            return text

    @staticmethod
    def _api_error(status: int, payload: Any) -> APIError:
        """Build an APIError from an error response."""
        message = None
        code = None
        if isinstance(payload, dict):
            message = payload.get('message') or payload.get('error')
            code = payload.get('code')
        elif isinstance(payload, str) and payload:
            message = payload[:200]
        return APIError(
            message or f"API request failed with status {status}",
            status_code=status,
            code=code,
            details=payload
        )
