"""
Async DFS API client.

Thin aiohttp wrapper speaking the ADLS-Gen2 style DFS REST conventions.
Every call carries a fresh bearer token and maps failures onto the
lakepy exception hierarchy. Nothing here retries.
"""
import json
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Any, List, Tuple, Union
from urllib.parse import urlencode, quote
import aiohttp

from .auth import AccessTokenProvider
from .config import APIConfig
from ..exceptions import NetworkFailure, HttpStatusError, NotFound

QueryParams = List[Tuple[str, Any]]


@dataclass(frozen=True)
class DFSResponse:
    """
    Fully read HTTP response.

    Attributes:
        status: HTTP status code
        body: Raw response body
        headers: Response headers
    """
    status: int
    body: bytes = b''
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self, encoding: str = 'utf-8') -> str:
        return self.body.decode(encoding)

    def json(self) -> Any:
        if not self.body:
            return {}
        return json.loads(self.body)


def render_query(params: QueryParams) -> str:
    """
    Render query parameters in order, DFS style.

    Booleans become ``true``/``false`` and values are percent-encoded with
    no safe characters, so ``/`` in a directory becomes ``%2F``.
    """
    rendered = []
    for key, value in params:
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        rendered.append((key, str(value)))
    return urlencode(rendered, quote_via=quote, safe='')


class AsyncDFSClient:
    """
    Asynchronous DFS client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling
    - Bearer token from an injected AccessTokenProvider on every call

    Example:
        >>> provider = StaticTokenProvider(token)
        >>> async with AsyncDFSClient(provider) as client:
        ...     response = await client.request('GET', 'ws/item/Files/a.txt')
    """

    def __init__(
        self,
        token_provider: AccessTokenProvider,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize async DFS client.

        Args:
            token_provider: Source of bearer tokens
            config: API configuration (uses defaults if not provided)
            session: Optional shared session (not closed by this client)
        """
        self._token_provider = token_provider
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._closed = False

        from ..logging import get_logger
        self._logger = get_logger('lakepy.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncDFSClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
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

    def build_url(self, path: str, params: Optional[QueryParams] = None) -> str:
        """Build request URL from a storage path and ordered query params."""
        url = self._config.build_url(path)
        if params:
            url += f"?{render_query(params)}"
        return url

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[QueryParams] = None,
        data: Optional[Union[bytes, str]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> DFSResponse:
        """
        Make one DFS request.

        Args:
            method: HTTP method
            path: Storage path relative to the DFS endpoint
            params: Ordered query parameters
            data: Request body
            headers: Extra request headers

        Returns:
            DFSResponse for any 2xx status

        Raises:
            NotFound: On 404
            HttpStatusError: On any other non-2xx status
            NetworkFailure: If no response was received
        """
        if self._closed:
            raise NetworkFailure("Client is closed", method, path)

        url = self.build_url(path, params)
        session = await self._ensure_session()
        token = await self._token_provider.get_token()

        request_headers = {'Authorization': f"Bearer {token}"}
        if headers:
            request_headers.update(headers)


        try:
            async with session.request(
                method,
                url,
                data=data,
                headers=request_headers,
                proxy=self._config.proxy
            ) as response:
                body = await response.read()
                result = DFSResponse(
                    status=response.status,
                    body=body,
                    headers=dict(response.headers)
                )
        except asyncio.TimeoutError as e:
            self._logger.error(f"{method} {url} timed out")
            raise NetworkFailure(f"Request timed out: {method} {url}", method, url) from e
        except aiohttp.ClientError as e:
            self._logger.error(f"{method} {url} failed: {e}")
            raise NetworkFailure(f"Request failed: {e}", method, url) from e

        self._logger.debug(f"{method} {url} -> {result.status}")

        if result.status == 404:
            raise NotFound(404, method, url, result.body.decode('utf-8', 'replace'))
        if not result.ok:
            raise HttpStatusError(result.status, method, url, result.body.decode('utf-8', 'replace'))

        return result
