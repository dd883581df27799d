"""Tests for AsyncDFSClient and API configuration."""
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from lakepy.core.api import AsyncDFSClient, APIConfig, StaticTokenProvider, TimeoutConfig, render_query
from lakepy.core.exceptions import HttpStatusError, NetworkFailure, NotFound


def make_session(status=200, body=b'', error=None):
    """Mock aiohttp session whose request() yields one response."""
    response = MagicMock()
    response.status = status
    response.headers = {}
    response.read = AsyncMock(return_value=body)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.closed = False
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = context
    return session


class TestRenderQuery:
    """Test suite for DFS query rendering."""

    def test_booleans_lowercase(self):
        assert render_query([('recursive', True), ('getShortcutMetadata', False)]) == \
            'recursive=true&getShortcutMetadata=false'

    def test_directory_fully_encoded(self):
        assert render_query([('directory', 'item/Files/my dir')]) == 'directory=item%2FFiles%2Fmy%20dir'

    def test_order_preserved(self):
        assert render_query([('position', 12), ('action', 'flush')]) == 'position=12&action=flush'


class TestAPIConfig:
    """Test suite for APIConfig."""

    def test_build_url(self):
        config = APIConfig(dfs_base_url='https://dfs.example.com/')
        assert config.build_url('/ws/item/Files/a') == 'https://dfs.example.com/ws/item/Files/a'

    def test_insecure(self):
        config = APIConfig.insecure()
        assert config.get_connector_kwargs()['ssl'] is False

    def test_with_proxy(self):
        config = APIConfig.with_proxy('http://proxy:8080')
        assert config.proxy == 'http://proxy:8080'

    def test_default_ssl_verifies(self):
        assert APIConfig().get_connector_kwargs()['ssl'] is True

    def test_timeouts(self):
        timeout = APIConfig(timeout=TimeoutConfig(total=10, connect=2)).get_session_kwargs()['timeout']
        assert timeout.total == 10
        assert timeout.connect == 2

    def test_write_defaults(self):
        assert APIConfig().write.cleanup_on_failure is False


class TestAsyncDFSClient:
    """Test suite for AsyncDFSClient."""

    @pytest.fixture
    def config(self):
        return APIConfig(dfs_base_url='https://dfs.example.com')

    def test_build_url(self, config):
        client = AsyncDFSClient(StaticTokenProvider('t'), config, session=MagicMock())
        url = client.build_url('ws/', [('resource', 'filesystem'), ('directory', 'item/Files/')])
        assert url == 'https://dfs.example.com/ws/?resource=filesystem&directory=item%2FFiles%2F'

    @pytest.mark.asyncio
    async def test_request_sends_bearer_token(self, config):
        session = make_session(body=b'hello')
        client = AsyncDFSClient(StaticTokenProvider('secret'), config, session=session)

        response = await client.request('GET', 'ws/item/Files/a.txt')

        assert response.text() == 'hello'
        args, kwargs = session.request.call_args
        assert args == ('GET', 'https://dfs.example.com/ws/item/Files/a.txt')
        assert kwargs['headers']['Authorization'] == 'Bearer secret'

    @pytest.mark.asyncio
    async def test_proxy_passed_per_request(self):
        session = make_session()
        config = APIConfig.with_proxy('http://user:pw@proxy:8080', dfs_base_url='https://dfs.example.com')
        client = AsyncDFSClient(StaticTokenProvider('t'), config, session=session)

        await client.request('GET', 'a')

        assert session.request.call_args.kwargs['proxy'] == 'http://user:pw@proxy:8080'

    @pytest.mark.asyncio
    async def test_token_fetched_per_call(self, config):
        provider = MagicMock()
        provider.get_token = AsyncMock(return_value='t')
        client = AsyncDFSClient(provider, config, session=make_session())

        await client.request('HEAD', 'a')
        await client.request('HEAD', 'b')

        assert provider.get_token.await_count == 2

    @pytest.mark.asyncio
    async def test_404_raises_not_found(self, config):
        client = AsyncDFSClient(StaticTokenProvider('t'), config, session=make_session(status=404))

        with pytest.raises(NotFound) as exc_info:
            await client.request('GET', 'missing')

        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_error_status_raises(self, config):
        client = AsyncDFSClient(StaticTokenProvider('t'), config, session=make_session(status=409, body=b'conflict'))

        with pytest.raises(HttpStatusError) as exc_info:
            await client.request('PUT', 'a')

        assert exc_info.value.status == 409
        assert exc_info.value.body == 'conflict'
        assert not isinstance(exc_info.value, NotFound)

    @pytest.mark.asyncio
    async def test_transport_error_raises_network_failure(self, config):
        session = make_session(error=aiohttp.ClientConnectionError('refused'))
        client = AsyncDFSClient(StaticTokenProvider('t'), config, session=session)

        with pytest.raises(NetworkFailure):
            await client.request('GET', 'a')

    @pytest.mark.asyncio
    async def test_closed_client_rejects_requests(self, config):
        client = AsyncDFSClient(StaticTokenProvider('t'), config, session=make_session())
        await client.close()

        with pytest.raises(NetworkFailure):
            await client.request('GET', 'a')

    @pytest.mark.asyncio
    async def test_shared_session_not_closed(self, config):
        session = make_session()
        session.close = AsyncMock()
        client = AsyncDFSClient(StaticTokenProvider('t'), config, session=session)

        await client.close()

        session.close.assert_not_awaited()


class TestStaticTokenProvider:
    """Test suite for StaticTokenProvider."""

    @pytest.mark.asyncio
    async def test_returns_token(self):
        assert await StaticTokenProvider('abc').get_token() == 'abc'

    def test_empty_token_rejected(self):
        with pytest.raises(ValueError):
            StaticTokenProvider('')
