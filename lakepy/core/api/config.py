"""
API configuration module.

Endpoint, transport and write-protocol settings for lakepy.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Union
import ssl

import aiohttp


@dataclass
class SSLConfig:
    """
    TLS verification settings.

    Attributes:
        verify: Verify the server certificate
        ca_file: Extra CA bundle, e.g. for a TLS-inspecting corporate proxy
    """
    verify: bool = True
    ca_file: Optional[str] = None

    def to_aiohttp_ssl(self) -> Union[bool, ssl.SSLContext]:
        """Value for the connector's ``ssl`` argument."""
        if not self.verify:
            return False
        if self.ca_file:
            return ssl.create_default_context(cafile=self.ca_file)
        return True


@dataclass
class TimeoutConfig:
    """
    Per-request timeouts in seconds.

    Every DFS call is a single request, so a total bound is enough;
    connect is bounded separately to fail fast on unreachable hosts.
    """
    total: float = 300.0
    connect: float = 30.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.total, connect=self.connect)


@dataclass
class WriteConfig:
    """
    Write protocol policy.

    Attributes:
        cleanup_on_failure: Best-effort delete of the path when append or
            flush fails. Off by default: a failed write may leave a
            partially committed file behind.
        placeholder_name: File written to materialize an empty folder
    """
    cleanup_on_failure: bool = False
    placeholder_name: str = '.folder_placeholder'


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the DFS client.
    """
    # Endpoint
    dfs_base_url: str = 'https://onelake.dfs.fabric.microsoft.com'

    user_agent: str = 'lakepy/1.0.0'

    # HTTP(S) proxy URL; credentials go in the URL
    proxy: Optional[str] = None

    # Sub-configurations
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    write: WriteConfig = field(default_factory=WriteConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Logging
    log_level: int = 20  # logging.INFO

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration routed through a proxy."""
        return cls(proxy=proxy_url, **kwargs)

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with certificate verification disabled."""
        return cls(ssl=SSLConfig(verify=False), **kwargs)

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.to_aiohttp_ssl(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }

    def build_url(self, path: str) -> str:
        """Join the DFS base URL and a storage path."""
        return f"{self.dfs_base_url.rstrip('/')}/{path.lstrip('/')}"
