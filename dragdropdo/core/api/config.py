"""
API configuration module.

Provides the configuration for the dragdropdo API client. The configuration
is read-only once a client has been built from it.
"""
import os
import ssl
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, Union

from ..exceptions import ValidationError


class ProtocolVariant(str, Enum):
    """
    Deployment flavour of the service.

    DRAGDROPDO: bearer auth, multipart uploads finalized with ETags.
    D3: legacy X-API-Key auth, no completion step after part uploads.
    """
    DRAGDROPDO = 'dragdropdo'
    D3 = 'd3'

    @property
    def default_base_url(self) -> str:
        if self is ProtocolVariant.D3:
            return 'https://api.d3.com'
        return 'https://api-dev.dragdropdo.com'

    @property
    def requires_completion(self) -> bool:
        """Whether uploads need ETags and a complete-upload call."""
        return self is ProtocolVariant.DRAGDROPDO

    def auth_headers(self, api_key: str) -> Dict[str, str]:
        if self is ProtocolVariant.D3:
            return {'X-API-Key': api_key}
        return {'Authorization': f'Bearer {api_key}'}


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password and '://' in self.url:
            protocol, rest = self.url.split('://', 1)
            return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """SSL/TLS configuration."""
    verify: bool = True
    ca_file: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(self.cert_file, keyfile=self.key_file)

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration in seconds.

    `total` bounds every API request; `part_total` bounds each part PUT
    (None means no limit, large parts can take a while).
    """
    total: float = 30.0
    connect: float = 30.0
    part_total: Optional[float] = None

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout for API calls."""
        import aiohttp
        return aiohttp.ClientTimeout(total=self.total, connect=self.connect)

    def to_aiohttp_part_timeout(self):
        """Convert to aiohttp ClientTimeout for presigned part uploads."""
        import aiohttp
        return aiohttp.ClientTimeout(total=self.part_total, connect=self.connect)


@dataclass
class ClientConfig:
    """
    Complete client configuration.

    Example:
        >>> config = ClientConfig(api_key="key", timeout=60)
        >>> config.base_url
        'https://api-dev.dragdropdo.com'
    """
    api_key: str = ''
    base_url: Optional[str] = None
    timeout: float = 30.0
    headers: Dict[str, str] = field(default_factory=dict)
    variant: ProtocolVariant = ProtocolVariant.DRAGDROPDO
    api_prefix: str = '/v1/external'

    user_agent: str = 'dragdropdo-python/1.0.0'

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeouts: Optional[TimeoutConfig] = None

    log_level: int = 20  # logging.INFO

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    def __post_init__(self):
        if not self.api_key:
            raise ValidationError("API key is required")

        self.variant = ProtocolVariant(self.variant)
        self.base_url = (self.base_url or self.variant.default_base_url).rstrip('/')
        if self.api_prefix:
            self.api_prefix = '/' + self.api_prefix.strip('/')
        if self.timeouts is None:
            self.timeouts = TimeoutConfig(total=self.timeout)

    @classmethod
    def default(cls, api_key: str) -> 'ClientConfig':
        """Create default configuration."""
        return cls(api_key=api_key)

    @classmethod
    def from_env(cls, **kwargs) -> 'ClientConfig':
        """
        Create configuration from environment variables.

        Reads DRAGDROPDO_API_KEY (or D3_API_KEY) and DRAGDROPDO_BASE_URL
        (or D3_BASE_URL). Keyword arguments override the environment.
        """
        env = os.environ
        kwargs.setdefault('api_key', env.get('DRAGDROPDO_API_KEY') or env.get('D3_API_KEY', ''))
        base_url = env.get('DRAGDROPDO_BASE_URL') or env.get('D3_BASE_URL')
        if base_url:
            kwargs.setdefault('base_url', base_url)
        return cls(**kwargs)

    @classmethod
    def with_proxy(cls, api_key: str, proxy_url: str, **kwargs) -> 'ClientConfig':
        """Create configuration with proxy."""
        return cls(api_key=api_key, proxy=ProxyConfig(url=proxy_url), **kwargs)

    @classmethod
    def insecure(cls, api_key: str, **kwargs) -> 'ClientConfig':
        """Create configuration with SSL verification disabled."""
        return cls(api_key=api_key, ssl=SSLConfig(verify=False), **kwargs)

    def api_url(self, path: str) -> str:
        """Absolute URL for an API path such as '/upload'."""
        return f"{self.base_url}{self.api_prefix}/{path.lstrip('/')}"

    def get_request_headers(self) -> Dict[str, str]:
        """Headers sent with every API call; caller headers win."""
        return {
            'Content-Type': 'application/json',
            'User-Agent': self.user_agent,
            **self.variant.auth_headers(self.api_key),
            **self.headers,
        }

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'timeout': self.timeouts.to_aiohttp_timeout(),
        }
