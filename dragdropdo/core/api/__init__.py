"""dragdropdo API transport and configuration."""
from .config import ClientConfig, ProtocolVariant, ProxyConfig, SSLConfig, TimeoutConfig
from .async_client import AsyncAPIClient

__all__ = [
    'AsyncAPIClient',
    'ClientConfig',
    'ProtocolVariant',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
]
