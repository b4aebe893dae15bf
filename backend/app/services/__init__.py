"""
Gateway Services

Provider clients, normalization and dual-provider aggregation.
No component keeps state between requests.
"""

from app.services.base import (
    BaseProviderClient,
    ProviderError,
    TransportError,
    UpstreamHTTPError,
    InvalidResponseError,
    ProviderNotConfiguredError,
)

__all__ = [
    "BaseProviderClient",
    "ProviderError",
    "TransportError",
    "UpstreamHTTPError",
    "InvalidResponseError",
    "ProviderNotConfiguredError",
]
