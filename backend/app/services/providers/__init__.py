"""
Provider Clients

Thin async wrappers around the upstream market data APIs. Each method is one
GET request returning the provider's native JSON; failures surface as
ProviderError subclasses.
"""

from app.services.providers.marketstack import MarketstackClient
from app.services.providers.polygon import PolygonClient

__all__ = [
    "MarketstackClient",
    "PolygonClient",
]
