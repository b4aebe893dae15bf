"""
Gateway Schema Contracts

Normalized shapes returned to API clients, plus typed views of the
provider-native payloads they are built from.
"""

from app.schemas.market import (
    ProviderSource,
    NormalizedQuote,
    AggregateResponse,
    QuoteComparison,
    QuoteSeries,
    HealthResponse,
    ErrorResponse,
)
from app.schemas.providers import (
    MarketstackEODRecord,
    MarketstackEODResponse,
    PolygonBar,
    PolygonAggregatesResponse,
)

__all__ = [
    "ProviderSource",
    "NormalizedQuote",
    "AggregateResponse",
    "QuoteComparison",
    "QuoteSeries",
    "HealthResponse",
    "ErrorResponse",
    "MarketstackEODRecord",
    "MarketstackEODResponse",
    "PolygonBar",
    "PolygonAggregatesResponse",
]
