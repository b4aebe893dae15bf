"""
Normalized Market Data Contracts

Provider-agnostic shapes returned by the API. Every provider response is
reshaped into a NormalizedQuote before it leaves the service.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class ProviderSource(str, Enum):
    MARKETSTACK = "Marketstack"
    POLYGON = "Polygon.io"


# =============================================================================
# OUTPUT: NormalizedQuote
# =============================================================================


class NormalizedQuote(BaseModel):
    """
    One daily price record in the common shape.
    Produced by: Normalization Layer
    Consumed by: API responses, quote comparison
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "symbol": "AMZN",
                "close": 185.3,
                "high": 186.0,
                "low": 184.1,
                "open": 185.0,
                "volume": 32000000,
                "date": "Tue Nov 14 2023",
                "source": "Polygon.io",
            }
        },
    )

    symbol: str = Field(..., description="Ticker symbol, always upper case")
    close: float
    high: float
    low: float
    open: float
    volume: int = Field(..., ge=0)
    date: str = Field(..., description="Trading day of the record")
    source: ProviderSource


# =============================================================================
# OUTPUT: Aggregates
# =============================================================================


class AggregateResponse(BaseModel):
    """Both providers' view of one symbol, with per-provider errors."""

    symbol: str
    polygon: Optional[NormalizedQuote] = None
    marketstack: Optional[NormalizedQuote] = None
    errors: dict[str, str] = Field(default_factory=dict)


class QuoteComparison(BaseModel):
    """Side-by-side summary of the two providers' closing prices."""

    symbol: str
    polygon_close: Optional[float] = None
    marketstack_close: Optional[float] = None
    price_difference: Optional[float] = Field(
        default=None, description="Absolute close difference, 2 decimals"
    )
    polygon_date: Optional[str] = None
    marketstack_date: Optional[str] = None
    comparable: bool = False
    errors: dict[str, str] = Field(default_factory=dict)


class QuoteSeries(BaseModel):
    """Several normalized daily records for one symbol, newest first."""

    symbol: str
    source: ProviderSource
    quotes: list[NormalizedQuote]


# =============================================================================
# OUTPUT: Service responses
# =============================================================================


class ProviderKeyStatus(BaseModel):
    polygon: bool
    marketstack: bool


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str
    apis: ProviderKeyStatus


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
