"""
Provider-Native Contracts

Typed views of the raw JSON each upstream API returns. Only the fields the
normalization layer reads are declared; anything else is ignored.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Marketstack  (GET /eod)
# =============================================================================


class MarketstackEODRecord(BaseModel):
    """Single end-of-day record."""

    model_config = ConfigDict(extra="ignore")

    symbol: str
    open: float
    high: float
    low: float
    close: float
    volume: float
    date: str = Field(..., description="ISO datetime, e.g. 2024-01-31T00:00:00+0000")
    exchange: Optional[str] = None


class MarketstackPagination(BaseModel):
    model_config = ConfigDict(extra="ignore")

    limit: int = 0
    offset: int = 0
    count: int = 0
    total: int = 0


class MarketstackEODResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pagination: Optional[MarketstackPagination] = None
    data: list[MarketstackEODRecord] = Field(default_factory=list)


# =============================================================================
# Polygon.io  (GET /v2/aggs/ticker/{ticker}/prev)
# =============================================================================


class PolygonBar(BaseModel):
    """Aggregate bar using Polygon's single-letter field names."""

    model_config = ConfigDict(extra="ignore")

    c: float = Field(..., description="Close")
    h: float = Field(..., description="High")
    l: float = Field(..., description="Low")
    o: float = Field(..., description="Open")
    v: float = Field(..., description="Volume")
    t: int = Field(..., description="Bar start, Unix epoch milliseconds")
    vw: Optional[float] = None
    T: Optional[str] = None


class PolygonAggregatesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ticker: Optional[str] = None
    status: Optional[str] = None
    resultsCount: Optional[int] = None
    results: list[PolygonBar] = Field(default_factory=list)
