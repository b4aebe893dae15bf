"""
Quote API Endpoints

Normalized daily quotes from one provider or both.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_marketstack_client, get_polygon_client
from app.schemas.market import (
    AggregateResponse,
    ErrorResponse,
    NormalizedQuote,
    ProviderSource,
    QuoteComparison,
    QuoteSeries,
)
from app.services.aggregation import (
    compare_quotes,
    fetch_aggregate,
    fetch_marketstack_quote,
    fetch_polygon_quote,
)
from app.services.base import ProviderError
from app.services.normalization import normalize_marketstack_series
from app.services.providers import MarketstackClient, PolygonClient

logger = logging.getLogger(__name__)

router = APIRouter()

NO_DATA = {"error": "No data found for symbol"}

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Provider returned no records"},
    500: {"model": ErrorResponse, "description": "Provider call failed"},
}


@router.get("/polygon/{symbol}", response_model=NormalizedQuote, responses=ERROR_RESPONSES)
async def get_polygon_quote(
    symbol: str,
    polygon: PolygonClient = Depends(get_polygon_client),
):
    """
    Previous close from Polygon.io.

    404 when Polygon has no bar for the symbol, 500 when the call fails.
    """
    try:
        quote = await fetch_polygon_quote(polygon, symbol)
    except ProviderError as e:
        logger.error(f"Polygon.io API error: {e.message}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to fetch Polygon.io data", "details": e.message},
        )

    if quote is None:
        raise HTTPException(status_code=404, detail=NO_DATA)

    return quote


@router.get("/marketstack/{symbol}", response_model=NormalizedQuote, responses=ERROR_RESPONSES)
async def get_marketstack_quote(
    symbol: str,
    marketstack: MarketstackClient = Depends(get_marketstack_client),
):
    """
    Latest end-of-day record from Marketstack.

    404 when Marketstack has no record for the symbol, 500 when the call fails.
    """
    try:
        quote = await fetch_marketstack_quote(marketstack, symbol)
    except ProviderError as e:
        logger.error(f"Marketstack API error: {e.message}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to fetch Marketstack data", "details": e.message},
        )

    if quote is None:
        raise HTTPException(status_code=404, detail=NO_DATA)

    return quote


@router.get("/marketstack/{symbol}/eod", response_model=QuoteSeries, responses=ERROR_RESPONSES)
async def get_marketstack_history(
    symbol: str,
    limit: int = Query(default=5, ge=1, le=100),
    marketstack: MarketstackClient = Depends(get_marketstack_client),
):
    """Last `limit` end-of-day records from Marketstack, newest first."""
    try:
        data = await marketstack.get_eod_data([symbol], limit=limit)
    except ProviderError as e:
        logger.error(f"Marketstack API error: {e.message}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to fetch Marketstack data", "details": e.message},
        )

    quotes = normalize_marketstack_series(data, symbol)
    if not quotes:
        raise HTTPException(status_code=404, detail=NO_DATA)

    return QuoteSeries(symbol=symbol.upper(), source=ProviderSource.MARKETSTACK, quotes=quotes)


@router.get("/test/{symbol}", response_model=AggregateResponse)
async def test_both_providers(
    symbol: str,
    polygon: PolygonClient = Depends(get_polygon_client),
    marketstack: MarketstackClient = Depends(get_marketstack_client),
):
    """
    Query both providers for one symbol.

    Always 200: a failing provider shows up under `errors` with its data null.
    """
    logger.info(f"Testing both providers for {symbol}")
    return await fetch_aggregate(symbol, polygon, marketstack)


@router.get("/compare/{symbol}", response_model=QuoteComparison)
async def compare_providers(
    symbol: str,
    polygon: PolygonClient = Depends(get_polygon_client),
    marketstack: MarketstackClient = Depends(get_marketstack_client),
):
    """Closing price of both providers side by side, with their difference."""
    aggregate = await fetch_aggregate(symbol, polygon, marketstack)
    return compare_quotes(aggregate)
