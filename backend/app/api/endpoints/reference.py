"""
Reference Data API Endpoints

Polygon.io ticker details, news, search and market status, passed through
in the provider's native shape.
"""

import logging
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_polygon_client
from app.schemas.market import ErrorResponse
from app.services.base import ProviderError
from app.services.providers import PolygonClient

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {500: {"model": ErrorResponse, "description": "Provider call failed"}}


def _polygon_failure(e: ProviderError) -> HTTPException:
    logger.error(f"Polygon.io API error: {e.message}")
    return HTTPException(
        status_code=500,
        detail={"error": "Failed to fetch Polygon.io data", "details": e.message},
    )


@router.get(
    "/polygon/{symbol}/details",
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse, "description": "Unknown ticker"}},
)
async def get_ticker_details(
    symbol: str,
    polygon: PolygonClient = Depends(get_polygon_client),
) -> dict[str, Any]:
    """Company name, primary exchange, market and description."""
    try:
        data = await polygon.get_ticker_details(symbol.upper())
    except ProviderError as e:
        raise _polygon_failure(e)

    if not data.get("results"):
        raise HTTPException(status_code=404, detail={"error": "No data found for symbol"})

    return data


@router.get("/polygon/{symbol}/news", responses=ERROR_RESPONSES)
async def get_ticker_news(
    symbol: str,
    limit: int = Query(default=5, ge=1, le=50),
    polygon: PolygonClient = Depends(get_polygon_client),
) -> dict[str, Any]:
    """Latest news articles mentioning the symbol."""
    try:
        return await polygon.get_news(symbol.upper(), limit=limit)
    except ProviderError as e:
        raise _polygon_failure(e)


@router.get("/market/status", responses=ERROR_RESPONSES)
async def get_market_status(
    polygon: PolygonClient = Depends(get_polygon_client),
) -> dict[str, Any]:
    """Whether the US exchanges are open right now."""
    try:
        return await polygon.get_market_status()
    except ProviderError as e:
        raise _polygon_failure(e)


@router.get("/search", responses=ERROR_RESPONSES)
async def search_tickers(
    q: str = Query(..., min_length=1, description="Search query"),
    limit: int = Query(default=5, ge=1, le=50),
    polygon: PolygonClient = Depends(get_polygon_client),
) -> dict[str, Any]:
    """Search active tickers by company name or symbol."""
    try:
        return await polygon.search_tickers(q, limit=limit)
    except ProviderError as e:
        raise _polygon_failure(e)
