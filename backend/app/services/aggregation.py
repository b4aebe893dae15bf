"""
Dual-Provider Aggregator

Fetches one symbol from both providers concurrently and normalizes each
result independently. A failure in one provider is recorded next to the
other provider's data instead of failing the whole request.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Optional

from app.schemas.market import (
    AggregateResponse,
    NormalizedQuote,
    ProviderSource,
    QuoteComparison,
)
from app.services.base import ProviderError
from app.services.normalization import normalize
from app.services.providers import MarketstackClient, PolygonClient

logger = logging.getLogger(__name__)


@dataclass
class ProviderRequestResult:
    """Outcome of one provider step: normalized quote (or None) or an error message."""

    ok: bool
    quote: Optional[NormalizedQuote] = None
    error_message: Optional[str] = None


async def _capture(step: Awaitable[Optional[NormalizedQuote]]) -> ProviderRequestResult:
    try:
        return ProviderRequestResult(ok=True, quote=await step)
    except ProviderError as e:
        return ProviderRequestResult(ok=False, error_message=e.message)
    except Exception as e:
        logger.exception(f"Unexpected provider failure: {e}")
        return ProviderRequestResult(ok=False, error_message=str(e))


async def fetch_polygon_quote(client: PolygonClient, symbol: str) -> Optional[NormalizedQuote]:
    """Previous close from Polygon.io, normalized. Provider errors propagate."""
    data = await client.get_previous_close(symbol)
    return normalize(ProviderSource.POLYGON, data, symbol)


async def fetch_marketstack_quote(client: MarketstackClient, symbol: str) -> Optional[NormalizedQuote]:
    """Latest EOD record from Marketstack, normalized. Provider errors propagate."""
    data = await client.get_eod_data([symbol], limit=1)
    return normalize(ProviderSource.MARKETSTACK, data, symbol)


async def fetch_aggregate(
    symbol: str,
    polygon: PolygonClient,
    marketstack: MarketstackClient,
) -> AggregateResponse:
    """
    Query both providers for `symbol`.

    Both fetch-and-normalize steps run concurrently and both outcomes are
    awaited before the response is built. A failed call or a malformed
    record only affects its own provider. Never raises for provider failures.
    """
    polygon_result, marketstack_result = await asyncio.gather(
        _capture(fetch_polygon_quote(polygon, symbol)),
        _capture(fetch_marketstack_quote(marketstack, symbol)),
    )

    response = AggregateResponse(symbol=symbol.upper())

    if polygon_result.ok:
        response.polygon = polygon_result.quote
    else:
        logger.warning(f"Polygon.io failed for {symbol}: {polygon_result.error_message}")
        response.errors["polygon"] = polygon_result.error_message

    if marketstack_result.ok:
        response.marketstack = marketstack_result.quote
    else:
        logger.warning(f"Marketstack failed for {symbol}: {marketstack_result.error_message}")
        response.errors["marketstack"] = marketstack_result.error_message

    return response


def compare_quotes(aggregate: AggregateResponse) -> QuoteComparison:
    """Summarize how far apart the two providers' closing prices are."""
    comparison = QuoteComparison(symbol=aggregate.symbol, errors=dict(aggregate.errors))

    if aggregate.polygon is not None:
        comparison.polygon_close = aggregate.polygon.close
        comparison.polygon_date = aggregate.polygon.date
    if aggregate.marketstack is not None:
        comparison.marketstack_close = aggregate.marketstack.close
        comparison.marketstack_date = aggregate.marketstack.date

    if aggregate.polygon is not None and aggregate.marketstack is not None:
        comparison.price_difference = round(
            abs(aggregate.marketstack.close - aggregate.polygon.close), 2
        )
        comparison.comparable = True

    return comparison
