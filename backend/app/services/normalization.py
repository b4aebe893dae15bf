"""
Normalization Layer

Maps each provider's native response into NormalizedQuote.

A response with an empty or missing result wrapper normalizes to None
(the "no data" case); it is never an exception. Leaf fields inside a
present record must match the provider's documented schema; a record
that does not raises InvalidResponseError.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Optional

from pydantic import ValidationError

from app.schemas.market import NormalizedQuote, ProviderSource
from app.schemas.providers import (
    MarketstackEODRecord,
    MarketstackEODResponse,
    PolygonAggregatesResponse,
    PolygonBar,
)
from app.services.base import InvalidResponseError

logger = logging.getLogger(__name__)

# Same layout as JavaScript's Date.toDateString(), e.g. "Tue Nov 14 2023"
POLYGON_DATE_FORMAT = "%a %b %d %Y"


def format_epoch_millis(millis: int) -> str:
    """Calendar date of a Unix millisecond timestamp, in UTC."""
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).strftime(POLYGON_DATE_FORMAT)


@contextmanager
def _malformed_record(provider: ProviderSource) -> Iterator[None]:
    try:
        yield
    except ValidationError as e:
        raise InvalidResponseError(
            provider.value,
            f"Malformed {provider.value} record: {e.error_count()} invalid field(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e


def _marketstack_quote(record: MarketstackEODRecord, symbol: str) -> NormalizedQuote:
    return NormalizedQuote(
        symbol=symbol.upper(),
        close=record.close,
        high=record.high,
        low=record.low,
        open=record.open,
        volume=int(record.volume),
        date=record.date.split("T")[0],
        source=ProviderSource.MARKETSTACK,
    )


def _polygon_quote(bar: PolygonBar, symbol: str) -> NormalizedQuote:
    return NormalizedQuote(
        symbol=symbol.upper(),
        close=bar.c,
        high=bar.h,
        low=bar.l,
        open=bar.o,
        volume=int(bar.v),
        date=format_epoch_millis(bar.t),
        source=ProviderSource.POLYGON,
    )


def normalize_marketstack(payload: Any, symbol: str) -> Optional[NormalizedQuote]:
    """First EOD record of a Marketstack /eod response."""
    if not isinstance(payload, dict) or not payload.get("data"):
        return None
    with _malformed_record(ProviderSource.MARKETSTACK):
        response = MarketstackEODResponse.model_validate(payload)
        return _marketstack_quote(response.data[0], symbol)


def normalize_marketstack_series(payload: Any, symbol: str) -> list[NormalizedQuote]:
    """Every EOD record of a Marketstack /eod response, in response order."""
    if not isinstance(payload, dict) or not payload.get("data"):
        return []
    with _malformed_record(ProviderSource.MARKETSTACK):
        response = MarketstackEODResponse.model_validate(payload)
        return [_marketstack_quote(record, symbol) for record in response.data]


def normalize_polygon(payload: Any, symbol: str) -> Optional[NormalizedQuote]:
    """First bar of a Polygon.io aggregates / previous-close response."""
    if not isinstance(payload, dict) or not payload.get("results"):
        return None
    with _malformed_record(ProviderSource.POLYGON):
        response = PolygonAggregatesResponse.model_validate(payload)
        return _polygon_quote(response.results[0], symbol)


NORMALIZERS: dict[ProviderSource, Callable[[Any, str], Optional[NormalizedQuote]]] = {
    ProviderSource.MARKETSTACK: normalize_marketstack,
    ProviderSource.POLYGON: normalize_polygon,
}


def normalize(
    provider: ProviderSource,
    payload: Any,
    symbol: str,
) -> Optional[NormalizedQuote]:
    """
    Normalize one provider response.

    Args:
        provider: Which provider produced `payload`
        payload: Native JSON body
        symbol: Symbol as requested by the caller (any case)

    Returns:
        NormalizedQuote, or None when the response holds no records
    """
    quote = NORMALIZERS[ProviderSource(provider)](payload, symbol)
    if quote is None:
        logger.debug(f"{ProviderSource(provider).value} returned no records for {symbol}")
    return quote
