"""
Polygon.io API Client

Previous close, aggregates, reference data and news from Polygon.io.
Authenticates with a bearer token over HTTPS.

Documentation: https://polygon.io/docs/stocks/getting-started
"""

import logging
from typing import Any, Dict, Optional

from app.core.config import Settings
from app.services.base import BaseProviderClient, ProviderError, UpstreamHTTPError

logger = logging.getLogger(__name__)


class PolygonClient(BaseProviderClient):
    """Polygon.io REST client."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.polygon.io",
        timeout_seconds: float = 15.0,
    ):
        super().__init__(api_key, base_url, timeout_seconds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PolygonClient":
        return cls(
            api_key=settings.polygon_api_key,
            base_url=settings.polygon_base_url,
            timeout_seconds=settings.polygon_timeout_seconds,
        )

    @property
    def name(self) -> str:
        return "Polygon.io"

    def _default_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def test_connection(self) -> bool:
        try:
            status = await self.get_market_status()
        except ProviderError as e:
            logger.error(f"Polygon.io connection failed: {e}")
            return False

        logger.info(
            f"Polygon.io connection OK (market: {status.get('market')}, "
            f"server time: {status.get('serverTime')})"
        )
        return True

    async def get_market_status(self) -> Dict[str, Any]:
        """Current trading status of the US exchanges."""
        return await self._get("/v1/marketstatus/now")

    async def get_previous_close(self, ticker: str) -> Dict[str, Any]:
        """Previous day's OHLCV bar for a ticker."""
        logger.info(f"Fetching Polygon.io previous close for {ticker}")
        return await self._get(f"/v2/aggs/ticker/{ticker}/prev")

    async def get_aggregates(
        self,
        ticker: str,
        timespan: str = "day",
        date_from: str = "2024-01-01",
        date_to: str = "2024-01-31",
        limit: int = 10,
    ) -> Dict[str, Any]:
        """Historical bars between two dates (YYYY-MM-DD), newest first."""
        logger.info(f"Fetching Polygon.io {timespan} aggregates for {ticker} {date_from}..{date_to}")
        return await self._get(
            f"/v2/aggs/ticker/{ticker}/range/1/{timespan}/{date_from}/{date_to}",
            {"adjusted": "true", "sort": "desc", "limit": limit},
        )

    async def get_real_time_quote(self, ticker: str) -> Dict[str, Any]:
        """Last NBBO quote. Paid plans only; free keys get a 403."""
        try:
            return await self._get(f"/v2/last/nbbo/{ticker}")
        except UpstreamHTTPError as e:
            if e.status_code == 403:
                logger.warning("Polygon.io real-time quotes require a paid plan")
            raise

    async def get_ticker_details(self, ticker: str) -> Dict[str, Any]:
        """Reference details (name, exchange, market, description)."""
        logger.info(f"Fetching Polygon.io ticker details for {ticker}")
        return await self._get(f"/v3/reference/tickers/{ticker}")

    async def search_tickers(self, query: str, limit: int = 5) -> Dict[str, Any]:
        """Search active tickers by name or symbol."""
        logger.info(f"Searching Polygon.io tickers for '{query}'")
        return await self._get(
            "/v3/reference/tickers",
            {"search": query, "limit": limit, "active": "true"},
        )

    async def get_news(self, ticker: str, limit: int = 5) -> Dict[str, Any]:
        """Most recent news articles mentioning a ticker."""
        logger.info(f"Fetching Polygon.io news for {ticker}")
        return await self._get(
            "/v2/reference/news",
            {"ticker": ticker, "limit": limit, "order": "desc"},
        )
