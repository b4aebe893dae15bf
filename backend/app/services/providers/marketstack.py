"""
Marketstack API Client

End-of-day, intraday and reference data from Marketstack.
The API key travels as the `access_key` query parameter; the free plan
only serves plain HTTP.

Documentation: https://marketstack.com/documentation
"""

import logging
from typing import Any, Dict, Optional, Sequence

from app.core.config import Settings
from app.services.base import BaseProviderClient, ProviderError, UpstreamHTTPError

logger = logging.getLogger(__name__)


class MarketstackClient(BaseProviderClient):
    """Marketstack v1 client."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "http://api.marketstack.com/v1",
        timeout_seconds: float = 10.0,
    ):
        super().__init__(api_key, base_url, timeout_seconds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketstackClient":
        return cls(
            api_key=settings.marketstack_api_key,
            base_url=settings.marketstack_base_url,
            timeout_seconds=settings.marketstack_timeout_seconds,
        )

    @property
    def name(self) -> str:
        return "Marketstack"

    def _auth_params(self) -> dict[str, str]:
        return {"access_key": self.api_key}

    async def test_connection(self) -> bool:
        """Fetch one EOD record and report the rate limit headers."""
        try:
            _, headers = await self._request("/eod", {"symbols": "AMZN", "limit": 1})
        except ProviderError as e:
            logger.error(f"Marketstack connection failed: {e}")
            return False

        logger.info(
            "Marketstack connection OK (rate limit: %s, remaining: %s)",
            headers.get("x-ratelimit-limit", "N/A"),
            headers.get("x-ratelimit-remaining", "N/A"),
        )
        return True

    async def get_eod_data(self, symbols: Sequence[str], limit: int = 5) -> Dict[str, Any]:
        """Get end-of-day prices for one or more symbols."""
        logger.info(f"Fetching Marketstack EOD data for {', '.join(symbols)} (limit {limit})")
        return await self._get("/eod", {"symbols": ",".join(symbols), "limit": limit})

    async def get_intraday_data(
        self,
        symbol: str,
        interval: str = "1hour",
        limit: int = 10,
    ) -> Dict[str, Any]:
        """Get intraday bars. Paid plans only; free keys get a 4xx."""
        logger.info(f"Fetching Marketstack intraday data for {symbol} ({interval})")
        try:
            return await self._get(
                "/intraday",
                {"symbols": symbol, "interval": interval, "limit": limit},
            )
        except UpstreamHTTPError as e:
            if e.status_code in (403, 422):
                logger.warning("Marketstack intraday data requires a paid plan")
            raise

    async def get_tickers(self, exchange: str = "NASDAQ", limit: int = 10) -> Dict[str, Any]:
        """List tickers listed on an exchange (by MIC or acronym)."""
        logger.info(f"Fetching Marketstack tickers for {exchange}")
        return await self._get("/tickers", {"exchange": exchange, "limit": limit})

    async def get_exchanges(self) -> Dict[str, Any]:
        """List supported exchanges."""
        logger.info("Fetching Marketstack exchanges")
        return await self._get("/exchanges")
