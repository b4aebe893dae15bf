"""
Shared fixtures: stand-in aiohttp session and sample provider payloads.
"""

import json
from typing import Any, Optional

import pytest


class FakeResponse:
    """Enough of aiohttp.ClientResponse for BaseProviderClient._request."""

    def __init__(
        self,
        status: int = 200,
        body: Any = None,
        raw: Optional[str] = None,
        headers: Optional[dict] = None,
        reason: str = "OK",
    ):
        self.status = status
        self._body = body
        self._raw = raw
        self.headers = headers or {}
        self.reason = reason

    async def json(self, content_type=None):
        if self._raw is not None:
            return json.loads(self._raw)
        return self._body

    async def text(self):
        if self._raw is not None:
            return self._raw
        return json.dumps(self._body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records GET calls and replays one canned response or error."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[BaseException] = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def get(self, url, params=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


@pytest.fixture
def polygon_prev_close():
    return {
        "ticker": "AMZN",
        "status": "OK",
        "resultsCount": 1,
        "adjusted": True,
        "results": [
            {"T": "AMZN", "c": 185.3, "h": 186.0, "l": 184.1, "o": 185.0, "v": 32000000, "t": 1700000000000}
        ],
    }


@pytest.fixture
def marketstack_eod():
    return {
        "pagination": {"limit": 2, "offset": 0, "count": 2, "total": 250},
        "data": [
            {
                "open": 185.2,
                "high": 186.1,
                "low": 184.0,
                "close": 185.31,
                "volume": 31500000.0,
                "symbol": "AMZN",
                "exchange": "XNAS",
                "date": "2023-11-14T00:00:00+0000",
            },
            {
                "open": 182.0,
                "high": 184.5,
                "low": 181.7,
                "close": 184.2,
                "volume": 29000000.0,
                "symbol": "AMZN",
                "exchange": "XNAS",
                "date": "2023-11-13T00:00:00+0000",
            },
        ],
    }
