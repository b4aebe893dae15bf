"""
Base Provider Client

All upstream API wrappers inherit from this base class.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import aiohttp

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base exception for provider call failures."""

    def __init__(self, provider: str, message: str, details: dict = None):
        self.provider = provider
        self.message = message
        self.details = details or {}
        super().__init__(f"[{provider}] {message}")


class TransportError(ProviderError):
    """Network unreachable, connection reset or timed out."""
    pass


class UpstreamHTTPError(ProviderError):
    """Provider answered with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, message: str, details: dict = None):
        self.status_code = status_code
        super().__init__(provider, message, details)


class InvalidResponseError(ProviderError):
    """Provider answered 2xx but the body is not JSON or does not match its schema."""
    pass


class ProviderNotConfiguredError(ProviderError):
    """No API key configured for the provider."""
    pass


def _error_message(body: Any) -> Optional[str]:
    """Pull a human readable message out of a provider error body."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        return error.get("message") or error.get("code")
    if isinstance(error, str):
        return error
    return body.get("message")


class BaseProviderClient(ABC):
    """
    Base class for provider clients.

    Each client:
    - Owns one lazily created aiohttp session with a fixed timeout
    - Issues stateless GET requests and returns the provider's JSON
    - Raises ProviderError subclasses, never swallows them
    """

    base_url: str
    timeout_seconds: float

    def __init__(self, api_key: Optional[str], base_url: str, timeout_seconds: float):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging and error reporting."""
        pass

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    async def test_connection(self) -> bool:
        """Check the key and connectivity with one cheap request."""
        pass

    def _default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def _auth_params(self) -> dict[str, str]:
        return {}

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                headers=self._default_headers(),
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(self, path: str, params: Optional[dict] = None) -> tuple[Any, dict]:
        """
        GET `path` and return (json_body, response_headers).

        Raises:
            ProviderNotConfiguredError: no API key
            TransportError: network failure or timeout
            UpstreamHTTPError: non-2xx status
            InvalidResponseError: body is not JSON
        """
        if not self.is_configured:
            raise ProviderNotConfiguredError(self.name, f"{self.name} API key is not configured")

        query = {**self._auth_params(), **(params or {})}
        url = f"{self.base_url}{path}"
        session = await self._ensure_session()

        try:
            async with session.get(url, params=query) as resp:
                if resp.status >= 400:
                    try:
                        body = await resp.json(content_type=None)
                    except ValueError:
                        body = await resp.text()
                    reason = _error_message(body) or resp.reason or "request failed"
                    raise UpstreamHTTPError(
                        self.name,
                        resp.status,
                        f"Request failed with status code {resp.status}: {reason}",
                        details={"path": path, "body": body},
                    )
                try:
                    data = await resp.json(content_type=None)
                except ValueError as e:
                    raise InvalidResponseError(
                        self.name, f"Response from {path} is not valid JSON"
                    ) from e
                return data, {k.lower(): v for k, v in resp.headers.items()}
        except asyncio.TimeoutError as e:
            raise TransportError(
                self.name, f"Request to {path} timed out after {self.timeout_seconds}s"
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(self.name, f"Request to {path} failed: {e}") from e

    async def _get(self, path: str, params: Optional[dict] = None) -> Any:
        data, _ = await self._request(path, params)
        return data
