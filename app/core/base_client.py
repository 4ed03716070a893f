import asyncio
from typing import Any

import httpx
from loguru import logger

from app.core.version import __version__

# Statuses worth another attempt; anything else in 4xx fails fast
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})


class BaseClient:
    """
    Base asynchronous HTTP client with retry logic and logging.
    """

    def __init__(
        self, base_url: str = "", timeout: float = 10.0, max_retries: int = 3, headers: dict[str, str] | None = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.headers = {"User-Agent": f"Momentmix/{__version__}", **(headers or {})}
        self._client: httpx.AsyncClient | None = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx.AsyncClient instance."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, headers=self.headers, follow_redirects=True
            )
        return self._client

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _should_retry(exc: Exception) -> bool:
        if isinstance(exc, httpx.HTTPStatusError):
            return exc.response.status_code in RETRY_STATUSES
        return isinstance(exc, httpx.RequestError)

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Internal request handler with retry and exponential backoff."""
        client = await self.get_client()

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                if attempt >= self.max_retries or not self._should_retry(e):
                    logger.warning(f"Request failed ({method} {url}) after {attempt} attempt(s): {e}")
                    raise
                wait_time = 0.5 * (2 ** (attempt - 1))
                logger.debug(f"Request failed ({method} {url}): {e}. Retrying in {wait_time}s")
                await asyncio.sleep(wait_time)

        raise httpx.RequestError(f"Request failed for unknown reasons ({method} {url})")

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs) -> dict[str, Any]:
        """Perform a GET request and return the JSON response."""
        response = await self._request("GET", url, params=params, **kwargs)
        return response.json()
