import logging
from typing import Optional

import httpx

from errors import UpstreamNetworkError

logger = logging.getLogger(__name__)


class HackerNewsClient:
    """Thin wrapper over the Hacker News Firebase endpoints.

    Responses are returned as text; decoding is left to the caller.
    """

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    @property
    def http(self) -> httpx.AsyncClient:
        # opened on first request so building the app holds no connections
        if self._http is None:
            self._http = httpx.AsyncClient(transport=self._transport)
        return self._http

    @property
    def best_stories_url(self) -> str:
        return f"{self.base_url}/beststories.json"

    def item_url(self, item_id: int) -> str:
        return f"{self.base_url}/item/{item_id}.json"

    async def fetch_text(self, url: str) -> str:
        try:
            response = await self.http.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamNetworkError(f"GET {url} failed: {e}") from e
        return response.text

    async def best_stories_text(self) -> str:
        return await self.fetch_text(self.best_stories_url)

    async def item_text(self, item_id: int) -> str:
        return await self.fetch_text(self.item_url(item_id))

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
