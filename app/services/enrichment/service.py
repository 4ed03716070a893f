import asyncio
from collections.abc import Iterable
from typing import Any

from loguru import logger

from app.models.enrichment import Enrichment, EnrichmentRequest
from app.services.enrichment.cache import EnrichmentCache
from app.services.enrichment.client import OEmbedClient


class EnrichmentService:
    """
    Artwork and title lookups for track URLs.

    Lookups go through the cache first. Misses call the oEmbed client under a
    bounded timeout; failures are cached as fallback results so a broken URL
    is not retried until its entry expires. Concurrent callers asking for the
    same URL share one in-flight lookup. Nothing here raises to the caller.
    """

    def __init__(self, client: OEmbedClient, cache: EnrichmentCache, timeout: float = 3.0):
        self.client = client
        self.cache = cache
        self.timeout = timeout
        self._inflight: dict[str, asyncio.Task] = {}

    async def close(self):
        await self.client.close()
        await self.cache.close()

    async def enrich(self, url: str, fallback_name: str, fallback_artist: str) -> Enrichment:
        cached = await self.cache.get(url)
        if cached is not None:
            return cached

        task = self._inflight.get(url)
        if task is None:
            task = asyncio.ensure_future(self._lookup(url, fallback_name, fallback_artist))
            self._inflight[url] = task
            task.add_done_callback(lambda _: self._inflight.pop(url, None))
        # shield so one cancelled caller does not cancel the shared lookup
        return await asyncio.shield(task)

    async def enrich_many(self, requests: Iterable[EnrichmentRequest]) -> dict[str, Enrichment]:
        """Enrich a batch, one lookup per distinct URL."""
        unique: dict[str, EnrichmentRequest] = {}
        for request in requests:
            unique.setdefault(request.url, request)
        if not unique:
            return {}

        results = await asyncio.gather(
            *(self.enrich(r.url, r.fallback_name, r.fallback_artist) for r in unique.values())
        )
        return dict(zip(unique.keys(), results))

    async def _lookup(self, url: str, fallback_name: str, fallback_artist: str) -> Enrichment:
        try:
            data = await asyncio.wait_for(self.client.fetch(url), timeout=self.timeout)
            result = self._from_oembed(data, fallback_name, fallback_artist)
        except asyncio.TimeoutError:
            logger.warning(f"Enrichment timed out after {self.timeout}s for {url}")
            result = Enrichment.fallback(fallback_name, fallback_artist)
        except Exception as e:
            logger.warning(f"Enrichment failed for {url}: {e}")
            result = Enrichment.fallback(fallback_name, fallback_artist)

        await self.cache.set(url, result)
        return result

    @staticmethod
    def _from_oembed(data: dict[str, Any], fallback_name: str, fallback_artist: str) -> Enrichment:
        if not isinstance(data, dict):
            return Enrichment.fallback(fallback_name, fallback_artist)
        title = data.get("title") or None
        return Enrichment(
            name=title or fallback_name,
            artist=fallback_artist,
            artwork_url=data.get("thumbnail_url") or None,
            raw_title=title,
        )
