from abc import ABC, abstractmethod

import redis.asyncio as redis
from cachetools import TTLCache
from loguru import logger

from app.models.enrichment import Enrichment


class EnrichmentCache(ABC):
    """
    Interface for the enrichment cache, keyed by external track URL.
    """

    @abstractmethod
    async def get(self, url: str) -> Enrichment | None:
        pass

    @abstractmethod
    async def set(self, url: str, value: Enrichment) -> None:
        pass

    async def close(self) -> None:
        return None


class MemoryEnrichmentCache(EnrichmentCache):
    """In-process cache with per-entry TTL eviction."""

    def __init__(self, ttl_seconds: int = 86400, maxsize: int = 10000):
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl_seconds)

    async def get(self, url: str) -> Enrichment | None:
        return self._entries.get(url)

    async def set(self, url: str, value: Enrichment) -> None:
        self._entries[url] = value

    def __len__(self) -> int:
        return len(self._entries)


class RedisEnrichmentCache(EnrichmentCache):
    """Redis-backed cache for deployments that run several workers."""

    def __init__(self, redis_url: str, key_prefix: str = "momentmix:enrich:", ttl_seconds: int = 86400):
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds
        self._client: redis.Redis | None = None

    async def get_client(self) -> redis.Redis:
        if self._client is None:
            logger.info("Creating Redis client for enrichment cache")
            self._client = redis.from_url(
                self.redis_url,
                decode_responses=True,
                encoding="utf-8",
                socket_connect_timeout=5,
                socket_timeout=5,
                health_check_interval=30,
            )
        return self._client

    def _key(self, url: str) -> str:
        return f"{self.key_prefix}{url}"

    async def get(self, url: str) -> Enrichment | None:
        try:
            client = await self.get_client()
            raw = await client.get(self._key(url))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to read enrichment for '{url}' from Redis: {exc}")
            return None
        if not raw:
            return None
        try:
            return Enrichment.model_validate_json(raw)
        except ValueError as exc:
            logger.warning(f"Discarding undecodable enrichment for '{url}': {exc}")
            return None

    async def set(self, url: str, value: Enrichment) -> None:
        try:
            client = await self.get_client()
            await client.setex(self._key(url), self.ttl_seconds, value.model_dump_json())
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Failed to store enrichment for '{url}' in Redis: {exc}")

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
