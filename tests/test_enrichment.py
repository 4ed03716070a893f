import asyncio
import json

import httpx
import pytest
from redis.exceptions import RedisError

from app.core.config import Settings
from app.models.enrichment import Enrichment, EnrichmentRequest
from app.services.enrichment.cache import MemoryEnrichmentCache, RedisEnrichmentCache
from app.services.enrichment.client import OEmbedClient
from app.services.enrichment.factory import build_enrichment_cache, build_enrichment_service
from app.services.enrichment.service import EnrichmentService

URL = "https://open.spotify.com/track/abc"


class FakeClient:
    def __init__(self, payload=None, error: Exception | None = None, delay: float = 0.0):
        self.payload = payload if payload is not None else {"title": "Real Title", "thumbnail_url": "https://img/1"}
        self.error = error
        self.delay = delay
        self.calls: list[str] = []
        self.closed = False

    async def fetch(self, track_url: str):
        self.calls.append(track_url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.payload

    async def close(self):
        self.closed = True


def _service(client, timeout=1.0):
    return EnrichmentService(client, MemoryEnrichmentCache(ttl_seconds=60, maxsize=100), timeout=timeout)


def test_successful_lookup_is_cached():
    client = FakeClient()
    service = _service(client)

    async def run():
        first = await service.enrich(URL, "Fallback", "Someone")
        second = await service.enrich(URL, "Fallback", "Someone")
        return first, second

    first, second = asyncio.run(run())
    assert first == second
    assert first.name == "Real Title"
    assert first.artist == "Someone"
    assert first.artwork_url == "https://img/1"
    assert client.calls == [URL]


@pytest.mark.parametrize(
    "error",
    [
        httpx.RequestError("boom"),
        httpx.HTTPStatusError("404", request=httpx.Request("GET", URL), response=httpx.Response(404)),
        ValueError("bad json"),
    ],
)
def test_failures_fall_back_and_are_negatively_cached(error):
    client = FakeClient(error=error)
    service = _service(client)

    async def run():
        return [await service.enrich(URL, "Fallback", "Someone") for _ in range(3)]

    results = asyncio.run(run())
    assert all(r == Enrichment.fallback("Fallback", "Someone") for r in results)
    assert results[0].artwork_url is None
    assert len(client.calls) == 1


def test_timeout_falls_back():
    client = FakeClient(delay=0.5)
    service = _service(client, timeout=0.01)

    result = asyncio.run(service.enrich(URL, "Fallback", "Someone"))
    assert result.name == "Fallback"
    assert result.artwork_url is None


def test_missing_fields_keep_fallbacks():
    client = FakeClient(payload={"provider_name": "Spotify"})
    result = asyncio.run(_service(client).enrich(URL, "Fallback", "Someone"))
    assert result.name == "Fallback"
    assert result.raw_title is None
    assert result.artwork_url is None


def test_enrich_many_dedupes_urls():
    client = FakeClient()
    service = _service(client)
    other = "https://open.spotify.com/track/def"
    requests = [
        EnrichmentRequest(url=URL, fallback_name="A", fallback_artist="X"),
        EnrichmentRequest(url=other, fallback_name="B", fallback_artist="Y"),
        EnrichmentRequest(url=URL, fallback_name="A", fallback_artist="X"),
    ]

    results = asyncio.run(service.enrich_many(requests))
    assert set(results) == {URL, other}
    assert sorted(client.calls) == sorted([URL, other])


def test_enrich_many_empty():
    assert asyncio.run(_service(FakeClient()).enrich_many([])) == {}


def test_concurrent_callers_share_one_lookup():
    client = FakeClient(delay=0.05)
    service = _service(client)

    async def run():
        return await asyncio.gather(*(service.enrich(URL, "Fallback", "Someone") for _ in range(5)))

    results = asyncio.run(run())
    assert len({r.name for r in results}) == 1
    assert client.calls == [URL]


def test_close_closes_client():
    client = FakeClient()
    asyncio.run(_service(client).close())
    assert client.closed


def test_memory_cache_expires_entries():
    cache = MemoryEnrichmentCache(ttl_seconds=60, maxsize=2)

    async def run():
        for i in range(3):
            await cache.set(f"url-{i}", Enrichment.fallback(f"n{i}", "a"))
        return await cache.get("url-0"), await cache.get("url-2")

    oldest, newest = asyncio.run(run())
    assert oldest is None
    assert newest.name == "n2"
    assert len(cache) == 2


class StubRedis:
    def __init__(self, fail: bool = False):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail = fail
        self.closed = False

    async def get(self, key):
        if self.fail:
            raise RedisError("connection lost")
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        if self.fail:
            raise RedisError("connection lost")
        self.store[key] = value
        self.ttls[key] = ttl

    async def aclose(self):
        self.closed = True


def _redis_cache(stub):
    cache = RedisEnrichmentCache("redis://unused", key_prefix="test:", ttl_seconds=120)
    cache._client = stub
    return cache


def test_redis_cache_round_trips_with_ttl():
    stub = StubRedis()
    cache = _redis_cache(stub)
    value = Enrichment(name="N", artist="A", artwork_url="https://img/2", raw_title="N")

    async def run():
        await cache.set(URL, value)
        return await cache.get(URL), await cache.get("https://open.spotify.com/track/other")

    found, missing = asyncio.run(run())
    assert found == value
    assert missing is None
    assert stub.ttls == {f"test:{URL}": 120}
    assert json.loads(stub.store[f"test:{URL}"])["artwork_url"] == "https://img/2"


def test_redis_cache_swallows_connection_errors():
    cache = _redis_cache(StubRedis(fail=True))

    async def run():
        await cache.set(URL, Enrichment.fallback("N", "A"))
        return await cache.get(URL)

    assert asyncio.run(run()) is None


def test_redis_cache_discards_undecodable_entries():
    stub = StubRedis()
    stub.store[f"test:{URL}"] = "{not json"
    assert asyncio.run(_redis_cache(stub).get(URL)) is None


def test_redis_cache_close_releases_client():
    stub = StubRedis()
    cache = _redis_cache(stub)
    asyncio.run(cache.close())
    assert stub.closed
    assert cache._client is None


def test_factory_picks_memory_backend_by_default():
    cache = build_enrichment_cache(Settings(ENRICHMENT_CACHE_BACKEND="memory"))
    assert isinstance(cache, MemoryEnrichmentCache)


def test_factory_picks_redis_backend():
    config = Settings(
        ENRICHMENT_CACHE_BACKEND="redis",
        REDIS_URL="redis://cache:6379/1",
        REDIS_ENRICHMENT_KEY="mm:",
        ENRICHMENT_CACHE_TTL_SECONDS=60,
    )
    cache = build_enrichment_cache(config)
    assert isinstance(cache, RedisEnrichmentCache)
    assert cache.redis_url == "redis://cache:6379/1"
    assert cache.key_prefix == "mm:"
    assert cache.ttl_seconds == 60


def test_factory_wires_service_from_settings():
    service = build_enrichment_service(Settings(ENRICHMENT_TIMEOUT_SECONDS=1.5, OEMBED_BASE_URL="https://oembed.test"))
    assert service.timeout == 1.5
    assert isinstance(service.client, OEmbedClient)
    assert service.client.base_url == "https://oembed.test"
