from app.core.config import Settings
from app.services.enrichment.cache import EnrichmentCache, MemoryEnrichmentCache, RedisEnrichmentCache
from app.services.enrichment.client import OEmbedClient
from app.services.enrichment.service import EnrichmentService


def build_enrichment_cache(settings: Settings) -> EnrichmentCache:
    if settings.ENRICHMENT_CACHE_BACKEND == "redis":
        return RedisEnrichmentCache(
            settings.REDIS_URL,
            key_prefix=settings.REDIS_ENRICHMENT_KEY,
            ttl_seconds=settings.ENRICHMENT_CACHE_TTL_SECONDS,
        )
    return MemoryEnrichmentCache(
        ttl_seconds=settings.ENRICHMENT_CACHE_TTL_SECONDS,
        maxsize=settings.ENRICHMENT_CACHE_MAXSIZE,
    )


def build_enrichment_service(settings: Settings) -> EnrichmentService:
    return EnrichmentService(
        client=OEmbedClient(base_url=settings.OEMBED_BASE_URL),
        cache=build_enrichment_cache(settings),
        timeout=settings.ENRICHMENT_TIMEOUT_SECONDS,
    )
