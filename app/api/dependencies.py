from collections.abc import Callable
from datetime import datetime, timezone

from fastapi import Depends, HTTPException, Request
from loguru import logger

from app.core.config import settings
from app.core.exceptions import CatalogUnavailableError
from app.services.catalog import get_catalog
from app.services.enrichment.service import EnrichmentService
from app.services.mix.engine import MixEngine
from app.services.mix.service import MixService


def get_clock() -> Callable[[], datetime]:
    return lambda: datetime.now(timezone.utc)


def get_mix_engine() -> MixEngine:
    try:
        catalog = get_catalog()
    except CatalogUnavailableError as e:
        logger.error(f"Catalog unavailable: {e}")
        raise HTTPException(status_code=503, detail="Catalog is unavailable. Try again later.")
    return MixEngine(catalog, block_size=settings.BLOCK_SIZE)


def get_enrichment_service(request: Request) -> EnrichmentService | None:
    """Service built by the application lifespan, if enrichment is enabled."""
    if not settings.ENRICHMENT_ENABLED:
        return None
    return getattr(request.app.state, "enrichment_service", None)


def get_mix_service(
    engine: MixEngine = Depends(get_mix_engine),
    enrichment: EnrichmentService | None = Depends(get_enrichment_service),
) -> MixService:
    return MixService(engine, settings.TIMEZONE, enrichment=enrichment)
