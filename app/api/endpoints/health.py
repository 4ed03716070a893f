from fastapi import APIRouter
from loguru import logger

from app.core.exceptions import CatalogUnavailableError
from app.core.version import __version__
from app.services.catalog import get_catalog

router = APIRouter(tags=["health"])


@router.get("/health", summary="Simple readiness probe")
async def health_check() -> dict:
    try:
        catalog_size = len(get_catalog())
    except CatalogUnavailableError as exc:
        logger.warning(f"Health check could not load catalog: {exc}")
        return {"status": "degraded", "version": __version__, "catalog_items": 0}
    return {"status": "ok", "version": __version__, "catalog_items": catalog_size}
