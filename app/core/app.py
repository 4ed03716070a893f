from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.main import api_router
from app.services.enrichment.factory import build_enrichment_service

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).

    The enrichment service and its cache are owned here and handed to
    requests through dependencies.
    """
    app.state.enrichment_service = build_enrichment_service(settings)
    logger.info(f"Enrichment cache backend: {settings.ENRICHMENT_CACHE_BACKEND}")
    yield
    try:
        await app.state.enrichment_service.close()
        logger.info("Enrichment service closed")
    except Exception as exc:
        logger.warning(f"Failed to close enrichment service: {exc}")


app = FastAPI(
    title=settings.APP_NAME,
    description="Context-aware music block recommendations with explanations",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(api_router)
