from functools import lru_cache
from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter

from app.core.config import settings
from app.core.exceptions import CatalogUnavailableError
from app.models.catalog import CatalogItem

# app/services/catalog.py -> app/services -> app
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog.json"

_catalog_adapter = TypeAdapter(list[CatalogItem])


def load_catalog(path: Path | str) -> tuple[CatalogItem, ...]:
    """
    Load and validate a catalog file.

    Raises:
        CatalogUnavailableError: the file is missing, unreadable, invalid, or
            contains duplicate ids.
    """
    path = Path(path)
    try:
        items = _catalog_adapter.validate_json(path.read_bytes())
    except (OSError, ValueError) as e:
        raise CatalogUnavailableError(f"Failed to load catalog from {path}: {e}") from e

    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise CatalogUnavailableError(f"Duplicate catalog id '{item.id}' in {path}")
        seen.add(item.id)

    logger.info(f"Loaded {len(items)} catalog items from {path.name}")
    return tuple(items)


@lru_cache(maxsize=4)
def _cached_catalog(path: str) -> tuple[CatalogItem, ...]:
    return load_catalog(path)


def get_catalog() -> tuple[CatalogItem, ...]:
    """Catalog at the configured path, loaded once per process."""
    return _cached_catalog(str(settings.CATALOG_PATH or DEFAULT_CATALOG_PATH))
