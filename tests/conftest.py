import pytest

from app.models.catalog import CatalogItem, NoiseLevel, TrackProfile
from app.models.context import Intent
from app.services.catalog import DEFAULT_CATALOG_PATH, load_catalog


@pytest.fixture(scope="session")
def catalog():
    return load_catalog(DEFAULT_CATALOG_PATH)


@pytest.fixture
def make_item():
    def _make(
        item_id: str,
        tags=(Intent.FOCUS,),
        hook: str | None = None,
        noise: NoiseLevel = NoiseLevel.MEDIUM,
        tempo: int = 120,
        intensity: int = 60,
        positivity: int = 50,
    ) -> CatalogItem:
        return CatalogItem(
            id=item_id,
            title=f"Title {item_id}",
            creator=f"Artist {item_id}",
            tags=frozenset(tags),
            profile=TrackProfile(
                genre="indie pop",
                era="early 2010s",
                vibe_words=("bright", "steady"),
                hook_phrase=hook or f"velvet hook {item_id}",
                activity_noise_level=noise,
                tempo=tempo,
                intensity=intensity,
                positivity=positivity,
            ),
        )

    return _make
