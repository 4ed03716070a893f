import json

import pytest

from app.core.exceptions import CatalogUnavailableError
from app.models.context import Intent
from app.services.catalog import load_catalog


def test_bundled_catalog_is_valid(catalog):
    assert len(catalog) >= 25
    assert len({item.id for item in catalog}) == len(catalog)
    assert all(item.tags for item in catalog)
    assert not any(item.has_tag(Intent.DISCOVERY) for item in catalog)


def test_bundled_catalog_covers_tagged_intents(catalog):
    for intent in (Intent.FOCUS, Intent.ENERGY, Intent.RAMP, Intent.RESET, Intent.THROWBACK):
        assert sum(item.has_tag(intent) for item in catalog) >= 5, intent.value


def test_external_url(catalog):
    with_id = next(item for item in catalog if item.spotify_id)
    without_id = next(item for item in catalog if not item.spotify_id)
    assert with_id.external_url == f"https://open.spotify.com/track/{with_id.spotify_id}"
    assert without_id.external_url.startswith("https://open.spotify.com/search/")
    assert " " not in without_id.external_url


def test_missing_file_raises(tmp_path):
    with pytest.raises(CatalogUnavailableError):
        load_catalog(tmp_path / "missing.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(CatalogUnavailableError):
        load_catalog(path)


def test_undecodable_bytes_raise(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b'[{"id": "\xff\xfe"}]')
    with pytest.raises(CatalogUnavailableError):
        load_catalog(path)


def _raw_item(item_id, tags=("focus",)):
    return {
        "id": item_id,
        "title": "T",
        "creator": "C",
        "tags": list(tags),
        "profile": {
            "genre": "g",
            "era": "e",
            "vibe_words": ["v"],
            "hook_phrase": "h",
            "activity_noise_level": "low",
            "tempo": 100,
            "intensity": 50,
            "positivity": 50,
        },
    }


def test_empty_tags_are_rejected(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([_raw_item("a", tags=())]), encoding="utf-8")
    with pytest.raises(CatalogUnavailableError):
        load_catalog(path)


def test_duplicate_ids_are_rejected(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([_raw_item("a"), _raw_item("a")]), encoding="utf-8")
    with pytest.raises(CatalogUnavailableError):
        load_catalog(path)
