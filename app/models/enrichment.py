from pydantic import BaseModel


class Enrichment(BaseModel):
    """Display metadata for one external track URL."""

    name: str
    artist: str
    artwork_url: str | None = None
    raw_title: str | None = None

    @classmethod
    def fallback(cls, name: str, artist: str) -> "Enrichment":
        return cls(name=name, artist=artist)


class EnrichmentRequest(BaseModel):
    url: str
    fallback_name: str
    fallback_artist: str
