from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.context import Intent


class NoiseLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TrackProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    genre: str
    era: str
    vibe_words: tuple[str, ...] = Field(min_length=1)
    hook_phrase: str
    activity_noise_level: NoiseLevel = NoiseLevel.MEDIUM
    tempo: int = Field(ge=0, description="Beats per minute")
    intensity: int = Field(ge=0, le=100)
    positivity: int = Field(ge=0, le=100)

    def vibe(self, position: int = 0) -> str:
        """Vibe word at `position`, falling back to the first one."""
        if position < len(self.vibe_words):
            return self.vibe_words[position]
        return self.vibe_words[0]


class CatalogItem(BaseModel):
    """
    One track in the fixed catalog.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    creator: str
    tags: frozenset[Intent]
    profile: TrackProfile
    spotify_id: str | None = None

    @field_validator("tags")
    @classmethod
    def _tags_not_empty(cls, value: frozenset[Intent]) -> frozenset[Intent]:
        if not value:
            raise ValueError("catalog item needs at least one tag")
        return value

    @property
    def external_url(self) -> str:
        if self.spotify_id:
            return f"https://open.spotify.com/track/{self.spotify_id}"
        return f"https://open.spotify.com/search/{quote(f'{self.title} {self.creator}')}"

    def has_tag(self, intent: Intent) -> bool:
        return intent in self.tags
