from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel

from app.models.catalog import CatalogItem
from app.models.context import EngineMode, Intent, Situation, TimeBucket, Tweak


@dataclass(frozen=True)
class BlockSpec:
    title: str
    subtitle: str
    intent: Intent


@dataclass(frozen=True)
class SelectedItem:
    item: CatalogItem
    reason: str = ""
    reason_signal: str | None = None


@dataclass(frozen=True)
class Block:
    id: str
    title: str
    subtitle: str
    why_now: str
    intent: Intent
    items: tuple[SelectedItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MixResult:
    generated_at: datetime
    local_time_display: str
    time_bucket: TimeBucket
    situation: Situation
    tweak: Tweak
    engine_mode: EngineMode
    blocks: tuple[Block, ...]


# Wire shapes for GET /mix


class TrackOut(BaseModel):
    id: str
    name: str
    artist: str
    reason: str
    reason_signal: str | None = None
    track_url: str
    artwork_url: str | None = None


class BlockOut(BaseModel):
    id: str
    title: str
    subtitle: str
    why_now: str
    tracks: list[TrackOut]


class MixResponse(BaseModel):
    generated_at: str
    local_time_display: str
    time_bucket: TimeBucket
    situation: Situation
    tweak: Tweak
    engine: EngineMode
    blocks: list[BlockOut]
