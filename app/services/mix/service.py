from datetime import datetime, timezone

from loguru import logger

from app.models.enrichment import Enrichment, EnrichmentRequest
from app.models.mix import BlockOut, MixResponse, MixResult, TrackOut
from app.services.enrichment.service import EnrichmentService
from app.services.mix.context import resolve_context
from app.services.mix.engine import MixEngine


def format_generated_at(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MixService:
    """
    Facade behind GET /mix: resolve the context, run the engine, then
    decorate the result with artwork.
    """

    def __init__(self, engine: MixEngine, tz_name: str, enrichment: EnrichmentService | None = None):
        self.engine = engine
        self.tz_name = tz_name
        self.enrichment = enrichment

    async def get_mix(
        self,
        now: datetime,
        time: str | None = None,
        tweak: str | None = None,
        engine: str | None = None,
        situation: str | None = None,
        artwork: bool = True,
    ) -> MixResponse:
        context = resolve_context(now, self.tz_name, time=time, situation=situation, tweak=tweak, engine=engine)
        logger.info(
            f"Building mix: bucket={context.time_bucket.value} situation={context.situation.value} "
            f"tweak={context.tweak.value} engine={context.engine_mode.value} override={context.time_override}"
        )
        result = self.engine.build(context, now)

        enriched: dict[str, Enrichment] = {}
        if artwork and self.enrichment is not None:
            enriched = await self.enrichment.enrich_many(
                EnrichmentRequest(url=s.item.external_url, fallback_name=s.item.title, fallback_artist=s.item.creator)
                for block in result.blocks
                for s in block.items
            )

        return self.to_response(result, enriched)

    @staticmethod
    def to_response(result: MixResult, enriched: dict[str, Enrichment] | None = None) -> MixResponse:
        enriched = enriched or {}
        blocks = []
        for block in result.blocks:
            tracks = []
            for selected in block.items:
                item = selected.item
                extra = enriched.get(item.external_url)
                tracks.append(
                    TrackOut(
                        id=item.id,
                        name=item.title,
                        artist=item.creator,
                        reason=selected.reason,
                        reason_signal=selected.reason_signal,
                        track_url=item.external_url,
                        artwork_url=extra.artwork_url if extra else None,
                    )
                )
            blocks.append(
                BlockOut(id=block.id, title=block.title, subtitle=block.subtitle, why_now=block.why_now, tracks=tracks)
            )

        return MixResponse(
            generated_at=format_generated_at(result.generated_at),
            local_time_display=result.local_time_display,
            time_bucket=result.time_bucket,
            situation=result.situation,
            tweak=result.tweak,
            engine=result.engine_mode,
            blocks=blocks,
        )
