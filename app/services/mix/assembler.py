from collections.abc import Sequence

from app.models.catalog import CatalogItem
from app.models.context import MixContext, TimeBucket
from app.models.mix import Block, BlockSpec, SelectedItem
from app.services.mix.reasons import ReasonState, generate_reason, reason_signal, why_now

# Opaque comparison feed: titles rotate by position, never by context
BASELINE_TITLES: tuple[str, ...] = ("Made for You", "Daily Mix", "Vibes", "Recommended", "More Like This")

BASELINE_SUBTITLES: dict[TimeBucket, str] = {
    TimeBucket.MORNING: "Upbeat mix for your day",
    TimeBucket.MIDDAY: "A blend for your routine",
    TimeBucket.EVENING: "Chill picks you might like",
    TimeBucket.LATE_NIGHT: "Late night vibes",
}

BASELINE_WHY_NOW: dict[TimeBucket, str] = {
    TimeBucket.MORNING: "Picked based on your listening habits.",
    TimeBucket.MIDDAY: "A mix based on your recent activity.",
    TimeBucket.EVENING: "Selected for your typical evening listening.",
    TimeBucket.LATE_NIGHT: "Recommended from your taste profile.",
}


def baseline_title(index: int) -> str:
    return BASELINE_TITLES[min(index, len(BASELINE_TITLES) - 1)]


def explain_items(items: Sequence[CatalogItem], spec: BlockSpec) -> tuple[SelectedItem, ...]:
    state = ReasonState()
    selected = []
    signal = reason_signal(spec.intent)
    for item in items:
        text, state = generate_reason(item, spec.intent, state)
        selected.append(SelectedItem(item=item, reason=text, reason_signal=signal))
    return tuple(selected)


def assemble_block(index: int, spec: BlockSpec, items: Sequence[CatalogItem], context: MixContext) -> Block:
    block_id = f"block-{index}"

    if context.is_baseline:
        return Block(
            id=block_id,
            title=baseline_title(index),
            subtitle=BASELINE_SUBTITLES[context.time_bucket],
            why_now=BASELINE_WHY_NOW[context.time_bucket],
            intent=spec.intent,
            items=tuple(SelectedItem(item=item) for item in items),
        )

    return Block(
        id=block_id,
        title=spec.title,
        subtitle=spec.subtitle,
        why_now=why_now(spec.intent, context.situation, context.tweak, context.time_bucket),
        intent=spec.intent,
        items=explain_items(items, spec),
    )
