from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from app.core.constants import DEFAULT_BLOCK_SIZE
from app.models.catalog import CatalogItem
from app.models.context import Intent, Situation, Tweak
from app.services.mix.scoring import score_item
from app.services.mix.seed import seeded_shuffle


@dataclass(frozen=True)
class SelectionState:
    """
    Duplicate bookkeeping carried from one block to the next.

    `seen` drives the no_repeats skip rule; `chosen` drives the cross-block
    duplicate penalty. Every selection returns a new state.
    """

    seen: frozenset[str] = field(default_factory=frozenset)
    chosen: frozenset[str] = field(default_factory=frozenset)

    def with_items(self, items: Sequence[CatalogItem]) -> "SelectionState":
        ids = frozenset(item.id for item in items)
        return SelectionState(seen=self.seen | ids, chosen=self.chosen | ids)


def rank_items(
    catalog: Sequence[CatalogItem],
    block_seed: int,
    intent: Intent,
    tweak: Tweak,
    situation: Situation,
    block_index: int,
    state: SelectionState,
) -> list[tuple[float, CatalogItem]]:
    """Shuffle, then stable-sort by descending score. Ties keep the shuffle order."""
    shuffled = seeded_shuffle(catalog, block_seed)
    scored = [(score_item(item, intent, tweak, situation, block_index, state.chosen), item) for item in shuffled]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return scored


def select_items(
    catalog: Sequence[CatalogItem],
    block_seed: int,
    intent: Intent,
    tweak: Tweak,
    situation: Situation,
    block_index: int,
    state: SelectionState,
    size: int = DEFAULT_BLOCK_SIZE,
) -> tuple[list[CatalogItem], SelectionState]:
    """
    Pick `size` items for one block.

    Returns the picks and the state to hand to the next block. The result
    only comes up short when the catalog itself is smaller than `size`.
    """
    ranked = [item for _, item in rank_items(catalog, block_seed, intent, tweak, situation, block_index, state)]

    picked: list[CatalogItem] = []
    picked_ids: set[str] = set()
    for item in ranked:
        if len(picked) >= size:
            break
        if tweak == Tweak.NO_REPEATS and item.id in state.seen:
            continue
        picked.append(item)
        picked_ids.add(item.id)

    if len(picked) < size:
        # no_repeats ran the pool dry: relax it, keep items unique within the block
        logger.debug(f"Backfilling {intent.value} block {block_index}: {len(picked)}/{size} after no-repeat pass")
        for item in ranked:
            if len(picked) >= size:
                break
            if item.id in picked_ids:
                continue
            picked.append(item)
            picked_ids.add(item.id)

    return picked, state.with_items(picked)
