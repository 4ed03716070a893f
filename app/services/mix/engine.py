from collections.abc import Sequence
from datetime import datetime

from loguru import logger

from app.core.constants import DEFAULT_BLOCK_SIZE
from app.models.catalog import CatalogItem
from app.models.context import MixContext
from app.models.mix import Block, MixResult
from app.services.mix.assembler import assemble_block
from app.services.mix.context import local_time_display
from app.services.mix.planner import plan_blocks
from app.services.mix.seed import block_seed, derive_seed
from app.services.mix.selector import SelectionState, select_items


class MixEngine:
    """
    Deterministic mix builder: plan blocks, then select and explain each one.

    Everything here is a pure function of the context and the catalog; the
    only state is the SelectionState folded from one block to the next.
    """

    def __init__(self, catalog: Sequence[CatalogItem], block_size: int = DEFAULT_BLOCK_SIZE):
        self.catalog = tuple(catalog)
        self.block_size = block_size

    def build_blocks(self, context: MixContext) -> list[Block]:
        base_seed = derive_seed(context)
        specs = plan_blocks(context.time_bucket, context.situation)

        state = SelectionState()
        blocks: list[Block] = []
        for index, spec in enumerate(specs):
            items, state = select_items(
                self.catalog,
                block_seed(base_seed, index),
                spec.intent,
                context.tweak,
                context.situation,
                index,
                state,
                size=self.block_size,
            )
            logger.debug(f"Block {index} ({spec.intent.value}): {[item.id for item in items]}")
            blocks.append(assemble_block(index, spec, items, context))
        return blocks

    def build(self, context: MixContext, now: datetime) -> MixResult:
        blocks = self.build_blocks(context)
        return MixResult(
            generated_at=now,
            local_time_display=local_time_display(context),
            time_bucket=context.time_bucket,
            situation=context.situation,
            tweak=context.tweak,
            engine_mode=context.engine_mode,
            blocks=tuple(blocks),
        )
