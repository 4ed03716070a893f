from collections.abc import Sequence
from typing import TypeVar

from app.core.constants import (
    BLOCK_SEED_STRIDE,
    FNV_OFFSET_BASIS,
    FNV_PRIME,
    NO_OVERRIDE_TOKEN,
    SEED_SEPARATOR,
    UINT32_MASK,
)
from app.models.context import MixContext

T = TypeVar("T")


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a over the UTF-8 bytes of `text`."""
    h = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = (h * FNV_PRIME) & UINT32_MASK
    return h


def seed_key(context: MixContext) -> str:
    parts = [
        context.time_bucket.value,
        context.tweak.value,
        context.engine_mode.value,
        context.situation.value,
        context.time_override or NO_OVERRIDE_TOKEN,
    ]
    return SEED_SEPARATOR.join(parts)


def derive_seed(context: MixContext) -> int:
    return fnv1a_32(seed_key(context))


def block_seed(base_seed: int, block_index: int) -> int:
    return (base_seed + block_index * BLOCK_SEED_STRIDE) & UINT32_MASK


class XorShift32:
    """
    Minimal xorshift32 generator. Seed 0 is a fixed point, which still yields
    a valid (identity-like) permutation.
    """

    def __init__(self, seed: int):
        self.state = seed & UINT32_MASK

    def next_uint(self) -> int:
        x = self.state
        x ^= (x << 13) & UINT32_MASK
        x ^= x >> 17
        x ^= (x << 5) & UINT32_MASK
        self.state = x
        return x

    def random(self) -> float:
        """Float in [0, 1)."""
        return self.next_uint() / 4294967296


def seeded_shuffle(items: Sequence[T], seed: int) -> list[T]:
    """Fisher-Yates shuffle driven by XorShift32. The input is left untouched."""
    shuffled = list(items)
    rng = XorShift32(seed)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
