from collections.abc import Set

from app.core.constants import (
    DISCOVERY_BASELINE,
    DUPLICATE_EXCLUSIVE_BLOCKS,
    DUPLICATE_PENALTY_EARLY,
    DUPLICATE_PENALTY_LATE,
    FAVOR_FAMILIAR_THROWBACK_BONUS,
    FAVOR_NEW_BONUS,
    FAVOR_NEW_THROWBACK_PENALTY,
    HIGH_INTENSITY_MIN_INTENSITY,
    HIGH_INTENSITY_MIN_TEMPO,
    LOW_INTENSITY_MAX_INTENSITY,
    LOW_INTENSITY_MAX_TEMPO,
    SITUATION_BIAS_FACTOR,
    TAG_MATCH_SCORE,
)
from app.models.catalog import CatalogItem, NoiseLevel
from app.models.context import Intent, Situation, Tweak

# Signed weight per intent tag. Negative weights shape the block presets only.
SITUATION_BIAS: dict[Situation, dict[Intent, int]] = {
    Situation.AUTO: {},
    Situation.WORKING: {Intent.FOCUS: 3, Intent.ENERGY: -1},
    Situation.STUDYING: {Intent.FOCUS: 3, Intent.RESET: -2},
    Situation.WORKING_OUT: {Intent.ENERGY: 3, Intent.RAMP: 2, Intent.FOCUS: -3},
    Situation.WALKING: {Intent.RESET: 2, Intent.RAMP: 1, Intent.FOCUS: -1},
    Situation.DINNER: {Intent.RESET: 2, Intent.ENERGY: -1},
    Situation.HANGING_OUT: {Intent.RESET: 2, Intent.ENERGY: 1, Intent.FOCUS: -2},
    Situation.PARTY: {Intent.ENERGY: 3, Intent.RAMP: 2, Intent.FOCUS: -3},
    Situation.LATE_NIGHT: {Intent.ENERGY: 2, Intent.RAMP: 1, Intent.THROWBACK: 1},
    Situation.CHILL: {Intent.RESET: 3, Intent.FOCUS: 1, Intent.ENERGY: -2},
}

LOW_DISTRACTION_SITUATIONS: frozenset[Situation] = frozenset({Situation.WORKING, Situation.STUDYING})
HIGH_INTENSITY_SITUATIONS: frozenset[Situation] = frozenset({Situation.WORKING_OUT, Situation.PARTY})
LOW_INTENSITY_SITUATIONS: frozenset[Situation] = frozenset({Situation.DINNER, Situation.CHILL})


def base_match_score(item: CatalogItem, intent: Intent) -> float:
    score = 0.0
    if item.has_tag(intent):
        score += TAG_MATCH_SCORE
    if intent == Intent.DISCOVERY:
        # discovery is never an exact tag, so every item gets a looser baseline
        score += DISCOVERY_BASELINE
    return score


def tweak_adjustment(item: CatalogItem, tweak: Tweak) -> float:
    is_throwback = item.has_tag(Intent.THROWBACK)
    if tweak == Tweak.FAVOR_NEW:
        return FAVOR_NEW_THROWBACK_PENALTY if is_throwback else FAVOR_NEW_BONUS
    if tweak == Tweak.FAVOR_FAMILIAR:
        return FAVOR_FAMILIAR_THROWBACK_BONUS if is_throwback else 0.0
    # no_repeats acts during selection, not scoring
    return 0.0


def situation_bias(item: CatalogItem, situation: Situation) -> float:
    bias = SITUATION_BIAS[situation]
    total = 0.0
    for tag in item.tags:
        weight = bias.get(tag, 0)
        if weight > 0:
            total += weight * SITUATION_BIAS_FACTOR
    return total


def attribute_tuning(item: CatalogItem, situation: Situation) -> float:
    """Small integer nudges on raw profile attributes for situations that care about them."""
    profile = item.profile
    nudge = 0.0

    if situation in LOW_DISTRACTION_SITUATIONS:
        if profile.activity_noise_level == NoiseLevel.LOW:
            nudge += 2
        elif profile.activity_noise_level == NoiseLevel.HIGH:
            nudge -= 2

    elif situation in HIGH_INTENSITY_SITUATIONS:
        if profile.activity_noise_level == NoiseLevel.HIGH:
            nudge += 1
        if profile.intensity < HIGH_INTENSITY_MIN_INTENSITY:
            nudge -= 2
        if profile.tempo < HIGH_INTENSITY_MIN_TEMPO:
            nudge -= 1

    elif situation in LOW_INTENSITY_SITUATIONS:
        if profile.intensity > LOW_INTENSITY_MAX_INTENSITY:
            nudge -= 2
        if profile.tempo > LOW_INTENSITY_MAX_TEMPO:
            nudge -= 1

    return nudge


def duplicate_penalty(item: CatalogItem, block_index: int, already_chosen: Set[str]) -> float:
    if item.id not in already_chosen:
        return 0.0
    if block_index < DUPLICATE_EXCLUSIVE_BLOCKS:
        return DUPLICATE_PENALTY_EARLY
    return DUPLICATE_PENALTY_LATE


def score_item(
    item: CatalogItem,
    intent: Intent,
    tweak: Tweak,
    situation: Situation,
    block_index: int = 0,
    already_chosen: Set[str] = frozenset(),
) -> float:
    """
    Score one catalog item for a block.

    Pure: the only state it reads is the `already_chosen` ids passed in.
    """
    return (
        base_match_score(item, intent)
        + tweak_adjustment(item, tweak)
        + situation_bias(item, situation)
        + attribute_tuning(item, situation)
        + duplicate_penalty(item, block_index, already_chosen)
    )
