"""
Core constants used by the mix engine. Keep these simple and documented.
"""

from typing import Final

# Bucket boundaries, minutes since midnight
MORNING_START: Final[int] = 7 * 60
MIDDAY_START: Final[int] = 12 * 60
EVENING_START: Final[int] = 17 * 60
LATE_NIGHT_START: Final[int] = 22 * 60

# Seeds
FNV_OFFSET_BASIS: Final[int] = 2166136261
FNV_PRIME: Final[int] = 16777619
UINT32_MASK: Final[int] = 0xFFFFFFFF
BLOCK_SEED_STRIDE: Final[int] = 101
SEED_SEPARATOR: Final[str] = "|"
NO_OVERRIDE_TOKEN: Final[str] = "now"

# Scoring
TAG_MATCH_SCORE: Final[float] = 6.0
DISCOVERY_BASELINE: Final[float] = 1.0
FAVOR_NEW_BONUS: Final[float] = 2.0
FAVOR_NEW_THROWBACK_PENALTY: Final[float] = -2.0
FAVOR_FAMILIAR_THROWBACK_BONUS: Final[float] = 3.0
SITUATION_BIAS_FACTOR: Final[float] = 0.5

# Cross-block duplicates: early blocks effectively exclude, later blocks only discourage
DUPLICATE_EXCLUSIVE_BLOCKS: Final[int] = 3
DUPLICATE_PENALTY_EARLY: Final[float] = -1000.0
DUPLICATE_PENALTY_LATE: Final[float] = -5.0

# Attribute fine tuning thresholds
HIGH_INTENSITY_MIN_INTENSITY: Final[int] = 55
HIGH_INTENSITY_MIN_TEMPO: Final[int] = 110
LOW_INTENSITY_MAX_INTENSITY: Final[int] = 70
LOW_INTENSITY_MAX_TEMPO: Final[int] = 130

DEFAULT_BLOCK_SIZE: Final[int] = 5
