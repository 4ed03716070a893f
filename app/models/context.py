from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Intent(str, Enum):
    FOCUS = "focus"
    ENERGY = "energy"
    RAMP = "ramp"
    RESET = "reset"
    THROWBACK = "throwback"
    DISCOVERY = "discovery"


class TimeBucket(str, Enum):
    MORNING = "morning"
    MIDDAY = "midday"
    EVENING = "evening"
    LATE_NIGHT = "late_night"


class Situation(str, Enum):
    AUTO = "auto"
    WORKING = "working"
    STUDYING = "studying"
    WORKING_OUT = "working_out"
    WALKING = "walking"
    DINNER = "dinner"
    HANGING_OUT = "hanging_out"
    PARTY = "party"
    LATE_NIGHT = "late_night"
    CHILL = "chill"


class Tweak(str, Enum):
    NONE = "none"
    FAVOR_NEW = "favor_new"
    FAVOR_FAMILIAR = "favor_familiar"
    NO_REPEATS = "no_repeats"


class EngineMode(str, Enum):
    PRIMARY = "primary"
    BASELINE = "baseline"


class MixContext(BaseModel):
    """
    Normalized request context. Built once per request and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    time_bucket: TimeBucket
    situation: Situation = Situation.AUTO
    tweak: Tweak = Tweak.NONE
    engine_mode: EngineMode = EngineMode.PRIMARY
    # Literal "HH:MM" when the caller supplied a valid override
    time_override: str | None = None
    # Local minutes since midnight, from the override or the clock
    minutes: int = Field(ge=0, lt=24 * 60)

    @property
    def is_baseline(self) -> bool:
        return self.engine_mode == EngineMode.BASELINE
