import re
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from app.core.constants import EVENING_START, LATE_NIGHT_START, MIDDAY_START, MORNING_START
from app.models.context import EngineMode, MixContext, Situation, TimeBucket, Tweak

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_SEPARATORS = re.compile(r"[\s\-]+")

# Alias tables are keyed by normalized tokens (lowercase, underscores)
SITUATION_ALIASES: dict[str, Situation] = {
    "work": Situation.WORKING,
    "working": Situation.WORKING,
    "office": Situation.WORKING,
    "coding": Situation.WORKING,
    "study": Situation.STUDYING,
    "studying": Situation.STUDYING,
    "homework": Situation.STUDYING,
    "reading": Situation.STUDYING,
    "workout": Situation.WORKING_OUT,
    "working_out": Situation.WORKING_OUT,
    "work_out": Situation.WORKING_OUT,
    "gym": Situation.WORKING_OUT,
    "exercise": Situation.WORKING_OUT,
    "exercising": Situation.WORKING_OUT,
    "running": Situation.WORKING_OUT,
    "run": Situation.WORKING_OUT,
    "walk": Situation.WALKING,
    "walking": Situation.WALKING,
    "commute": Situation.WALKING,
    "commuting": Situation.WALKING,
    "dinner": Situation.DINNER,
    "cooking": Situation.DINNER,
    "eating": Situation.DINNER,
    "hanging_out": Situation.HANGING_OUT,
    "hangout": Situation.HANGING_OUT,
    "hang_out": Situation.HANGING_OUT,
    "friends": Situation.HANGING_OUT,
    "socializing": Situation.HANGING_OUT,
    "party": Situation.PARTY,
    "partying": Situation.PARTY,
    "pregame": Situation.PARTY,
    "dancing": Situation.PARTY,
    "late_night": Situation.LATE_NIGHT,
    "latenight": Situation.LATE_NIGHT,
    "night": Situation.LATE_NIGHT,
    "chill": Situation.CHILL,
    "chilling": Situation.CHILL,
    "relax": Situation.CHILL,
    "relaxing": Situation.CHILL,
    "unwind": Situation.CHILL,
}

TWEAK_ALIASES: dict[str, Tweak] = {
    "favor_new": Tweak.FAVOR_NEW,
    "more_new": Tweak.FAVOR_NEW,
    "favor_familiar": Tweak.FAVOR_FAMILIAR,
    "more_familiar": Tweak.FAVOR_FAMILIAR,
    "no_repeats": Tweak.NO_REPEATS,
}

ENGINE_ALIASES: dict[str, EngineMode] = {
    "primary": EngineMode.PRIMARY,
    "my_engine": EngineMode.PRIMARY,
    "baseline": EngineMode.BASELINE,
    "spotify_ai": EngineMode.BASELINE,
}


def parse_time_override(raw: str | None) -> tuple[int, int] | None:
    """Parse a 24-hour HH:MM string. Anything else is ignored."""
    if not raw:
        return None
    match = TIME_PATTERN.match(raw.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def bucket_for_minutes(minutes: int) -> TimeBucket:
    # 02:00-07:00 has no bucket of its own and reads as late night
    if MORNING_START <= minutes < MIDDAY_START:
        return TimeBucket.MORNING
    if MIDDAY_START <= minutes < EVENING_START:
        return TimeBucket.MIDDAY
    if EVENING_START <= minutes < LATE_NIGHT_START:
        return TimeBucket.EVENING
    return TimeBucket.LATE_NIGHT


def normalize_token(raw: str | None) -> str:
    if not raw:
        return ""
    return _SEPARATORS.sub("_", raw.strip().lower())


def normalize_situation(raw: str | None) -> Situation:
    return SITUATION_ALIASES.get(normalize_token(raw), Situation.AUTO)


def parse_tweak(raw: str | None) -> Tweak:
    return TWEAK_ALIASES.get(normalize_token(raw), Tweak.NONE)


def parse_engine(raw: str | None) -> EngineMode:
    return ENGINE_ALIASES.get(normalize_token(raw), EngineMode.PRIMARY)


def to_local(now: datetime, timezone: str) -> datetime:
    """Convert `now` to the canonical zone. Naive datetimes are taken as UTC."""
    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{timezone}', using UTC")
        zone = ZoneInfo("UTC")
    if now.tzinfo is None:
        now = now.replace(tzinfo=ZoneInfo("UTC"))
    return now.astimezone(zone)


def resolve_context(
    now: datetime,
    timezone: str,
    time: str | None = None,
    situation: str | None = None,
    tweak: str | None = None,
    engine: str | None = None,
) -> MixContext:
    """
    Turn raw query values into a MixContext.

    Invalid or missing values fall back silently: the clock for `time`,
    `auto`/`none`/`primary` for the rest.
    """
    override = parse_time_override(time)
    if override:
        hours, mins = override
        time_override = f"{hours:02d}:{mins:02d}"
    else:
        local = to_local(now, timezone)
        hours, mins = local.hour, local.minute
        time_override = None

    minutes = hours * 60 + mins
    return MixContext(
        time_bucket=bucket_for_minutes(minutes),
        situation=normalize_situation(situation),
        tweak=parse_tweak(tweak),
        engine_mode=parse_engine(engine),
        time_override=time_override,
        minutes=minutes,
    )


def local_time_display(context: MixContext) -> str:
    """12-hour clock label, e.g. "08:30 AM"."""
    hours, mins = divmod(context.minutes, 60)
    suffix = "AM" if hours < 12 else "PM"
    return f"{(hours % 12) or 12:02d}:{mins:02d} {suffix}"
