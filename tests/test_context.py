from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.models.context import EngineMode, MixContext, Situation, TimeBucket, Tweak
from app.services.mix.context import (
    bucket_for_minutes,
    local_time_display,
    normalize_situation,
    parse_engine,
    parse_time_override,
    parse_tweak,
    resolve_context,
)

CHICAGO = "America/Chicago"
# 14:30 UTC in January is 08:30 in Chicago (CST, UTC-6)
WINTER_AFTERNOON_UTC = datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "minutes,bucket",
    [
        (419, TimeBucket.LATE_NIGHT),
        (420, TimeBucket.MORNING),
        (719, TimeBucket.MORNING),
        (720, TimeBucket.MIDDAY),
        (1019, TimeBucket.MIDDAY),
        (1020, TimeBucket.EVENING),
        (1319, TimeBucket.EVENING),
        (1320, TimeBucket.LATE_NIGHT),
        (0, TimeBucket.LATE_NIGHT),
        (119, TimeBucket.LATE_NIGHT),
        (180, TimeBucket.LATE_NIGHT),
    ],
)
def test_bucket_boundaries(minutes, bucket):
    assert bucket_for_minutes(minutes) == bucket


@pytest.mark.parametrize("raw", [None, "", "24:00", "7:30", "07:60", "noon", "07:30:00", "0730"])
def test_invalid_time_override_is_ignored(raw):
    assert parse_time_override(raw) is None


def test_valid_time_override_is_trimmed():
    assert parse_time_override(" 23:59 ") == (23, 59)
    assert parse_time_override("00:00") == (0, 0)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("workout", Situation.WORKING_OUT),
        ("Gym", Situation.WORKING_OUT),
        ("  EXERCISE ", Situation.WORKING_OUT),
        ("working-out", Situation.WORKING_OUT),
        ("working   out", Situation.WORKING_OUT),
        ("Hanging Out", Situation.HANGING_OUT),
        ("late-night", Situation.LATE_NIGHT),
        ("dinner", Situation.DINNER),
        ("skydiving", Situation.AUTO),
        ("", Situation.AUTO),
        (None, Situation.AUTO),
    ],
)
def test_normalize_situation(raw, expected):
    assert normalize_situation(raw) == expected


def test_tweak_and_engine_fall_back_to_neutral_defaults():
    assert parse_tweak("favor_new") == Tweak.FAVOR_NEW
    assert parse_tweak("more_familiar") == Tweak.FAVOR_FAMILIAR
    assert parse_tweak("no_repeats") == Tweak.NO_REPEATS
    assert parse_tweak("chaos") == Tweak.NONE
    assert parse_tweak(None) == Tweak.NONE
    assert parse_engine("baseline") == EngineMode.BASELINE
    assert parse_engine("spotify_ai") == EngineMode.BASELINE
    assert parse_engine("turbo") == EngineMode.PRIMARY


def test_tweak_and_engine_ignore_case_and_separators():
    assert parse_tweak("No_Repeats") == Tweak.NO_REPEATS
    assert parse_tweak(" favor-new ") == Tweak.FAVOR_NEW
    assert parse_engine("BASELINE") == EngineMode.BASELINE
    assert parse_engine("Spotify AI") == EngineMode.BASELINE


def test_context_requires_minutes():
    with pytest.raises(ValidationError):
        MixContext(time_bucket=TimeBucket.MORNING)


def test_override_wins_over_clock():
    context = resolve_context(WINTER_AFTERNOON_UTC, CHICAGO, time="22:15")
    assert context.time_bucket == TimeBucket.LATE_NIGHT
    assert context.time_override == "22:15"
    assert context.minutes == 22 * 60 + 15


def test_invalid_override_falls_back_to_canonical_zone():
    context = resolve_context(WINTER_AFTERNOON_UTC, CHICAGO, time="99:99")
    assert context.time_override is None
    assert context.minutes == 8 * 60 + 30
    assert context.time_bucket == TimeBucket.MORNING


def test_naive_now_is_treated_as_utc():
    naive = datetime(2024, 1, 15, 14, 30)
    assert resolve_context(naive, CHICAGO).minutes == 8 * 60 + 30


def test_unknown_zone_falls_back_to_utc():
    context = resolve_context(WINTER_AFTERNOON_UTC, "Mars/Olympus_Mons")
    assert context.minutes == 14 * 60 + 30
    assert context.time_bucket == TimeBucket.MIDDAY


def test_local_time_display():
    assert local_time_display(resolve_context(WINTER_AFTERNOON_UTC, CHICAGO, time="08:30")) == "08:30 AM"
    assert local_time_display(resolve_context(WINTER_AFTERNOON_UTC, CHICAGO, time="00:05")) == "12:05 AM"
    assert local_time_display(resolve_context(WINTER_AFTERNOON_UTC, CHICAGO, time="12:00")) == "12:00 PM"
    assert local_time_display(resolve_context(WINTER_AFTERNOON_UTC, CHICAGO, time="21:45")) == "09:45 PM"
