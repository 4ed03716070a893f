import pytest

from app.models.context import Intent, Situation, TimeBucket
from app.services.mix.planner import BUCKET_PRESETS, SITUATION_PRESETS, plan_blocks
from app.services.mix.scoring import SITUATION_BIAS


def test_every_bucket_and_situation_has_a_preset():
    assert set(BUCKET_PRESETS) == set(TimeBucket)
    assert set(SITUATION_PRESETS) == set(Situation) - {Situation.AUTO}


@pytest.mark.parametrize("specs", list(BUCKET_PRESETS.values()) + list(SITUATION_PRESETS.values()))
def test_presets_have_four_or_five_blocks(specs):
    assert 4 <= len(specs) <= 5


def test_morning_leads_with_energy():
    assert plan_blocks(TimeBucket.MORNING, Situation.AUTO)[0].intent == Intent.ENERGY


@pytest.mark.parametrize("bucket", list(TimeBucket))
def test_situation_overrides_time_bucket(bucket):
    intents = [spec.intent for spec in plan_blocks(bucket, Situation.WORKING_OUT)]
    assert intents == [spec.intent for spec in SITUATION_PRESETS[Situation.WORKING_OUT]]


@pytest.mark.parametrize("situation", [s for s in Situation if s != Situation.AUTO])
def test_situation_presets_avoid_intents_biased_against(situation):
    bias = SITUATION_BIAS[situation]
    for spec in SITUATION_PRESETS[situation]:
        assert bias.get(spec.intent, 0) >= 0, f"{situation.value} plans a {spec.intent.value} block"


def test_dinner_never_plans_energy():
    intents = {spec.intent for spec in plan_blocks(TimeBucket.EVENING, Situation.DINNER)}
    assert Intent.ENERGY not in intents


def test_plan_is_a_fresh_list():
    first = plan_blocks(TimeBucket.MIDDAY, Situation.AUTO)
    first.clear()
    assert len(plan_blocks(TimeBucket.MIDDAY, Situation.AUTO)) == 5
