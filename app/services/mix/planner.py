"""
Block planning.

A declared situation picks its own curated preset; otherwise the time bucket
does. The presets are the only place that decides which intents are allowed
for a context, so a situation never gets a block whose intent it biases
against.
"""

from app.models.context import Intent, Situation, TimeBucket
from app.models.mix import BlockSpec

BUCKET_PRESETS: dict[TimeBucket, tuple[BlockSpec, ...]] = {
    TimeBucket.MORNING: (
        BlockSpec("If you want momentum", "Upbeat tracks to get you moving and thinking clearly", Intent.ENERGY),
        BlockSpec("If you need a smooth start", "Lighter energy that builds without rushing", Intent.RAMP),
        BlockSpec("If you want deep focus", "Steady, low-distraction tracks that help you stay locked in", Intent.FOCUS),
        BlockSpec("If you want something different", "A change in texture and mood that still fits right now", Intent.DISCOVERY),
        BlockSpec("If you want something familiar", "Comfort picks that usually work", Intent.THROWBACK),
    ),
    TimeBucket.MIDDAY: (
        BlockSpec("If you want deep focus", "Predictable energy that stays out of the way", Intent.FOCUS),
        BlockSpec("If you need a mental reset", "Light, familiar sounds to clear your head", Intent.RESET),
        BlockSpec("If you need a push", "Upbeat tracks that lift momentum without chaos", Intent.ENERGY),
        BlockSpec("If you want something different", "Something fresh without feeling random", Intent.DISCOVERY),
        BlockSpec("If you want something familiar", "Reliable songs that feel right without thinking", Intent.THROWBACK),
    ),
    TimeBucket.EVENING: (
        BlockSpec("If you want to unwind", "Lower pressure, warmer vibe to transition out of the day", Intent.RESET),
        BlockSpec("If you want light focus", "Smooth groove with enough energy to stay present", Intent.FOCUS),
        BlockSpec("If you want to move", "More movement, still controlled", Intent.RAMP),
        BlockSpec("If you want something different", "A fresh angle that still fits your current moment", Intent.DISCOVERY),
        BlockSpec("If you want something familiar", "Classics you can count on, no surprises", Intent.THROWBACK),
    ),
    TimeBucket.LATE_NIGHT: (
        BlockSpec("If you want energy", "More pulse, less chatter for late-night momentum", Intent.ENERGY),
        BlockSpec("If you want to stay sharp", "Steady tracks that keep you locked in without forcing it", Intent.FOCUS),
        BlockSpec("If you want to move", "Bright energy for dancing or staying up", Intent.RAMP),
        BlockSpec("If you want something different", "A change in texture and mood that still fits right now", Intent.DISCOVERY),
        BlockSpec("If you want something familiar", "Throwback bangers that never miss", Intent.THROWBACK),
    ),
}

SITUATION_PRESETS: dict[Situation, tuple[BlockSpec, ...]] = {
    Situation.WORKING: (
        BlockSpec("Heads-down work", "Low-distraction tracks for long stretches", Intent.FOCUS),
        BlockSpec("Between meetings", "A quick reset that doesn't derail you", Intent.RESET),
        BlockSpec("Afternoon lift", "Gentle build for when the day starts to drag", Intent.RAMP),
        BlockSpec("Familiar background", "Songs you know well enough to tune out", Intent.THROWBACK),
        BlockSpec("Something new at your desk", "Fresh picks that still stay out of the way", Intent.DISCOVERY),
    ),
    Situation.STUDYING: (
        BlockSpec("Deep study", "Steady, predictable tracks that keep you on the page", Intent.FOCUS),
        BlockSpec("Known territory", "Familiar songs that won't pull your attention", Intent.THROWBACK),
        BlockSpec("Wake your brain up", "A slow climb when focus starts to fade", Intent.RAMP),
        BlockSpec("Quiet discoveries", "New textures without lyrics fighting your notes", Intent.DISCOVERY),
    ),
    Situation.WORKING_OUT: (
        BlockSpec("Warm up", "Build the tempo before the heavy part", Intent.RAMP),
        BlockSpec("Peak effort", "High-energy tracks for the hardest sets", Intent.ENERGY),
        BlockSpec("Gym classics", "Reliable bangers that always hit", Intent.THROWBACK),
        BlockSpec("New fuel", "Fresh picks with enough drive to keep going", Intent.DISCOVERY),
        BlockSpec("Cool down", "Bring the heart rate back without stopping cold", Intent.RESET),
    ),
    Situation.WALKING: (
        BlockSpec("Find your stride", "Even tempo that sets a comfortable pace", Intent.RAMP),
        BlockSpec("Clear your head", "Light tracks for thinking on your feet", Intent.RESET),
        BlockSpec("Pick up the pace", "A little more push for the last stretch", Intent.ENERGY),
        BlockSpec("Familiar route", "Songs that feel like a walk you've done before", Intent.THROWBACK),
        BlockSpec("New scenery", "Something different for the same streets", Intent.DISCOVERY),
    ),
    Situation.DINNER: (
        BlockSpec("At the table", "Warm, easy tracks that leave room for conversation", Intent.RESET),
        BlockSpec("Crowd-pleasers", "Familiar songs everyone can settle into", Intent.THROWBACK),
        BlockSpec("Quiet background", "Present enough to fill the room, never loud", Intent.FOCUS),
        BlockSpec("Something to talk about", "Fresh picks that stay gentle", Intent.DISCOVERY),
    ),
    Situation.HANGING_OUT: (
        BlockSpec("Easy company", "Relaxed tracks that keep the mood light", Intent.RESET),
        BlockSpec("Turn it up a little", "Upbeat picks without taking over the room", Intent.ENERGY),
        BlockSpec("Everyone knows this one", "Sing-along throwbacks", Intent.THROWBACK),
        BlockSpec("Building momentum", "A gradual lift as the night picks up", Intent.RAMP),
        BlockSpec("Something to share", "New finds worth passing the aux for", Intent.DISCOVERY),
    ),
    Situation.PARTY: (
        BlockSpec("Peak energy", "Big tracks for a full room", Intent.ENERGY),
        BlockSpec("Getting started", "Raise the tempo as people arrive", Intent.RAMP),
        BlockSpec("Throwback bangers", "Songs the whole room knows", Intent.THROWBACK),
        BlockSpec("Fresh on the floor", "New picks that keep the energy up", Intent.DISCOVERY),
    ),
    Situation.LATE_NIGHT: (
        BlockSpec("Second wind", "More pulse for staying up", Intent.ENERGY),
        BlockSpec("Night shift focus", "Steady tracks for late work", Intent.FOCUS),
        BlockSpec("Winding down", "Softer picks for the end of the night", Intent.RESET),
        BlockSpec("Late-night classics", "Familiar songs that fit the hour", Intent.THROWBACK),
        BlockSpec("After-hours finds", "Something different while everyone else sleeps", Intent.DISCOVERY),
    ),
    Situation.CHILL: (
        BlockSpec("Slow down", "Low-pressure tracks to let the day go", Intent.RESET),
        BlockSpec("Easy attention", "Calm music you can half-listen to", Intent.FOCUS),
        BlockSpec("Comfort listening", "Familiar songs with nothing to prove", Intent.THROWBACK),
        BlockSpec("Gentle discoveries", "New picks that keep things mellow", Intent.DISCOVERY),
    ),
}


def plan_blocks(bucket: TimeBucket, situation: Situation) -> list[BlockSpec]:
    if situation != Situation.AUTO:
        return list(SITUATION_PRESETS[situation])
    return list(BUCKET_PRESETS[bucket])
