"""
Per-item explanations.

Every intent owns five templates, each written as a pair: one phrasing that
cites the track's hook phrase and one that does not. Within a block a hook
phrase is cited at most once and templates are used round-robin, so two
reasons in the same block never read alike.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import NamedTuple

from app.models.catalog import CatalogItem
from app.models.context import Intent, Situation, TimeBucket, Tweak

Phrase = Callable[[CatalogItem], str]


class ReasonTemplate(NamedTuple):
    with_hook: Phrase
    without_hook: Phrase


def _energy_vibe(item: CatalogItem) -> str:
    for word in item.profile.vibe_words:
        if word in ("driving", "anthemic", "bold"):
            return word
    return item.profile.vibe()


REASON_TEMPLATES: dict[Intent, tuple[ReasonTemplate, ...]] = {
    Intent.FOCUS: (
        ReasonTemplate(
            lambda t: f"{t.creator} with {t.profile.hook_phrase}. Easy focus music that still feels alive.",
            lambda t: f"{t.creator}, {t.profile.genre} that keeps distractions low without going ambient.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator}'s {t.profile.hook_phrase} keeps you anchored. Good for deep work.",
            lambda t: f"{t.creator} stays out of the way but keeps the room from feeling empty.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} from {t.creator}. Texture without distraction.",
            lambda t: f"{t.creator}, clean {t.profile.genre}. Sits in the background without pulling focus.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator} leans on {t.profile.hook_phrase}. Familiar structure, low noise.",
            lambda t: f"{t.creator} holds steady energy without demanding attention.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} keeps {t.creator} grounded. Works when you need flow.",
            lambda t: f"{t.creator}, subtle {t.profile.genre}. Present but never intrusive.",
        ),
    ),
    Intent.RESET: (
        ReasonTemplate(
            lambda t: f"{t.creator} and that {t.profile.hook_phrase}. A mental reset that doesn't kill momentum.",
            lambda t: f"{t.profile.genre.capitalize()} with a {t.profile.vibe()} feel. Clears your head without pulling you out.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator}'s {t.profile.hook_phrase} gives you breathing room. Quick mental refresh.",
            lambda t: f"{t.creator}, {t.profile.vibe()} {t.profile.genre}. Lets your mind wander briefly.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} from {t.creator}. Shifts the mood without losing pace.",
            lambda t: f"{t.creator} creates space to reset. You can step back without fully disengaging.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator} uses {t.profile.hook_phrase} to ease tension. Small break, big impact.",
            lambda t: f"{t.creator}, gentle {t.profile.genre}. A moment to recalibrate.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} anchors {t.creator}. Calms without slowing down.",
            lambda t: f"{t.creator} offers a {t.profile.vibe()} pause. Clears the mental queue.",
        ),
    ),
    Intent.ENERGY: (
        ReasonTemplate(
            lambda t: f"{t.creator}, {t.profile.hook_phrase}. Lifts the energy without chaos.",
            lambda t: f"{t.creator} brings {_energy_vibe(t)} energy. Quick push when the day drags.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator} leans into {t.profile.hook_phrase}. Momentum boost, no overload.",
            lambda t: f"{t.creator}, high-energy {t.profile.genre}. Gets you moving without overwhelming.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} drives {t.creator}. Forward motion when you need it.",
            lambda t: f"{t.creator} delivers {t.profile.vibe()} force. Shakes off the slump.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator}'s {t.profile.hook_phrase} injects urgency. Raises tempo, keeps control.",
            lambda t: f"{t.creator}, punchy {t.profile.genre}. Pulls you up without feeling forced.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} gives {t.creator} its edge. Sharp energy, no strain.",
            lambda t: f"{t.creator} amplifies the room. Bold but focused.",
        ),
    ),
    Intent.RAMP: (
        ReasonTemplate(
            lambda t: f"{t.creator} with {t.profile.hook_phrase}. Upbeat without jumping straight into peak mode.",
            lambda t: f"{t.creator}, {t.profile.genre}. Raises the tempo smoothly.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator} uses {t.profile.hook_phrase} to build momentum. Gradual lift.",
            lambda t: f"{t.creator}, steady climb. Gets you there without rushing.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} from {t.creator}. Warm-up energy that scales naturally.",
            lambda t: f"{t.creator}, rising {t.profile.genre}. Sets the pace without forcing it.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator}'s {t.profile.hook_phrase} eases you in. Not yet peak, but heading there.",
            lambda t: f"{t.creator} bridges calm and active. Smooth transition mode.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} carries the {t.creator} ramp-up. Measured acceleration.",
            lambda t: f"{t.creator}, gradual {t.profile.genre}. Primes the energy curve.",
        ),
    ),
    Intent.THROWBACK: (
        ReasonTemplate(
            lambda t: f"{t.creator}, {t.profile.era}, and that {t.profile.hook_phrase}. Familiar energy that keeps the mood up.",
            lambda t: f"{t.creator}, {t.profile.era}. Familiar energy that keeps the mood up.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator} from {t.profile.era}. You know the {t.profile.hook_phrase}, and it still lands.",
            lambda t: f"{t.creator} from {t.profile.era}. You know this one, and it still lands.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.era.capitalize()} {t.creator} with {t.profile.hook_phrase}. Proven track, reliable energy.",
            lambda t: f"{t.profile.era.capitalize()} {t.creator}. Proven track, reliable energy.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator}, classic {t.profile.era} {t.profile.hook_phrase}. Comfort without nostalgia drag.",
            lambda t: f"{t.creator}, classic {t.profile.era}. Comfort without nostalgia drag.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator} from back then. The {t.profile.hook_phrase} still works now.",
            lambda t: f"{t.creator} from back then. {t.profile.era.capitalize()} familiarity that still works now.",
        ),
    ),
    Intent.DISCOVERY: (
        ReasonTemplate(
            lambda t: f"{t.profile.genre.capitalize()} built on {t.profile.hook_phrase}. New pick, but fits what you already play.",
            lambda t: f"{t.profile.genre.capitalize()} with a {t.profile.vibe(1)} edge. New pick, but fits what you already play.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator} and {t.profile.hook_phrase}. Fresh find that aligns with your range.",
            lambda t: f"{t.creator}, {t.profile.vibe()} {t.profile.genre}. Fresh find that aligns with your range.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator} offers {t.profile.hook_phrase} over {t.profile.vibe(1)} {t.profile.genre}. New to you, not a risk.",
            lambda t: f"{t.creator} offers {t.profile.vibe(1)} {t.profile.genre}. New to you, not a risk.",
        ),
        ReasonTemplate(
            lambda t: f"{t.creator}'s {t.profile.hook_phrase}, adjacent to what you know. Safe exploration.",
            lambda t: f"{t.creator}, {t.profile.genre} adjacent to what you know. Safe exploration.",
        ),
        ReasonTemplate(
            lambda t: f"{t.profile.hook_phrase.capitalize()} from {t.creator}. Expands the mix without disrupting it.",
            lambda t: f"{t.creator}, {t.profile.vibe()} sound. Expands the mix without disrupting it.",
        ),
    ),
}

REASON_SIGNALS: dict[Intent, str] = {
    Intent.FOCUS: "Low distraction",
    Intent.ENERGY: "Momentum boost",
    Intent.RAMP: "Gradual lift",
    Intent.RESET: "Mental reset",
    Intent.THROWBACK: "Familiar favorite",
    Intent.DISCOVERY: "Fresh find",
}

# Lead-in and body per situation; the time bucket phrase goes between them
SITUATION_WHY_NOW: dict[Situation, tuple[str, str]] = {
    Situation.AUTO: ("", ""),
    Situation.WORKING: ("Since you're working", "this moment favors focus and familiarity."),
    Situation.STUDYING: ("Since you're studying", "this moment prioritizes low distraction and consistent tempo."),
    Situation.WORKING_OUT: ("Since you're working out", "this moment prioritizes high energy and momentum."),
    Situation.WALKING: ("Since you're walking", "this moment balances an easy stride with a clear head."),
    Situation.DINNER: ("Since it's dinner", "this moment keeps energy warm without demanding attention."),
    Situation.HANGING_OUT: ("Since you're hanging out", "this moment favors relaxed, crowd-friendly picks."),
    Situation.PARTY: ("Since it's party time", "this moment pushes energy and bold choices."),
    Situation.LATE_NIGHT: ("Since you're up late", "this moment keeps a pulse going without getting loud."),
    Situation.CHILL: ("Since you're chilling", "this moment leans toward lighter, easier listening."),
}

BUCKET_PHRASES: dict[TimeBucket, str] = {
    TimeBucket.MORNING: "this morning",
    TimeBucket.MIDDAY: "this afternoon",
    TimeBucket.EVENING: "this evening",
    TimeBucket.LATE_NIGHT: "tonight",
}

INTENT_WHY_NOW: dict[Intent, str] = {
    Intent.FOCUS: "Built to keep you locked in without distraction.",
    Intent.RESET: "Built to reset your head without slowing you down.",
    Intent.ENERGY: "Built to give you a push when you need it.",
    Intent.RAMP: "Built to lift the tempo smoothly.",
    Intent.THROWBACK: "Built around reliable favorites.",
    Intent.DISCOVERY: "Built to shift texture while staying grounded.",
}

TWEAK_WHY_NOW: dict[Tweak, str] = {
    Tweak.NONE: "",
    Tweak.FAVOR_NEW: "Leaning toward newer picks.",
    Tweak.FAVOR_FAMILIAR: "Leaning toward familiar picks.",
    Tweak.NO_REPEATS: "No track shows up twice.",
}


@dataclass(frozen=True)
class ReasonState:
    """Hooks and template indices already spent in the current block."""

    used_hooks: frozenset[str] = field(default_factory=frozenset)
    used_templates: tuple[int, ...] = ()


def pick_template_index(count: int, used: tuple[int, ...]) -> int:
    for index in range(count):
        if index not in used:
            return index
    return len(used) % count


def generate_reason(item: CatalogItem, intent: Intent, state: ReasonState) -> tuple[str, ReasonState]:
    templates = REASON_TEMPLATES[intent]
    hook = item.profile.hook_phrase
    use_hook = hook not in state.used_hooks

    index = pick_template_index(len(templates), state.used_templates)
    template = templates[index]
    text = template.with_hook(item) if use_hook else template.without_hook(item)

    used_hooks = state.used_hooks | {hook} if use_hook else state.used_hooks
    return text, ReasonState(used_hooks=used_hooks, used_templates=state.used_templates + (index,))


def reason_signal(intent: Intent) -> str:
    return REASON_SIGNALS[intent]


def why_now(intent: Intent, situation: Situation, tweak: Tweak, bucket: TimeBucket) -> str:
    """
    Block explanation. A declared situation names itself and the time of day;
    otherwise the intent speaks for the block.
    """
    if situation != Situation.AUTO:
        lead, body = SITUATION_WHY_NOW[situation]
        text = f"{lead} {BUCKET_PHRASES[bucket]}, {body}"
    else:
        text = INTENT_WHY_NOW[intent]
    suffix = TWEAK_WHY_NOW[tweak]
    return f"{text} {suffix}" if suffix else text
