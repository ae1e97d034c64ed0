"""Heuristic Scorer - deterministic category scores from recorded answers.

Used whenever the oracle cannot provide a complete set of category scores.
Each question slot has an ordered list of rules; the first rule whose pattern
occurs in the answer text applies its deltas. Slots are positional: slot 0 is
always the sleep-duration question regardless of how it was worded.

The delta figures are fixed constants and are intentionally not smooth
(e.g. "7-8 hours" outranks "More than 8 hours").
"""

from dataclasses import dataclass, field
from typing import Mapping

from src.modules.assessment.interface import AnswerSet, CategoryScores, clamp_score
from src.shared.constants import BASELINE_SCORE, CATEGORIES


@dataclass(frozen=True)
class SlotRule:
    """Substring pattern and the category deltas it triggers."""

    pattern: str
    deltas: Mapping[str, int] = field(default_factory=dict)

    def matches(self, answer: str) -> bool:
        return self.pattern in answer


# Slot 0: hours slept
DURATION_RULES = (
    SlotRule("7-8 hours", {"Duration": 25, "Consistency": 10}),
    SlotRule("More than 8 hours", {"Duration": 15, "Consistency": 5}),
    SlotRule("5-6 hours", {"Duration": -10, "Consistency": -5}),
    SlotRule("Less than 5 hours", {"Duration": -25, "Consistency": -15}),
)

# Slot 1: time to fall asleep
ONSET_RULES = (
    SlotRule("Less than 5 minutes", {"Quality": 15, "Habits": 10}),
    SlotRule("5-15 minutes", {"Quality": 10, "Habits": 5}),
    SlotRule("15-30 minutes"),
    SlotRule("30-60 minutes", {"Quality": -10, "Habits": -10}),
    SlotRule("More than 60 minutes", {"Quality": -20, "Habits": -20}),
)

# Slot 2: waking during the night
WAKING_RULES = (
    SlotRule("Not at all", {"Quality": 20, "Environment": 10}),
    SlotRule("Once briefly", {"Quality": 10, "Environment": 5}),
    SlotRule("2-3 times", {"Quality": -10, "Environment": -5}),
    SlotRule("More than 3 times", {"Quality": -20, "Environment": -10}),
    SlotRule("Awake for extended", {"Quality": -30, "Environment": -15}),
)

# Slot 3: how rested on waking
MORNING_RULES = (
    SlotRule("Very refreshed", {"Quality": 20}),
    SlotRule("Mostly rested", {"Quality": 10}),
    SlotRule("Somewhat tired"),
    SlotRule("Very tired", {"Quality": -15}),
    SlotRule("Exhausted", {"Quality": -25}),
)

# Slot 4: screens before bed
DEVICE_RULES = (
    SlotRule("No devices", {"Habits": 20, "Environment": 10}),
    SlotRule("Brief check only", {"Habits": 10, "Environment": 5}),
    SlotRule("15-30 minutes", {"Habits": -5, "Environment": -5}),
    SlotRule("30-60 minutes", {"Habits": -15, "Environment": -10}),
    SlotRule("Used until falling asleep", {"Habits": -25, "Environment": -15}),
)

SLOT_RULES: tuple[tuple[SlotRule, ...], ...] = (
    DURATION_RULES,
    ONSET_RULES,
    WAKING_RULES,
    MORNING_RULES,
    DEVICE_RULES,
)


def baseline_scores() -> CategoryScores:
    """Every category at the neutral baseline."""
    return {name: BASELINE_SCORE for name in CATEGORIES}


def classify(slot: int, answer: str) -> SlotRule | None:
    """First rule of the slot whose pattern occurs in the answer."""
    if not 0 <= slot < len(SLOT_RULES):
        return None
    for rule in SLOT_RULES[slot]:
        if rule.matches(answer):
            return rule
    return None


def score(answers: AnswerSet) -> CategoryScores:
    """Compute category scores from the recorded answers.

    Missing slots and unrecognised answers leave the baseline untouched.
    """
    scores = baseline_scores()

    for slot in range(len(SLOT_RULES)):
        answer = answers.get(slot)
        if not answer:
            continue
        rule = classify(slot, answer)
        if rule is None:
            continue
        for category, delta in rule.deltas.items():
            scores[category] += delta

    return {name: clamp_score(value) for name, value in scores.items()}
