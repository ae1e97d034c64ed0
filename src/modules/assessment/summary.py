"""Result summary helpers used by the score card."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from src.shared.constants import (
    BASELINE_SCORE,
    EXCELLENT_SCORE_THRESHOLD,
    FAIR_SCORE_THRESHOLD,
    GOOD_SCORE_THRESHOLD,
    POSITIVE_DELTA_THRESHOLD,
    STEADY_CATEGORY_THRESHOLD,
    STRONG_CATEGORY_THRESHOLD,
    WATCH_CATEGORY_THRESHOLD,
)


class ScoreTier(str, Enum):
    """Overall sleep score tiers."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class CategoryBand(str, Enum):
    """How a single category score reads on the card."""

    STRONG = "strong"
    STEADY = "steady"
    WATCH = "watch"
    WEAK = "weak"


@dataclass(frozen=True)
class ScoreRating:
    tier: ScoreTier
    message: str


_RATINGS = (
    (EXCELLENT_SCORE_THRESHOLD, ScoreRating(ScoreTier.EXCELLENT, "Excellent sleep last night!")),
    (GOOD_SCORE_THRESHOLD, ScoreRating(ScoreTier.GOOD, "Good sleep with some room for improvement")),
    (FAIR_SCORE_THRESHOLD, ScoreRating(ScoreTier.FAIR, "Your sleep last night needs some attention")),
)
_POOR_RATING = ScoreRating(ScoreTier.POOR, "Your sleep quality last night was poor")


def rate_score(score: int) -> ScoreRating:
    """Tier and headline for an overall score."""
    for threshold, rating in _RATINGS:
        if score >= threshold:
            return rating
    return _POOR_RATING


def category_band(score: int) -> CategoryBand:
    """Band for a single category score."""
    if score >= STRONG_CATEGORY_THRESHOLD:
        return CategoryBand.STRONG
    if score >= STEADY_CATEGORY_THRESHOLD:
        return CategoryBand.STEADY
    if score >= WATCH_CATEGORY_THRESHOLD:
        return CategoryBand.WATCH
    return CategoryBand.WEAK


def baseline_delta(score: int) -> int:
    """Difference from the static average."""
    return score - BASELINE_SCORE


def format_baseline_delta(score: int) -> str:
    """Badge text comparing a score to the static average, e.g. "+13% from avg".

    The "+" sign is only shown above the positive threshold, so scores just
    over the baseline read without a sign.
    """
    sign = "+" if score > POSITIVE_DELTA_THRESHOLD else ""
    return f"{sign}{baseline_delta(score)}% from avg"


def format_last_assessed(completed_at: datetime | None, now: datetime | None = None) -> str:
    """Header text for when the shown result was produced.

    Results from today read "Today"; older ones show the local date.
    """
    if completed_at is None:
        return "Not yet assessed"
    local = completed_at.astimezone()
    now = (now or datetime.now(local.tzinfo)).astimezone(local.tzinfo)
    if local.date() == now.date():
        return "Last assessed: Today"
    return f"Last assessed: {local.strftime('%b %d, %Y')}"
