"""Assessment Module - Sleep questionnaire, results and session contract."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Protocol

from src.shared.constants import (
    CATEGORIES,
    MAX_CATEGORY_SCORE,
    MIN_CATEGORY_SCORE,
    MIN_OPTIONS_PER_QUESTION,
    RECOMMENDATION_COUNT,
)
from src.shared.exceptions import InvalidCategoryScoresError, ValidationError

# Question index -> exact option text
AnswerSet = dict[int, str]

# Category name -> score in [0, 100]
CategoryScores = dict[str, int]


class SessionPhase(str, Enum):
    """Lifecycle position of an assessment attempt."""

    IDLE = "idle"
    QUESTIONS_LOADING = "questions_loading"
    ANSWERING = "answering"
    INSIGHTS_LOADING = "insights_loading"
    COMPLETE = "complete"

    @property
    def is_loading(self) -> bool:
        return self in (SessionPhase.QUESTIONS_LOADING, SessionPhase.INSIGHTS_LOADING)


class ResultSource(str, Enum):
    """Where the category scores of a result came from."""

    ORACLE = "oracle"
    HEURISTIC = "heuristic"
    DEFAULT = "default"


@dataclass
class Question:
    """A multiple-choice question about last night's sleep."""

    text: str
    options: list[str]

    @property
    def is_well_formed(self) -> bool:
        return bool(self.text) and len(self.options) >= MIN_OPTIONS_PER_QUESTION


def clamp_score(value: int) -> int:
    """Clamp a category score into the valid range."""
    return max(MIN_CATEGORY_SCORE, min(MAX_CATEGORY_SCORE, value))


def overall_score(categories: Mapping[str, int]) -> int:
    """Overall score: the rounded mean of the category scores."""
    return round(sum(categories.values()) / len(categories))


@dataclass(frozen=True)
class AssessmentResult:
    """Outcome of one completed assessment.

    The overall score is derived from the categories on every access, so it
    always equals round(mean(categories)). Categories are a read-only view.
    """

    analysis: str
    recommendations: tuple[str, ...]
    categories: Mapping[str, int]
    source: ResultSource
    completed_at: datetime | None = None

    @classmethod
    def build(
        cls,
        analysis: str,
        recommendations: list[str] | tuple[str, ...],
        categories: CategoryScores,
        source: ResultSource,
        completed_at: datetime | None = None,
    ) -> "AssessmentResult":
        """Validate and normalise the pieces of a result.

        Raises:
            InvalidCategoryScoresError: If the keys are not exactly the five categories
            ValidationError: If there are not exactly three recommendations
        """
        if set(categories) != set(CATEGORIES):
            raise InvalidCategoryScoresError(list(categories))
        if len(recommendations) != RECOMMENDATION_COUNT:
            raise ValidationError(
                "recommendations",
                f"Expected {RECOMMENDATION_COUNT} recommendations, got {len(recommendations)}",
            )
        return cls(
            analysis=analysis,
            recommendations=tuple(recommendations),
            categories=MappingProxyType(
                {name: clamp_score(int(categories[name])) for name in CATEGORIES}
            ),
            source=source,
            completed_at=completed_at,
        )

    @property
    def overall_score(self) -> int:
        return overall_score(self.categories)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for the presentation layer."""

    phase: SessionPhase
    current_index: int
    questions: tuple[Question, ...]
    answers: AnswerSet
    result: AssessmentResult
    attempt_id: int

    @property
    def current_question(self) -> Question | None:
        if self.phase != SessionPhase.ANSWERING or not self.questions:
            return None
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return bool(self.questions) and self.current_index == len(self.questions) - 1


class TextGenerator(Protocol):
    """Anything that turns a prompt into free text.

    Implementations raise OracleError when no completion is available.
    """

    async def generate(self, prompt: str) -> str:
        ...


class IAssessmentSession(Protocol):
    """Operations the presentation layer may call on a session."""

    def snapshot(self) -> SessionSnapshot:
        """Current state as a read-only snapshot."""
        ...

    async def start(self) -> SessionSnapshot:
        """Begin a new attempt."""
        ...

    async def answer(self, index: int, value: str) -> SessionSnapshot:
        """Record an answer and advance."""
        ...

    def previous(self) -> SessionSnapshot:
        """Go back one question without discarding answers."""
        ...

    def next(self) -> SessionSnapshot:
        """Go forward past an answered question."""
        ...

    def cancel(self) -> SessionSnapshot:
        """Abandon the attempt and return to idle."""
        ...
