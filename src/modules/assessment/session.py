"""Assessment Session - the stateful orchestrator of one sleep assessment.

Lifecycle of an attempt:

    IDLE -> QUESTIONS_LOADING -> ANSWERING(i) -> INSIGHTS_LOADING -> COMPLETE

The two loading phases are the only points where the session awaits the
oracle. Oracle problems never escape: they are logged and replaced by default
content or heuristic scores, and every attempt that is not cancelled reaches
COMPLETE. Caller misuse (wrong phase, busy session, bad index) raises.
"""

import asyncio
import logging
from datetime import datetime, timezone

from src.modules.assessment.interface import (
    AnswerSet,
    AssessmentResult,
    Question,
    ResultSource,
    SessionPhase,
    SessionSnapshot,
    TextGenerator,
)
from src.modules.assessment.outcome import (
    OracleFailure,
    OracleOutcome,
    OracleSuccess,
    call_oracle,
)
from src.modules.assessment.prompts import (
    ParsedAnalysis,
    build_analysis_prompt,
    build_question_prompt,
    default_questions,
    parse_analysis_response,
    try_parse_question_response,
)
from src.modules.assessment.scoring import score
from src.shared.config import Settings
from src.shared.constants import (
    DEFAULT_ANALYSIS,
    DEFAULT_RECOMMENDATIONS,
    INITIAL_CATEGORY_SCORES,
    INITIAL_RECOMMENDATIONS,
)
from src.shared.exceptions import (
    InvalidAnswerError,
    InvalidStateTransitionError,
    OracleError,
    SessionBusyError,
)

logger = logging.getLogger(__name__)


def initial_result() -> AssessmentResult:
    """Score card shown before any assessment has completed."""
    return AssessmentResult.build(
        analysis="",
        recommendations=INITIAL_RECOMMENDATIONS,
        categories=dict(INITIAL_CATEGORY_SCORES),
        source=ResultSource.DEFAULT,
    )


def _parse_analysis_or_none(text: str) -> ParsedAnalysis | None:
    parsed = parse_analysis_response(text)
    return None if parsed.is_empty else parsed


def resolve_result(outcome: "OracleOutcome[ParsedAnalysis]", answers: AnswerSet) -> AssessmentResult:
    """Collapse an analysis outcome into a complete result.

    Each piece is taken from the oracle only when that piece parsed in full.
    Incomplete category scores are replaced wholesale by the heuristic.
    """
    if isinstance(outcome, OracleSuccess):
        parsed = outcome.value
    else:
        parsed = ParsedAnalysis()

    if parsed.categories is not None:
        categories, source = parsed.categories, ResultSource.ORACLE
    else:
        categories, source = score(answers), ResultSource.HEURISTIC

    return AssessmentResult.build(
        analysis=parsed.analysis or DEFAULT_ANALYSIS,
        recommendations=parsed.recommendations or DEFAULT_RECOMMENDATIONS,
        categories=categories,
        source=source,
        completed_at=datetime.now(timezone.utc),
    )


class AssessmentSession:
    """Owns quiz progress, answers and the latest result for one user.

    Args:
        oracle: Text generator used for questions and analysis. None runs the
            session fully offline (default questions, heuristic scoring).
        settings: Application settings; provides the oracle timeout.
        question_timeout: Override for the question-generation wait, in seconds.
        insight_timeout: Override for the analysis wait, in seconds.
    """

    def __init__(
        self,
        oracle: TextGenerator | None,
        settings: Settings,
        *,
        question_timeout: float | None = None,
        insight_timeout: float | None = None,
    ) -> None:
        self._oracle = oracle
        self._question_timeout = question_timeout or settings.oracle_timeout_seconds
        self._insight_timeout = insight_timeout or settings.oracle_timeout_seconds

        self._phase = SessionPhase.IDLE
        self._index = 0
        self._questions: list[Question] | None = None
        self._answers: AnswerSet = {}
        self._result = initial_result()
        # Bumped on every start and cancel; stale oracle replies are dropped
        self._epoch = 0
        # Question generation shared by every start until it resolves
        self._question_task: asyncio.Task | None = None
        # The single oracle call allowed to be outstanding
        self._pending: asyncio.Task | None = None

    # Read-only state

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def questions(self) -> tuple[Question, ...]:
        return tuple(self._questions or ())

    @property
    def answers(self) -> AnswerSet:
        return dict(self._answers)

    @property
    def result(self) -> AssessmentResult:
        return self._result

    @property
    def attempt_id(self) -> int:
        return self._epoch

    def snapshot(self) -> SessionSnapshot:
        """Current state as a read-only snapshot."""
        return SessionSnapshot(
            phase=self._phase,
            current_index=self._index,
            questions=tuple(
                Question(text=q.text, options=list(q.options)) for q in self._questions or ()
            ),
            answers=dict(self._answers),
            result=self._result,
            attempt_id=self._epoch,
        )

    # Mutators

    async def start(self) -> SessionSnapshot:
        """Begin a new attempt, generating questions on first use."""
        self._ensure_not_busy()
        if self._phase not in (SessionPhase.IDLE, SessionPhase.COMPLETE):
            raise InvalidStateTransitionError("start", self._phase.value)

        self._epoch += 1
        epoch = self._epoch
        self._answers = {}
        self._index = 0

        if self._questions is None:
            self._set_phase(SessionPhase.QUESTIONS_LOADING)
            if self._question_task is None:
                self._question_task = asyncio.ensure_future(self._generate_questions())
            task = self._question_task
            questions = await task
            if self._question_task is task:
                self._question_task = None
            if epoch != self._epoch:
                logger.info("Discarding questions for abandoned attempt %d", epoch)
                return self.snapshot()
            self._questions = questions

        self._set_phase(SessionPhase.ANSWERING)
        return self.snapshot()

    async def answer(self, index: int, value: str) -> SessionSnapshot:
        """Record the answer for a question and move on.

        Answering the last question runs the analysis and completes the attempt.
        """
        questions = self._require_answering("answer")
        if not 0 <= index < len(questions):
            raise InvalidAnswerError(index, len(questions))

        self._answers[index] = value

        if index == len(questions) - 1:
            return await self._complete()

        self._index = index + 1
        logger.debug("Advanced to question %d", self._index)
        return self.snapshot()

    def previous(self) -> SessionSnapshot:
        """Step back one question; recorded answers are kept."""
        self._require_answering("go back")
        if self._index == 0:
            raise InvalidStateTransitionError("go back from the first question", self._phase.value)
        self._index -= 1
        return self.snapshot()

    def next(self) -> SessionSnapshot:
        """Step forward past a question that already has an answer."""
        questions = self._require_answering("go forward")
        if self._index not in self._answers or self._index >= len(questions) - 1:
            raise InvalidStateTransitionError("go forward", self._phase.value)
        self._index += 1
        return self.snapshot()

    def cancel(self) -> SessionSnapshot:
        """Abandon the current attempt and return to idle.

        Safe to call while an oracle call is in flight; its reply is ignored.
        """
        if self._phase != SessionPhase.IDLE:
            logger.info("Assessment attempt %d cancelled during %s", self._epoch, self._phase.value)
        self._epoch += 1
        self._answers = {}
        self._index = 0
        self._set_phase(SessionPhase.IDLE)
        return self.snapshot()

    # Internals

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase != self._phase:
            logger.debug("Session phase %s -> %s", self._phase.value, phase.value)
        self._phase = phase

    def _ensure_not_busy(self) -> None:
        if self._phase.is_loading:
            raise SessionBusyError(self._phase.value)

    def _require_answering(self, action: str) -> list[Question]:
        self._ensure_not_busy()
        if self._phase != SessionPhase.ANSWERING or not self._questions:
            raise InvalidStateTransitionError(action, self._phase.value)
        return self._questions

    async def _ask(self, prompt: str, parse, timeout: float) -> OracleOutcome:
        if self._oracle is None:
            return OracleFailure(OracleError("No text generator configured"))
        if self._pending is not None:
            # A call from an abandoned attempt is still running
            await asyncio.wait([self._pending])

        task = asyncio.ensure_future(call_oracle(self._oracle, prompt, parse, timeout))
        self._pending = task
        try:
            return await task
        finally:
            if self._pending is task:
                self._pending = None

    async def _generate_questions(self) -> list[Question]:
        outcome = await self._ask(
            build_question_prompt(),
            try_parse_question_response,
            self._question_timeout,
        )
        if isinstance(outcome, OracleSuccess):
            logger.debug("Using %d generated questions", len(outcome.value))
            return outcome.value

        logger.info("Using default questions")
        return default_questions()

    async def _complete(self) -> SessionSnapshot:
        epoch = self._epoch
        questions = list(self._questions or ())
        answers = dict(self._answers)
        self._set_phase(SessionPhase.INSIGHTS_LOADING)

        outcome = await self._ask(
            build_analysis_prompt(questions, answers),
            _parse_analysis_or_none,
            self._insight_timeout,
        )
        if epoch != self._epoch:
            logger.info("Discarding analysis for abandoned attempt %d", epoch)
            return self.snapshot()

        self._result = resolve_result(outcome, answers)
        self._set_phase(SessionPhase.COMPLETE)
        logger.info(
            "Assessment attempt %d complete: score %d (%s)",
            epoch,
            self._result.overall_score,
            self._result.source.value,
        )
        return self.snapshot()
