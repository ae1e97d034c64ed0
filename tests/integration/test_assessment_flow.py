"""Integration tests for the assessment flow from start to score card."""

import pytest
from typer.testing import CliRunner

from src.cli.main import app
from src.cli.ui.quiz import run_assessment
from src.modules.assessment import (
    AssessmentSession,
    ResultSource,
    SessionPhase,
    default_questions,
    rate_score,
    score,
)
from src.shared.constants import CATEGORIES, DEFAULT_ANALYSIS


class ScriptedInterface:
    """Quiz interface that replays a fixed list of commands."""

    def __init__(self, commands):
        self.commands = list(commands)
        self.shown = []

    def display_header(self):
        pass

    def display_question(self, snapshot):
        self.shown.append(snapshot.current_index)

    def get_choice(self, option_count):
        return self.commands.pop(0)


class TestAssessmentFlow:
    """End-to-end attempts against scripted text generators."""

    @pytest.mark.asyncio
    async def test_full_attempt_with_generator(self, settings, mock_oracle):
        session = AssessmentSession(mock_oracle, settings)

        snapshot = await session.start()
        for index, question in enumerate(snapshot.questions):
            snapshot = await session.answer(index, question.options[0])

        result = snapshot.result
        assert snapshot.phase == SessionPhase.COMPLETE
        assert result.source == ResultSource.ORACLE
        assert result.analysis.startswith("You slept a healthy amount")
        assert len(result.recommendations) == 3
        assert result.overall_score == round(sum(result.categories.values()) / 5)
        assert result.overall_score == 75

    @pytest.mark.asyncio
    async def test_full_attempt_offline(self, settings, best_answers):
        session = AssessmentSession(None, settings)

        snapshot = await session.start()
        assert [q.text for q in snapshot.questions] == [q.text for q in default_questions()]
        for index in range(len(snapshot.questions)):
            snapshot = await session.answer(index, best_answers[index])

        result = snapshot.result
        assert result.source == ResultSource.HEURISTIC
        assert result.categories == score(best_answers)
        assert result.analysis == DEFAULT_ANALYSIS
        assert set(result.categories) == set(CATEGORIES)

    @pytest.mark.asyncio
    async def test_failing_generator_still_completes(self, settings, failing_oracle, worst_answers):
        session = AssessmentSession(failing_oracle, settings)

        await session.start()
        for index in range(5):
            snapshot = await session.answer(index, worst_answers[index])

        assert snapshot.phase == SessionPhase.COMPLETE
        assert snapshot.result.source == ResultSource.HEURISTIC
        assert rate_score(snapshot.result.overall_score).message

    @pytest.mark.asyncio
    async def test_retake_reuses_questions(self, settings, mock_oracle):
        session = AssessmentSession(mock_oracle, settings)

        first = await session.start()
        for index, question in enumerate(first.questions):
            await session.answer(index, question.options[-1])
        first_result = session.result

        second = await session.start()

        assert second.phase == SessionPhase.ANSWERING
        assert second.answers == {}
        assert [q.text for q in second.questions] == [q.text for q in first.questions]
        assert second.attempt_id > first.attempt_id
        assert session.result is first_result


class TestRunAssessment:
    """Tests for the interactive loop driven by a scripted interface."""

    @pytest.mark.asyncio
    async def test_back_and_forward_then_finish(self, settings):
        session = AssessmentSession(None, settings)
        interface = ScriptedInterface([
            ("answer", 0),
            ("back", None),
            ("next", None),
            ("answer", 1),
            ("answer", 2),
            ("answer", 0),
            ("answer", 0),
        ])

        snapshot = await run_assessment(session, interface)

        assert snapshot.phase == SessionPhase.COMPLETE
        assert interface.shown == [0, 1, 0, 1, 2, 3, 4]
        assert snapshot.answers[0] == default_questions()[0].options[0]

    @pytest.mark.asyncio
    async def test_quit_cancels(self, settings):
        session = AssessmentSession(None, settings)
        interface = ScriptedInterface([("answer", 0), ("quit", None)])

        snapshot = await run_assessment(session, interface)

        assert snapshot.phase == SessionPhase.IDLE
        assert snapshot.answers == {}

    @pytest.mark.asyncio
    async def test_next_without_answer_stays_put(self, settings):
        session = AssessmentSession(None, settings)
        interface = ScriptedInterface([
            ("next", None),
            ("back", None),
            ("quit", None),
        ])

        await run_assessment(session, interface)

        assert interface.shown == [0, 0, 0]


class TestCli:
    """Tests for the typer commands."""

    def test_questions_command(self):
        result = CliRunner().invoke(app, ["questions"])

        assert result.exit_code == 0
        assert default_questions()[0].text in result.output

    def test_offline_assessment(self):
        result = CliRunner().invoke(app, ["assess", "--offline"], input="1\n1\n1\n1\n1\nn\n")

        assert result.exit_code == 0
        assert "Your Sleep Assessment Results" in result.output
        assert "Not yet assessed" in result.output
        assert "Last assessed: Today" in result.output
