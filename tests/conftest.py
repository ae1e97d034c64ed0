"""Test configuration and fixtures."""

import sys
from pathlib import Path

# Load environment variables before any imports that need them
from dotenv import load_dotenv
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Ensure src is in path
sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import AsyncMock

from src.shared.config import Settings
from src.shared.exceptions import OracleError


GENERATED_QUESTIONS = """QUESTION: How many hours of sleep did you get last night?
Less than 5 hours (cut short), 5-6 hours (a bit short), 7-8 hours (right on target), More than 8 hours (long night)

QUESTION: How quickly did you fall asleep last night?
Less than 5 minutes (out like a light), 5-15 minutes (normal), 15-30 minutes (took a while), 30-60 minutes (restless), More than 60 minutes (could not settle)

QUESTION: How often did you wake during the night?
Not at all (solid sleep), Once briefly (quick wake), 2-3 times (broken up), More than 3 times (very broken), Awake for extended periods (long stretches awake)

QUESTION: How did you feel this morning?
Very refreshed (ready to go), Mostly rested (fine), Somewhat tired (sluggish), Very tired (dragging), Exhausted (wiped out)

QUESTION: Did you look at screens before bed last night?
No devices (screen free), Brief check only (a glance), 15-30 minutes (some scrolling), 30-60 minutes (a lot of scrolling), Used until falling asleep (phone in hand)
"""

ANALYSIS_RESPONSE = """ANALYSIS: You slept a healthy amount and settled quickly. Light screen use may have delayed deep sleep slightly.

RECOMMENDATIONS:
Put your phone in another room at bedtime
Keep the same wake time tomorrow morning
Open the curtains within minutes of waking

CATEGORY_SCORES:
Quality: 82
Duration: 88
Consistency: 74
Environment: 70
Habits: 61
"""


@pytest.fixture
def settings():
    """Settings isolated from the developer's environment."""
    return Settings(
        _env_file=None,
        anthropic_api_key=None,
        oracle_timeout_seconds=1.0,
    )


@pytest.fixture
def mock_oracle():
    """Text generator that answers both prompts with well-formed text."""
    oracle = AsyncMock()

    async def mock_generate(prompt):
        if prompt.startswith("Generate"):
            return GENERATED_QUESTIONS
        return ANALYSIS_RESPONSE

    oracle.generate = AsyncMock(side_effect=mock_generate)
    return oracle


@pytest.fixture
def failing_oracle():
    """Text generator that is always unavailable."""
    oracle = AsyncMock()
    oracle.generate = AsyncMock(side_effect=OracleError("service unavailable"))
    return oracle


@pytest.fixture
def best_answers():
    """The best option of every default question."""
    return {
        0: "7-8 hours (optimal sleep duration)",
        1: "Less than 5 minutes (fell asleep immediately)",
        2: "Not at all (slept straight through)",
        3: "Very refreshed and energetic (optimal recovery)",
        4: "No devices at all (complete digital detox)",
    }


@pytest.fixture
def worst_answers():
    """The worst option of every default question."""
    return {
        0: "Less than 5 hours (insufficient sleep)",
        1: "More than 60 minutes (severe difficulty falling asleep)",
        2: "Awake for extended periods (severely disrupted)",
        3: "Exhausted (minimal recovery)",
        4: "Used until falling asleep (maximum exposure)",
    }


@pytest.fixture
def generated_questions_text():
    """Oracle reply with five well-formed questions."""
    return GENERATED_QUESTIONS


@pytest.fixture
def analysis_response_text():
    """Oracle reply with all three analysis sections."""
    return ANALYSIS_RESPONSE
