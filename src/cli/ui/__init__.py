"""CLI UI Components - Rich displays and the interactive sleep quiz."""

from src.cli.ui.display import (
    display_progress_bar,
    display_questions,
    display_score_card,
)
from src.cli.ui.quiz import SleepQuizInterface, run_assessment

__all__ = [
    "display_progress_bar",
    "display_questions",
    "display_score_card",
    "SleepQuizInterface",
    "run_assessment",
]
