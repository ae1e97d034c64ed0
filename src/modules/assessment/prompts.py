"""Prompt builders and response parsers for the sleep assessment oracle.

The oracle returns free text with only loose formatting guarantees, so the
parsers here are line-oriented and bounded by the section labels defined in
src.shared.constants. They tolerate extra whitespace and blank lines but only
hand back a section when it is complete.
"""

import logging
import re
from dataclasses import dataclass

from src.modules.assessment.interface import AnswerSet, CategoryScores, Question, clamp_score
from src.shared.constants import (
    ANALYSIS_LABEL,
    CATEGORIES,
    CATEGORY_SCORES_LABEL,
    DEFAULT_QUESTIONS,
    MIN_PARSED_QUESTIONS,
    QUESTION_COUNT,
    QUESTION_SENTINEL,
    RECOMMENDATION_COUNT,
    RECOMMENDATIONS_LABEL,
    SECTION_LABELS,
)

logger = logging.getLogger(__name__)

_LIST_MARKER = re.compile(r"^(?:[-*•]\s*|\d+[.)]\s+)")
_SCORE_LINE = re.compile(r"^\s*([A-Za-z][A-Za-z ]*?)\s*:\s*(-?\d+)\s*(?:/\s*100|%)?\s*$")
_CANONICAL_CATEGORIES = {name.lower(): name for name in CATEGORIES}

QUESTION_PROMPT = f"""Generate {QUESTION_COUNT} detailed questions specifically about the user's PREVIOUS NIGHT's sleep (not their general sleep habits). Each question should have 4-5 detailed multiple choice options that give context and help users accurately assess their recent sleep quality.

Ask about these topics, in this order: how long they slept, how long it took to fall asleep, how often they woke during the night, how rested they felt this morning, and whether they used electronic devices before sleeping.

Format your response exactly like this example:

{QUESTION_SENTINEL} How many hours did you sleep last night?
Less than 5 hours (went to bed very late or woke up too early), 5-6 hours (somewhat insufficient), 7-8 hours (recommended amount), More than 8 hours (extended sleep period)

{QUESTION_SENTINEL} How long did it take you to fall asleep last night?
Less than 5 minutes (fell asleep almost immediately), 5-15 minutes (dozed off quickly), 15-30 minutes (some difficulty), 30-60 minutes (significant delay), More than 60 minutes (severe difficulty falling asleep)

Just provide the questions and detailed options in exactly this format - no introductions or explanations. Put all options for a question on the single line after it, separated by commas. Make each question specifically about LAST NIGHT's sleep (not general sleep patterns), and make the options detailed with contextual descriptions."""

ANALYSIS_INSTRUCTIONS = f"""Format your response exactly like this:
{ANALYSIS_LABEL} [2-3 sentence personalized analysis]

{RECOMMENDATIONS_LABEL}
[First recommendation under 15 words]
[Second recommendation under 15 words]
[Third recommendation under 15 words]

{CATEGORY_SCORES_LABEL}
""" + "\n".join(f"{name}: [score]" for name in CATEGORIES)


@dataclass
class ParsedAnalysis:
    """Pieces recovered from an analysis response.

    A piece is None when the oracle's text did not contain a usable version of
    it; the caller substitutes defaults or heuristic scores.
    """

    analysis: str | None = None
    recommendations: list[str] | None = None
    categories: CategoryScores | None = None

    @property
    def is_empty(self) -> bool:
        return self.analysis is None and self.recommendations is None and self.categories is None


def default_questions() -> list[Question]:
    """Fresh copy of the built-in question set."""
    return [Question(text=text, options=list(options)) for text, options in DEFAULT_QUESTIONS]


# =============================================================================
# Question generation
# =============================================================================

def build_question_prompt() -> str:
    """Prompt asking the oracle for the five last-night questions."""
    return QUESTION_PROMPT


def try_parse_question_response(text: str) -> list[Question] | None:
    """Parse generated questions, or None if too few are usable."""
    questions: list[Question] = []

    for segment in text.split(QUESTION_SENTINEL):
        lines = [line.strip() for line in segment.strip().splitlines()]
        if not lines or not lines[0]:
            continue

        options_text = " ".join(line for line in lines[1:] if line)
        question = Question(
            text=lines[0],
            options=[opt.strip() for opt in options_text.split(",") if opt.strip()],
        )
        if question.is_well_formed:
            questions.append(question)

    if len(questions) < MIN_PARSED_QUESTIONS:
        logger.debug("Only %d usable questions in oracle response", len(questions))
        return None
    return questions[:QUESTION_COUNT]


def parse_question_response(text: str) -> list[Question]:
    """Parse generated questions, falling back to the default set."""
    return try_parse_question_response(text) or default_questions()


# =============================================================================
# Analysis
# =============================================================================

def build_analysis_prompt(questions: list[Question], answers: AnswerSet) -> str:
    """Prompt asking the oracle to analyse the recorded answers."""
    answers_text = "\n\n".join(
        f"Question: {questions[index].text}\nAnswer: {value}"
        for index, value in sorted(answers.items())
        if 0 <= index < len(questions)
    )

    categories_text = "\n".join(
        f"   - {name} ({description})"
        for name, description in (
            ("Quality", "depth and restfulness"),
            ("Duration", "appropriate length"),
            ("Consistency", "regular patterns"),
            ("Environment", "bedroom conditions"),
            ("Habits", "pre-sleep behaviors"),
        )
    )

    return f"""Based on these answers about LAST NIGHT's sleep quality, provide:

1. A detailed AI analysis of the user's sleep (2-3 sentences that personalize the assessment based on their answers)
2. Exactly {RECOMMENDATION_COUNT} specific, personalized, and actionable recommendations to improve tonight's sleep
3. A breakdown of sleep quality across these {len(CATEGORIES)} categories, with scores between 0-100:
{categories_text}

{answers_text}

{ANALYSIS_INSTRUCTIONS}"""


def _extract_section(text: str, label: str) -> str | None:
    """Text between a section label and the next known label, or None."""
    start = text.find(label)
    if start == -1:
        return None
    start += len(label)

    end = len(text)
    for other in SECTION_LABELS:
        if other == label:
            continue
        position = text.find(other, start)
        if position != -1:
            end = min(end, position)

    return text[start:end].strip()


def _parse_recommendations(section: str | None) -> list[str] | None:
    if section is None:
        return None
    lines = [_LIST_MARKER.sub("", line.strip()).strip() for line in section.splitlines()]
    lines = [line for line in lines if line]
    if len(lines) < RECOMMENDATION_COUNT:
        return None
    return lines[:RECOMMENDATION_COUNT]


def _parse_category_scores(section: str | None) -> CategoryScores | None:
    if section is None:
        return None

    scores: CategoryScores = {}
    for line in section.splitlines():
        match = _SCORE_LINE.match(_LIST_MARKER.sub("", line.strip()))
        if not match:
            continue
        name = _CANONICAL_CATEGORIES.get(match.group(1).strip().lower())
        if name is None:
            continue
        scores[name] = clamp_score(int(match.group(2)))

    if set(scores) != set(CATEGORIES):
        logger.debug("Category scores incomplete: %s", sorted(scores))
        return None
    return scores


def parse_analysis_response(text: str) -> ParsedAnalysis:
    """Recover analysis, recommendations and category scores from oracle text."""
    analysis = _extract_section(text, ANALYSIS_LABEL)

    return ParsedAnalysis(
        analysis=analysis or None,
        recommendations=_parse_recommendations(_extract_section(text, RECOMMENDATIONS_LABEL)),
        categories=_parse_category_scores(_extract_section(text, CATEGORY_SCORES_LABEL)),
    )
