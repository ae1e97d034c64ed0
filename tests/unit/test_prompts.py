"""Unit tests for prompt building and oracle response parsing."""

import pytest

from src.modules.assessment.interface import Question
from src.modules.assessment.prompts import (
    build_analysis_prompt,
    build_question_prompt,
    default_questions,
    parse_analysis_response,
    parse_question_response,
    try_parse_question_response,
)
from src.shared.constants import CATEGORIES, DEFAULT_QUESTIONS


class TestQuestionPrompt:
    """Tests for the question-generation prompt."""

    def test_asks_about_last_night(self):
        prompt = build_question_prompt()
        assert "PREVIOUS NIGHT" in prompt
        assert "5 detailed questions" in prompt

    def test_includes_sentinel_format(self):
        assert "QUESTION:" in build_question_prompt()

    def test_prompt_is_stable(self):
        assert build_question_prompt() == build_question_prompt()


class TestParseQuestionResponse:
    """Tests for parsing generated questions."""

    def test_well_formed_response(self, generated_questions_text):
        questions = parse_question_response(generated_questions_text)

        assert len(questions) == 5
        assert all(len(q.options) >= 2 for q in questions)
        assert questions[0].text == "How many hours of sleep did you get last night?"
        assert questions[0].options[2] == "7-8 hours (right on target)"

    def test_single_segment_falls_back_to_defaults(self):
        text = "QUESTION: How did you sleep?\nWell, Badly"

        questions = parse_question_response(text)

        assert len(questions) == 5
        assert questions == default_questions()

    def test_free_text_falls_back_to_defaults(self):
        assert parse_question_response("I'm sorry, I can't help with that.") == default_questions()

    def test_empty_response_falls_back_to_defaults(self):
        assert parse_question_response("") == default_questions()

    def test_segments_without_options_do_not_count(self):
        text = (
            "QUESTION: First?\nA, B\n"
            "QUESTION: Second?\n"
            "QUESTION: Third?\nA, B\n"
        )
        assert try_parse_question_response(text) is None

    def test_three_questions_are_enough(self):
        text = (
            "QUESTION: First?\nA, B\n"
            "QUESTION: Second?\nC, D, E\n"
            "QUESTION: Third?\nF, G\n"
        )
        questions = try_parse_question_response(text)

        assert questions is not None
        assert [q.text for q in questions] == ["First?", "Second?", "Third?"]

    def test_options_split_across_lines_are_joined(self):
        text = (
            "QUESTION: First?\nA,\nB, C\n"
            "QUESTION: Second?\nA, B\n"
            "QUESTION: Third?\nA, B\n"
        )
        questions = try_parse_question_response(text)

        assert questions[0].options == ["A", "B", "C"]

    def test_preamble_and_blank_lines_are_ignored(self, generated_questions_text):
        text = "Here are your questions:\n\n" + generated_questions_text.replace("\n", "\n\n")

        questions = parse_question_response(text)

        assert len(questions) == 5
        assert questions[0].text.startswith("How many hours")

    def test_extra_questions_are_truncated(self, generated_questions_text):
        text = generated_questions_text + "\nQUESTION: One more?\nYes, No\n"
        assert len(parse_question_response(text)) == 5

    def test_default_questions_are_fresh_copies(self):
        first = default_questions()
        first[0].options.append("Mutated")

        assert default_questions()[0].options == list(DEFAULT_QUESTIONS[0][1])


class TestAnalysisPrompt:
    """Tests for the analysis prompt."""

    def test_serializes_answers_in_index_order(self):
        questions = [Question("Q one?", ["a", "b"]), Question("Q two?", ["c", "d"])]
        prompt = build_analysis_prompt(questions, {1: "d", 0: "a"})

        first = prompt.index("Question: Q one?\nAnswer: a")
        second = prompt.index("Question: Q two?\nAnswer: d")
        assert first < second

    def test_sections_requested_in_order(self):
        prompt = build_analysis_prompt(default_questions(), {0: "7-8 hours"})

        analysis = prompt.index("ANALYSIS:")
        recommendations = prompt.index("RECOMMENDATIONS:")
        scores = prompt.index("CATEGORY_SCORES:")
        assert analysis < recommendations < scores

    def test_lists_every_category(self):
        prompt = build_analysis_prompt(default_questions(), {})
        for name in CATEGORIES:
            assert f"{name}: [score]" in prompt


class TestParseAnalysisResponse:
    """Tests for parsing the analysis response."""

    def test_full_response(self, analysis_response_text):
        parsed = parse_analysis_response(analysis_response_text)

        assert parsed.analysis.startswith("You slept a healthy amount")
        assert parsed.recommendations == [
            "Put your phone in another room at bedtime",
            "Keep the same wake time tomorrow morning",
            "Open the curtains within minutes of waking",
        ]
        assert parsed.categories == {
            "Quality": 82,
            "Duration": 88,
            "Consistency": 74,
            "Environment": 70,
            "Habits": 61,
        }
        assert not parsed.is_empty

    def test_missing_category_section(self, analysis_response_text):
        text = analysis_response_text.split("CATEGORY_SCORES:")[0]

        parsed = parse_analysis_response(text)

        assert parsed.categories is None
        assert parsed.analysis is not None
        assert parsed.recommendations is not None

    def test_four_of_five_categories_is_rejected(self, analysis_response_text):
        text = analysis_response_text.replace("Habits: 61\n", "")
        assert parse_analysis_response(text).categories is None

    def test_malformed_score_lines_are_dropped_individually(self, analysis_response_text):
        text = analysis_response_text.replace("Habits: 61", "Habits: 61\nNoise: high\nnot a score line")
        assert parse_analysis_response(text).categories["Habits"] == 61

    def test_non_integer_score_invalidates_category(self, analysis_response_text):
        text = analysis_response_text.replace("Quality: 82", "Quality: great")
        assert parse_analysis_response(text).categories is None

    def test_out_of_range_scores_are_clamped(self, analysis_response_text):
        text = analysis_response_text.replace("Quality: 82", "Quality: 140").replace(
            "Habits: 61", "Habits: -5"
        )
        categories = parse_analysis_response(text).categories

        assert categories["Quality"] == 100
        assert categories["Habits"] == 0

    def test_category_names_are_case_insensitive(self, analysis_response_text):
        text = analysis_response_text.replace("Quality: 82", "quality: 82/100")
        assert parse_analysis_response(text).categories["Quality"] == 82

    def test_too_few_recommendations(self):
        text = """ANALYSIS: Fine night.

RECOMMENDATIONS:
Sleep earlier
Drink less coffee

CATEGORY_SCORES:
Quality: 70
"""
        assert parse_analysis_response(text).recommendations is None

    def test_extra_recommendations_keep_first_three(self, analysis_response_text):
        text = analysis_response_text.replace(
            "Open the curtains within minutes of waking",
            "Open the curtains within minutes of waking\nTake a short walk after lunch",
        )
        recommendations = parse_analysis_response(text).recommendations

        assert len(recommendations) == 3
        assert "Take a short walk after lunch" not in recommendations

    def test_list_markers_are_stripped(self, analysis_response_text):
        text = analysis_response_text.replace(
            "Put your phone", "1. Put your phone"
        ).replace("Keep the same", "- Keep the same")
        recommendations = parse_analysis_response(text).recommendations

        assert recommendations[0] == "Put your phone in another room at bedtime"
        assert recommendations[1] == "Keep the same wake time tomorrow morning"

    def test_missing_analysis(self, analysis_response_text):
        text = analysis_response_text.replace(
            "ANALYSIS: You slept a healthy amount and settled quickly. "
            "Light screen use may have delayed deep sleep slightly.",
            "ANALYSIS:",
        )
        assert parse_analysis_response(text).analysis is None

    def test_analysis_without_blank_line_separator(self):
        text = "ANALYSIS: Short night.\nRECOMMENDATIONS:\nA\nB\nC\nCATEGORY_SCORES:\nQuality: 1"
        parsed = parse_analysis_response(text)

        assert parsed.analysis == "Short night."
        assert parsed.recommendations == ["A", "B", "C"]

    @pytest.mark.parametrize("text", ["", "No idea.", "RECOMMENDATIONS:\nOnly one"])
    def test_unusable_text_is_empty(self, text):
        assert parse_analysis_response(text).is_empty
