"""Assessment Module - Sleep questionnaire, oracle parsing and scoring.

Usage:
    from src.modules.assessment import AssessmentSession
    from src.modules.llm.service import create_oracle

    session = AssessmentSession(create_oracle(settings), settings)
    snapshot = await session.start()
"""

from src.modules.assessment.interface import (
    AnswerSet,
    AssessmentResult,
    CategoryScores,
    IAssessmentSession,
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
    OracleUnparseable,
    call_oracle,
)
from src.modules.assessment.prompts import (
    ParsedAnalysis,
    build_analysis_prompt,
    build_question_prompt,
    default_questions,
    parse_analysis_response,
    parse_question_response,
)
from src.modules.assessment.scoring import classify, score
from src.modules.assessment.session import AssessmentSession, initial_result, resolve_result
from src.modules.assessment.summary import (
    CategoryBand,
    ScoreRating,
    ScoreTier,
    category_band,
    format_baseline_delta,
    format_last_assessed,
    rate_score,
)

__all__ = [
    # Interface types
    "AnswerSet",
    "AssessmentResult",
    "CategoryScores",
    "IAssessmentSession",
    "Question",
    "ResultSource",
    "SessionPhase",
    "SessionSnapshot",
    "TextGenerator",
    # Oracle outcomes
    "OracleFailure",
    "OracleOutcome",
    "OracleSuccess",
    "OracleUnparseable",
    "call_oracle",
    # Prompt-response parser
    "ParsedAnalysis",
    "build_analysis_prompt",
    "build_question_prompt",
    "default_questions",
    "parse_analysis_response",
    "parse_question_response",
    # Heuristic scorer
    "classify",
    "score",
    # Session
    "AssessmentSession",
    "initial_result",
    "resolve_result",
    # Summary
    "CategoryBand",
    "ScoreRating",
    "ScoreTier",
    "category_band",
    "format_baseline_delta",
    "format_last_assessed",
    "rate_score",
]
