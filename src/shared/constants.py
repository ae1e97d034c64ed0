"""Application-wide constants.

This module centralizes fixed values shared by the prompt builders, the
parsers and the heuristic scorer. Values that need to be configurable at
runtime should go in config.py instead.
"""

# ===================
# Scoring
# ===================

# Fixed scoring dimensions, in display order
CATEGORIES = ("Quality", "Duration", "Consistency", "Environment", "Habits")

MIN_CATEGORY_SCORE = 0
MAX_CATEGORY_SCORE = 100

# Neutral starting point for every category, also the static "average"
BASELINE_SCORE = 65

# Number of questions in a full assessment
QUESTION_COUNT = 5

# Fewer well-formed questions than this and the generated set is discarded
MIN_PARSED_QUESTIONS = 3

MIN_OPTIONS_PER_QUESTION = 2

RECOMMENDATION_COUNT = 3


# ===================
# Oracle Formats
# ===================

QUESTION_SENTINEL = "QUESTION:"

ANALYSIS_LABEL = "ANALYSIS:"
RECOMMENDATIONS_LABEL = "RECOMMENDATIONS:"
CATEGORY_SCORES_LABEL = "CATEGORY_SCORES:"

SECTION_LABELS = (ANALYSIS_LABEL, RECOMMENDATIONS_LABEL, CATEGORY_SCORES_LABEL)


# ===================
# Default Content
# ===================

# Order matters: slot 0 is duration, 1 onset, 2 waking, 3 morning, 4 devices
DEFAULT_QUESTIONS = (
    (
        "How many hours did you sleep last night?",
        (
            "Less than 5 hours (insufficient sleep)",
            "5-6 hours (somewhat below recommended)",
            "7-8 hours (optimal sleep duration)",
            "More than 8 hours (extended sleep)",
        ),
    ),
    (
        "How long did it take you to fall asleep last night?",
        (
            "Less than 5 minutes (fell asleep immediately)",
            "5-15 minutes (normal sleep onset)",
            "15-30 minutes (slightly delayed)",
            "30-60 minutes (significantly delayed)",
            "More than 60 minutes (severe difficulty falling asleep)",
        ),
    ),
    (
        "Did you wake up during the night?",
        (
            "Not at all (slept straight through)",
            "Once briefly (minimal disruption)",
            "2-3 times (moderate disruption)",
            "More than 3 times (fragmented sleep)",
            "Awake for extended periods (severely disrupted)",
        ),
    ),
    (
        "How did you feel when you woke up this morning?",
        (
            "Very refreshed and energetic (optimal recovery)",
            "Mostly rested (good recovery)",
            "Somewhat tired (incomplete recovery)",
            "Very tired (poor recovery)",
            "Exhausted (minimal recovery)",
        ),
    ),
    (
        "Did you use electronic devices within an hour before sleeping?",
        (
            "No devices at all (complete digital detox)",
            "Brief check only (minimal exposure)",
            "15-30 minutes (moderate exposure)",
            "30-60 minutes (significant exposure)",
            "Used until falling asleep (maximum exposure)",
        ),
    ),
)

DEFAULT_ANALYSIS = (
    "Based on your sleep data, you had a moderately restful night with some "
    "areas for improvement. Your sleep patterns indicate you could benefit from "
    "adjustments to your sleep environment and pre-bedtime routine."
)

DEFAULT_RECOMMENDATIONS = (
    "Dim all lights one hour before your target bedtime tonight",
    "Drink chamomile tea 30 minutes before bed to promote relaxation",
    "Set your bedroom temperature between 60-67°F for optimal sleep",
)


# ===================
# Initial Score Card
# ===================

# Shown before the first assessment completes
INITIAL_CATEGORY_SCORES = {
    "Quality": 72,
    "Duration": 80,
    "Consistency": 65,
    "Environment": 75,
    "Habits": 70,
}

INITIAL_RECOMMENDATIONS = (
    "Create a consistent pre-sleep ritual to signal your body it's time to rest",
    "Limit caffeine after 2pm to improve sleep quality",
    "Keep bedroom temperature between 60-67°F for optimal sleep conditions",
)


# ===================
# Result Summary
# ===================

EXCELLENT_SCORE_THRESHOLD = 85
GOOD_SCORE_THRESHOLD = 70
FAIR_SCORE_THRESHOLD = 50

STRONG_CATEGORY_THRESHOLD = 80
STEADY_CATEGORY_THRESHOLD = 65
WATCH_CATEGORY_THRESHOLD = 50

# Scores above this get an explicit "+" in the baseline comparison
POSITIVE_DELTA_THRESHOLD = 70
