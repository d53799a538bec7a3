"""
skillgate: adaptive assessment and eligibility engine.

Pure decision functions over a learner's self-assessment, quiz attempts and
coding submissions. See ``skillgate.engine`` for the exposed operations.
"""

from skillgate.engine import (
    AssessmentEngine,
    classify_proficiency,
    evaluate_eligibility,
    filter_quizzes,
    resolve_coding_tier,
    select_questions,
)

__version__ = "1.0.0"

__all__ = [
    "AssessmentEngine",
    "classify_proficiency",
    "evaluate_eligibility",
    "filter_quizzes",
    "resolve_coding_tier",
    "select_questions",
]
