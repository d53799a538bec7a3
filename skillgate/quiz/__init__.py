"""
Quiz module for question sampling and catalogue filtering.

This module provides:
- QuestionSelector: level-weighted, shuffled question subsets
- filter_available_quizzes: topic / readiness filtering of the catalogue
- summarize_attempts: attempt-history statistics

Difficulty buckets:
- Easy: explicit, or mcq with 4 or fewer options
- Medium: explicit, or mcq with more than 4 options
- Hard: explicit, or any coding question
"""

from .attempt_stats import AttemptStats, summarize_attempts
from .question_selector import (
    LEVEL_MIX,
    MAX_SUBSET_SIZE,
    SAMPLING_THRESHOLD,
    QuestionSelector,
    bucket_by_difficulty,
    select_adaptive_questions,
)
from .quiz_filter import (
    READY_TO_START_MIN_MATCHES,
    QuizAvailability,
    filter_available_quizzes,
    matching_questions,
    preview_quizzes,
)

__all__ = [
    "AttemptStats",
    "summarize_attempts",
    "LEVEL_MIX",
    "MAX_SUBSET_SIZE",
    "SAMPLING_THRESHOLD",
    "QuestionSelector",
    "bucket_by_difficulty",
    "select_adaptive_questions",
    "READY_TO_START_MIN_MATCHES",
    "QuizAvailability",
    "filter_available_quizzes",
    "matching_questions",
    "preview_quizzes",
]
