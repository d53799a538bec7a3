"""
Self-assessment builder.

Turns the learner's per-topic star ratings into a SkillAssessment snapshot:
overall level, average rating, rated topics and the per-topic expected
difficulty used later to filter quizzes.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone

from loguru import logger

from skillgate.assessment.rating_normalizer import (
    is_rated,
    rating_to_difficulty,
    resolve_rating,
)
from skillgate.core.levels import Level, Topic
from skillgate.core.models import SkillAssessment

MIN_RATING = 0
MAX_RATING = 5

# Average-rating cut-offs for the overall level.
ADVANCED_AVG_RATING = 4.0
INTERMEDIATE_AVG_RATING = 2.5


def normalize_ratings(ratings: Mapping[str, int] | None) -> dict[str, int]:
    """
    Project arbitrary rating keys onto the canonical vocabulary.

    Keys resolve the same way rating lookups do (exact, case-insensitive,
    alias); unknown keys are dropped and missing topics default to 0.
    Values are clamped to 0-5.
    """
    normalized: dict[str, int] = {}
    for topic in Topic:
        value = resolve_rating(ratings, topic) or 0
        normalized[topic.value] = max(MIN_RATING, min(MAX_RATING, value))
    return normalized


def level_from_average(avg_rating: float) -> Level:
    if avg_rating >= ADVANCED_AVG_RATING:
        return Level.ADVANCED
    if avg_rating >= INTERMEDIATE_AVG_RATING:
        return Level.INTERMEDIATE
    return Level.BEGINNER


def build_skill_assessment(
    ratings: Mapping[str, int] | None,
    now: datetime | None = None,
) -> SkillAssessment:
    """
    Build a SkillAssessment from raw self-ratings.

    The average runs over all six canonical topics, unrated ones counting as
    0. With nothing rated the result is Beginner with an average of 0 and
    ``has_ratings`` is False.

    Args:
        ratings: Topic -> 0-5 rating
        now: Timestamp override (defaults to UTC now)

    Returns:
        Frozen SkillAssessment
    """
    normalized = normalize_ratings(ratings)
    selected = [topic for topic, rating in normalized.items() if is_rated(rating)]

    if selected:
        avg_rating = round(sum(normalized.values()) / len(normalized), 1)
        level = level_from_average(avg_rating)
    else:
        avg_rating = 0.0
        level = Level.BEGINNER

    difficulty_map = {topic: rating_to_difficulty(normalized[topic]) for topic in selected}

    logger.debug(
        f"Self-assessment: level={level.value} avg={avg_rating} rated={selected}"
    )

    return SkillAssessment(
        ratings=normalized,
        level=level,
        avg_rating=avg_rating,
        selected_topics=selected,
        topic_difficulty_map=difficulty_map,
        timestamp=now or datetime.now(timezone.utc),
    )
