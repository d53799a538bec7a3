"""
Assessment: topic normalization and self-report handling.

- rating_normalizer: canonical topic and rating lookup, rating -> difficulty
- self_assessment: build a SkillAssessment from per-topic star ratings
"""

from skillgate.assessment.rating_normalizer import (
    TOPIC_ALIASES,
    is_rated,
    match_topic,
    rating_to_difficulty,
    resolve_rating,
    resolve_topic,
)
from skillgate.assessment.self_assessment import build_skill_assessment, normalize_ratings

__all__ = [
    "TOPIC_ALIASES",
    "build_skill_assessment",
    "is_rated",
    "match_topic",
    "normalize_ratings",
    "rating_to_difficulty",
    "resolve_rating",
    "resolve_topic",
]
