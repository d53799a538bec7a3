"""
Coding Difficulty Resolver.

Picks the coding-challenge tier from the learner's DSA self-rating, then
corrects it by one step when the actual quiz score diverges from what the
rating predicts:

    expected_score = dsa_rating * 20        # 1-5 -> 20-100
    delta = quiz_score - expected_score

If |delta| >= 20, a Beginner who outperformed moves up to Intermediate and an
Advanced learner who underperformed moves down to Intermediate. No other
transition happens, so a tier never jumps two steps.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Protocol

from loguru import logger

from skillgate.adaptive.challenge_bank import ChallengeTest, CodingChallenge, challenges_for
from skillgate.assessment.rating_normalizer import is_rated, rating_to_difficulty
from skillgate.core.levels import Tier
from skillgate.core.models import CodingSubmission
from skillgate.core.rounding import round_half_up

# Points of quiz percentage per rating star.
SCORE_PER_RATING_POINT = 20
# Minimum |quiz - expected| that triggers a one-step correction.
DIVERGENCE_THRESHOLD = 20
# Unset DSA ratings are read as the lowest star.
DEFAULT_DSA_RATING = 1


class CodeEvaluator(Protocol):
    """External service that runs submitted code against challenge tests."""

    def run_tests(
        self, code: str, language: str, tests: Sequence[ChallengeTest]
    ) -> list[bool]:
        """Return one pass/fail flag per test, in order."""
        ...


def base_tier(dsa_rating: int) -> Tier:
    """Tier implied by the rating alone (1-2 / 3 / 4-5)."""
    return rating_to_difficulty(dsa_rating).level


def resolve_coding_tier(dsa_rating: int | None, quiz_score: float | None) -> Tier:
    """
    Resolve the coding-challenge tier.

    Args:
        dsa_rating: DSA self-rating 1-5 (None/0 read as 1)
        quiz_score: Quiz percentage 0-100 (None read as 0)

    Returns:
        Beginner, Intermediate or Advanced
    """
    rating = dsa_rating if is_rated(dsa_rating) else DEFAULT_DSA_RATING
    score = min(max(quiz_score or 0.0, 0.0), 100.0)

    tier = base_tier(rating)
    expected = rating * SCORE_PER_RATING_POINT
    delta = score - expected

    if abs(delta) >= DIVERGENCE_THRESHOLD:
        if delta > 0 and tier == Tier.BEGINNER:
            tier = Tier.INTERMEDIATE
        elif delta < 0 and tier == Tier.ADVANCED:
            tier = Tier.INTERMEDIATE

    logger.debug(
        f"Coding tier: rating={rating} score={score:.1f} expected={expected} "
        f"delta={delta:+.1f} -> {tier.value}"
    )
    return tier


def select_challenges(dsa_rating: int | None, quiz_score: float | None) -> tuple[CodingChallenge, ...]:
    """Challenge set for the resolved tier."""
    return challenges_for(resolve_coding_tier(dsa_rating, quiz_score))


def score_submission(
    challenge: CodingChallenge,
    outcomes: Sequence[bool],
    language: str = "javascript",
    code: str = "",
    now: datetime | None = None,
) -> CodingSubmission:
    """
    Turn per-test outcomes from the evaluator into a CodingSubmission.

    Score is the percentage of the challenge's full test suite that passed;
    tests the evaluator did not report on count as failed. The submission
    passes only if every test passed.
    """
    total = len(challenge.all_tests)
    passed_count = sum(1 for ok in list(outcomes)[:total] if ok)
    score = round_half_up(passed_count / total * 100) if total else 0

    return CodingSubmission(
        challenge_id=challenge.id,
        language=language,
        code=code,
        passed=total > 0 and passed_count == total,
        score=score,
        timestamp=now or datetime.now(timezone.utc),
    )


def grade_with(
    evaluator: CodeEvaluator,
    challenge: CodingChallenge,
    code: str,
    language: str = "javascript",
) -> CodingSubmission:
    """Run the full test suite through an evaluator and score the result."""
    outcomes = evaluator.run_tests(code, language, challenge.all_tests)
    return score_submission(challenge, outcomes, language=language, code=code)
