"""
Difficulty-weighted question sampling.

Draws a bounded subset from a quiz's question pool whose Easy / Medium /
Hard mix follows the learner's level:

    | Level        | Hard | Medium | Easy        |
    |--------------|------|--------|-------------|
    | Advanced     | 70%  | 20%    | remainder   |
    | Intermediate | 20%  | 60%    | remainder   |
    | Beginner     | 10%  | 20%    | remainder   |

Buckets are never backfilled from one another, so thin pools give a
smaller subset. The final order is reshuffled across buckets.

Sampling is random per call; callers that need a stable subset for one quiz
session must cache the result.
"""
from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from skillgate.core.levels import Difficulty, Level
from skillgate.core.models import Question, SkillAssessment

# Pools at or below this size are served as-is.
SAMPLING_THRESHOLD = 10
# Upper bound on the sampled subset.
MAX_SUBSET_SIZE = 15


@dataclass(frozen=True)
class DifficultyMix:
    """Percent of the subset drawn as Hard and Medium; Easy takes the rest."""

    hard_percent: int
    medium_percent: int

    def split(self, target: int) -> dict[Difficulty, int]:
        """Integer per-bucket quotas that sum exactly to ``target``."""
        hard = target * self.hard_percent // 100
        medium = target * self.medium_percent // 100
        return {
            Difficulty.HARD: hard,
            Difficulty.MEDIUM: medium,
            Difficulty.EASY: target - hard - medium,
        }


LEVEL_MIX: dict[Level, DifficultyMix] = {
    Level.ADVANCED: DifficultyMix(hard_percent=70, medium_percent=20),
    Level.INTERMEDIATE: DifficultyMix(hard_percent=20, medium_percent=60),
    Level.BEGINNER: DifficultyMix(hard_percent=10, medium_percent=20),
}


def bucket_by_difficulty(pool: Sequence[Question]) -> dict[Difficulty, list[Question]]:
    """Group questions by explicit-or-inferred difficulty, keeping pool order."""
    buckets: dict[Difficulty, list[Question]] = {d: [] for d in Difficulty}
    for question in pool:
        buckets[question.resolved_difficulty].append(question)
    return buckets


def level_of(assessment: SkillAssessment | Level | None) -> Level:
    if isinstance(assessment, Level):
        return assessment
    if isinstance(assessment, SkillAssessment):
        return assessment.level
    return Level.BEGINNER


class QuestionSelector:
    """
    Samples level-appropriate question subsets.

    The random source is injectable so tests can pin bucket composition.
    """

    def __init__(self, rng: random.Random | None = None):
        """
        Initialize selector.

        Args:
            rng: Random source (a fresh unseeded Random if None)
        """
        self.rng = rng or random.Random()

    def select(
        self,
        pool: Sequence[Question],
        assessment: SkillAssessment | Level | None = None,
    ) -> list[Question]:
        """
        Select an adaptive subset of ``pool``.

        Args:
            pool: Every question of the quiz
            assessment: Learner's SkillAssessment or Level (Beginner if None)

        Returns:
            The pool unchanged if it has 10 or fewer questions, otherwise at
            most 15 questions mixed per the level's policy
        """
        if len(pool) <= SAMPLING_THRESHOLD:
            return list(pool)

        level = level_of(assessment)
        target = min(MAX_SUBSET_SIZE, len(pool))
        quotas = LEVEL_MIX[level].split(target)
        buckets = bucket_by_difficulty(pool)

        selected: list[Question] = []
        for difficulty, quota in quotas.items():
            bucket = list(buckets[difficulty])
            self.rng.shuffle(bucket)
            selected.extend(bucket[:quota])
            if len(bucket) < quota:
                logger.debug(
                    f"{difficulty.value} bucket short: wanted {quota}, had {len(bucket)}"
                )

        self.rng.shuffle(selected)

        logger.debug(
            f"Selected {len(selected)}/{target} questions for {level.value} "
            f"(quotas {[(d.value, q) for d, q in quotas.items()]})"
        )
        return selected


def select_adaptive_questions(
    pool: Sequence[Question],
    assessment: SkillAssessment | Level | None = None,
    rng: random.Random | None = None,
) -> list[Question]:
    """Module-level shortcut for ``QuestionSelector(rng).select``."""
    return QuestionSelector(rng).select(pool, assessment)
