"""
Proficiency Classifier.

Derives a coarse Beginner / Intermediate / Advanced level from one of
three signal sources:

- a single topic rating (picks the difficulty context of one quiz)
- aggregate attempt history: volume + average score
- recent attempt history with completion-time pressure, as an explicit
  decision table evaluated top to bottom, first match wins

A learner with no data at all is always Beginner.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from skillgate.assessment.rating_normalizer import is_rated, rating_to_difficulty
from skillgate.assessment.self_assessment import build_skill_assessment
from skillgate.core.levels import Level
from skillgate.core.models import QuizAttempt, SkillAssessment


@dataclass(frozen=True)
class AttemptPressure:
    """Recent-attempt statistics fed to the pressure decision table."""

    attempt_count: int
    average_score: float
    failed_count: int
    average_minutes: float


@dataclass(frozen=True)
class DecisionRule:
    """One row of the pressure decision table."""

    name: str
    matches: Callable[[AttemptPressure], bool]
    level: Level


@dataclass(frozen=True)
class ProficiencyDecision:
    """Outcome of the pressure table: the level plus the row that fired."""

    level: Level
    rule: str
    pressure: AttemptPressure


def average_score(attempts: Sequence[QuizAttempt]) -> float:
    """Mean attempt percentage (0 for no attempts)."""
    if not attempts:
        return 0.0
    return sum(a.percentage for a in attempts) / len(attempts)


def chronological(attempts: Sequence[QuizAttempt]) -> list[QuizAttempt]:
    """
    Attempts oldest first.

    Sorted by timestamp when every attempt carries one; otherwise the
    collaborator's order is taken as chronological.
    """
    ordered = list(attempts)
    if ordered and all(a.timestamp is not None for a in ordered):
        try:
            ordered.sort(key=lambda a: a.timestamp)
        except TypeError:
            # Mixed naive/aware timestamps: keep the given order.
            logger.debug("Attempt timestamps not comparable, keeping given order")
    return ordered


class ProficiencyClassifier:
    """
    Classify learners into Beginner / Intermediate / Advanced.

    History thresholds:
    - Advanced: >= 10 attempts and >= 85 average
    - Intermediate: >= 5 attempts and >= 70 average
    - Beginner: otherwise

    Pressure table (recent window):
    1. no attempts, avg < 50, or >= 3 failed -> Beginner
    2. avg <= 75 -> Intermediate
    3. avg time > 45 min and avg < 85 -> Intermediate
    4. otherwise -> Advanced
    """

    ADVANCED_MIN_ATTEMPTS = 10
    ADVANCED_MIN_AVERAGE = 85.0
    INTERMEDIATE_MIN_ATTEMPTS = 5
    INTERMEDIATE_MIN_AVERAGE = 70.0

    STRUGGLING_AVERAGE = 50.0
    MAX_FAILED_ATTEMPTS = 3
    INTERMEDIATE_CEILING = 75.0
    SLOW_LEARNER_MAX_AVERAGE = 85.0

    def __init__(
        self,
        recent_window: int = 5,
        slow_completion_minutes: float = 45.0,
    ):
        """
        Initialize classifier.

        Args:
            recent_window: Number of most recent attempts the pressure table uses
            slow_completion_minutes: Average minutes per attempt considered slow
        """
        self.recent_window = recent_window
        self.slow_completion_minutes = slow_completion_minutes
        self.decision_table: tuple[DecisionRule, ...] = (
            DecisionRule(
                "struggling",
                lambda p: (
                    p.attempt_count == 0
                    or p.average_score < self.STRUGGLING_AVERAGE
                    or p.failed_count >= self.MAX_FAILED_ATTEMPTS
                ),
                Level.BEGINNER,
            ),
            DecisionRule(
                "mid_scores",
                lambda p: p.average_score <= self.INTERMEDIATE_CEILING,
                Level.INTERMEDIATE,
            ),
            DecisionRule(
                "slow_and_mediocre",
                lambda p: (
                    p.average_minutes > self.slow_completion_minutes
                    and p.average_score < self.SLOW_LEARNER_MAX_AVERAGE
                ),
                Level.INTERMEDIATE,
            ),
            DecisionRule("proficient", lambda p: True, Level.ADVANCED),
        )

    @classmethod
    def from_settings(cls, settings: Any = None) -> ProficiencyClassifier:
        if settings is None:
            from config import get_settings

            settings = get_settings()
        return cls(
            recent_window=settings.recent_attempt_window,
            slow_completion_minutes=settings.slow_completion_minutes,
        )

    # ========================================
    # Topic-rating policy
    # ========================================

    def classify_rating(self, rating: int | None) -> Level:
        """Level for a single 1-5 topic rating; unrated is Beginner."""
        if not is_rated(rating):
            return Level.BEGINNER
        return rating_to_difficulty(rating).level

    # ========================================
    # History policy
    # ========================================

    def classify_history(
        self,
        attempts: Sequence[QuizAttempt] | None,
        avg_score: float | None = None,
    ) -> Level:
        """
        Level from attempt volume and average score.

        Args:
            attempts: Full attempt history
            avg_score: Precomputed average (computed from attempts if None)
        """
        attempts = attempts or []
        count = len(attempts)
        avg = average_score(attempts) if avg_score is None else avg_score

        if count >= self.ADVANCED_MIN_ATTEMPTS and avg >= self.ADVANCED_MIN_AVERAGE:
            level = Level.ADVANCED
        elif count >= self.INTERMEDIATE_MIN_ATTEMPTS and avg >= self.INTERMEDIATE_MIN_AVERAGE:
            level = Level.INTERMEDIATE
        else:
            level = Level.BEGINNER

        logger.debug(f"History classification: {count} attempts, avg {avg:.1f} -> {level.value}")
        return level

    # ========================================
    # Pressure policy
    # ========================================

    def measure_pressure(self, attempts: Sequence[QuizAttempt] | None) -> AttemptPressure:
        recent = chronological(attempts or [])[-self.recent_window :]
        if not recent:
            return AttemptPressure(0, 0.0, 0, 0.0)
        return AttemptPressure(
            attempt_count=len(recent),
            average_score=average_score(recent),
            failed_count=sum(1 for a in recent if not a.passed),
            average_minutes=sum(a.time_taken_minutes for a in recent) / len(recent),
        )

    def decide(self, attempts: Sequence[QuizAttempt] | None) -> ProficiencyDecision:
        """Run the pressure decision table and report which row fired."""
        pressure = self.measure_pressure(attempts)
        # The last row always matches.
        rule = next(r for r in self.decision_table if r.matches(pressure))
        logger.debug(f"Pressure classification: rule={rule.name} -> {rule.level.value}")
        return ProficiencyDecision(level=rule.level, rule=rule.name, pressure=pressure)

    def classify_with_pressure(self, attempts: Sequence[QuizAttempt] | None) -> Level:
        return self.decide(attempts).level

    # ========================================
    # Dispatch
    # ========================================

    def classify(self, source: Any) -> Level:
        """
        Classify from whichever signal the caller holds.

        - int / float: a single topic rating
        - SkillAssessment: its stored level
        - mapping of topic -> rating: self-assessment average
        - sequence of QuizAttempt: history policy
        - None / empty: Beginner
        """
        if source is None:
            return Level.BEGINNER
        if isinstance(source, bool):
            return Level.BEGINNER
        if isinstance(source, (int, float)):
            return self.classify_rating(int(source))
        if isinstance(source, SkillAssessment):
            return source.level
        if isinstance(source, Mapping):
            return build_skill_assessment(source).level
        if isinstance(source, Sequence) and not isinstance(source, (str, bytes)):
            attempts = [a if isinstance(a, QuizAttempt) else QuizAttempt.model_validate(a) for a in source]
            return self.classify_history(attempts)
        logger.debug(f"Unclassifiable proficiency source {type(source).__name__}, defaulting to Beginner")
        return Level.BEGINNER


def is_quiz_locked(quiz_level: Level | None, student_level: Level | None) -> bool:
    """A quiz is locked when its level sits more than one step above the learner's."""
    if quiz_level is None:
        return False
    return quiz_level.steps_above(student_level or Level.BEGINNER) > 1


def can_preview(quiz_level: Level | None, student_level: Level | None) -> bool:
    """Read-only preview is open for quizzes exactly one level away."""
    if quiz_level is None:
        return False
    return quiz_level in (student_level or Level.BEGINNER).adjacent()


def classify_proficiency(ratings_or_history: Any, classifier: ProficiencyClassifier | None = None) -> Level:
    """Module-level shortcut for ``ProficiencyClassifier().classify``."""
    return (classifier or ProficiencyClassifier()).classify(ratings_or_history)
