"""Attempt-history statistics for progress views."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from skillgate.adaptive.proficiency import average_score, chronological
from skillgate.core.models import QuizAttempt

IMPROVEMENT_WINDOW = 5
RECENT_LIMIT = 10


@dataclass(frozen=True)
class AttemptStats:
    total_attempts: int = 0
    passed: int = 0
    failed: int = 0
    average_score: float = 0.0
    improvement: float = 0.0  # recent-window mean minus earlier mean
    recent_attempts: list[QuizAttempt] = field(default_factory=list)  # newest first

    @property
    def pass_rate(self) -> float:
        if not self.total_attempts:
            return 0.0
        return round(self.passed / self.total_attempts * 100, 1)


def summarize_attempts(attempts: Sequence[QuizAttempt] | None) -> AttemptStats:
    """
    Summarize a learner's attempt history.

    The improvement compares the last five attempts against everything
    before them; with no earlier attempts the earlier mean counts as 0.
    """
    ordered = chronological(attempts or [])
    if not ordered:
        return AttemptStats()

    passed = sum(1 for a in ordered if a.passed)
    recent = ordered[-IMPROVEMENT_WINDOW:]
    earlier = ordered[:-IMPROVEMENT_WINDOW]

    return AttemptStats(
        total_attempts=len(ordered),
        passed=passed,
        failed=len(ordered) - passed,
        average_score=round(average_score(ordered), 1),
        improvement=round(average_score(recent) - average_score(earlier), 1),
        recent_attempts=list(reversed(ordered[-RECENT_LIMIT:])),
    )
