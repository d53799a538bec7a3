"""
Eligibility Gate.

Two independent gates decide whether the leave-application action unlocks:

Coding gate (itemized, combined by AND):
1. quiz: attempt percentage >= 60
2. coding: mean submission score >= 50
3. challenges: passed submissions >= ceil(total / 2), zero submissions fail
4. attendance (only when a record is supplied): percentage >= 75

    final_score = round_half_up(quiz * 0.6 + avg_coding * 0.4)

Required-quiz gate:
    every allow-listed quiz completed AND their average score >= 60

Every failing criterion contributes one suggestion string. Missing inputs
resolve to zeros and a failed gate, never to an exception.
"""

from __future__ import annotations

import math
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from skillgate.core.models import AttendanceRecord, CodingSubmission, Quiz, QuizAttempt
from skillgate.core.rounding import round_half_up

ELIGIBLE_MESSAGE = "🎉 Congratulations! You are eligible to apply for leave."
NOT_ELIGIBLE_MESSAGE = "You need to improve in some areas to become eligible."

QUIZ_SUGGESTION = "Quiz score below 60% - Review theoretical concepts"
CODING_SUGGESTION = "Coding average below 50% - Practice more DSA problems"
CHALLENGES_SUGGESTION = "Complete more coding challenges successfully"
ATTENDANCE_SUGGESTION = "Attendance below {threshold:g}% - Attend more classes"
REQUIRED_INCOMPLETE_SUGGESTION = "Complete all required quizzes ({completed}/{total} done)"
REQUIRED_AVERAGE_SUGGESTION = "Required quiz average below {threshold:g}% - Retake weak quizzes"


@dataclass(frozen=True)
class RequiredQuizStatus:
    """Progress through the allow-listed required quizzes."""

    completed: int = 0
    total: int = 0
    average_score: float = 0.0


@dataclass(frozen=True)
class AttendanceResult:
    attendance_percentage: float
    threshold: float
    is_eligible: bool


@dataclass(frozen=True)
class EligibilityResult:
    """
    Outcome of one gate.

    Coding-gate fields are None on a required-quiz result and vice versa.
    """

    gate: str
    is_eligible: bool
    message: str
    suggestions: list[str] = field(default_factory=list)

    # Coding gate
    quiz_passed: bool | None = None
    coding_passed: bool | None = None
    challenges_passed: bool | None = None
    attendance_passed: bool | None = None
    quiz_score: float = 0.0
    avg_coding_score: float = 0.0
    passed_challenges: int = 0
    total_challenges: int = 0
    final_score: int = 0

    # Required-quiz gate
    required_completed: int | None = None
    required_total: int | None = None
    required_average: float | None = None

    def snapshot(self, timestamp: Any = None) -> dict[str, Any]:
        """The leave-eligibility record persisted in the session store."""
        return {
            "isEligible": self.is_eligible,
            "finalScore": self.final_score,
            "quizScore": self.quiz_score,
            "codingScore": self.avg_coding_score,
            "timestamp": timestamp,
        }


class EligibilityGate:
    """
    Evaluate leave eligibility.

    The pass marks and weights are fixed; the attendance threshold and the
    required-quiz policy come from settings.
    """

    QUIZ_PASS_PERCENTAGE = 60.0
    CODING_PASS_AVERAGE = 50.0
    QUIZ_WEIGHT = 0.6
    CODING_WEIGHT = 0.4

    def __init__(
        self,
        attendance_threshold: float = 75.0,
        required_min_average: float = 60.0,
        required_categories: Collection[str] | None = None,
    ):
        """
        Initialize gate.

        Args:
            attendance_threshold: Minimum attendance percentage
            required_min_average: Minimum average across required quizzes
            required_categories: Quiz categories that count as required
                (None reads the allow-list from settings; empty means none)
        """
        if required_categories is None:
            from config import get_settings

            required_categories = get_settings().get_required_categories()

        self.attendance_threshold = attendance_threshold
        self.required_min_average = required_min_average
        self.required_categories = frozenset(c.strip().lower() for c in required_categories)

    @classmethod
    def from_settings(cls, settings: Any = None) -> EligibilityGate:
        if settings is None:
            from config import get_settings

            settings = get_settings()
        return cls(
            attendance_threshold=settings.attendance_threshold,
            required_min_average=settings.required_quiz_min_average,
            required_categories=settings.get_required_categories(),
        )

    # ========================================
    # Coding gate
    # ========================================

    def final_score(self, quiz_score: float, avg_coding_score: float) -> int:
        return round_half_up(quiz_score * self.QUIZ_WEIGHT + avg_coding_score * self.CODING_WEIGHT)

    def evaluate(
        self,
        quiz_attempt: QuizAttempt | None,
        submissions: Sequence[CodingSubmission] | None,
        attendance: AttendanceRecord | None = None,
    ) -> EligibilityResult:
        """
        Evaluate the coding gate.

        Args:
            quiz_attempt: The assessment quiz attempt (0% if None)
            submissions: Coding submissions of this session
            attendance: Attendance record; adds a fourth criterion when given

        Returns:
            EligibilityResult with every criterion reported
        """
        submissions = list(submissions or [])
        quiz_score = quiz_attempt.percentage if quiz_attempt else 0.0
        total = len(submissions)
        passed_count = sum(1 for s in submissions if s.passed)
        avg_coding = sum(s.score for s in submissions) / total if total else 0.0

        quiz_passed = quiz_score >= self.QUIZ_PASS_PERCENTAGE
        coding_passed = avg_coding >= self.CODING_PASS_AVERAGE
        challenges_passed = total > 0 and passed_count >= math.ceil(total / 2)

        suggestions: list[str] = []
        if not quiz_passed:
            suggestions.append(QUIZ_SUGGESTION)
        if not coding_passed:
            suggestions.append(CODING_SUGGESTION)
        if not challenges_passed:
            suggestions.append(CHALLENGES_SUGGESTION)

        attendance_passed = None
        if attendance is not None:
            attendance_passed = self.evaluate_attendance(attendance).is_eligible
            if not attendance_passed:
                suggestions.append(ATTENDANCE_SUGGESTION.format(threshold=self.attendance_threshold))

        is_eligible = quiz_passed and coding_passed and challenges_passed and attendance_passed is not False

        logger.debug(
            f"Coding gate: quiz={quiz_score:.1f}({quiz_passed}) coding={avg_coding:.1f}({coding_passed}) "
            f"challenges={passed_count}/{total}({challenges_passed}) attendance={attendance_passed} "
            f"-> eligible={is_eligible}"
        )

        return EligibilityResult(
            gate="coding",
            is_eligible=is_eligible,
            message=ELIGIBLE_MESSAGE if is_eligible else NOT_ELIGIBLE_MESSAGE,
            suggestions=suggestions,
            quiz_passed=quiz_passed,
            coding_passed=coding_passed,
            challenges_passed=challenges_passed,
            attendance_passed=attendance_passed,
            quiz_score=quiz_score,
            avg_coding_score=avg_coding,
            passed_challenges=passed_count,
            total_challenges=total,
            final_score=self.final_score(quiz_score, avg_coding),
        )

    # ========================================
    # Attendance
    # ========================================

    def evaluate_attendance(self, record: AttendanceRecord | None) -> AttendanceResult:
        percentage = record.attendance_percentage if record else 0.0
        return AttendanceResult(
            attendance_percentage=percentage,
            threshold=self.attendance_threshold,
            is_eligible=percentage >= self.attendance_threshold,
        )

    # ========================================
    # Required-quiz gate
    # ========================================

    def is_required(self, quiz: Quiz) -> bool:
        return bool(quiz.category) and quiz.category.strip().lower() in self.required_categories

    def required_quiz_status(
        self,
        quizzes: Sequence[Quiz],
        attempts: Sequence[QuizAttempt] | None,
    ) -> RequiredQuizStatus:
        """
        Completion and average over the required quizzes.

        A required quiz is completed once it has any attempt; its score is
        the best attempt percentage.
        """
        required_ids = {q.id for q in quizzes if self.is_required(q)}
        best: dict[str, float] = {}
        for attempt in attempts or []:
            if attempt.quiz_id in required_ids:
                best[attempt.quiz_id] = max(best.get(attempt.quiz_id, 0.0), attempt.percentage)

        average = sum(best.values()) / len(best) if best else 0.0
        return RequiredQuizStatus(
            completed=len(best),
            total=len(required_ids),
            average_score=round(average, 1),
        )

    def evaluate_required(self, status: RequiredQuizStatus | None) -> EligibilityResult:
        """Evaluate the required-quiz gate from a precomputed status."""
        status = status or RequiredQuizStatus()
        all_completed = status.total > 0 and status.completed >= status.total
        average_ok = status.average_score >= self.required_min_average

        suggestions: list[str] = []
        if not all_completed:
            suggestions.append(
                REQUIRED_INCOMPLETE_SUGGESTION.format(completed=status.completed, total=status.total)
            )
        if not average_ok:
            suggestions.append(REQUIRED_AVERAGE_SUGGESTION.format(threshold=self.required_min_average))

        is_eligible = all_completed and average_ok
        logger.debug(
            f"Required-quiz gate: {status.completed}/{status.total} avg {status.average_score:.1f} "
            f"-> eligible={is_eligible}"
        )

        return EligibilityResult(
            gate="required_quizzes",
            is_eligible=is_eligible,
            message=ELIGIBLE_MESSAGE if is_eligible else NOT_ELIGIBLE_MESSAGE,
            suggestions=suggestions,
            quiz_score=status.average_score,
            final_score=round_half_up(status.average_score),
            required_completed=status.completed,
            required_total=status.total,
            required_average=status.average_score,
        )


# ========================================
# Module-level shortcuts
# ========================================


def evaluate_eligibility(
    quiz_attempt: QuizAttempt | None,
    submissions: Sequence[CodingSubmission] | None,
    attendance: AttendanceRecord | None = None,
    gate: EligibilityGate | None = None,
) -> EligibilityResult:
    return (gate or EligibilityGate()).evaluate(quiz_attempt, submissions, attendance)


def evaluate_required_quizzes(
    status: RequiredQuizStatus | None,
    gate: EligibilityGate | None = None,
) -> EligibilityResult:
    return (gate or EligibilityGate()).evaluate_required(status)


def evaluate_attendance(
    record: AttendanceRecord | None,
    gate: EligibilityGate | None = None,
) -> AttendanceResult:
    return (gate or EligibilityGate()).evaluate_attendance(record)


def required_quiz_status(
    quizzes: Sequence[Quiz],
    attempts: Sequence[QuizAttempt] | None,
    gate: EligibilityGate | None = None,
) -> RequiredQuizStatus:
    return (gate or EligibilityGate()).required_quiz_status(quizzes, attempts)
