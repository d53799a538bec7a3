"""Leave-eligibility gates."""

from skillgate.eligibility.gate import (
    AttendanceResult,
    EligibilityGate,
    EligibilityResult,
    RequiredQuizStatus,
    evaluate_attendance,
    evaluate_eligibility,
    evaluate_required_quizzes,
    required_quiz_status,
)

__all__ = [
    "AttendanceResult",
    "EligibilityGate",
    "EligibilityResult",
    "RequiredQuizStatus",
    "evaluate_attendance",
    "evaluate_eligibility",
    "evaluate_required_quizzes",
    "required_quiz_status",
]
