"""
Assessment engine facade.

The five operations the UI layer calls, wired to one set of configured
components:

- classify_proficiency(ratings_or_history) -> Level
- select_questions(pool, assessment) -> list[Question]
- filter_quizzes(quizzes, assessment) -> list[QuizAvailability]
- resolve_coding_tier(dsa_rating, quiz_score) -> Tier
- evaluate_eligibility(quiz_attempt, submissions, required_progress) -> EligibilityResult

Session-scoped state is passed in as a SessionSnapshot and any change comes
back as a new snapshot.
"""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from loguru import logger

from skillgate.adaptive.coding_difficulty import resolve_coding_tier as _resolve_coding_tier
from skillgate.adaptive.proficiency import ProficiencyClassifier
from skillgate.assessment.self_assessment import build_skill_assessment
from skillgate.core.levels import Level, Tier
from skillgate.core.models import (
    AttendanceRecord,
    CodingSubmission,
    Question,
    Quiz,
    QuizAttempt,
    SkillAssessment,
)
from skillgate.eligibility.gate import EligibilityGate, EligibilityResult, RequiredQuizStatus
from skillgate.quiz.question_selector import QuestionSelector
from skillgate.quiz.quiz_filter import QuizAvailability, filter_available_quizzes, preview_quizzes
from skillgate.session.session_store import SessionSnapshot, leave_eligibility_record


class AssessmentEngine:
    """Stateless decision layer over the classifier, selector and gates."""

    def __init__(
        self,
        classifier: ProficiencyClassifier | None = None,
        gate: EligibilityGate | None = None,
        rng: random.Random | None = None,
    ):
        self.classifier = classifier or ProficiencyClassifier()
        self.gate = gate or EligibilityGate()
        self.selector = QuestionSelector(rng)

    @classmethod
    def from_settings(cls, settings: Any = None, rng: random.Random | None = None) -> AssessmentEngine:
        return cls(
            classifier=ProficiencyClassifier.from_settings(settings),
            gate=EligibilityGate.from_settings(settings),
            rng=rng,
        )

    # ========================================
    # Exposed operations
    # ========================================

    def classify_proficiency(self, ratings_or_history: Any) -> Level:
        return self.classifier.classify(ratings_or_history)

    def select_questions(
        self,
        pool: Sequence[Question],
        assessment: SkillAssessment | Level | None,
    ) -> list[Question]:
        return self.selector.select(pool, assessment)

    def filter_quizzes(
        self,
        quizzes: Sequence[Quiz],
        assessment: SkillAssessment | None,
        student_level: Level | None = None,
    ) -> list[QuizAvailability]:
        return filter_available_quizzes(quizzes, assessment, student_level)

    def preview_quizzes(self, quizzes: Sequence[Quiz], student_level: Level | None) -> list[Quiz]:
        return preview_quizzes(quizzes, student_level)

    def resolve_coding_tier(self, dsa_rating: int | None, quiz_score: float | None) -> Tier:
        return _resolve_coding_tier(dsa_rating, quiz_score)

    def evaluate_eligibility(
        self,
        quiz_attempt: QuizAttempt | None,
        coding_submissions: Sequence[CodingSubmission] | None,
        required_progress: RequiredQuizStatus | None = None,
        attendance: AttendanceRecord | None = None,
    ) -> EligibilityResult:
        """
        Evaluate the coding gate.

        ``required_progress`` is copied onto the result for display and never
        changes ``is_eligible`` or the suggestions. Apply the required-quiz
        gate with ``evaluate_required_quizzes``.
        """
        result = self.gate.evaluate(quiz_attempt, coding_submissions, attendance)
        if required_progress is not None:
            result = replace(
                result,
                required_completed=required_progress.completed,
                required_total=required_progress.total,
                required_average=required_progress.average_score,
            )
            logger.debug(
                f"Attached required-quiz progress {required_progress.completed}/{required_progress.total}"
            )
        return result

    def evaluate_required_quizzes(
        self,
        quizzes: Sequence[Quiz],
        attempts: Sequence[QuizAttempt] | None,
    ) -> EligibilityResult:
        return self.gate.evaluate_required(self.gate.required_quiz_status(quizzes, attempts))

    # ========================================
    # Snapshot transitions
    # ========================================

    def record_assessment(
        self, snapshot: SessionSnapshot, ratings: Mapping[str, Any]
    ) -> SessionSnapshot:
        """Build a SkillAssessment from raw ratings and store it in a new snapshot."""
        return snapshot.with_assessment(build_skill_assessment(ratings))

    def start_quiz(self, snapshot: SessionSnapshot, quiz_id: str) -> SessionSnapshot:
        return snapshot.with_current_quiz(quiz_id)

    def record_eligibility(
        self, snapshot: SessionSnapshot, result: EligibilityResult
    ) -> SessionSnapshot:
        return snapshot.with_leave_eligibility(leave_eligibility_record(result))


_default_engine: AssessmentEngine | None = None


def get_engine() -> AssessmentEngine:
    """Process-wide engine built from settings."""
    global _default_engine
    if _default_engine is None:
        _default_engine = AssessmentEngine.from_settings()
    return _default_engine


def classify_proficiency(ratings_or_history: Any) -> Level:
    return get_engine().classify_proficiency(ratings_or_history)


def select_questions(
    pool: Sequence[Question],
    assessment: SkillAssessment | Level | None,
    rng: random.Random | None = None,
) -> list[Question]:
    if rng is not None:
        return QuestionSelector(rng).select(pool, assessment)
    return get_engine().select_questions(pool, assessment)


def filter_quizzes(quizzes: Sequence[Quiz], assessment: SkillAssessment | None) -> list[QuizAvailability]:
    return get_engine().filter_quizzes(quizzes, assessment)


def resolve_coding_tier(dsa_rating: int | None, quiz_score: float | None) -> Tier:
    return get_engine().resolve_coding_tier(dsa_rating, quiz_score)


def evaluate_eligibility(
    quiz_attempt: QuizAttempt | None,
    coding_submissions: Sequence[CodingSubmission] | None,
    required_progress: RequiredQuizStatus | None = None,
    attendance: AttendanceRecord | None = None,
) -> EligibilityResult:
    return get_engine().evaluate_eligibility(
        quiz_attempt, coding_submissions, required_progress, attendance
    )
