"""
Core Module - Shared domain types.

Components:
- levels: Level / Difficulty / Topic enums and level ordering
- models: validated collaborator records and the SkillAssessment snapshot
- rounding: half-up score rounding

Design Principle:
Every other package (assessment, adaptive, quiz, eligibility) imports these
types from skillgate.core rather than re-declaring them.
"""

from skillgate.core.levels import Difficulty, Level, Tier, Topic
from skillgate.core.models import (
    AttendanceRecord,
    CodingSubmission,
    Question,
    QuestionKind,
    Quiz,
    QuizAttempt,
    SkillAssessment,
)
from skillgate.core.rounding import round_half_up

__all__ = [
    # Enums
    "Difficulty",
    "Level",
    "Tier",
    "Topic",
    "QuestionKind",
    # Records
    "AttendanceRecord",
    "CodingSubmission",
    "Question",
    "Quiz",
    "QuizAttempt",
    "SkillAssessment",
    # Scoring
    "round_half_up",
]
