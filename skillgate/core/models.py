"""
Records exchanged with the surrounding application.

Question banks, attempt history, coding submissions and attendance come in
from external collaborators as JSON with camelCase keys; these models
validate them once at the boundary so the engine can stay total over its
inputs. All records are frozen: nothing in the engine mutates them.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from functools import cached_property
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from skillgate.core.levels import Difficulty, Level


class QuestionKind(str, Enum):
    """Question kinds served by the question bank."""

    MCQ = "mcq"
    CODING = "coding"


class WireModel(BaseModel):
    """Base for collaborator records: camelCase on the wire, frozen in memory."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


def _coerce_id(value: Any) -> Any:
    if isinstance(value, dict):
        value = value.get("_id") or value.get("id")
    return None if value is None else str(value)


# ========================================
# Question bank
# ========================================


class Question(WireModel):
    """A single quiz question as fetched from the question bank."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    prompt: str = Field("", validation_alias=AliasChoices("prompt", "question", "text"))
    kind: QuestionKind = Field(QuestionKind.MCQ, validation_alias=AliasChoices("kind", "type"))
    options: list[str] = Field(default_factory=list)
    difficulty: Difficulty | None = None
    topic: str | None = None
    subject: str | None = None
    category: str | None = None
    points: int = Field(1, ge=0)
    starter_code: str | dict[str, str] | None = Field(
        None, validation_alias=AliasChoices("starter_code", "starterCode")
    )

    @model_validator(mode="before")
    @classmethod
    def _default_kind(cls, data: Any) -> Any:
        # The bank omits the type on older records: options imply mcq.
        if isinstance(data, dict) and not (data.get("kind") or data.get("type")):
            data = dict(data)
            data["kind"] = QuestionKind.MCQ if data.get("options") else QuestionKind.CODING
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return _coerce_id(value)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _parse_difficulty(cls, value: Any) -> Difficulty | None:
        # Unknown labels are left for inference rather than rejected.
        return Difficulty.parse(value)

    @model_validator(mode="after")
    def _check_options(self) -> Question:
        if self.kind == QuestionKind.MCQ and len(self.options) < 2:
            raise ValueError(f"mcq question {self.id} needs at least 2 options")
        return self

    @cached_property
    def resolved_difficulty(self) -> Difficulty:
        """
        Explicit difficulty, else inferred from the question's shape.

        Inference: coding -> Hard, mcq with more than 4 options -> Medium,
        anything else -> Easy. Computed once per instance.
        """
        if self.difficulty is not None:
            return self.difficulty
        if self.kind == QuestionKind.CODING:
            return Difficulty.HARD
        if len(self.options) > 4:
            return Difficulty.MEDIUM
        return Difficulty.EASY


class Quiz(WireModel):
    """A quiz listing with its embedded questions."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str = ""
    description: str | None = None
    category: str | None = None
    subject: str | None = None
    topic: str | None = None
    difficulty: Difficulty | None = None
    questions: list[Question] = Field(default_factory=list)
    is_preview: bool = Field(False, validation_alias=AliasChoices("is_preview", "isPreview", "preview"))
    duration: int | None = Field(None, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return _coerce_id(value)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _parse_difficulty(cls, value: Any) -> Difficulty | None:
        return Difficulty.parse(value)

    @property
    def level(self) -> Level | None:
        """Level implied by the quiz's own difficulty label."""
        return self.difficulty.level if self.difficulty else None


# ========================================
# Attempts and submissions
# ========================================


class QuizAttempt(WireModel):
    """One submitted quiz attempt. Never mutated after creation."""

    quiz_id: str | None = Field(None, validation_alias=AliasChoices("quiz_id", "quizId", "quiz"))
    answers: list[dict[str, Any]] = Field(default_factory=list)
    percentage: float = Field(0.0, ge=0, le=100)
    passed: bool = False
    earned_points: float = Field(0, ge=0)
    total_points: float = Field(0, ge=0)
    time_taken: float = Field(0, ge=0, description="Seconds spent on the attempt")
    timestamp: datetime | None = Field(
        None, validation_alias=AliasChoices("timestamp", "completedAt", "createdAt")
    )

    @field_validator("quiz_id", mode="before")
    @classmethod
    def _quiz_ref(cls, value: Any) -> Any:
        return _coerce_id(value)

    @property
    def time_taken_minutes(self) -> float:
        return self.time_taken / 60


class CodingSubmission(WireModel):
    """One graded coding-challenge attempt."""

    challenge_id: str
    language: str = "javascript"
    code: str = ""
    passed: bool = False
    score: float = Field(0.0, ge=0, le=100)
    timestamp: datetime | None = None


class AttendanceRecord(WireModel):
    """Attendance summary from the attendance service."""

    attendance_percentage: float = Field(0.0, ge=0, le=100)
    total_classes: int = Field(0, ge=0)
    attended_classes: int = Field(0, ge=0)


# ========================================
# Session-scoped self-report
# ========================================


class SkillAssessment(WireModel):
    """
    A learner's self-report, created once per assessment session.

    ``ratings`` maps canonical topic tags to 1-5 ratings (0 = not rated).
    Built by ``skillgate.assessment.self_assessment.build_skill_assessment``.
    """

    ratings: dict[str, int] = Field(default_factory=dict)
    level: Level = Level.BEGINNER
    avg_rating: float = 0.0
    selected_topics: list[str] = Field(default_factory=list)
    topic_difficulty_map: dict[str, Difficulty] = Field(default_factory=dict)
    timestamp: datetime | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Level:
        return Level.parse(value) or Level.BEGINNER

    @field_validator("topic_difficulty_map", mode="before")
    @classmethod
    def _drop_unknown_difficulties(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {}
        parsed = {topic: Difficulty.parse(label) for topic, label in value.items()}
        return {topic: difficulty for topic, difficulty in parsed.items() if difficulty}

    @property
    def has_ratings(self) -> bool:
        return any((rating or 0) > 0 for rating in self.ratings.values())
