"""
Session state persistence for skillgate.

The engine never touches ambient state: callers load a SessionSnapshot,
pass it in, and save the new snapshot the engine hands back. Values are
stored as one JSON file per key in ~/.skillgate/session/:

- skillAssessment.json: the learner's SkillAssessment
- currentQuizAssessment.json: {quizId, assessment} for the quiz in progress
- leaveEligibility.json: the last evaluated eligibility record
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from loguru import logger
from pydantic import ValidationError

from skillgate.core.models import SkillAssessment

SKILL_ASSESSMENT_KEY = "skillAssessment"
CURRENT_QUIZ_KEY = "currentQuizAssessment"
LEAVE_ELIGIBILITY_KEY = "leaveEligibility"

SESSION_KEYS = (SKILL_ASSESSMENT_KEY, CURRENT_QUIZ_KEY, LEAVE_ELIGIBILITY_KEY)


@dataclass(frozen=True)
class CurrentQuizMarker:
    """The quiz being taken and the assessment it was filtered with."""

    quiz_id: str
    assessment: SkillAssessment

    def to_dict(self) -> dict:
        return {
            "quizId": self.quiz_id,
            "assessment": self.assessment.model_dump(mode="json", by_alias=True),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CurrentQuizMarker":
        return cls(
            quiz_id=str(data["quizId"]),
            assessment=SkillAssessment.model_validate(data["assessment"]),
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of the persisted session. Every change returns a copy."""

    skill_assessment: Optional[SkillAssessment] = None
    current_quiz: Optional[CurrentQuizMarker] = None
    leave_eligibility: Optional[dict] = None

    def with_assessment(self, assessment: SkillAssessment) -> "SessionSnapshot":
        return replace(self, skill_assessment=assessment)

    def with_current_quiz(self, quiz_id: str) -> "SessionSnapshot":
        """Mark ``quiz_id`` as in progress under the current assessment."""
        if self.skill_assessment is None:
            return replace(self, current_quiz=None)
        return replace(
            self, current_quiz=CurrentQuizMarker(quiz_id=quiz_id, assessment=self.skill_assessment)
        )

    def with_leave_eligibility(self, record: dict) -> "SessionSnapshot":
        return replace(self, leave_eligibility=dict(record))

    def cleared(self) -> "SessionSnapshot":
        """Drop the assessment and quiz marker to reset quiz filtering."""
        return replace(self, skill_assessment=None, current_quiz=None)


class SessionStore:
    """
    Key/value JSON store backing SessionSnapshot.

    Unreadable or corrupted files read as "no stored value".
    """

    def __init__(self, session_dir: Optional[Path] = None):
        if session_dir is None:
            from config import get_settings

            session_dir = get_settings().session_dir
        self.session_dir = Path(session_dir).expanduser()
        self.session_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.session_dir / f"{key}.json"

    # ========================================
    # Raw keys
    # ========================================

    def get(self, key: str) -> Any:
        """Load the raw JSON value for ``key``, or None."""
        filepath = self._path(key)
        if not filepath.exists():
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable session value {key}: {e}")
            return None

    def set(self, key: str, value: Any) -> Path:
        filepath = self._path(key)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2, default=str)
        return filepath

    def delete(self, key: str) -> bool:
        filepath = self._path(key)
        if filepath.exists():
            filepath.unlink()
            return True
        return False

    # ========================================
    # Snapshots
    # ========================================

    def load(self) -> SessionSnapshot:
        """Read every key into a snapshot; bad values load as None."""
        return SessionSnapshot(
            skill_assessment=self._load_model(SKILL_ASSESSMENT_KEY, SkillAssessment.model_validate),
            current_quiz=self._load_model(CURRENT_QUIZ_KEY, CurrentQuizMarker.from_dict),
            leave_eligibility=self._load_model(LEAVE_ELIGIBILITY_KEY, dict),
        )

    def _load_model(self, key: str, parse: Any) -> Any:
        data = self.get(key)
        if data is None:
            return None
        try:
            return parse(data)
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed session value {key}: {e}")
            return None

    def save(self, snapshot: SessionSnapshot) -> SessionSnapshot:
        """Persist ``snapshot``; keys set to None are removed."""
        if snapshot.skill_assessment is None:
            self.delete(SKILL_ASSESSMENT_KEY)
        else:
            self.set(
                SKILL_ASSESSMENT_KEY,
                snapshot.skill_assessment.model_dump(mode="json", by_alias=True),
            )

        if snapshot.current_quiz is None:
            self.delete(CURRENT_QUIZ_KEY)
        else:
            self.set(CURRENT_QUIZ_KEY, snapshot.current_quiz.to_dict())

        if snapshot.leave_eligibility is None:
            self.delete(LEAVE_ELIGIBILITY_KEY)
        else:
            self.set(LEAVE_ELIGIBILITY_KEY, snapshot.leave_eligibility)

        return snapshot

    def clear_assessment(self) -> SessionSnapshot:
        """Reset filtering state, keeping the last eligibility record."""
        return self.save(self.load().cleared())


def leave_eligibility_record(result: Any, now: Optional[datetime] = None) -> dict:
    """Build the persisted leave-eligibility record from an EligibilityResult."""
    return result.snapshot(timestamp=(now or datetime.now(timezone.utc)).isoformat())
