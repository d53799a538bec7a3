"""Persisted session snapshot."""

from skillgate.session.session_store import (
    CURRENT_QUIZ_KEY,
    LEAVE_ELIGIBILITY_KEY,
    SKILL_ASSESSMENT_KEY,
    CurrentQuizMarker,
    SessionSnapshot,
    SessionStore,
    leave_eligibility_record,
)

__all__ = [
    "CURRENT_QUIZ_KEY",
    "LEAVE_ELIGIBILITY_KEY",
    "SKILL_ASSESSMENT_KEY",
    "CurrentQuizMarker",
    "SessionSnapshot",
    "SessionStore",
    "leave_eligibility_record",
]
