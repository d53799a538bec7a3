"""
Unit tests for the session key/value store and snapshots.
"""

import pytest

from skillgate.assessment.self_assessment import build_skill_assessment
from skillgate.core.levels import Level
from skillgate.eligibility.gate import evaluate_eligibility
from skillgate.session.session_store import (
    CURRENT_QUIZ_KEY,
    LEAVE_ELIGIBILITY_KEY,
    SKILL_ASSESSMENT_KEY,
    SessionSnapshot,
    SessionStore,
    leave_eligibility_record,
)


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "session")


class TestSessionSnapshot:
    def test_changes_return_new_snapshot(self):
        original = SessionSnapshot()
        updated = original.with_assessment(build_skill_assessment({"CSS": 3}))
        assert original.skill_assessment is None
        assert updated.skill_assessment is not None

    def test_current_quiz_needs_assessment(self):
        assert SessionSnapshot().with_current_quiz("q1").current_quiz is None

    def test_current_quiz_carries_assessment(self):
        assessment = build_skill_assessment({"CSS": 3})
        snapshot = SessionSnapshot(skill_assessment=assessment).with_current_quiz("q1")
        assert snapshot.current_quiz.quiz_id == "q1"
        assert snapshot.current_quiz.assessment == assessment

    def test_cleared_keeps_eligibility(self):
        snapshot = SessionSnapshot(
            skill_assessment=build_skill_assessment({"CSS": 3}),
            leave_eligibility={"isEligible": True},
        ).with_current_quiz("q1")
        cleared = snapshot.cleared()
        assert cleared.skill_assessment is None
        assert cleared.current_quiz is None
        assert cleared.leave_eligibility == {"isEligible": True}


class TestSessionStore:
    def test_empty_store_loads_empty_snapshot(self, store):
        assert store.load() == SessionSnapshot()

    def test_save_and_load(self, store):
        assessment = build_skill_assessment({"JavaScript": 4, "React": 5})
        snapshot = SessionSnapshot(skill_assessment=assessment).with_current_quiz("quiz-7")
        store.save(snapshot)

        loaded = store.load()
        assert loaded.skill_assessment == assessment
        assert loaded.current_quiz.quiz_id == "quiz-7"
        assert (store.session_dir / f"{SKILL_ASSESSMENT_KEY}.json").exists()

    def test_stored_with_wire_names(self, store):
        store.save(SessionSnapshot(skill_assessment=build_skill_assessment({"DSA": 5})))
        raw = store.get(SKILL_ASSESSMENT_KEY)
        assert "avgRating" in raw
        assert raw["topicDifficultyMap"] == {"DSA": "Hard"}

    def test_corrupt_json_reads_as_missing(self, store):
        (store.session_dir / f"{SKILL_ASSESSMENT_KEY}.json").write_text("{not json", encoding="utf-8")
        assert store.get(SKILL_ASSESSMENT_KEY) is None
        assert store.load().skill_assessment is None

    def test_malformed_marker_reads_as_missing(self, store):
        store.set(CURRENT_QUIZ_KEY, {"assessment": {}})
        assert store.load().current_quiz is None

    def test_none_values_delete_keys(self, store):
        store.save(SessionSnapshot(skill_assessment=build_skill_assessment({"DSA": 5})))
        store.save(SessionSnapshot())
        assert not (store.session_dir / f"{SKILL_ASSESSMENT_KEY}.json").exists()

    def test_clear_assessment(self, store):
        snapshot = SessionSnapshot(skill_assessment=build_skill_assessment({"HTML": 2}))
        store.save(snapshot.with_current_quiz("q").with_leave_eligibility({"isEligible": False}))

        cleared = store.clear_assessment()
        assert cleared.skill_assessment is None
        assert store.load().current_quiz is None
        assert store.get(LEAVE_ELIGIBILITY_KEY) == {"isEligible": False}

    def test_delete_missing_key(self, store):
        assert store.delete("nothing") is False

    def test_leave_eligibility_round_trip(self, store, attempt_factory):
        from skillgate.core.models import CodingSubmission

        result = evaluate_eligibility(
            attempt_factory(65),
            [CodingSubmission(challenge_id="a", score=60, passed=True)],
        )
        record = leave_eligibility_record(result)
        store.save(SessionSnapshot().with_leave_eligibility(record))
        loaded = store.load().leave_eligibility
        assert loaded["isEligible"] is True
        assert loaded["finalScore"] == 63
        assert loaded["timestamp"]

    def test_assessment_level_survives(self, store):
        ratings = {t: 5 for t in ("HTML", "CSS", "JavaScript", "React", "Backend", "DSA")}
        store.save(SessionSnapshot(skill_assessment=build_skill_assessment(ratings)))
        assert store.load().skill_assessment.level == Level.ADVANCED
