"""
Unit tests for collaborator records and the level vocabulary.
"""

import pytest
from pydantic import ValidationError

from skillgate.core.levels import Difficulty, Level
from skillgate.core.models import (
    CodingSubmission,
    Question,
    QuestionKind,
    Quiz,
    QuizAttempt,
    SkillAssessment,
)


class TestLevel:
    def test_total_order(self):
        assert Level.BEGINNER < Level.INTERMEDIATE < Level.ADVANCED
        assert max(Level) == Level.ADVANCED

    def test_adjacent(self):
        assert Level.BEGINNER.adjacent() == (Level.INTERMEDIATE,)
        assert Level.INTERMEDIATE.adjacent() == (Level.BEGINNER, Level.ADVANCED)
        assert Level.ADVANCED.adjacent() == (Level.INTERMEDIATE,)

    def test_parse(self):
        assert Level.parse("advanced") == Level.ADVANCED
        assert Level.parse("expert") is None
        assert Difficulty.parse(" HARD ") == Difficulty.HARD

    def test_difficulty_round_trip(self):
        for level in Level:
            assert level.difficulty.level == level


class TestQuestion:
    def test_wire_aliases(self):
        question = Question.model_validate(
            {
                "_id": "abc",
                "question": "2 + 2?",
                "type": "mcq",
                "options": ["3", "4"],
                "starterCode": None,
            }
        )
        assert question.id == "abc"
        assert question.prompt == "2 + 2?"
        assert question.kind == QuestionKind.MCQ

    def test_kind_defaults_from_options(self):
        assert Question.model_validate({"id": "1", "options": ["a", "b"]}).kind == QuestionKind.MCQ
        assert Question.model_validate({"id": "2"}).kind == QuestionKind.CODING

    def test_mcq_needs_two_options(self):
        with pytest.raises(ValidationError):
            Question.model_validate({"id": "1", "type": "mcq", "options": ["only"]})

    def test_unknown_difficulty_left_for_inference(self):
        question = Question.model_validate({"id": "1", "options": ["a", "b"], "difficulty": "spicy"})
        assert question.difficulty is None
        assert question.resolved_difficulty == Difficulty.EASY

    @pytest.mark.parametrize(
        "data,expected",
        [
            ({"id": "c", "type": "coding"}, Difficulty.HARD),
            ({"id": "m", "options": list("abcde")}, Difficulty.MEDIUM),
            ({"id": "e", "options": list("abcd")}, Difficulty.EASY),
            ({"id": "x", "type": "coding", "difficulty": "Easy"}, Difficulty.EASY),
        ],
    )
    def test_resolved_difficulty(self, data, expected):
        assert Question.model_validate(data).resolved_difficulty == expected

    def test_resolved_difficulty_is_stable(self):
        question = Question.model_validate({"id": "c", "type": "coding"})
        assert question.resolved_difficulty is question.resolved_difficulty

    def test_frozen(self):
        question = Question.model_validate({"id": "c", "type": "coding"})
        with pytest.raises(ValidationError):
            question.prompt = "changed"


class TestQuizAndAttempts:
    def test_quiz_level_from_difficulty(self):
        assert Quiz.model_validate({"_id": "q", "difficulty": "Hard"}).level == Level.ADVANCED
        assert Quiz.model_validate({"_id": "q"}).level is None

    def test_preview_alias(self):
        assert Quiz.model_validate({"_id": "q", "isPreview": True}).is_preview is True

    def test_attempt_quiz_reference_object(self):
        attempt = QuizAttempt.model_validate({"quiz": {"_id": "quiz-9"}, "percentage": 70})
        assert attempt.quiz_id == "quiz-9"

    def test_attempt_percentage_bounds(self):
        with pytest.raises(ValidationError):
            QuizAttempt.model_validate({"percentage": 101})

    def test_submission_score_bounds(self):
        with pytest.raises(ValidationError):
            CodingSubmission.model_validate({"challengeId": "x", "score": -1})

    def test_attempt_minutes(self):
        assert QuizAttempt.model_validate({"timeTaken": 90}).time_taken_minutes == 1.5


class TestSkillAssessmentRecord:
    def test_camel_case_round_trip(self):
        assessment = SkillAssessment.model_validate(
            {
                "ratings": {"JavaScript": 4},
                "level": "intermediate",
                "avgRating": 0.7,
                "topicDifficultyMap": {"JavaScript": "Hard", "CSS": "???"},
            }
        )
        assert assessment.level == Level.INTERMEDIATE
        assert assessment.topic_difficulty_map == {"JavaScript": Difficulty.HARD}
        dumped = assessment.model_dump(mode="json", by_alias=True)
        assert dumped["avgRating"] == 0.7
        assert SkillAssessment.model_validate(dumped) == assessment

    def test_unknown_level_defaults_to_beginner(self):
        assert SkillAssessment.model_validate({"level": "guru"}).level == Level.BEGINNER
