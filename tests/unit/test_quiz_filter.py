"""
Unit tests for topic / readiness filtering of the quiz catalogue.
"""

import pytest

from skillgate.assessment.self_assessment import build_skill_assessment
from skillgate.core.levels import Difficulty, Level, Topic
from skillgate.core.models import SkillAssessment
from skillgate.quiz.quiz_filter import (
    READY_TO_START_MIN_MATCHES,
    expected_difficulty_for,
    filter_available_quizzes,
    matching_questions,
    preview_quizzes,
)


@pytest.fixture
def medium_js(pool_factory):
    def build(count):
        return pool_factory(medium=count, topic="JavaScript")

    return build


class TestFilterAvailableQuizzes:
    def test_no_assessment_lists_nothing(self, quiz_factory, medium_js):
        quiz = quiz_factory("js", medium_js(12), category="JavaScript")
        assert filter_available_quizzes([quiz], None) == []

    def test_ready_when_twelve_match(self, quiz_factory, medium_js, js_assessment):
        quiz = quiz_factory("js", medium_js(12), category="JavaScript")
        [item] = filter_available_quizzes([quiz], js_assessment)
        assert item.topic == Topic.JAVASCRIPT
        assert item.expected_difficulty == Difficulty.MEDIUM
        assert item.matching_count == 12
        assert item.ready_to_start is True
        assert item.display_count == 12
        assert item.message is None

    def test_listed_but_disabled_below_twelve(self, quiz_factory, medium_js, js_assessment):
        quiz = quiz_factory("js", medium_js(11), category="JavaScript")
        [item] = filter_available_quizzes([quiz], js_assessment)
        assert item.ready_to_start is False
        assert item.matching_count == 11
        assert item.shortfall == 1
        assert "11" in item.message

    def test_display_count_capped_at_fifteen(self, quiz_factory, medium_js, js_assessment):
        quiz = quiz_factory("js", medium_js(20), category="JavaScript")
        [item] = filter_available_quizzes([quiz], js_assessment)
        assert item.matching_count == 20
        assert item.display_count == 15

    def test_only_matching_topic_and_difficulty_count(
        self, quiz_factory, pool_factory, question_factory, js_assessment
    ):
        questions = pool_factory(easy=5, medium=12, hard=5, topic="JavaScript")
        questions += [question_factory(f"css{i}", "Medium", topic="CSS") for i in range(4)]
        questions += [question_factory(f"none{i}", "Medium", topic=None) for i in range(3)]
        quiz = quiz_factory("js", questions, category="JavaScript")
        [item] = filter_available_quizzes([quiz], js_assessment)
        assert item.matching_count == 12

    def test_unrated_topic_hidden(self, quiz_factory, pool_factory, js_assessment):
        quiz = quiz_factory("css", pool_factory(easy=15, topic="CSS"), category="CSS")
        assert filter_available_quizzes([quiz], js_assessment) == []

    def test_zero_rating_hidden(self, quiz_factory, medium_js):
        assessment = SkillAssessment(ratings={"JavaScript": 0})
        quiz = quiz_factory("js", medium_js(15), category="JavaScript")
        assert filter_available_quizzes([quiz], assessment) == []

    def test_unresolvable_topic_hidden(self, quiz_factory, medium_js, js_assessment):
        quiz = quiz_factory("gen", medium_js(15), category="General", title="Mixed bag")
        assert filter_available_quizzes([quiz], js_assessment) == []

    def test_preview_quizzes_skipped(self, quiz_factory, medium_js, js_assessment):
        quiz = quiz_factory("js", medium_js(15), category="JavaScript", isPreview=True)
        assert filter_available_quizzes([quiz], js_assessment) == []

    def test_locked_quiz_skipped(self, quiz_factory, medium_js, js_assessment):
        """Beginner learner, Hard (Advanced) quiz: two steps above."""
        assert js_assessment.level == Level.BEGINNER
        quiz = quiz_factory("js", medium_js(15), category="JavaScript", difficulty="Hard")
        assert filter_available_quizzes([quiz], js_assessment) == []

    def test_student_level_override_unlocks(self, quiz_factory, medium_js, js_assessment):
        quiz = quiz_factory("js", medium_js(15), category="JavaScript", difficulty="Hard")
        visible = filter_available_quizzes([quiz], js_assessment, student_level=Level.INTERMEDIATE)
        assert len(visible) == 1

    def test_catalogue_order_kept(self, quiz_factory, medium_js, js_assessment):
        quizzes = [quiz_factory(f"js{i}", medium_js(12), category="JavaScript") for i in range(3)]
        assert [v.quiz.id for v in filter_available_quizzes(quizzes, js_assessment)] == [
            "js0",
            "js1",
            "js2",
        ]

    def test_threshold_constant(self):
        assert READY_TO_START_MIN_MATCHES == 12


class TestExpectedDifficulty:
    def test_explicit_map_wins(self):
        assessment = SkillAssessment(
            ratings={"React": 5},
            topic_difficulty_map={"react": "Easy"},
        )
        assert expected_difficulty_for(assessment, Topic.REACT, 5) == Difficulty.EASY

    def test_rating_fallback(self):
        assessment = SkillAssessment(ratings={"React": 5})
        assert expected_difficulty_for(assessment, Topic.REACT, 5) == Difficulty.HARD

    def test_unrated_has_no_expectation(self):
        assert expected_difficulty_for(SkillAssessment(), Topic.REACT, None) is None

    def test_no_expectation_matches_any_difficulty(self, quiz_factory, pool_factory):
        quiz = quiz_factory("r", pool_factory(easy=2, medium=2, hard=2, topic="React"))
        assert len(matching_questions(quiz, Topic.REACT, None)) == 6


class TestPreviewQuizzes:
    def test_adjacent_preview_listed(self, quiz_factory, medium_js):
        quizzes = [
            quiz_factory("p-int", medium_js(3), isPreview=True, difficulty="Medium"),
            quiz_factory("p-adv", medium_js(3), isPreview=True, difficulty="Hard"),
            quiz_factory("regular", medium_js(3), difficulty="Medium"),
        ]
        previews = preview_quizzes(quizzes, Level.BEGINNER)
        assert [q.id for q in previews] == ["p-int"]

    def test_assessment_build_integration(self, quiz_factory, pool_factory):
        assessment = build_skill_assessment({"react": 4})
        quiz = quiz_factory("r", pool_factory(hard=13, topic="React"), subject="React")
        [item] = filter_available_quizzes([quiz], assessment)
        assert item.expected_difficulty == Difficulty.HARD
        assert item.ready_to_start is True
