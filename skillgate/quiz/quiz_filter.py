"""
Topic / readiness filtering of the quiz catalogue.

Decides which quizzes a learner sees and which of those can be started:

1. preview quizzes are skipped (see ``preview_quizzes``)
2. quizzes more than one level above the learner are locked and skipped
3. the quiz topic must resolve to a canonical topic
4. the learner must have rated that topic (unrated / 0 is hidden)
5. questions match when their own topic equals the quiz topic and their
   difficulty equals the expected difficulty for that topic

A quiz with at least 12 matching questions is ready to start; fewer and it
is still listed, disabled, with the count surfaced as ``matching_count``.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from loguru import logger

from skillgate.adaptive.proficiency import can_preview, is_quiz_locked
from skillgate.assessment.rating_normalizer import (
    is_rated,
    rating_to_difficulty,
    resolve_rating,
    resolve_topic,
)
from skillgate.core.levels import Difficulty, Level, Topic
from skillgate.core.models import Question, Quiz, SkillAssessment
from skillgate.quiz.question_selector import MAX_SUBSET_SIZE

# Matching questions required before a quiz can be started.
READY_TO_START_MIN_MATCHES = 12


@dataclass(frozen=True)
class QuizAvailability:
    """One visible quiz and whether it can be started."""

    quiz: Quiz
    topic: Topic
    rating: int
    expected_difficulty: Difficulty | None
    matching_count: int
    ready_to_start: bool
    display_count: int

    @property
    def shortfall(self) -> int:
        """Matching questions still missing before the quiz unlocks."""
        return max(0, READY_TO_START_MIN_MATCHES - self.matching_count)

    @property
    def message(self) -> str | None:
        """Advisory text for disabled quizzes."""
        if self.ready_to_start:
            return None
        return (
            f"Only {self.matching_count} {self.topic.value} questions match your level; "
            f"{READY_TO_START_MIN_MATCHES} are needed to start"
        )


def expected_difficulty_for(
    assessment: SkillAssessment, topic: Topic, rating: int | None
) -> Difficulty | None:
    """Explicit per-topic difficulty, else the difficulty the rating implies."""
    explicit = _lookup(assessment.topic_difficulty_map, topic)
    if explicit is not None:
        return explicit
    if is_rated(rating):
        return rating_to_difficulty(rating)
    return None


def _lookup(mapping: Mapping[str, Difficulty], topic: Topic) -> Difficulty | None:
    if topic.value in mapping:
        return mapping[topic.value]
    lowered = topic.value.lower()
    for key, value in mapping.items():
        if key.lower() == lowered:
            return value
    return None


def question_matches(
    question: Question, topic: Topic, expected: Difficulty | None
) -> bool:
    """Same canonical topic, and same difficulty when one is expected."""
    if resolve_topic(question) != topic:
        return False
    return expected is None or question.resolved_difficulty == expected


def matching_questions(
    quiz: Quiz, topic: Topic, expected: Difficulty | None
) -> list[Question]:
    return [q for q in quiz.questions if question_matches(q, topic, expected)]


def filter_available_quizzes(
    quizzes: Sequence[Quiz],
    assessment: SkillAssessment | None,
    student_level: Level | None = None,
) -> list[QuizAvailability]:
    """
    List the quizzes a learner may see, flagging which can start.

    Args:
        quizzes: Full quiz catalogue
        assessment: Learner's self-assessment (nothing is listed without one)
        student_level: Overall level for locking (defaults to the assessment's)

    Returns:
        QuizAvailability per visible quiz, in catalogue order
    """
    if assessment is None:
        logger.debug("No skill assessment: no quizzes listed")
        return []

    level = student_level or assessment.level
    visible: list[QuizAvailability] = []

    for quiz in quizzes:
        if quiz.is_preview:
            continue
        if is_quiz_locked(quiz.level, level):
            logger.debug(f"Quiz {quiz.id} locked for {level.value}")
            continue

        topic = resolve_topic(quiz)
        if topic is None:
            logger.debug(f"Quiz {quiz.id} has no recognizable topic")
            continue

        rating = resolve_rating(assessment.ratings, topic)
        if not is_rated(rating):
            continue

        expected = expected_difficulty_for(assessment, topic, rating)
        matches = len(matching_questions(quiz, topic, expected))

        logger.debug(
            f"Quiz {quiz.id} [{topic.value}/{expected.value if expected else '-'}]: "
            f"{matches} matching questions"
        )

        visible.append(
            QuizAvailability(
                quiz=quiz,
                topic=topic,
                rating=rating,
                expected_difficulty=expected,
                matching_count=matches,
                ready_to_start=matches >= READY_TO_START_MIN_MATCHES,
                display_count=min(MAX_SUBSET_SIZE, matches),
            )
        )

    return visible


def preview_quizzes(quizzes: Sequence[Quiz], student_level: Level | None) -> list[Quiz]:
    """Preview-flagged quizzes one level away from the learner (read-only)."""
    return [q for q in quizzes if q.is_preview and can_preview(q.level, student_level)]
