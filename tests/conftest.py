"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from skillgate.assessment.self_assessment import build_skill_assessment  # noqa: E402
from skillgate.core.models import Question, Quiz, QuizAttempt  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


# =============================================================================
# Record factories
# =============================================================================


def make_question(
    qid: str,
    difficulty: str | None = None,
    kind: str = "mcq",
    topic: str | None = "JavaScript",
    options: int = 4,
) -> Question:
    """Build a Question; mcq gets ``options`` placeholder choices."""
    data = {"_id": qid, "question": f"Question {qid}", "type": kind, "topic": topic}
    if kind == "mcq":
        data["options"] = [f"Option {i}" for i in range(options)]
    if difficulty is not None:
        data["difficulty"] = difficulty
    return Question.model_validate(data)


def make_pool(easy: int = 0, medium: int = 0, hard: int = 0, topic: str = "JavaScript") -> list[Question]:
    """Pool with explicit difficulty counts."""
    pool = [make_question(f"e{i}", "Easy", topic=topic) for i in range(easy)]
    pool += [make_question(f"m{i}", "Medium", topic=topic) for i in range(medium)]
    pool += [make_question(f"h{i}", "Hard", topic=topic) for i in range(hard)]
    return pool


def make_attempt(
    percentage: float,
    passed: bool | None = None,
    minutes: float = 10,
    day: int = 0,
    quiz_id: str = "quiz-1",
) -> QuizAttempt:
    """Attempt ``day`` days after a fixed epoch; passes at 60% unless told."""
    return QuizAttempt.model_validate(
        {
            "quizId": quiz_id,
            "percentage": percentage,
            "passed": percentage >= 60 if passed is None else passed,
            "timeTaken": minutes * 60,
            "completedAt": (datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(days=day)).isoformat(),
        }
    )


def make_quiz(qid: str, questions: list[Question], **fields) -> Quiz:
    return Quiz.model_validate({"_id": qid, "title": fields.pop("title", qid), "questions": questions, **fields})


@pytest.fixture
def rng():
    """Seeded random source for reproducible sampling."""
    return random.Random(1234)


@pytest.fixture
def js_assessment():
    """Assessment with only JavaScript rated (3 -> Medium)."""
    return build_skill_assessment({"JavaScript": 3})


@pytest.fixture
def sample_quiz_json():
    """A quiz in the question bank's camelCase wire format."""
    return {
        "_id": "quiz-js-1",
        "title": "JavaScript Fundamentals",
        "category": "JavaScript",
        "difficulty": "Medium",
        "questions": [
            {
                "_id": f"q{i}",
                "question": f"What does snippet {i} print?",
                "type": "mcq",
                "options": ["a", "b", "c", "d"],
                "difficulty": "Medium",
                "topic": "JavaScript",
                "points": 1,
            }
            for i in range(14)
        ],
    }


@pytest.fixture
def question_factory():
    return make_question


@pytest.fixture
def pool_factory():
    return make_pool


@pytest.fixture
def attempt_factory():
    return make_attempt


@pytest.fixture
def quiz_factory():
    return make_quiz
