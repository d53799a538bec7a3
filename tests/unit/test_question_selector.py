"""
Unit tests for difficulty-weighted question sampling.

Bucket composition is asserted with a seeded random source; order is not.
"""

import random
from collections import Counter

import pytest

from skillgate.core.levels import Difficulty, Level
from skillgate.quiz.question_selector import (
    LEVEL_MIX,
    DifficultyMix,
    QuestionSelector,
    bucket_by_difficulty,
    select_adaptive_questions,
)


def composition(questions):
    return Counter(q.resolved_difficulty for q in questions)


class TestDifficultyMix:
    @pytest.mark.parametrize(
        "level,expected",
        [
            (Level.ADVANCED, {Difficulty.HARD: 10, Difficulty.MEDIUM: 3, Difficulty.EASY: 2}),
            (Level.INTERMEDIATE, {Difficulty.HARD: 3, Difficulty.MEDIUM: 9, Difficulty.EASY: 3}),
            (Level.BEGINNER, {Difficulty.HARD: 1, Difficulty.MEDIUM: 3, Difficulty.EASY: 11}),
        ],
    )
    def test_split_of_fifteen(self, level, expected):
        assert LEVEL_MIX[level].split(15) == expected

    def test_split_always_sums_to_target(self):
        for mix in LEVEL_MIX.values():
            for target in range(11, 16):
                assert sum(mix.split(target).values()) == target

    def test_custom_mix(self):
        assert DifficultyMix(50, 50).split(11) == {
            Difficulty.HARD: 5,
            Difficulty.MEDIUM: 5,
            Difficulty.EASY: 1,
        }


class TestBuckets:
    def test_inference_used_when_no_label(self, question_factory):
        pool = [
            question_factory("c", kind="coding"),
            question_factory("m", options=6),
            question_factory("e", options=3),
        ]
        buckets = bucket_by_difficulty(pool)
        assert [q.id for q in buckets[Difficulty.HARD]] == ["c"]
        assert [q.id for q in buckets[Difficulty.MEDIUM]] == ["m"]
        assert [q.id for q in buckets[Difficulty.EASY]] == ["e"]


class TestSelect:
    def test_small_pool_returned_unchanged(self, pool_factory, rng):
        pool = pool_factory(easy=4, medium=3, hard=3)
        assert QuestionSelector(rng).select(pool, Level.ADVANCED) == pool

    def test_advanced_composition(self, pool_factory, rng):
        pool = pool_factory(easy=10, medium=10, hard=10)
        subset = QuestionSelector(rng).select(pool, Level.ADVANCED)
        assert len(subset) == 15
        assert composition(subset) == {Difficulty.HARD: 10, Difficulty.MEDIUM: 3, Difficulty.EASY: 2}

    def test_intermediate_composition(self, pool_factory, rng):
        pool = pool_factory(easy=10, medium=10, hard=10)
        subset = QuestionSelector(rng).select(pool, Level.INTERMEDIATE)
        assert composition(subset) == {Difficulty.HARD: 3, Difficulty.MEDIUM: 9, Difficulty.EASY: 3}

    def test_assessment_level_is_used(self, pool_factory, rng):
        from skillgate.assessment.self_assessment import build_skill_assessment

        ratings = {t: 5 for t in ("HTML", "CSS", "JavaScript", "React", "Backend", "DSA")}
        pool = pool_factory(easy=10, medium=10, hard=10)
        subset = QuestionSelector(rng).select(pool, build_skill_assessment(ratings))
        assert composition(subset)[Difficulty.HARD] == 10

    def test_missing_assessment_is_beginner(self, pool_factory, rng):
        pool = pool_factory(easy=12, medium=5, hard=5)
        subset = QuestionSelector(rng).select(pool, None)
        assert composition(subset) == {Difficulty.HARD: 1, Difficulty.MEDIUM: 3, Difficulty.EASY: 11}

    def test_target_capped_by_pool_size(self, pool_factory, rng):
        """12 questions -> target 12: Advanced gets 8 hard, 2 medium, 2 easy."""
        pool = pool_factory(easy=4, medium=4, hard=4)
        subset = QuestionSelector(rng).select(pool, Level.ADVANCED)
        counts = composition(subset)
        assert counts[Difficulty.HARD] == 4  # bucket exhausted
        assert counts[Difficulty.MEDIUM] == 2
        assert counts[Difficulty.EASY] == 2

    def test_thin_buckets_not_backfilled(self, pool_factory, rng):
        pool = pool_factory(easy=20, medium=0, hard=0)
        subset = QuestionSelector(rng).select(pool, Level.ADVANCED)
        assert len(subset) == 2
        assert composition(subset) == {Difficulty.EASY: 2}

    def test_no_duplicates_and_from_pool(self, pool_factory, rng):
        pool = pool_factory(easy=10, medium=10, hard=10)
        subset = QuestionSelector(rng).select(pool, Level.BEGINNER)
        ids = [q.id for q in subset]
        assert len(ids) == len(set(ids))
        assert set(ids) <= {q.id for q in pool}

    @pytest.mark.parametrize("size", [11, 14, 15, 30, 60])
    @pytest.mark.parametrize("level", list(Level))
    def test_size_never_exceeds_cap(self, pool_factory, size, level):
        third = size // 3
        pool = pool_factory(easy=size - 2 * third, medium=third, hard=third)
        subset = select_adaptive_questions(pool, level, rng=random.Random(size))
        assert len(subset) <= min(15, len(pool))

    def test_same_seed_same_subset(self, pool_factory):
        pool = pool_factory(easy=10, medium=10, hard=10)
        first = select_adaptive_questions(pool, Level.INTERMEDIATE, rng=random.Random(7))
        second = select_adaptive_questions(pool, Level.INTERMEDIATE, rng=random.Random(7))
        assert [q.id for q in first] == [q.id for q in second]

    def test_order_is_mixed_across_buckets(self, pool_factory):
        """Across many draws the first question is not always from the same bucket."""
        pool = pool_factory(easy=10, medium=10, hard=10)
        firsts = {
            select_adaptive_questions(pool, Level.INTERMEDIATE, rng=random.Random(seed))[0].resolved_difficulty
            for seed in range(40)
        }
        assert len(firsts) > 1
