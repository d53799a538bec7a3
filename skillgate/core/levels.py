"""
Proficiency levels, question difficulties and the canonical topic vocabulary.

Design:
- Level: Beginner < Intermediate < Advanced, totally ordered
- Difficulty: Easy / Medium / Hard, mapped one-to-one onto Level
- Topic: the fixed vocabulary quiz and question metadata is normalized into
"""

from __future__ import annotations

from enum import Enum


class Level(str, Enum):
    """
    Coarse proficiency tier.

    Also used as the coding-challenge tier (see adaptive.coding_difficulty).
    """

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @property
    def rank(self) -> int:
        """Position in the total order (0 = Beginner)."""
        return _LEVEL_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.rank >= other.rank

    def __hash__(self) -> int:
        return hash(self.value)

    def adjacent(self) -> tuple[Level, ...]:
        """Levels exactly one step away (read-only preview access)."""
        return tuple(level for level in _LEVEL_ORDER if abs(level.rank - self.rank) == 1)

    def steps_above(self, other: Level) -> int:
        """How many steps this level sits above ``other`` (negative if below)."""
        return self.rank - other.rank

    @property
    def difficulty(self) -> Difficulty:
        """Question difficulty that corresponds to this level."""
        return _LEVEL_TO_DIFFICULTY[self]

    @classmethod
    def parse(cls, value: str | Level | None) -> Level | None:
        """Case-insensitive lookup by name; ``None`` if unknown."""
        if isinstance(value, Level):
            return value
        if not value:
            return None
        needle = str(value).strip().lower()
        for level in cls:
            if level.value.lower() == needle:
                return level
        return None


class Difficulty(str, Enum):
    """Question difficulty bucket."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @property
    def level(self) -> Level:
        """Level this difficulty is surfaced as (Easy -> Beginner, ...)."""
        return _DIFFICULTY_TO_LEVEL[self]

    @classmethod
    def parse(cls, value: str | Difficulty | None) -> Difficulty | None:
        """Case-insensitive lookup by name; ``None`` if unknown."""
        if isinstance(value, Difficulty):
            return value
        if not value:
            return None
        needle = str(value).strip().lower()
        for difficulty in cls:
            if difficulty.value.lower() == needle:
                return difficulty
        return None


class Topic(str, Enum):
    """Canonical topic tags."""

    HTML = "HTML"
    CSS = "CSS"
    JAVASCRIPT = "JavaScript"
    REACT = "React"
    BACKEND = "Backend"
    DSA = "DSA"


_LEVEL_ORDER: tuple[Level, ...] = (Level.BEGINNER, Level.INTERMEDIATE, Level.ADVANCED)

_LEVEL_TO_DIFFICULTY = {
    Level.BEGINNER: Difficulty.EASY,
    Level.INTERMEDIATE: Difficulty.MEDIUM,
    Level.ADVANCED: Difficulty.HARD,
}

_DIFFICULTY_TO_LEVEL = {v: k for k, v in _LEVEL_TO_DIFFICULTY.items()}

# Coding tiers reuse the level values.
Tier = Level
