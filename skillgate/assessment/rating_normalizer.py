"""
Rating Normalizer.

Maps free-form subject/category/title text onto a canonical topic tag and
looks up the learner's self-rating for that tag.

Unmatched text resolves to ``None`` and callers exclude the item. A rating of
``None`` or ``0`` means "not yet assessed"; both are hidden from listings.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from loguru import logger

from skillgate.core.levels import Difficulty, Topic

# Fields inspected on a quiz or question, highest priority first.
TOPIC_FIELDS = ("subject", "category", "topic", "title")

# React before JavaScript so "React (a JavaScript library)" stays React.
TOPIC_MATCH_ORDER: tuple[Topic, ...] = (
    Topic.REACT,
    Topic.BACKEND,
    Topic.DSA,
    Topic.JAVASCRIPT,
    Topic.HTML,
    Topic.CSS,
)

# Alternate spellings, matched as whole words.
TOPIC_ALIASES: dict[Topic, tuple[str, ...]] = {
    Topic.HTML: ("html", "html5"),
    Topic.CSS: ("css", "css3"),
    Topic.JAVASCRIPT: ("javascript", "js", "ecmascript"),
    Topic.REACT: ("react", "reactjs", "react.js"),
    Topic.BACKEND: ("backend", "node", "node.js", "nodejs", "express"),
    Topic.DSA: ("dsa", "algorithms", "data structures"),
}

_ALIAS_PATTERNS: dict[Topic, re.Pattern[str]] = {
    topic: re.compile(
        r"(?<![\w.])(?:" + "|".join(re.escape(a) for a in aliases) + r")(?![\w])",
        re.IGNORECASE,
    )
    for topic, aliases in TOPIC_ALIASES.items()
}


def _field_text(item: Any, name: str) -> str | None:
    if isinstance(item, Mapping):
        value = item.get(name)
    else:
        value = getattr(item, name, None)
    return value if isinstance(value, str) and value.strip() else None


def match_topic(text: str | None) -> Topic | None:
    """
    Match one piece of text against the topic vocabulary.

    Canonical names match as case-insensitive substrings; aliases match as
    whole words so "js" does not fire inside "json".
    """
    if not text:
        return None
    lowered = text.lower()
    for topic in TOPIC_MATCH_ORDER:
        if topic.value.lower() in lowered:
            return topic
    for topic in TOPIC_MATCH_ORDER:
        if _ALIAS_PATTERNS[topic].search(text):
            return topic
    return None


def resolve_topic(item: Any) -> Topic | None:
    """
    Resolve the canonical topic of a quiz, question or plain mapping.

    Args:
        item: Anything with subject/category/topic/title attributes or keys

    Returns:
        Canonical Topic, or None if no field mentions a known topic
    """
    if item is None:
        return None
    for name in TOPIC_FIELDS:
        topic = match_topic(_field_text(item, name))
        if topic is not None:
            return topic
    return None


def resolve_rating(ratings: Mapping[str, Any] | None, topic: Topic | str | None) -> int | None:
    """
    Look up the self-rating for a topic.

    Lookup order: exact key, case-insensitive key, then any key that is an
    alias of the topic (e.g. a "js" key answers for JavaScript).

    Returns:
        The stored rating (possibly 0), or None if the topic was never rated
    """
    if not ratings or topic is None:
        return None

    name = topic.value if isinstance(topic, Topic) else str(topic)

    if name in ratings:
        return _as_rating(ratings[name])

    lowered = name.lower()
    for key, value in ratings.items():
        if str(key).lower() == lowered:
            return _as_rating(value)

    canonical = topic if isinstance(topic, Topic) else match_topic(name)
    aliases = TOPIC_ALIASES.get(canonical, ()) if canonical else ()
    for key, value in ratings.items():
        if str(key).strip().lower() in aliases:
            return _as_rating(value)

    return None


def _as_rating(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric rating {value!r}")
        return None


def is_rated(rating: int | None) -> bool:
    """True if a rating counts as assessed (``None`` and ``0`` do not)."""
    return bool(rating) and rating > 0


def rating_to_difficulty(rating: float) -> Difficulty:
    """
    Map a 1-5 self-rating onto a question difficulty.

    1-2 -> Easy, 3 -> Medium, 4-5 -> Hard. Monotonic in ``rating``; values
    outside 1-5 fall into the nearest end bucket.
    """
    if rating <= 2:
        return Difficulty.EASY
    if rating < 4:
        return Difficulty.MEDIUM
    return Difficulty.HARD
