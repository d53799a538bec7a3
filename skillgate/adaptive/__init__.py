"""
Adaptive Engine.

Components:
- ProficiencyClassifier: rating / history / pressure-table leveling
- resolve_coding_tier: DSA rating + quiz score -> coding tier
- CHALLENGE_BANK: static three-tier challenge set
"""
from skillgate.adaptive.challenge_bank import (
    CHALLENGE_BANK,
    ChallengeTest,
    CodingChallenge,
    challenges_for,
    find_challenge,
)
from skillgate.adaptive.coding_difficulty import (
    CodeEvaluator,
    grade_with,
    resolve_coding_tier,
    score_submission,
    select_challenges,
)
from skillgate.adaptive.proficiency import (
    AttemptPressure,
    ProficiencyClassifier,
    ProficiencyDecision,
    can_preview,
    classify_proficiency,
    is_quiz_locked,
)

__all__ = [
    # Proficiency
    "ProficiencyClassifier",
    "ProficiencyDecision",
    "AttemptPressure",
    "classify_proficiency",
    "is_quiz_locked",
    "can_preview",
    # Coding
    "CodeEvaluator",
    "resolve_coding_tier",
    "select_challenges",
    "score_submission",
    "grade_with",
    # Bank
    "CHALLENGE_BANK",
    "ChallengeTest",
    "CodingChallenge",
    "challenges_for",
    "find_challenge",
]
