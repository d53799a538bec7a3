"""
Static three-tier coding challenge bank.

Each tier holds a fixed challenge set. Tests are data only: running the
submitted code against them belongs to the external code evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from skillgate.core.levels import Difficulty, Tier


@dataclass(frozen=True)
class ChallengeTest:
    """One input/expected-output pair."""

    input: tuple[Any, ...]
    expected_output: Any
    description: str = ""


@dataclass(frozen=True)
class CodingChallenge:
    """A coding challenge served for one tier."""

    id: str
    title: str
    description: str
    input_description: str
    output_description: str
    constraints: str
    difficulty: Difficulty
    sample_tests: tuple[ChallengeTest, ...] = ()
    hidden_tests: tuple[ChallengeTest, ...] = ()
    starter_code: dict[str, str] = field(default_factory=dict)

    @property
    def all_tests(self) -> tuple[ChallengeTest, ...]:
        """Sample tests followed by hidden tests (full submission run)."""
        return self.sample_tests + self.hidden_tests

    def starter_for(self, language: str) -> str:
        return self.starter_code.get(language.lower(), "")


def _starters(js: str, py: str, java: str) -> dict[str, str]:
    return {"javascript": js, "python": py, "java": java}


CHALLENGE_BANK: dict[Tier, tuple[CodingChallenge, ...]] = {
    Tier.BEGINNER: (
        CodingChallenge(
            id="beginner-1",
            title="Sum of Two Numbers",
            description="Write a function that takes two numbers as input and returns their sum.",
            input_description="Two integers a and b",
            output_description="The sum of a and b",
            constraints="-1000 <= a, b <= 1000",
            difficulty=Difficulty.EASY,
            sample_tests=(
                ChallengeTest((5, 3), 8, "sum(5, 3)"),
                ChallengeTest((-2, 7), 5, "sum(-2, 7)"),
                ChallengeTest((0, 0), 0, "sum(0, 0)"),
            ),
            hidden_tests=(
                ChallengeTest((100, -50), 50),
                ChallengeTest((-999, -1), -1000),
                ChallengeTest((500, 500), 1000),
            ),
            starter_code=_starters(
                "function sum(a, b) {\n  // Write your code here\n  \n}",
                "def sum(a, b):\n    # Write your code here\n    pass",
                "public class Solution {\n    public static int sum(int a, int b) {\n"
                "        // Write your code here\n        \n    }\n}",
            ),
        ),
        CodingChallenge(
            id="beginner-2",
            title="Reverse a String",
            description="Write a function that reverses a given string.",
            input_description="A string s",
            output_description="The reversed string",
            constraints="1 <= length of s <= 1000",
            difficulty=Difficulty.EASY,
            sample_tests=(
                ChallengeTest(("hello",), "olleh", 'reverse("hello")'),
                ChallengeTest(("world",), "dlrow", 'reverse("world")'),
                ChallengeTest(("a",), "a", 'reverse("a")'),
            ),
            hidden_tests=(
                ChallengeTest(("JavaScript",), "tpircSavaJ"),
                ChallengeTest(("12345",), "54321"),
                ChallengeTest(("racecar",), "racecar"),
            ),
            starter_code=_starters(
                "function reverse(s) {\n  // Write your code here\n  \n}",
                "def reverse(s):\n    # Write your code here\n    pass",
                "public class Solution {\n    public static String reverse(String s) {\n"
                "        // Write your code here\n        \n    }\n}",
            ),
        ),
    ),
    Tier.INTERMEDIATE: (
        CodingChallenge(
            id="intermediate-1",
            title="Find Duplicates in Array",
            description=(
                "Write a function that finds all duplicate elements in an array "
                "and returns them in ascending order."
            ),
            input_description="An array of integers",
            output_description="Array of duplicate elements in ascending order",
            constraints="1 <= array length <= 1000, 0 <= elements <= 1000",
            difficulty=Difficulty.MEDIUM,
            sample_tests=(
                ChallengeTest(([1, 2, 3, 2, 4, 3],), [2, 3], "findDuplicates([1,2,3,2,4,3])"),
                ChallengeTest(([5, 5, 5, 5],), [5], "findDuplicates([5,5,5,5])"),
                ChallengeTest(([1, 2, 3, 4],), [], "findDuplicates([1,2,3,4])"),
            ),
            hidden_tests=(
                ChallengeTest(([10, 20, 10, 30, 20, 40],), [10, 20]),
                ChallengeTest(([1],), []),
                ChallengeTest(([7, 7, 8, 8, 9, 9],), [7, 8, 9]),
            ),
            starter_code=_starters(
                "function findDuplicates(arr) {\n  // Write your code here\n  \n}",
                "def find_duplicates(arr):\n    # Write your code here\n    pass",
                "public class Solution {\n    public static int[] findDuplicates(int[] arr) {\n"
                "        // Write your code here\n        \n    }\n}",
            ),
        ),
        CodingChallenge(
            id="intermediate-2",
            title="Valid Palindrome",
            description=(
                "Determine if a string is a palindrome, considering only "
                "alphanumeric characters and ignoring case."
            ),
            input_description="A string s",
            output_description="true if palindrome, false otherwise",
            constraints="1 <= length of s <= 1000",
            difficulty=Difficulty.MEDIUM,
            sample_tests=(
                ChallengeTest(("A man, a plan, a canal: Panama",), True),
                ChallengeTest(("race a car",), False),
                ChallengeTest(("",), True),
            ),
            hidden_tests=(
                ChallengeTest(("Madam",), True),
                ChallengeTest(("hello",), False),
                ChallengeTest(("12321",), True),
            ),
            starter_code=_starters(
                "function isPalindrome(s) {\n  // Write your code here\n  \n}",
                "def is_palindrome(s):\n    # Write your code here\n    pass",
                "public class Solution {\n    public static boolean isPalindrome(String s) {\n"
                "        // Write your code here\n        \n    }\n}",
            ),
        ),
    ),
    Tier.ADVANCED: (
        CodingChallenge(
            id="advanced-1",
            title="Longest Substring Without Repeating Characters",
            description="Find the length of the longest substring without repeating characters.",
            input_description="A string s",
            output_description="Length of the longest substring without repeating characters",
            constraints="0 <= length of s <= 50000",
            difficulty=Difficulty.HARD,
            sample_tests=(
                ChallengeTest(("abcabcbb",), 3, '"abc"'),
                ChallengeTest(("bbbbb",), 1, '"b"'),
                ChallengeTest(("pwwkew",), 3, '"wke"'),
            ),
            hidden_tests=(
                ChallengeTest(("",), 0),
                ChallengeTest(("abcdef",), 6),
                ChallengeTest(("aab",), 2),
            ),
            starter_code=_starters(
                "function lengthOfLongestSubstring(s) {\n  // Write your code here\n  \n}",
                "def length_of_longest_substring(s):\n    # Write your code here\n    pass",
                "public class Solution {\n    public static int lengthOfLongestSubstring(String s) {\n"
                "        // Write your code here\n        \n    }\n}",
            ),
        ),
        CodingChallenge(
            id="advanced-2",
            title="Merge Intervals",
            description="Given an array of intervals, merge all overlapping intervals.",
            input_description="Array of intervals [[start1, end1], [start2, end2], ...]",
            output_description="Array of merged intervals",
            constraints="1 <= intervals.length <= 1000",
            difficulty=Difficulty.HARD,
            sample_tests=(
                ChallengeTest(
                    ([[1, 3], [2, 6], [8, 10], [15, 18]],), [[1, 6], [8, 10], [15, 18]]
                ),
                ChallengeTest(([[1, 4], [4, 5]],), [[1, 5]]),
            ),
            hidden_tests=(
                ChallengeTest(([[1, 4], [2, 3]],), [[1, 4]]),
                ChallengeTest(([[1, 10], [2, 6], [8, 9]],), [[1, 10]]),
            ),
            starter_code=_starters(
                "function merge(intervals) {\n  // Write your code here\n  \n}",
                "def merge(intervals):\n    # Write your code here\n    pass",
                "public class Solution {\n    public static int[][] merge(int[][] intervals) {\n"
                "        // Write your code here\n        \n    }\n}",
            ),
        ),
    ),
}


def challenges_for(tier: Tier | None) -> tuple[CodingChallenge, ...]:
    """Challenge set for a tier; unknown tiers get the Beginner set."""
    return CHALLENGE_BANK.get(tier, CHALLENGE_BANK[Tier.BEGINNER])


def find_challenge(challenge_id: str) -> CodingChallenge | None:
    for challenges in CHALLENGE_BANK.values():
        for challenge in challenges:
            if challenge.id == challenge_id:
                return challenge
    return None
