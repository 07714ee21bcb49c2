"""Coding playground.

Practice problems with starter code and a mock runner. Submitted code is
never executed: every run returns the same canned report of passing test
cases, which is what the practice UI displays.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

MOCK_TEST_CASES = 3
MOCK_RUNTIME_MS = 45


class ProblemNotFoundError(Exception):
    """Raised for an unknown problem index."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Problem {index} not found")


@dataclass(frozen=True)
class Problem:
    """A practice problem."""

    title: str
    difficulty: str
    description: str
    example: str
    starter_code: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RunReport:
    """Result of a (mock) run."""

    problem: str
    passed: int
    total: int
    runtime_ms: int
    output: str

    @property
    def success(self) -> bool:
        return self.passed == self.total


PROBLEMS: tuple[Problem, ...] = (
    Problem(
        title="Two Sum",
        difficulty="Easy",
        description=(
            "Given an array of integers nums and an integer target, return indices "
            "of the two numbers such that they add up to target."
        ),
        example="Input: nums = [2,7,11,15], target = 9\nOutput: [0,1]",
        starter_code="function twoSum(nums, target) {\n  // Write your code here\n}",
    ),
    Problem(
        title="Reverse Integer",
        difficulty="Medium",
        description=(
            "Given a signed 32-bit integer x, return x with its digits reversed. "
            "If reversing x causes the value to go outside the signed 32-bit "
            "integer range, then return 0."
        ),
        example="Input: x = 123\nOutput: 321",
        starter_code="function reverse(x) {\n  // Write your code here\n}",
    ),
    Problem(
        title="Palindrome Number",
        difficulty="Easy",
        description="Given an integer x, return true if x is a palindrome, and false otherwise.",
        example="Input: x = 121\nOutput: true",
        starter_code="function isPalindrome(x) {\n  // Write your code here\n}",
    ),
)


def list_problems() -> list[Problem]:
    """All practice problems, in display order."""
    return list(PROBLEMS)


def get_problem(index: int) -> Problem:
    """Get a problem by its position.

    Raises:
        ProblemNotFoundError: If the index is out of range
    """
    if not 0 <= index < len(PROBLEMS):
        raise ProblemNotFoundError(index)
    return PROBLEMS[index]


def _format_report(passed: int, total: int, runtime_ms: int) -> str:
    lines = [f"✅ Test Case {i}: Passed" for i in range(1, passed + 1)]
    lines.append("")
    lines.append("Result: Success" if passed == total else "Result: Failed")
    lines.append(f"Runtime: {runtime_ms}ms")
    return "\n".join(lines)


def run_code(index: int, code: str) -> RunReport:
    """Mock-run a solution.

    Args:
        index: Problem index
        code: Submitted source (must be non-blank; not executed)

    Returns:
        RunReport with the canned all-passing output

    Raises:
        ProblemNotFoundError: If the index is out of range
        ValueError: If the code is blank
    """
    problem = get_problem(index)
    if not code.strip():
        raise ValueError("Code is empty")

    logger.info("playground.run", problem=problem.title, code_chars=len(code))

    return RunReport(
        problem=problem.title,
        passed=MOCK_TEST_CASES,
        total=MOCK_TEST_CASES,
        runtime_ms=MOCK_RUNTIME_MS,
        output=_format_report(MOCK_TEST_CASES, MOCK_TEST_CASES, MOCK_RUNTIME_MS),
    )
