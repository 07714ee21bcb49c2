"""Scoring for contests and skill assessments.

Rules:
- score: number of questions whose chosen option equals the correct one
  (unanswered questions count as wrong)
- percentage: round(score / total * 100), 0 for an empty test
- progress boost: round(percentage / 10)
- progress counters are capped at 100

Rounding is half-up, so 12.5 -> 13 and 2.5 -> 3 (Python's round() would
give 12 and 2).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

MAX_PROGRESS = 100


@dataclass
class ScoreResult:
    """Outcome of grading one multiple-choice test."""

    score: int
    total: int

    @property
    def percentage(self) -> int:
        return percentage(self.score, self.total)

    @property
    def boost(self) -> int:
        return progress_boost(self.percentage)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def score_answers(correct: Sequence[int], answers: Sequence[int | None]) -> int:
    """Count positional matches between correct options and answers.

    Args:
        correct: Correct option index per question
        answers: Chosen option index per question (None = unanswered);
            may be shorter than ``correct``

    Returns:
        Number of correctly answered questions
    """
    return sum(
        1
        for i, expected in enumerate(correct)
        if i < len(answers) and answers[i] is not None and answers[i] == expected
    )


def grade(correct_by_id: Mapping[int, int], answers_by_id: Mapping[int, int]) -> ScoreResult:
    """Grade answers keyed by question id.

    Args:
        correct_by_id: question id -> correct option index
        answers_by_id: question id -> chosen option index; ids not in
            ``correct_by_id`` are ignored

    Returns:
        ScoreResult over every question in ``correct_by_id``
    """
    ids = list(correct_by_id)
    score = score_answers(
        [correct_by_id[qid] for qid in ids],
        [answers_by_id.get(qid) for qid in ids],
    )
    return ScoreResult(score=score, total=len(ids))


def percentage(score: int, total: int) -> int:
    """Score as a whole-number percentage."""
    if total <= 0:
        return 0
    return round_half_up(score / total * 100)


def progress_boost(percent: int) -> int:
    """Progress points earned for a test result."""
    return round_half_up(percent / 10)


def apply_boost(current: int, boost: int) -> int:
    """Add a boost to a progress counter without exceeding the cap."""
    return min(MAX_PROGRESS, current + boost)
