"""Skill assessments.

Responsibilities:
- Load the multiple-choice question bank (data/assessments_v1.yaml)
- Grade a submitted category test
- Turn the result into a progress boost on the matching counter

Tracks map one-to-one onto the user progress counters: coding,
aptitude and comm.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

from skillup.core.scoring import ScoreResult, apply_boost, grade
from skillup.db.users_repository import get_user_by_id, update_progress

logger = structlog.get_logger(__name__)

BANK_FILE = Path(__file__).parent.parent / "data" / "assessments_v1.yaml"


class AssessmentNotFoundError(Exception):
    """Raised for an unknown track or category."""

    def __init__(self, track: str, category: str | None = None):
        self.track = track
        self.category = category
        if category is None:
            super().__init__(f"Assessment track '{track}' not found")
        else:
            super().__init__(f"Category '{category}' not found in track '{track}'")


@dataclass
class AssessmentQuestion:
    """A multiple-choice question; ``correct`` is a zero-based option index."""

    id: int
    question: str
    options: list[str]
    correct: int

    def to_public_dict(self) -> dict[str, Any]:
        """Question as shown to the student (no answer key)."""
        return {"id": self.id, "question": self.question, "options": list(self.options)}


@dataclass
class AssessmentCategory:
    """A topic within a track."""

    id: str
    title: str
    icon: str = ""
    questions: list[AssessmentQuestion] = field(default_factory=list)


@dataclass
class AssessmentTrack:
    """A skill track with its categories."""

    id: str
    title: str
    categories: list[AssessmentCategory] = field(default_factory=list)

    def get_category(self, category_id: str) -> AssessmentCategory | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None


@dataclass
class AssessmentResult:
    """Graded submission and the progress change it caused."""

    track: str
    category: str
    score: int
    total: int
    percentage: int
    boost: int
    previous_progress: int
    new_progress: int


# Module-level cache
_cached_bank: dict[str, AssessmentTrack] | None = None


def _parse_bank(data: dict[str, Any]) -> dict[str, AssessmentTrack]:
    tracks: dict[str, AssessmentTrack] = {}
    for track_id, tdata in (data.get("tracks") or {}).items():
        categories = []
        for cdata in tdata.get("categories", []):
            questions = [
                AssessmentQuestion(
                    id=q["id"],
                    question=q["question"],
                    options=list(q["options"]),
                    correct=q["correct"],
                )
                for q in cdata.get("questions", [])
            ]
            categories.append(
                AssessmentCategory(
                    id=cdata["id"],
                    title=cdata.get("title", cdata["id"]),
                    icon=cdata.get("icon", ""),
                    questions=questions,
                )
            )
        tracks[track_id] = AssessmentTrack(
            id=track_id,
            title=tdata.get("title", track_id),
            categories=categories,
        )
    return tracks


def load_bank(force_reload: bool = False) -> dict[str, AssessmentTrack]:
    """Load the question bank.

    Args:
        force_reload: If True, ignore cache and reload from file.

    Returns:
        Dictionary mapping track id to AssessmentTrack.
    """
    global _cached_bank

    if _cached_bank is not None and not force_reload:
        return _cached_bank

    data = yaml.safe_load(BANK_FILE.read_text(encoding="utf-8")) or {}
    _cached_bank = _parse_bank(data)

    logger.debug(
        "assessments.loaded",
        tracks=len(_cached_bank),
        questions=sum(
            len(c.questions) for t in _cached_bank.values() for c in t.categories
        ),
    )
    return _cached_bank


def list_tracks() -> list[AssessmentTrack]:
    """All assessment tracks."""
    return list(load_bank().values())


def get_track(track_id: str) -> AssessmentTrack:
    """Get a track.

    Raises:
        AssessmentNotFoundError: If the track doesn't exist
    """
    track = load_bank().get(track_id)
    if track is None:
        raise AssessmentNotFoundError(track_id)
    return track


def get_category(track_id: str, category_id: str) -> AssessmentCategory:
    """Get one category of a track.

    Raises:
        AssessmentNotFoundError: If the track or category doesn't exist
    """
    category = get_track(track_id).get_category(category_id)
    if category is None:
        raise AssessmentNotFoundError(track_id, category_id)
    return category


def grade_category(category: AssessmentCategory, answers: dict[int, int]) -> ScoreResult:
    """Grade answers (question id -> option index) for one category."""
    return grade({q.id: q.correct for q in category.questions}, answers)


def submit_assessment(
    user_id: int,
    track_id: str,
    category_id: str,
    answers: dict[int, int],
) -> AssessmentResult:
    """Grade a category test and boost the user's progress counter.

    Args:
        user_id: Student taking the test
        track_id: "coding", "aptitude" or "comm"
        category_id: Category within the track
        answers: question id -> chosen option index

    Returns:
        AssessmentResult with the new counter value

    Raises:
        AssessmentNotFoundError: If the track or category doesn't exist
        LookupError: If the user doesn't exist
    """
    category = get_category(track_id, category_id)

    user = get_user_by_id(user_id)
    if user is None:
        raise LookupError(f"User not found: {user_id}")

    result = grade_category(category, answers)
    previous = user.progress_for(track_id)
    new_progress = apply_boost(previous, result.boost)

    update_progress(user_id, track_id, new_progress)

    logger.info(
        "assessments.submitted",
        user_id=user_id,
        track=track_id,
        category=category_id,
        score=result.score,
        total=result.total,
        new_progress=new_progress,
    )

    return AssessmentResult(
        track=track_id,
        category=category_id,
        score=result.score,
        total=result.total,
        percentage=result.percentage,
        boost=result.boost,
        previous_progress=previous,
        new_progress=new_progress,
    )


def clear_bank_cache() -> None:
    """Clear the question bank cache."""
    global _cached_bank
    _cached_bank = None
