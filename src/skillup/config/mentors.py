"""Mentor catalogue loader.

Loads bookable mentors from data/config/mentors_v1.yaml.

Usage:
    from skillup.config.mentors import get_mentor, list_mentors

    mentor = get_mentor("Dr. Sarah")
    all_mentors = list_mentors()
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog
import yaml

from skillup.config.app_config import load_app_config

logger = structlog.get_logger(__name__)

MENTORS_FILENAME = "mentors_v1.yaml"


@dataclass
class Mentor:
    """A human mentor students can book a session with."""

    name: str
    role: str
    image: str = ""
    default: bool = False


# Module-level cache
_cached_mentors: dict[str, Mentor] | None = None


def _get_default_mentors() -> dict[str, Mentor]:
    """Get default mentors when config file is missing."""
    return {
        "Dr. Sarah": Mentor(
            name="Dr. Sarah",
            role="AI Specialist",
            image="https://picsum.photos/seed/sarah/100",
            default=True,
        ),
        "Prof. James": Mentor(
            name="Prof. James",
            role="Aptitude Expert",
            image="https://picsum.photos/seed/james/100",
        ),
        "Ms. Emily": Mentor(
            name="Ms. Emily",
            role="Comm. Coach",
            image="https://picsum.photos/seed/emily/100",
        ),
    }


def load_mentors(force_reload: bool = False) -> dict[str, Mentor]:
    """Load all mentors from config file.

    Args:
        force_reload: If True, ignore cache and reload from file.

    Returns:
        Dictionary mapping mentor name to Mentor object.
    """
    global _cached_mentors

    if _cached_mentors is not None and not force_reload:
        return _cached_mentors

    config = load_app_config()
    mentors_file = Path(config.paths.get("config_dir", "data/config")) / MENTORS_FILENAME

    if not mentors_file.exists():
        logger.debug("mentors_file_not_found", path=str(mentors_file))
        _cached_mentors = _get_default_mentors()
        return _cached_mentors

    try:
        data = yaml.safe_load(mentors_file.read_text(encoding="utf-8")) or {}

        _cached_mentors = {}
        for entry in data.get("mentors", []):
            mentor = Mentor(
                name=entry["name"],
                role=entry.get("role", ""),
                image=entry.get("image", ""),
                default=entry.get("default", False),
            )
            _cached_mentors[mentor.name] = mentor

        logger.debug("loaded_mentors", count=len(_cached_mentors))
        return _cached_mentors

    except (yaml.YAMLError, KeyError, TypeError, AttributeError) as e:
        logger.error("failed_to_load_mentors", error=str(e))
        _cached_mentors = _get_default_mentors()
        return _cached_mentors


def get_mentor(name: str) -> Mentor | None:
    """Get a specific mentor by name."""
    return load_mentors().get(name)


def get_default_mentor() -> Mentor:
    """Get the mentor preselected in the booking form."""
    mentors = load_mentors()

    for mentor in mentors.values():
        if mentor.default:
            return mentor

    if mentors:
        return list(mentors.values())[0]

    return _get_default_mentors()["Dr. Sarah"]


def list_mentors() -> list[Mentor]:
    """List all available mentors."""
    return list(load_mentors().values())


def clear_mentors_cache() -> None:
    """Clear the mentors cache.

    Useful for testing or when mentors are modified at runtime.
    """
    global _cached_mentors
    _cached_mentors = None
