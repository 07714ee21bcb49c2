"""Prompt Registry - Load prompts from template files.

Prompts live as Markdown files next to this module and support
{variable} substitution.

Usage:
    from skillup.prompts.registry import get_prompt

    prompt = get_prompt(
        "mentor/system",
        brand="SkillUp AI",
        department="CSE",
    )
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

# Prompts ship inside the package
PROMPTS_DIR = Path(__file__).parent


def _get_prompt_uncached(key: str) -> str:
    """Load raw prompt from file without caching.

    Args:
        key: Path-like key, e.g., "mentor/system"

    Returns:
        Raw prompt content

    Raises:
        FileNotFoundError: If prompt file doesn't exist
    """
    file_path = PROMPTS_DIR / f"{key}.md"
    if not file_path.exists():
        raise FileNotFoundError(f"Prompt not found: {key} (looked at {file_path})")

    return file_path.read_text(encoding="utf-8").strip()


@lru_cache(maxsize=32)
def _get_cached_prompt(key: str) -> str:
    """Cached version of prompt loading."""
    return _get_prompt_uncached(key)


def get_prompt(key: str, use_cache: bool = True, **variables: str) -> str:
    """Load prompt from file and substitute variables.

    Variables are substituted using {variable_name} syntax. Placeholders
    without a matching variable are left untouched.

    Args:
        key: Path-like key, e.g., "mentor/user"
        use_cache: Whether to use cached version (default True)
        **variables: Variables to substitute, e.g., department="CSE"

    Returns:
        Prompt string with variables substituted

    Raises:
        FileNotFoundError: If prompt file doesn't exist
    """
    if use_cache:
        content = _get_cached_prompt(key)
    else:
        content = _get_prompt_uncached(key)

    # Substitute variables: {name} -> value
    for var_name, var_value in variables.items():
        content = content.replace(f"{{{var_name}}}", str(var_value))

    return content


def clear_cache() -> None:
    """Clear the prompt cache.

    Useful for testing or when prompts are modified at runtime.
    """
    _get_cached_prompt.cache_clear()
