"""AI mentor chat.

Each student message becomes exactly one LLM call: a fixed system
instruction (brand + department) and the message framed as a single user
turn. Nothing is remembered between messages. Any failure (missing API
key, network error, provider error) is replaced by a fixed fallback
reply; the call is never retried.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from skillup.config.app_config import load_app_config
from skillup.llm.client import LLMClient, LLMError
from skillup.prompts.registry import get_prompt

logger = structlog.get_logger(__name__)

FALLBACK_REPLY = (
    "Sorry, I'm having trouble connecting to my brain right now. "
    "Please check your API key configuration."
)
EMPTY_REPLY = "I couldn't generate a response."
DEFAULT_DEPARTMENT = "general studies"


@dataclass
class MentorReply:
    """Text shown in the chat for one student message."""

    text: str
    fallback: bool = False
    model: str | None = None
    latency_ms: int = 0


def greeting(name: str, department: str | None) -> str:
    """Opening message shown when the chat is opened."""
    return get_prompt(
        "mentor/greeting",
        name=name,
        department=department or DEFAULT_DEPARTMENT,
    )


def build_prompts(message: str, department: str | None) -> tuple[str, str]:
    """Return (system instruction, user turn) for one message."""
    department = department or DEFAULT_DEPARTMENT
    brand = load_app_config().mentor.brand
    system_prompt = get_prompt("mentor/system", brand=brand, department=department)
    user_prompt = get_prompt("mentor/user", department=department, message=message)
    return system_prompt, user_prompt


def ask_mentor(
    message: str,
    department: str | None,
    client: LLMClient | None = None,
) -> MentorReply:
    """Forward one student message to the LLM.

    Args:
        message: Student's text
        department: Student's department, used to specialize the mentor
        client: LLM client (built from app config if not provided)

    Returns:
        MentorReply; ``fallback`` is True when the LLM could not be used
    """
    system_prompt, user_prompt = build_prompts(message, department)

    try:
        if client is None:
            client = LLMClient()
        response = client.simple_chat(system_prompt, user_prompt)
    except LLMError as e:
        logger.warning("mentor.fallback", error=str(e), error_type=type(e).__name__)
        return MentorReply(text=FALLBACK_REPLY, fallback=True)

    text = response.content.strip() or EMPTY_REPLY
    logger.info(
        "mentor.replied",
        model=response.model,
        latency_ms=response.latency_ms,
        chars=len(text),
    )
    return MentorReply(
        text=text,
        model=response.model,
        latency_ms=response.latency_ms,
    )
