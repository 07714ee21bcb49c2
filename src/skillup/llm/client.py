"""LLM client for Gemini / OpenAI-compatible providers.

Provides a unified interface for LLM interactions through the openai SDK,
which every supported provider exposes:

- gemini: Google Gemini via its OpenAI-compatible endpoint
- openai: OpenAI API
- lmstudio: Local LM Studio server
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Literal

import structlog
from openai import OpenAI

from skillup.config.app_config import load_app_config

logger = structlog.get_logger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

Provider = Literal["gemini", "openai", "lmstudio"]

# Provider-specific defaults
PROVIDER_DEFAULTS: dict[str, dict[str, Any]] = {
    "gemini": {
        "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "api_key_env": "GEMINI_API_KEY",
        "requires_key": True,
    },
    "openai": {
        "base_url": "https://api.openai.com/v1",
        "api_key_env": "OPENAI_API_KEY",
        "requires_key": True,
    },
    "lmstudio": {
        "base_url": "http://localhost:1234/v1",
        "api_key": "lm-studio",  # LM Studio doesn't need real API key
        "requires_key": False,
    },
}


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class LLMConfig:
    """Configuration for LLM client."""

    provider: str = "gemini"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    model: str = "gemini-2.0-flash"
    temperature: float = 0.7
    max_tokens: int = 1024
    timeout: int = 60
    api_key: str | None = None

    @property
    def requires_key(self) -> bool:
        return PROVIDER_DEFAULTS.get(self.provider, {}).get("requires_key", True)

    @classmethod
    def from_app_config(cls, provider: str | None = None) -> LLMConfig:
        """Build configuration from the application config.

        Args:
            provider: Provider name; defaults to the mentor's default provider
        """
        app_config = load_app_config()
        provider = provider or app_config.mentor.default_provider
        defaults = PROVIDER_DEFAULTS.get(provider, {})
        pconfig = app_config.providers.get(provider)

        if pconfig is None:
            logger.warning("provider_not_configured", provider=provider)
            return cls(provider=provider)

        api_key = pconfig.get_api_key()
        if api_key is None and "api_key" in defaults:
            api_key = defaults["api_key"]

        return cls(
            provider=provider,
            base_url=pconfig.base_url or defaults.get("base_url", ""),
            model=pconfig.default_model,
            temperature=app_config.mentor.temperature,
            max_tokens=app_config.mentor.max_tokens,
            api_key=api_key,
        )


@dataclass
class Message:
    """A chat message."""

    role: Literal["system", "user", "assistant"]
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for API call."""
        return {"role": self.role, "content": self.content}


@dataclass
class LLMResponse:
    """Response from LLM."""

    content: str
    model: str
    provider: str
    usage: dict[str, int] = field(default_factory=dict)
    latency_ms: int = 0

    @property
    def total_tokens(self) -> int:
        """Get total token count."""
        return self.usage.get("total_tokens", 0)


class LLMError(Exception):
    """Error during LLM interaction."""

    pass


class LLMCredentialsError(LLMError):
    """Provider requires an API key and none is configured."""

    pass


class LLMConnectionError(LLMError):
    """Error connecting to LLM server."""

    pass


class LLMResponseError(LLMError):
    """Error in LLM response."""

    pass


# =============================================================================
# LLM CLIENT
# =============================================================================


class LLMClient:
    """Unified client for LLM interactions.

    Supports Gemini, OpenAI and LM Studio via the OpenAI-compatible API.
    """

    def __init__(
        self,
        config: LLMConfig | None = None,
        provider: str | None = None,
        model: str | None = None,
    ):
        """Initialize LLM client.

        Args:
            config: LLM configuration (built from app config if not provided)
            provider: Override provider from config
            model: Override model from config
        """
        if config is None:
            config = LLMConfig.from_app_config(provider)

        self.config = config

        if model is not None:
            self.config.model = model

        # Initialize OpenAI client
        self._client = OpenAI(
            base_url=self.config.base_url,
            api_key=self.config.api_key or "not-needed",
            timeout=self.config.timeout,
        )

        logger.debug(
            "llm_client_initialized",
            provider=self.config.provider,
            model=self.config.model,
            base_url=self.config.base_url,
        )

    def chat(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send chat completion request.

        Args:
            messages: List of messages in conversation
            temperature: Override default temperature
            max_tokens: Override default max tokens

        Returns:
            LLMResponse with content and metadata

        Raises:
            LLMCredentialsError: If the provider needs an API key and has none
            LLMConnectionError: If cannot connect to server
            LLMResponseError: If response is invalid
        """
        if self.config.requires_key and not self.config.api_key:
            raise LLMCredentialsError(f"API key missing for provider {self.config.provider}")

        if temperature is None:
            temperature = self.config.temperature
        if max_tokens is None:
            max_tokens = self.config.max_tokens

        request_kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        # Make request with timing
        start_time = time.time()

        try:
            response = self._client.chat.completions.create(**request_kwargs)
        except Exception as e:
            error_msg = str(e)
            if "Connection" in error_msg or "connect" in error_msg.lower():
                raise LLMConnectionError(
                    f"Could not connect to {self.config.provider} at {self.config.base_url}: {e}"
                ) from e
            raise LLMError(f"LLM call failed: {e}") from e

        latency_ms = int((time.time() - start_time) * 1000)

        if not response.choices:
            raise LLMResponseError("Empty response from LLM")

        content = response.choices[0].message.content or ""

        usage = {}
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        logger.debug(
            "llm_response",
            provider=self.config.provider,
            model=response.model,
            tokens=usage.get("total_tokens", 0),
            latency_ms=latency_ms,
        )

        return LLMResponse(
            content=content,
            model=response.model,
            provider=self.config.provider,
            usage=usage,
            latency_ms=latency_ms,
        )

    def simple_chat(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Single-turn chat: one system instruction, one user message.

        Args:
            system_prompt: System prompt
            user_message: User message
            temperature: Override temperature
            max_tokens: Override max tokens

        Returns:
            LLMResponse for the single turn
        """
        messages = [
            Message(role="system", content=system_prompt),
            Message(role="user", content=user_message),
        ]

        return self.chat(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def is_available(self) -> bool:
        """Check if LLM server is available.

        Returns:
            True if server responds, False otherwise
        """
        try:
            self._client.models.list()
            return True
        except Exception:
            return False
