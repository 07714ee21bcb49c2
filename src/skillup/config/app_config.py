"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml,
falling back to built-in defaults when the file is missing. A few
deployment settings can be overridden from the environment.

Usage:
    from skillup.config.app_config import load_app_config, get_provider_config

    config = load_app_config()
    provider = get_provider_config("gemini")
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

# Environment overrides
ENV_DB_PATH = "SKILLUP_DB_PATH"
ENV_MODE = "SKILLUP_ENV"

# Only used in dev mode when the secret env var is unset
DEV_SECRET_KEY = "skillup-local-development-secret-not-for-deployment"


class MissingSecretKeyError(RuntimeError):
    """Raised outside dev mode when no token signing secret is configured."""

    pass


@dataclass
class ProviderConfig:
    """Configuration for a single LLM provider."""

    base_url: str | None
    default_model: str
    api_key_env: str | None = None

    def get_api_key(self) -> str | None:
        """Get API key from environment variable."""
        if self.api_key_env:
            return os.environ.get(self.api_key_env)
        return None


@dataclass
class MentorConfig:
    """Configuration for the AI mentor chat."""

    default_provider: str = "gemini"
    temperature: float = 0.7
    max_tokens: int = 1024
    brand: str = "SkillUp AI"


@dataclass
class AuthConfig:
    """Session token settings."""

    secret_key_env: str = "SKILLUP_SECRET_KEY"
    token_ttl_minutes: int = 720
    algorithm: str = "HS256"

    def get_secret_key(self, allow_dev_fallback: bool = True) -> str:
        """Get signing secret from the environment.

        Args:
            allow_dev_fallback: Use DEV_SECRET_KEY when the env var is unset

        Raises:
            MissingSecretKeyError: If the env var is unset and the fallback
                is not allowed
        """
        secret = os.environ.get(self.secret_key_env)
        if secret:
            return secret
        if not allow_dev_fallback:
            raise MissingSecretKeyError(
                f"{self.secret_key_env} must be set when dev mode is off"
            )
        logger.warning("auth.dev_secret_in_use", env_var=self.secret_key_env)
        return DEV_SECRET_KEY


@dataclass
class ServerConfig:
    """HTTP server and static client settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    dev_mode: bool = True
    static_dir: str = "dist"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    providers: dict[str, ProviderConfig] = field(default_factory=dict)
    mentor: MentorConfig = field(default_factory=MentorConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    paths: dict[str, str] = field(default_factory=dict)

    @property
    def database_path(self) -> Path:
        """Database file location."""
        return Path(self.paths.get("database", "db/platform.db"))


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "providers": {
            "gemini": {
                "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
                "default_model": "gemini-2.0-flash",
                "api_key_env": "GEMINI_API_KEY",
            },
            "openai": {
                "base_url": None,
                "default_model": "gpt-4o-mini",
                "api_key_env": "OPENAI_API_KEY",
            },
            "lmstudio": {
                "base_url": "http://localhost:1234/v1",
                "default_model": "llama-3.2-3b-instruct",
                "api_key_env": None,
            },
        },
        "mentor": {
            "default_provider": "gemini",
            "temperature": 0.7,
            "max_tokens": 1024,
            "brand": "SkillUp AI",
        },
        "auth": {
            "secret_key_env": "SKILLUP_SECRET_KEY",
            "token_ttl_minutes": 720,
            "algorithm": "HS256",
        },
        "server": {
            "host": "0.0.0.0",
            "port": 3000,
            "dev_mode": True,
            "static_dir": "dist",
        },
        "paths": {
            "database": "db/platform.db",
            "config_dir": "data/config",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    providers = {}
    for name, pconfig in data.get("providers", {}).items():
        providers[name] = ProviderConfig(
            base_url=pconfig.get("base_url"),
            default_model=pconfig.get("default_model", "default"),
            api_key_env=pconfig.get("api_key_env"),
        )

    mentor_data = data.get("mentor", {})
    mentor = MentorConfig(
        default_provider=mentor_data.get("default_provider", "gemini"),
        temperature=mentor_data.get("temperature", 0.7),
        max_tokens=mentor_data.get("max_tokens", 1024),
        brand=mentor_data.get("brand", "SkillUp AI"),
    )

    auth_data = data.get("auth", {})
    auth = AuthConfig(
        secret_key_env=auth_data.get("secret_key_env", "SKILLUP_SECRET_KEY"),
        token_ttl_minutes=auth_data.get("token_ttl_minutes", 720),
        algorithm=auth_data.get("algorithm", "HS256"),
    )

    server_data = data.get("server", {})
    server = ServerConfig(
        host=server_data.get("host", "0.0.0.0"),
        port=server_data.get("port", 3000),
        dev_mode=server_data.get("dev_mode", True),
        static_dir=server_data.get("static_dir", "dist"),
    )

    paths = dict(data.get("paths", {}))

    return AppConfig(
        providers=providers,
        mentor=mentor,
        auth=auth,
        server=server,
        paths=paths,
    )


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    """Apply SKILLUP_* environment overrides."""
    db_path = os.environ.get(ENV_DB_PATH)
    if db_path:
        config.paths["database"] = db_path

    mode = os.environ.get(ENV_MODE)
    if mode:
        config.server.dev_mode = mode.lower() != "production"

    return config


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _apply_env_overrides(_parse_config(data))
    return _cached_config


def get_provider_config(provider: str) -> ProviderConfig | None:
    """Get configuration for a specific provider.

    Args:
        provider: Provider name (e.g., "gemini", "openai")

    Returns:
        ProviderConfig or None if provider not found.
    """
    config = load_app_config()
    return config.providers.get(provider)


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
