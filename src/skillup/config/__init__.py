"""Configuration package for SkillUp."""

from skillup.config.app_config import (
    AppConfig,
    AuthConfig,
    MentorConfig,
    ProviderConfig,
    ServerConfig,
    get_provider_config,
    load_app_config,
)
from skillup.config.mentors import (
    Mentor,
    get_default_mentor,
    get_mentor,
    list_mentors,
    load_mentors,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "MentorConfig",
    "ProviderConfig",
    "ServerConfig",
    "get_provider_config",
    "load_app_config",
    "Mentor",
    "get_default_mentor",
    "get_mentor",
    "list_mentors",
    "load_mentors",
]
