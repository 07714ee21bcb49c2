"""Tests for application config and prompt registry (F5)."""

import pytest

from skillup.config.app_config import (
    DEV_SECRET_KEY,
    MissingSecretKeyError,
    get_provider_config,
    load_app_config,
)
from skillup.prompts.registry import get_prompt


class TestAppConfig:
    """Tests for load_app_config."""

    def test_loads_repo_config(self):
        config = load_app_config()
        assert config.mentor.default_provider == "gemini"
        assert config.mentor.brand == "SkillUp AI"
        assert config.server.port == 3000
        assert config.auth.algorithm == "HS256"

    def test_defaults_when_file_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_app_config(force_reload=True)
        assert "gemini" in config.providers
        assert str(config.database_path) == "db/platform.db"
        assert config.server.dev_mode is True

    def test_cached(self):
        assert load_app_config() is load_app_config()

    def test_db_path_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SKILLUP_DB_PATH", str(tmp_path / "other.db"))
        config = load_app_config(force_reload=True)
        assert config.database_path == tmp_path / "other.db"

    def test_production_disables_dev_mode(self, monkeypatch):
        monkeypatch.setenv("SKILLUP_ENV", "production")
        assert load_app_config(force_reload=True).server.dev_mode is False

    def test_secret_from_env(self):
        assert load_app_config().auth.get_secret_key() == "test-secret-key-with-at-least-32-bytes"

    def test_dev_secret_fallback(self, monkeypatch):
        monkeypatch.delenv("SKILLUP_SECRET_KEY")
        assert load_app_config().auth.get_secret_key() == DEV_SECRET_KEY

    def test_dev_secret_meets_hmac_minimum(self):
        assert len(DEV_SECRET_KEY.encode()) >= 32

    def test_secret_required_without_fallback(self, monkeypatch):
        monkeypatch.delenv("SKILLUP_SECRET_KEY")
        with pytest.raises(MissingSecretKeyError, match="SKILLUP_SECRET_KEY"):
            load_app_config().auth.get_secret_key(allow_dev_fallback=False)

    def test_provider_config(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        provider = get_provider_config("gemini")
        assert provider.get_api_key() == "k"
        assert get_provider_config("nope") is None


class TestPromptRegistry:
    """Tests for prompt templates."""

    def test_substitution(self):
        prompt = get_prompt("mentor/system", brand="Acme", department="Civil")
        assert prompt == (
            "You are a holistic skill development mentor at Acme. You specialize in Civil."
        )

    def test_unmatched_placeholder_kept(self):
        prompt = get_prompt("mentor/greeting", name="Ravi")
        assert "{department}" in prompt

    def test_missing_prompt(self):
        with pytest.raises(FileNotFoundError):
            get_prompt("mentor/nonexistent")
