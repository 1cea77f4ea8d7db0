"""Tests for DingTalk settings."""

import pytest
from pydantic import ValidationError

from dingbot.config import DEFAULT_API_URL, DingTalkSettings, get_settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove KW_DINGTALK_* variables and run where no ``.env`` file exists."""
    for key in ("TOKEN", "SIGN", "TIMEOUT", "API_URL", "SIGN_PER_REQUEST"):
        monkeypatch.delenv(f"KW_DINGTALK_{key}", raising=False)
    monkeypatch.chdir(tmp_path)


class TestDingTalkSettings:
    """Test DingTalkSettings."""

    def test_defaults(self, clean_env):
        """Test default values."""
        settings = DingTalkSettings()

        assert settings.token == ""
        assert settings.sign == ""
        assert settings.timeout == 5.0
        assert settings.api_url == DEFAULT_API_URL
        assert settings.sign_per_request is True

    def test_from_env(self, clean_env, monkeypatch):
        """Test values are read from KW_DINGTALK_* variables."""
        monkeypatch.setenv("KW_DINGTALK_TOKEN", "env-token")
        monkeypatch.setenv("KW_DINGTALK_SIGN", "SECenv")
        monkeypatch.setenv("KW_DINGTALK_TIMEOUT", "10")
        monkeypatch.setenv("KW_DINGTALK_SIGN_PER_REQUEST", "false")

        settings = get_settings()

        assert settings.token == "env-token"
        assert settings.sign == "SECenv"
        assert settings.timeout == 10.0
        assert settings.sign_per_request is False

    def test_timeout_bounds(self, clean_env, monkeypatch):
        """Test timeout must stay within bounds."""
        monkeypatch.setenv("KW_DINGTALK_TIMEOUT", "600")

        with pytest.raises(ValidationError):
            DingTalkSettings()

    def test_repr_masks_secrets(self, clean_env):
        """Test token and sign are not printed."""
        settings = DingTalkSettings(token="secret-token", sign="SECsecret")

        assert "secret-token" not in repr(settings)
        assert "SECsecret" not in repr(settings)

    def test_env_file(self, clean_env, tmp_path):
        """Test a .env file in the working directory is a settings source."""
        (tmp_path / ".env").write_text("KW_DINGTALK_TOKEN=file-token\n", encoding="utf-8")

        assert DingTalkSettings().token == "file-token"

    def test_environment_wins_over_env_file(self, clean_env, tmp_path, monkeypatch):
        """Test real environment variables override the .env file."""
        (tmp_path / ".env").write_text("KW_DINGTALK_TOKEN=file-token\n", encoding="utf-8")
        monkeypatch.setenv("KW_DINGTALK_TOKEN", "env-token")

        assert DingTalkSettings().token == "env-token"
