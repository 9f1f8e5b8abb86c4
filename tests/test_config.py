from pathlib import Path

import pytest

from app_jwt.config import Settings, get_settings
from app_jwt.errors import ConfigurationError


class TestGetSettings:
    def test_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("GITHUB_PRIVATE_KEY_PATH", "/secrets/app.pem")
        monkeypatch.setenv("GITHUB_APP_ID", " 12345 ")
        settings = get_settings()
        assert settings.github_private_key_path == Path("/secrets/app.pem")
        assert settings.github_app_id == "12345"
        assert settings.jwt_clock_skew == 60
        assert settings.jwt_lifetime == 600
        assert settings.github_api_url == "https://api.github.com"

    def test_overrides_win(self, clean_env, monkeypatch):
        monkeypatch.setenv("GITHUB_PRIVATE_KEY_PATH", "/secrets/app.pem")
        monkeypatch.setenv("GITHUB_APP_ID", "1")
        settings = get_settings(github_app_id="2", github_private_key_path=None)
        assert settings.github_app_id == "2"
        assert settings.github_private_key_path == Path("/secrets/app.pem")

    def test_dotenv(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("GITHUB_PRIVATE_KEY_PATH=key.pem\nGITHUB_APP_ID=777\n")
        settings = get_settings()
        assert settings.github_app_id == "777"

    def test_missing_app_id(self, clean_env, monkeypatch):
        monkeypatch.setenv("GITHUB_PRIVATE_KEY_PATH", "/secrets/app.pem")
        with pytest.raises(ConfigurationError, match="GITHUB_APP_ID"):
            get_settings()

    def test_missing_key_path(self, clean_env, monkeypatch):
        monkeypatch.setenv("GITHUB_APP_ID", "1")
        with pytest.raises(ConfigurationError, match="GITHUB_PRIVATE_KEY_PATH"):
            get_settings()

    def test_empty_values(self, clean_env, monkeypatch):
        monkeypatch.setenv("GITHUB_PRIVATE_KEY_PATH", "")
        monkeypatch.setenv("GITHUB_APP_ID", "  ")
        with pytest.raises(ConfigurationError) as exc:
            get_settings()
        assert "GITHUB_APP_ID" in str(exc.value)
        assert "GITHUB_PRIVATE_KEY_PATH" in str(exc.value)

    def test_lifetime_capped(self, clean_env, monkeypatch):
        monkeypatch.setenv("JWT_LIFETIME", "601")
        with pytest.raises(ConfigurationError, match="JWT_LIFETIME"):
            get_settings(github_private_key_path="k.pem", github_app_id="1")

    def test_negative_skew(self, clean_env):
        with pytest.raises(ConfigurationError, match="JWT_CLOCK_SKEW"):
            get_settings(github_private_key_path="k.pem", github_app_id="1", jwt_clock_skew=-5)

    def test_api_url_trailing_slash(self, clean_env):
        settings = Settings(
            github_private_key_path="k.pem",
            github_app_id="1",
            github_api_url="https://ghe.example.com/api/v3/",
            _env_file=None,
        )
        assert settings.github_api_url == "https://ghe.example.com/api/v3"
