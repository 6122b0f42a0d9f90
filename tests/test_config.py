# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# Verifies defaults, environment overrides and computed properties.
# Every Settings object is built with _env_file=None so a local .env file
# can't leak into the results.
# =============================================================================

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import DEFAULT_STATIC_ROOT, PROJECT_ROOT, Settings

ENV_VARS = [
    "PORT",
    "HOST",
    "MONGODB_URI",
    "MONGODB_AUTH_SOURCE",
    "COOKIE_PARSER_SECRET_KEY",
    "CORS_ORIGINS",
    "STATIC_ROOT",
    "API_ROUTER",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every setting from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    """Values used when nothing is configured."""

    def test_port_defaults_to_5000(self, clean_env):
        assert Settings(_env_file=None).PORT == 5000

    def test_database_and_secret_are_optional(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.MONGODB_URI is None
        assert settings.COOKIE_PARSER_SECRET_KEY is None
        assert settings.MONGODB_AUTH_SOURCE == "admin"

    def test_default_cors_origins(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.cors_origins_list == [
            "http://localhost:3000",
            "https://blog-app.online",
        ]

    def test_static_root_is_public_dir_next_to_app_package(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.static_root == DEFAULT_STATIC_ROOT == PROJECT_ROOT / "public"
        assert not (settings.static_root / "app" / "config.py").exists()

    def test_default_api_router(self, clean_env):
        assert Settings(_env_file=None).API_ROUTER == "app.routers.api:router"


class TestEnvironment:
    """Values read from environment variables."""

    def test_port_from_env(self, clean_env):
        clean_env.setenv("PORT", "8080")

        assert Settings(_env_file=None).PORT == 8080

    def test_mongodb_uri_and_secret_from_env(self, clean_env):
        clean_env.setenv("MONGODB_URI", "mongodb://db:27017/blog")
        clean_env.setenv("COOKIE_PARSER_SECRET_KEY", "s3cret")

        settings = Settings(_env_file=None)

        assert settings.MONGODB_URI == "mongodb://db:27017/blog"
        assert settings.COOKIE_PARSER_SECRET_KEY == "s3cret"

    def test_empty_values_are_ignored(self, clean_env):
        clean_env.setenv("PORT", "")

        assert Settings(_env_file=None).PORT == 5000

    def test_invalid_port_rejected(self, clean_env):
        clean_env.setenv("PORT", "70000")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_cors_origins_are_split_and_stripped(self, clean_env):
        clean_env.setenv("CORS_ORIGINS", " https://a.example , https://b.example ,")

        assert Settings(_env_file=None).cors_origins_list == [
            "https://a.example",
            "https://b.example",
        ]

    def test_static_root_override(self, clean_env, tmp_path):
        clean_env.setenv("STATIC_ROOT", str(tmp_path))

        assert Settings(_env_file=None).static_root == Path(tmp_path).resolve()
