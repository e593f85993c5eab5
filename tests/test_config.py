from __future__ import annotations

from users_api.core import config as core_config


def test_defaults(monkeypatch):
    for var in ("APP_ENV", "DATABASE_URL", "LOG_LEVEL", "CORS_ORIGINS", "MAX_PAGE_SIZE", "DEFAULT_PAGE_SIZE"):
        monkeypatch.delenv(var, raising=False)
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
        assert settings.app_env == "dev"
        assert settings.database_url == "sqlite:///./users.db"
        assert settings.cors_origins == ("*",)
        assert settings.default_page_size == 20
        assert settings.max_page_size == 100
    finally:
        core_config.get_settings.cache_clear()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("APP_ENV", "PROD")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("MAX_PAGE_SIZE", "10")
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "50")
    monkeypatch.setenv("SQL_ECHO", "yes")
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
        assert settings.app_env == "prod"
        assert settings.log_level == "DEBUG"
        assert settings.cors_origins == ("https://a.example", "https://b.example")
        assert settings.max_page_size == 10
        assert settings.default_page_size == 10
        assert settings.sql_echo is True
    finally:
        core_config.get_settings.cache_clear()


def test_absolute_url_roots_paths_at_public_base(monkeypatch):
    from users_api.core.utils import absolute_url

    monkeypatch.setenv("PUBLIC_BASE_URL", "https://users.example/")
    core_config.get_settings.cache_clear()
    try:
        assert absolute_url("/api/users/3") == "https://users.example/api/users/3"
        assert absolute_url("api/users") == "https://users.example/api/users"
    finally:
        core_config.get_settings.cache_clear()
