"""
Configuration helpers for the Users API.

Settings are read once from environment variables so that routers, services
and the data layer never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    public_base_url: str
    log_level: str
    sql_echo: bool
    cors_origins: tuple[str, ...]
    default_page_size: int
    max_page_size: int
    create_tables_on_startup: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _list(value: str | None, default: str) -> tuple[str, ...]:
        raw = value if value is not None else default
        return tuple(item.strip() for item in raw.split(",") if item.strip())

    max_page_size = max(1, _int(os.getenv("MAX_PAGE_SIZE", "100"), 100))
    default_page_size = _int(os.getenv("DEFAULT_PAGE_SIZE", "20"), 20)

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///./users.db").strip(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        sql_echo=_bool(os.getenv("SQL_ECHO"), False),
        cors_origins=_list(os.getenv("CORS_ORIGINS"), "*"),
        default_page_size=min(max(1, default_page_size), max_page_size),
        max_page_size=max_page_size,
        create_tables_on_startup=_bool(os.getenv("CREATE_TABLES_ON_STARTUP"), True),
    )
