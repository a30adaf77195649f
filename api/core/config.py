"""
Configuration helpers for the Taskboard backend.

Exposes a Settings object read from environment variables (database URL,
JWT secret, SMTP, logging) so that routers/services do not fetch os.environ
directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    api_prefix: str
    cors_origins: tuple[str, ...]
    create_tables: bool
    jwt_secret: str
    jwt_algorithm: str
    jwt_ttl_seconds: int
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    smtp_timeout_seconds: int
    log_level: str
    log_format: str
    login_rate_limit: int
    rate_limit_window_seconds: int
    trusted_proxies: tuple[str, ...]


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

    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    prefix = "/" + os.getenv("API_PREFIX", "/api").strip("/")
    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./taskboard.db"),
        api_prefix="" if prefix == "/" else prefix,
        cors_origins=_list(os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")),
        create_tables=_bool(os.getenv("CREATE_TABLES"), app_env != "prod"),
        jwt_secret=os.getenv("JWT_SECRET", "taskboard-dev-secret"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_ttl_seconds=_int(os.getenv("JWT_TTL_SECONDS", "86400"), 86400),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("SMTP_FROM", os.getenv("SMTP_USER", "")),
        smtp_timeout_seconds=_int(os.getenv("SMTP_TIMEOUT_SECONDS", "10"), 10),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_format=os.getenv("LOG_FORMAT", "json" if app_env == "prod" else "text").lower(),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "10"), 10),
        rate_limit_window_seconds=_int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "300"), 300),
        # only these peers may set X-Forwarded-For
        trusted_proxies=_list(os.getenv("TRUSTED_PROXIES")),
    )
