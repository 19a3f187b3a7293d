"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _split_emails(raw: str) -> tuple[str, ...]:
    return tuple(email.strip().lower() for email in raw.split(",") if email.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./data/jobboard.db"
    admin_emails: tuple[str, ...] = ()

    admin_api_base_url: str = "http://localhost:8000"
    admin_api_email: str = ""
    request_timeout: float = 30.0

    query_cache_size: int = 100
    query_cache_ttl: float = 30.0
    counts_cache_ttl: float = 60.0

    def is_admin(self, email: str | None) -> bool:
        """Return ``True`` when the e-mail belongs to the admin allow-list."""

        if not email:
            return False
        return email.strip().lower() in self.admin_emails


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/jobboard.db"),
        admin_emails=_split_emails(os.getenv("ADMIN_EMAILS", "")),
        admin_api_base_url=os.getenv("ADMIN_API_BASE_URL", "http://localhost:8000"),
        admin_api_email=os.getenv("ADMIN_API_EMAIL", ""),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        query_cache_size=int(os.getenv("QUERY_CACHE_SIZE", "100")),
        query_cache_ttl=float(os.getenv("QUERY_CACHE_TTL", "30")),
        counts_cache_ttl=float(os.getenv("COUNTS_CACHE_TTL", "60")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
