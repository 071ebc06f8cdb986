"""Environment-sourced service settings and the development identity guard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, Optional, Tuple
from urllib.parse import urlparse

DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
)

_LOCAL_HOSTS: FrozenSet[str] = frozenset({"localhost", "127.0.0.1", "::1"})

DEV_USER_EMAIL = "dev@localhost"
DEV_USER_NAME = "Development User"


@dataclass(frozen=True)
class Settings:
    log_level: str
    cors_origins: Tuple[str, ...]


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return cached settings read from the environment."""
    origins = _split_csv(os.getenv("CORS_ORIGINS", ""))
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=origins or DEFAULT_CORS_ORIGINS,
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()


def _hostname(url_value: str) -> Optional[str]:
    url_value = (url_value or "").strip()
    if not url_value:
        return None
    candidate = url_value if "://" in url_value else f"http://{url_value}"
    return urlparse(candidate).hostname


def dev_mode_active() -> bool:
    """Return True if DEV_MODE is on and allowed here; raise if misconfigured.

    DEV_MODE impersonates a fixed user, so it is only honoured when
    APP_BASE_URL resolves to a local host, a host listed in
    DEV_MODE_ALLOWED_HOSTS, or when ALLOW_DEV_MODE=true is set explicitly.
    DEV_MODE is read on every call so tests can toggle it.
    """
    if os.getenv("DEV_MODE", "false").lower() != "true":
        return False

    allowed = set(_LOCAL_HOSTS)
    allowed.update(host.lower() for host in _split_csv(os.getenv("DEV_MODE_ALLOWED_HOSTS", "")))

    hostname = _hostname(os.getenv("APP_BASE_URL", ""))
    if hostname:
        if hostname.lower() not in allowed:
            raise RuntimeError(
                f"DEV_MODE=true is not permitted when APP_BASE_URL points to '{hostname}'. "
                f"Allowed hosts: {sorted(allowed)}"
            )
    elif os.getenv("ALLOW_DEV_MODE", "false").lower() != "true":
        raise RuntimeError(
            "DEV_MODE=true requires APP_BASE_URL to be set to a localhost URL "
            "or ALLOW_DEV_MODE=true."
        )
    return True
