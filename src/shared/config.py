"""
Centralized configuration for the Big Based tenant resolution service.

- Dataclass settings loaded from OS env, plus a .env file via python-dotenv.
- Strong typing & validation in __post_init__.
- Immutable singleton via functools.lru_cache.
- Secrets never logged (masked).
"""

from __future__ import annotations

import functools
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, cast
from urllib.parse import urlparse

from dotenv import load_dotenv


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _mask_secret(value: Optional[str]) -> str:
    if not value:
        return "<unset>"
    if len(value) <= 8:
        return "***"
    return value[:2] + "…" + value[-2:]


def _get_env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key, default)
    if v is not None and v.strip() == "":
        return default
    return v


def _get_env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v is None:
        return default
    v = v.strip().lower()
    return v in {"1", "true", "t", "yes", "y", "on"}


def _get_env_int(key: str, default: int) -> int:
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"Env var {key} must be an integer")


def _validate_choice(value: str, *, choices: tuple[str, ...], key: str) -> str:
    if value not in choices:
        raise ValueError(f"{key} must be one of {choices}, got {value!r}")
    return value


def _validate_url(value: Optional[str], *, key: str, allowed_schemes: tuple[str, ...]) -> Optional[str]:
    if value in (None, ""):
        return None
    parsed = urlparse(value)
    if parsed.scheme not in allowed_schemes or not parsed.netloc:
        raise ValueError(f"{key} must be a valid URL with scheme in {allowed_schemes}")
    return value


def _validate_database_dsn(value: Optional[str], *, key: str) -> Optional[str]:
    if not value:
        return None
    if not value.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
        raise ValueError(f"{key} must start with postgresql+asyncpg:// or sqlite+aiosqlite://")
    return value


# ------------------------------------------------------------------------------
# Settings dataclass (immutable)
# ------------------------------------------------------------------------------
EnvName = Literal["local", "dev", "staging", "prod"]
LogFormat = Literal["json", "console"]


@dataclass(frozen=True)
class Settings:
    # Environment
    environment: EnvName = "local"

    # Backing services (all optional: resolution degrades to the default config)
    database_url: Optional[str] = None
    database_pool_size: int = 5
    database_max_overflow: int = 10
    redis_url: Optional[str] = None
    kv_rest_api_url: Optional[str] = None
    kv_rest_api_token: Optional[str] = None

    # Feature flags (disable always wins)
    enhanced_domains_flag: bool = False
    disable_enhanced_domains_flag: bool = False

    # Cache policy
    domain_cache_ttl_seconds: int = 300
    cache_sweep_interval_seconds: int = 300

    # Analytics collaborator
    analytics_track_url: str = "http://localhost:8000/api/analytics/track"

    # Observability
    log_level: str = "INFO"
    log_format: Optional[LogFormat] = None

    # Paths
    base_dir: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    # Derived/computed flags (filled in __post_init__)
    is_prod: bool = field(init=False)
    is_staging: bool = field(init=False)
    is_dev: bool = field(init=False)
    is_local: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "environment",
            _validate_choice(self.environment, choices=("local", "dev", "staging", "prod"), key="ENVIRONMENT"),
        )
        if self.log_format is not None:
            _validate_choice(self.log_format, choices=("json", "console"), key="LOG_FORMAT")

        object.__setattr__(self, "database_url", _validate_database_dsn(self.database_url, key="DATABASE_URL"))
        if self.redis_url:
            _validate_url(self.redis_url, key="REDIS_URL", allowed_schemes=("redis", "rediss"))
        _validate_url(self.kv_rest_api_url, key="KV_REST_API_URL", allowed_schemes=("http", "https"))
        _validate_url(self.analytics_track_url, key="ANALYTICS_TRACK_URL", allowed_schemes=("http", "https"))

        if self.domain_cache_ttl_seconds <= 0:
            raise ValueError("DOMAIN_CACHE_TTL_SECONDS must be > 0")
        if self.cache_sweep_interval_seconds <= 0:
            raise ValueError("CACHE_SWEEP_INTERVAL_SECONDS must be > 0")
        if self.database_pool_size <= 0:
            raise ValueError("DATABASE_POOL_SIZE must be > 0")

        if not re.fullmatch(r"(?i)DEBUG|INFO|WARNING|ERROR|CRITICAL", self.log_level.strip()):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")

        env = self.environment
        object.__setattr__(self, "is_prod", env == "prod")
        object.__setattr__(self, "is_staging", env == "staging")
        object.__setattr__(self, "is_dev", env == "dev")
        object.__setattr__(self, "is_local", env == "local")

    @property
    def enhanced_domains_enabled(self) -> bool:
        return self.enhanced_domains_flag and not self.disable_enhanced_domains_flag

    @property
    def kv_rest_configured(self) -> bool:
        """The REST store is only used when both URL and token are present."""
        return bool(self.kv_rest_api_url and self.kv_rest_api_token)

    # Safe dict (for debug prints without secrets)
    def safe_dict(self) -> dict:
        return {
            "environment": self.environment,
            "database_url": "<masked>" if self.database_url else "<unset>",
            "database_pool_size": self.database_pool_size,
            "database_max_overflow": self.database_max_overflow,
            "redis_url": "<masked>" if self.redis_url else "<unset>",
            "kv_rest_api_url": self.kv_rest_api_url or "<unset>",
            "kv_rest_api_token": _mask_secret(self.kv_rest_api_token),
            "enhanced_domains_enabled": self.enhanced_domains_enabled,
            "domain_cache_ttl_seconds": self.domain_cache_ttl_seconds,
            "cache_sweep_interval_seconds": self.cache_sweep_interval_seconds,
            "analytics_track_url": self.analytics_track_url,
            "log_level": self.log_level,
            "log_format": self.log_format or "<auto>",
            "base_dir": str(self.base_dir),
        }


# ------------------------------------------------------------------------------
# Loader (singleton)
# ------------------------------------------------------------------------------
_logger = logging.getLogger(__name__)


def load_settings() -> Settings:
    """Build Settings from the current process environment (no caching)."""
    return Settings(
        environment=cast(EnvName, _get_env_str("ENVIRONMENT", "local") or "local"),
        database_url=_get_env_str("DATABASE_URL", None),
        database_pool_size=_get_env_int("DATABASE_POOL_SIZE", 5),
        database_max_overflow=_get_env_int("DATABASE_MAX_OVERFLOW", 10),
        redis_url=_get_env_str("REDIS_URL", None),
        kv_rest_api_url=_get_env_str("KV_REST_API_URL", None),
        kv_rest_api_token=_get_env_str("KV_REST_API_TOKEN", None),
        enhanced_domains_flag=_get_env_bool("NEXT_PUBLIC_ENHANCED_DOMAINS", False),
        disable_enhanced_domains_flag=_get_env_bool("NEXT_PUBLIC_DISABLE_ENHANCED_DOMAINS", False),
        domain_cache_ttl_seconds=_get_env_int("DOMAIN_CACHE_TTL_SECONDS", 300),
        cache_sweep_interval_seconds=_get_env_int("CACHE_SWEEP_INTERVAL_SECONDS", 300),
        analytics_track_url=_get_env_str("ANALYTICS_TRACK_URL", "http://localhost:8000/api/analytics/track")
        or "http://localhost:8000/api/analytics/track",
        log_level=_get_env_str("LOG_LEVEL", "INFO") or "INFO",
        log_format=cast(Optional[LogFormat], _get_env_str("LOG_FORMAT", None)),
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Load .env from repo root (../.env relative to src/) without overriding OS env
    env_file = Path(__file__).resolve().parent.parent.parent / ".env"
    if env_file.exists():
        load_dotenv(dotenv_path=str(env_file), override=False)

    settings = load_settings()
    _logger.info("Settings loaded", extra={"settings": settings.safe_dict()})
    return settings
