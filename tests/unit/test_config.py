import pytest

from src.shared.config import Settings, load_settings
from src.tenancy.application.options import TenancyOptions

ENV_KEYS = [
    "ENVIRONMENT", "DATABASE_URL", "REDIS_URL", "KV_REST_API_URL", "KV_REST_API_TOKEN",
    "NEXT_PUBLIC_ENHANCED_DOMAINS", "NEXT_PUBLIC_DISABLE_ENHANCED_DOMAINS",
    "DOMAIN_CACHE_TTL_SECONDS", "CACHE_SWEEP_INTERVAL_SECONDS", "ANALYTICS_TRACK_URL",
    "LOG_LEVEL", "LOG_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = load_settings()
    assert s.environment == "local" and s.is_local
    assert s.enhanced_domains_enabled is False
    assert s.domain_cache_ttl_seconds == 300
    assert s.cache_sweep_interval_seconds == 300
    assert s.analytics_track_url == "http://localhost:8000/api/analytics/track"
    assert s.database_url is None
    assert not s.kv_rest_configured


@pytest.mark.parametrize(
    "enable,disable,expected",
    [
        ("true", None, True),
        ("true", "true", False),
        (None, "true", False),
        ("false", None, False),
        (None, None, False),
    ],
)
def test_disable_flag_always_wins(clean_env, enable, disable, expected):
    if enable is not None:
        clean_env.setenv("NEXT_PUBLIC_ENHANCED_DOMAINS", enable)
    if disable is not None:
        clean_env.setenv("NEXT_PUBLIC_DISABLE_ENHANCED_DOMAINS", disable)

    s = load_settings()

    assert s.enhanced_domains_enabled is expected
    assert TenancyOptions.from_settings(s).enhanced_domains_enabled is expected


def test_options_carry_cache_ttl(clean_env):
    clean_env.setenv("DOMAIN_CACHE_TTL_SECONDS", "60")
    assert TenancyOptions.from_settings(load_settings()).cache_ttl_seconds == 60


def test_kv_rest_requires_url_and_token(clean_env):
    clean_env.setenv("KV_REST_API_URL", "https://kv.example.test")
    assert not load_settings().kv_rest_configured
    clean_env.setenv("KV_REST_API_TOKEN", "t0ken")
    assert load_settings().kv_rest_configured


@pytest.mark.parametrize(
    "key,value",
    [
        ("ENVIRONMENT", "qa"),
        ("DOMAIN_CACHE_TTL_SECONDS", "0"),
        ("DOMAIN_CACHE_TTL_SECONDS", "soon"),
        ("DATABASE_URL", "mysql://db/app"),
        ("REDIS_URL", "http://cache:6379"),
        ("LOG_FORMAT", "xml"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_raise(clean_env, key, value):
    clean_env.setenv(key, value)
    with pytest.raises(ValueError):
        load_settings()


def test_safe_dict_masks_secrets():
    s = Settings(
        database_url="postgresql+asyncpg://u:p@db/app",
        kv_rest_api_url="https://kv.example.test",
        kv_rest_api_token="super-secret-token",
    )
    safe = s.safe_dict()
    assert safe["database_url"] == "<masked>"
    assert "super-secret-token" not in str(safe)
