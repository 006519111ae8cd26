"""
Hostname parsing and site classification.

Pure functions: no I/O, no DNS. Every public function accepts arbitrary input
and degrades to FALLBACK_DOMAIN instead of raising.
"""
from __future__ import annotations

import re
from typing import Any, Optional

from src.tenancy.domain.entities.domain_config import DomainConfig, SiteType

FALLBACK_DOMAIN = "bigbased.com"
MAIN_DOMAINS = frozenset({"bigbased.com", "basedbook.com"})
MAX_DOMAIN_LENGTH = 253

# One label: alnum at both ends, hyphens allowed inside, 1-63 chars
_LABEL = r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?"
_DOMAIN_RE = re.compile(rf"{_LABEL}(?:\.{_LABEL})*", re.IGNORECASE | re.ASCII)

# Checked in order, first hit wins
_BRAND_TOKENS: tuple[tuple[str, SiteType], ...] = (
    ("basedbook", SiteType.BASEDBOOK),
    ("bigbased", SiteType.BIGBASED),
)


def is_valid_domain(domain: Any) -> bool:
    if not isinstance(domain, str) or not domain:
        return False
    return len(domain) <= MAX_DOMAIN_LENGTH and _DOMAIN_RE.fullmatch(domain) is not None


def normalize_hostname(hostname: Any) -> Optional[str]:
    """Lowercase, drop the port and a leading "www." label; None when the rest is not a valid domain."""
    if not isinstance(hostname, str):
        return None

    domain = hostname.strip().lower().split(":", 1)[0]
    if domain.startswith("www."):
        domain = domain[4:]

    return domain if is_valid_domain(domain) else None


def parse_domain(hostname: Any) -> str:
    """
    Canonicalize a Host header value.

    "WWW.Example.com:8080" -> "example.com"; empty or invalid -> FALLBACK_DOMAIN.
    """
    return normalize_hostname(hostname) or FALLBACK_DOMAIN


def get_site_type_from_domain(domain: Any) -> SiteType:
    labels = parse_domain(domain).split(".")
    for token, site_type in _BRAND_TOKENS:
        if token in labels:
            return site_type
    return SiteType.CUSTOM


def get_default_domain_config(domain: Any) -> DomainConfig:
    """Synthesized config used whenever nothing better is available (id 0)."""
    canonical = parse_domain(domain)
    return DomainConfig(
        id=0,
        domain=canonical,
        site_type=get_site_type_from_domain(canonical),
        is_active=True,
        custom_branding={},
        owner_user_id=None,
        settings={},
    )


def should_show_feature(config: DomainConfig, feature: str) -> bool:
    if config.domain in MAIN_DOMAINS:
        return True
    enabled = config.settings.get("enabled_features") or []
    if not isinstance(enabled, (list, tuple, set, frozenset)):
        return False
    return feature in enabled
