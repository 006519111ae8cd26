"""
Navigation and route policy derived from a tenant's site type.

Allow by default, deny by exception: a path is refused only when its prefix
belongs exclusively to another site personality.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from src.tenancy.domain.entities.domain_config import DomainConfig, NavItem, SiteType

BASE_NAVIGATION: Tuple[NavItem, ...] = (
    NavItem(href="/", label="Home"),
    NavItem(href="/about", label="About"),
    NavItem(href="/contact", label="Contact"),
)

_SITE_NAVIGATION: Dict[SiteType, Tuple[NavItem, ...]] = {
    SiteType.BIGBASED: (
        NavItem(href="/features", label="Features"),
        NavItem(href="/revolution", label="Revolution"),
        NavItem(href="/transform", label="Transform"),
        NavItem(href="/partners", label="Partners"),
    ),
    SiteType.BASEDBOOK: (
        NavItem(href="/library", label="Library"),
        NavItem(href="/authors", label="Authors"),
        NavItem(href="/collections", label="Collections"),
    ),
    SiteType.CUSTOM: (),
}

BIGBASED_ROUTES: Tuple[str, ...] = ("/features", "/revolution", "/transform", "/partners")
BASEDBOOK_ROUTES: Tuple[str, ...] = ("/library", "/authors", "/collections")

_DENIED_PREFIXES: Dict[SiteType, Tuple[str, ...]] = {
    SiteType.BASEDBOOK: BIGBASED_ROUTES,
    SiteType.BIGBASED: BASEDBOOK_ROUTES,
    # custom tenants run bigbased functionality
    SiteType.CUSTOM: BASEDBOOK_ROUTES,
}


def get_tenant_navigation(config: DomainConfig) -> List[NavItem]:
    return [*BASE_NAVIGATION, *_SITE_NAVIGATION.get(config.site_type, ())]


def is_route_allowed(config: DomainConfig, pathname: str) -> bool:
    denied = _DENIED_PREFIXES.get(config.site_type, ())
    return not any(pathname.startswith(prefix) for prefix in denied)
