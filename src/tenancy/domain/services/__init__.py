from src.tenancy.domain.services.domain_parser import (
    FALLBACK_DOMAIN,
    get_default_domain_config,
    get_site_type_from_domain,
    is_valid_domain,
    normalize_hostname,
    parse_domain,
    should_show_feature,
)
from src.tenancy.domain.services.navigation_policy import get_tenant_navigation, is_route_allowed

__all__ = [
    "FALLBACK_DOMAIN",
    "get_default_domain_config",
    "get_site_type_from_domain",
    "is_valid_domain",
    "normalize_hostname",
    "parse_domain",
    "should_show_feature",
    "get_tenant_navigation",
    "is_route_allowed",
]
