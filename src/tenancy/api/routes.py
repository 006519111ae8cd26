from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from src.dependencies import get_tenant_resolver
from src.shared.exceptions import InvalidDomainError
from src.tenancy.application.services.tenant_config_resolver import TenantConfigResolver
from src.tenancy.domain.services.domain_parser import normalize_hostname
from src.tenancy.domain.services.navigation_policy import get_tenant_navigation
from src.tenancy.api.schemas import (
    CacheInvalidationResponse,
    DomainConfigResponse,
    NavigationResponse,
    NavItemResponse,
)

router = APIRouter(prefix="/api/domain-config", tags=["tenancy:domain-config"])


def _hostname(request: Request, domain: Optional[str]) -> str:
    # explicit ?domain= wins over the Host header
    return domain or request.headers.get("host", "")


@router.get("", response_model=DomainConfigResponse)
async def get_domain_config(
    request: Request,
    domain: Optional[str] = Query(default=None, max_length=300),
    resolver: TenantConfigResolver = Depends(get_tenant_resolver),
):
    config = await resolver.get_domain_config(_hostname(request, domain))
    return config.to_dict()


@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(
    request: Request,
    domain: Optional[str] = Query(default=None, max_length=300),
    resolver: TenantConfigResolver = Depends(get_tenant_resolver),
):
    config = await resolver.get_domain_config(_hostname(request, domain))
    return NavigationResponse(
        domain=config.domain,
        site_type=config.site_type.value,
        items=[NavItemResponse.model_validate(item) for item in get_tenant_navigation(config)],
    )


@router.delete("/cache", response_model=CacheInvalidationResponse, status_code=status.HTTP_200_OK)
async def invalidate_domain_cache(
    domain: str = Query(..., min_length=1, max_length=300),
    resolver: TenantConfigResolver = Depends(get_tenant_resolver),
):
    if normalize_hostname(domain) is None:
        raise InvalidDomainError(details={"domain": domain})
    canonical = await resolver.invalidate(domain)
    return CacheInvalidationResponse(domain=canonical, invalidated=True)
