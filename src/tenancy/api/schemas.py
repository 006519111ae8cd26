from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DomainConfigResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    domain: str
    site_type: str
    is_active: bool
    custom_branding: Dict[str, Any] = Field(default_factory=dict)
    owner_user_id: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)


class NavItemResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)
    href: str
    label: str


class NavigationResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")
    domain: str
    site_type: str
    items: List[NavItemResponse]


class CacheInvalidationResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")
    domain: str
    invalidated: bool
