from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class SiteType(str, Enum):
    """Site personality of a tenant; drives navigation and route policy."""
    BIGBASED = "bigbased"
    BASEDBOOK = "basedbook"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class NavItem:
    href: str
    label: str


@dataclass(frozen=True, slots=True)
class DomainConfig:
    """
    Resolved tenant configuration for one hostname.

    Notes:
    - `id == 0` marks a synthesized default that has no database row.
    - `custom_branding` and `settings` are opaque tenant-supplied bags; only
      `settings["enabled_features"]` is interpreted (see should_show_feature).
    """
    id: int
    domain: str
    site_type: SiteType
    is_active: bool = True
    custom_branding: Dict[str, Any] = field(default_factory=dict)
    owner_user_id: Optional[str] = None
    settings: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_default(self) -> bool:
        return self.id == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "domain": self.domain,
            "site_type": self.site_type.value,
            "is_active": self.is_active,
            "custom_branding": copy.deepcopy(self.custom_branding),
            "owner_user_id": self.owner_user_id,
            "settings": copy.deepcopy(self.settings),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DomainConfig":
        """Inverse of to_dict; raises KeyError/ValueError/TypeError on malformed input."""
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        owner = data.get("owner_user_id")
        return cls(
            id=int(data["id"]),
            domain=str(data["domain"]),
            site_type=SiteType(data["site_type"]),
            is_active=bool(data.get("is_active", True)),
            custom_branding=copy.deepcopy(dict(data.get("custom_branding") or {})),
            owner_user_id=str(owner) if owner is not None else None,
            settings=copy.deepcopy(dict(data.get("settings") or {})),
        )
