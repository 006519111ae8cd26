from __future__ import annotations

from dataclasses import dataclass

from src.shared.config import Settings


@dataclass(frozen=True, slots=True)
class TenancyOptions:
    """Explicit switches for tenant resolution (no environment reads at call time)."""
    enhanced_domains_enabled: bool = False
    cache_ttl_seconds: int = 300

    @classmethod
    def from_settings(cls, settings: Settings) -> "TenancyOptions":
        # Settings.enhanced_domains_enabled already lets the disable flag win
        return cls(
            enhanced_domains_enabled=settings.enhanced_domains_enabled,
            cache_ttl_seconds=settings.domain_cache_ttl_seconds,
        )
