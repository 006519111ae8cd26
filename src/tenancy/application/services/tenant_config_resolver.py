from __future__ import annotations

from typing import Any, Optional, Protocol

from src.shared.infrastructure.observability.metrics import MetricsCollector, get_metrics
from src.shared.logging import get_logger
from src.tenancy.application.options import TenancyOptions
from src.tenancy.domain.entities.domain_config import DomainConfig
from src.tenancy.domain.repositories.domain_repository import DomainRepository
from src.tenancy.domain.services.domain_parser import get_default_domain_config, parse_domain

logger = get_logger(__name__)


class ConfigCache(Protocol):
    async def get(self, key: str) -> Optional[Any]: ...
    async def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...
    async def delete(self, key: str) -> None: ...


def cache_key(domain: str) -> str:
    return f"domain:{domain}"


class TenantConfigResolver:
    """
    Hostname → DomainConfig, never raising and never returning None.

    Lookup chain (each layer independently guarded, each returns Optional):
      1) cache           domain:{domain}
      2) repository      active row + flattened domain_settings (written back to cache)
      3) default         synthesized config, id 0

    With enhanced domains disabled only step 3 runs.
    Cache and repository are both optional collaborators.
    """

    def __init__(
        self,
        cache: Optional[ConfigCache],
        repository: Optional[DomainRepository],
        options: TenancyOptions,
        *,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self._cache = cache
        self._repo = repository
        self._options = options
        self._metrics = metrics or get_metrics()

    @property
    def options(self) -> TenancyOptions:
        return self._options

    # ---------- layers ----------

    async def _from_cache(self, domain: str) -> Optional[DomainConfig]:
        if self._cache is None:
            return None
        try:
            raw = await self._cache.get(cache_key(domain))
        except Exception as e:
            logger.warning("Domain cache read failed", domain=domain, error=str(e))
            return None
        if raw is None:
            self._metrics.increment_counter("domain_cache_requests_total", result="miss")
            return None
        try:
            config = raw if isinstance(raw, DomainConfig) else DomainConfig.from_dict(raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding unreadable cached domain config", domain=domain, error=str(e))
            self._metrics.increment_counter("domain_cache_requests_total", result="miss")
            return None
        self._metrics.increment_counter("domain_cache_requests_total", result="hit")
        return config

    async def _from_repository(self, domain: str) -> Optional[DomainConfig]:
        if self._repo is None:
            return None
        try:
            return await self._repo.get_active_by_domain(domain)
        except Exception as e:
            logger.warning("Domain lookup failed, using default config", domain=domain, error=str(e))
            return None

    async def _store(self, config: DomainConfig) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.set(cache_key(config.domain), config.to_dict(), self._options.cache_ttl_seconds)
        except Exception as e:
            logger.warning("Domain cache write failed", domain=config.domain, error=str(e))

    # ---------- public ----------

    async def get_domain_config(self, hostname: Any) -> DomainConfig:
        domain = parse_domain(hostname)

        if not self._options.enhanced_domains_enabled:
            return self._resolved(get_default_domain_config(domain), "disabled")

        cached = await self._from_cache(domain)
        if cached is not None:
            return self._resolved(cached, "cache")

        found = await self._from_repository(domain)
        if found is not None:
            await self._store(found)
            return self._resolved(found, "database")

        return self._resolved(get_default_domain_config(domain), "default")

    async def invalidate(self, hostname: Any) -> str:
        """Drop the cached config for `hostname` from every tier; returns the canonical domain."""
        domain = parse_domain(hostname)
        if self._cache is not None:
            try:
                await self._cache.delete(cache_key(domain))
            except Exception as e:
                logger.warning("Domain cache delete failed", domain=domain, error=str(e))
        logger.info("Domain config cache invalidated", domain=domain)
        return domain

    def _resolved(self, config: DomainConfig, source: str) -> DomainConfig:
        self._metrics.increment_counter("domain_config_resolved_total", source=source)
        logger.debug("Domain config resolved", domain=config.domain, site_type=config.site_type.value, source=source)
        return config
