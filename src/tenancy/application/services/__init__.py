from src.tenancy.application.services.tenant_config_resolver import TenantConfigResolver, cache_key
from src.tenancy.application.services.visit_tracker import VisitTracker

__all__ = ["TenantConfigResolver", "VisitTracker", "cache_key"]
