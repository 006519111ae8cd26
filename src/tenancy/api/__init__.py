from src.tenancy.api.middleware import TenantContextMiddleware
from src.tenancy.api.routes import router

__all__ = ["TenantContextMiddleware", "router"]
