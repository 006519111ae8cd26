from src.tenancy.application.options import TenancyOptions

__all__ = ["TenancyOptions"]
