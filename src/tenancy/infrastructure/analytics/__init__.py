from src.tenancy.infrastructure.analytics.analytics_client import AnalyticsClient

__all__ = ["AnalyticsClient"]
