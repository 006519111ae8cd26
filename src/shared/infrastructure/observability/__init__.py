"""
Shared Observability Infrastructure
In-process metrics (logging lives in src.shared.logging)
"""
from src.shared.infrastructure.observability.metrics import (
    MetricsCollector,
    configure_metrics,
    get_metrics,
)

__all__ = [
    "MetricsCollector",
    "configure_metrics",
    "get_metrics",
]
