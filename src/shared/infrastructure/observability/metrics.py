"""
Metrics Collection
Prometheus-compatible in-process counters and gauges
"""
from __future__ import annotations

from collections import defaultdict
from typing import Any

from src.shared.logging import get_logger

logger = get_logger(__name__)


class MetricsCollector:
    """
    Collects application metrics for observability.

    In-process only; exporters (Prometheus/OpenTelemetry) read `get_metrics()`.

    Supports:
    - Counters (monotonically increasing values)
    - Gauges (values that can go up or down)
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled
        self._counters: dict[str, float] = defaultdict(float)
        self._gauges: dict[str, float] = {}

        if enabled:
            logger.info("Metrics collector initialized")

    def increment_counter(self, name: str, value: float = 1.0, **labels: Any) -> None:
        """
        Increment a counter metric.

        Args:
            name: Metric name (e.g., "domain_config_resolved_total")
            value: Amount to increment by
            **labels: Metric labels (e.g., source="cache")
        """
        if not self.enabled:
            return

        key = self._make_key(name, labels)
        self._counters[key] += value

    def set_gauge(self, name: str, value: float, **labels: Any) -> None:
        """Set a gauge metric to a specific value."""
        if not self.enabled:
            return

        key = self._make_key(name, labels)
        self._gauges[key] = value

    def get_counter(self, name: str, **labels: Any) -> float:
        return self._counters.get(self._make_key(name, labels), 0.0)

    def get_metrics(self) -> dict[str, Any]:
        """All collected metrics (for debugging/export)."""
        return {
            "counters": dict(self._counters),
            "gauges": dict(self._gauges),
        }

    def reset_metrics(self) -> None:
        """Reset all collected metrics (for testing)."""
        self._counters.clear()
        self._gauges.clear()

    @staticmethod
    def _make_key(name: str, labels: dict[str, Any]) -> str:
        """Create a unique key from metric name and labels."""
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}" if label_str else name


# Global metrics collector (configured at startup)
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get the global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def configure_metrics(enabled: bool = False) -> MetricsCollector:
    """Configure the global metrics collector."""
    global _metrics
    _metrics = MetricsCollector(enabled=enabled)
    return _metrics
