"""
Metrics data adapters.

An adapter turns some data source into DashboardData snapshots. The dashboard
only ever talks to the MetricsAdapter interface, so a real backend can be
substituted for the mock without touching the rendering path.

Supported adapters:
- MockAdapter: In-memory generated snapshot (default)
- HTTPMetricsAdapter: REST backend returning DashboardData JSON

Usage:
    from pulseboard.adapters import get_adapter

    adapter = get_adapter("mock", seed=7)
    data = await adapter.get_metrics(TimeHorizon.WEEK)
"""

from functools import lru_cache
from typing import Any, Optional, Type

from pulseboard.config import Settings, get_settings

from .base_adapter import MetricsAdapter, MetricsFetchError
from .http_adapter import HTTPMetricsAdapter
from .mock_adapter import MockAdapter

# Adapter registry mapping source names to adapter classes
ADAPTER_REGISTRY: dict[str, Type[MetricsAdapter]] = {
    "mock": MockAdapter,
    "http": HTTPMetricsAdapter,
}


def get_adapter(source: str, **kwargs: Any) -> MetricsAdapter:
    """
    Get adapter instance by source name.

    Args:
        source: Source identifier ("mock" or "http")
        **kwargs: Constructor arguments for the adapter

    Returns:
        Initialized adapter instance

    Raises:
        ValueError: If source is not found in registry

    Example:
        >>> adapter = get_adapter("http", base_url="https://metrics.internal")
    """
    adapter_class = ADAPTER_REGISTRY.get(source)
    if not adapter_class:
        available = ", ".join(ADAPTER_REGISTRY.keys())
        raise ValueError(
            f"Unknown adapter source: '{source}'. Available adapters: {available}"
        )
    return adapter_class(**kwargs)


def list_adapters() -> list[str]:
    """
    List all available adapter source names.

    Example:
        >>> list_adapters()
        ['mock', 'http']
    """
    return list(ADAPTER_REGISTRY.keys())


def create_metrics_adapter(settings: Optional[Settings] = None) -> MetricsAdapter:
    """Build the adapter selected by configuration."""
    settings = settings or get_settings()
    common = {"product": settings.dashboard_product, "region": settings.dashboard_region}

    if settings.metrics_adapter == "http":
        return get_adapter(
            "http",
            base_url=settings.metrics_api_base_url,
            timeout=settings.metrics_api_timeout_seconds,
            **common,
        )
    if settings.metrics_adapter == "mock":
        return get_adapter(
            "mock",
            latency_seconds=settings.mock_latency_seconds,
            seed=settings.mock_seed,
            **common,
        )
    raise ValueError(
        f"Unsupported METRICS_ADAPTER: '{settings.metrics_adapter}'. "
        f"Available adapters: {', '.join(list_adapters())}"
    )


@lru_cache
def get_metrics_adapter() -> MetricsAdapter:
    """
    Get cached metrics adapter instance (singleton).

    Returns the adapter selected by configuration (see create_metrics_adapter).
    """
    return create_metrics_adapter()


__all__ = [
    "MetricsAdapter",
    "MetricsFetchError",
    "MockAdapter",
    "HTTPMetricsAdapter",
    "ADAPTER_REGISTRY",
    "get_adapter",
    "list_adapters",
    "create_metrics_adapter",
    "get_metrics_adapter",
]
