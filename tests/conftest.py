"""
Pytest configuration and shared fixtures for the Pulseboard test suite.

Model factories, a stub adapter, environment isolation and reusable fixtures
across all test types (unit, integration, property-based).
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient

# Set testing environment BEFORE importing the app
os.environ["TESTING"] = "true"
os.environ["METRICS_ADAPTER"] = "mock"
os.environ["MOCK_LATENCY_SECONDS"] = "0"
os.environ["MOCK_SEED"] = "42"
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "warning"


# ---------------------------------------------------------------------------
# Pydantic model factories, reusable across all test suites
# ---------------------------------------------------------------------------

from pulseboard.adapters.base_adapter import MetricsAdapter, MetricsFetchError
from pulseboard.models.enums import MetricLevel, TimeHorizon, ValueFormat
from pulseboard.models.metrics import (
    DashboardData,
    DashboardFilters,
    Metric,
    MetricCategory,
    MetricValue,
    SparklineData,
    SparklinePoint,
)

FIXED_NOW = datetime(2024, 3, 9, 15, 30, tzinfo=timezone.utc)


def make_metric_value(
    value: float = 245.0,
    previous_value: float = 200.0,
    format: ValueFormat = ValueFormat.NUMBER,
) -> MetricValue:
    """Factory function for creating test MetricValue objects."""
    return MetricValue(value=value, previous_value=previous_value, format=format)


def make_sparkline(values: Optional[list[float]] = None) -> SparklineData:
    """Factory function for a small daily sparkline ending at FIXED_NOW."""
    values = values or [10.0, 12.0, 11.5, 13.0, 14.2, 13.8, 15.0]
    points = [
        SparklinePoint(
            date=FIXED_NOW - timedelta(days=len(values) - 1 - i),
            value=v,
            comparison=round(v * 0.9, 2),
        )
        for i, v in enumerate(values)
    ]
    return SparklineData.from_points(points)


def make_metric(
    metric_id: str = "signups",
    name: str = "Signups",
    value: float = 892.0,
    previous_value: float = 775.65,
    format: ValueFormat = ValueFormat.NUMBER,
    children: Optional[list[Metric]] = None,
    **overrides,
) -> Metric:
    """Factory function for creating test Metric objects (same reading in all windows)."""
    metric_value = make_metric_value(value, previous_value, format)
    defaults = dict(
        id=metric_id,
        name=name,
        level=MetricLevel.PARENT,
        is_expandable=bool(children),
        last_period=metric_value,
        period_to_date=metric_value,
        sparkline=make_sparkline(),
        rolling_period=metric_value,
        children=children,
    )
    defaults.update(overrides)
    return Metric(**defaults)


def make_child_metric(parent_label: str, metric_id: str, name: str, **kwargs) -> Metric:
    """Factory function for a child breakdown row."""
    return make_metric(
        metric_id=metric_id,
        name=name,
        parent_label=parent_label,
        level=MetricLevel.CHILD,
        **kwargs,
    )


def make_category(
    category_id: str = "growth",
    name: str = "GROWTH",
    metrics: Optional[list[Metric]] = None,
    hero_metric_id: Optional[str] = None,
) -> MetricCategory:
    """Factory function for creating test MetricCategory objects."""
    metrics = metrics if metrics is not None else [make_metric()]
    hero = hero_metric_id or (metrics[0].id if metrics else "none")
    return MetricCategory(id=category_id, name=name, hero_metric_id=hero, metrics=metrics)


def make_dashboard_data(
    categories: Optional[list[MetricCategory]] = None,
    time_horizon: TimeHorizon = TimeHorizon.WEEK,
    product: str = "dooze",
    region: str = "global",
) -> DashboardData:
    """Factory function for creating test DashboardData snapshots."""
    if categories is None:
        categories = [
            make_category(),
            make_category(
                category_id="performance",
                name="PERFORMANCE",
                metrics=[
                    make_metric(
                        "latency-p95", "Latency p95", 850.0, 890.0, ValueFormat.MILLISECONDS
                    ),
                    make_metric(
                        "error-rate", "Error Rate", 0.8, 0.94, ValueFormat.PERCENT
                    ),
                ],
            ),
            make_category(
                category_id="revenue",
                name="REVENUE",
                metrics=[
                    make_metric(
                        "revenue-by-tier",
                        "Revenue by Tier",
                        7820.0,
                        6982.14,
                        ValueFormat.CURRENCY,
                        children=[
                            make_child_metric(
                                "Revenue", "revenue-pro", "Pro",
                                value=4680.0, previous_value=4254.55, format=ValueFormat.CURRENCY,
                            ),
                        ],
                    ),
                ],
            ),
        ]
    return DashboardData(
        categories=categories,
        filters=DashboardFilters(time_horizon=time_horizon, product=product, region=region),
    )


# ---------------------------------------------------------------------------
# Stub adapter
# ---------------------------------------------------------------------------


class StubAdapter(MetricsAdapter):
    """
    In-memory MetricsAdapter for tests.

    Returns a fixed snapshot (re-labelled with the requested horizon) or
    raises the configured error. Records every requested horizon.
    """

    def __init__(self, data: Optional[DashboardData] = None, error: Optional[Exception] = None):
        super().__init__("stub")
        self.data = data or make_dashboard_data()
        self.error = error
        self.calls: list[TimeHorizon] = []
        self.closed = False

    async def get_metrics(self, time_horizon: TimeHorizon) -> DashboardData:
        time_horizon = TimeHorizon(time_horizon)
        self.calls.append(time_horizon)
        if self.error is not None:
            raise self.error
        filters = self.data.filters.model_copy(update={"time_horizon": time_horizon})
        return self.data.model_copy(update={"filters": filters})

    async def aclose(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_now():
    """Pinned reference time: Saturday 2024-03-09 15:30 UTC."""
    return FIXED_NOW


@pytest.fixture
def sample_dashboard():
    """Snapshot with growth, performance (inverted) and revenue (with children)."""
    return make_dashboard_data()


@pytest.fixture
def stub_adapter(sample_dashboard):
    """StubAdapter serving the sample snapshot."""
    return StubAdapter(data=sample_dashboard)


@pytest.fixture
def failing_adapter():
    """StubAdapter that always fails like an unreachable backend."""
    return StubAdapter(
        error=MetricsFetchError("Failed to fetch metrics: Bad Gateway", source="stub", status_code=502)
    )


@pytest.fixture
def client():
    """FastAPI test client wired to the configured (mock) adapter."""
    from pulseboard.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def stub_client(stub_adapter):
    """FastAPI test client with the metrics adapter replaced by stub_adapter."""
    from pulseboard.adapters import get_metrics_adapter
    from pulseboard.main import app

    app.dependency_overrides[get_metrics_adapter] = lambda: stub_adapter
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_metrics_adapter, None)


@pytest.fixture
def failing_client(failing_adapter):
    """FastAPI test client whose metrics adapter always fails."""
    from pulseboard.adapters import get_metrics_adapter
    from pulseboard.main import app

    app.dependency_overrides[get_metrics_adapter] = lambda: failing_adapter
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_metrics_adapter, None)
