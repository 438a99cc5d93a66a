"""
In-memory mock adapter.

Generates a plausible SaaS metrics snapshot (growth, engagement, conversion,
churn, usage, revenue, spend, performance) with random-walk sparklines.
Used as the default data source until a real backend is configured.
"""

import asyncio
import calendar
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

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

from .base_adapter import MetricsAdapter

HOURLY_POINTS = 7 * 24
PERIOD_POINTS = 7
DEFAULT_VARIANCE = 0.15
DEFAULT_GROWTH_RATE = 0.08

# Window scaling relative to the last full period
PERIOD_TO_DATE_SHARE = 0.4
PERIOD_TO_DATE_PREVIOUS_SHARE = 0.38
ROLLING_SHARE = 0.98
ROLLING_PREVIOUS_SHARE = 0.95


def _shift_months(d: datetime, months: int) -> datetime:
    index = d.year * 12 + (d.month - 1) + months
    year, month = index // 12, index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def _point_time(now: datetime, time_horizon: TimeHorizon, steps_back: int) -> datetime:
    if time_horizon in (TimeHorizon.HOUR, TimeHorizon.DAY):
        return now - timedelta(hours=steps_back)
    if time_horizon == TimeHorizon.WEEK:
        return now - timedelta(days=steps_back * 7)
    return _shift_months(now, -steps_back)


def generate_sparkline(
    base_value: float,
    time_horizon: TimeHorizon,
    rng: random.Random,
    now: datetime,
    variance: float = DEFAULT_VARIANCE,
) -> SparklineData:
    """
    Random-walk sparkline around base_value.

    HOUR and DAY produce hourly points over 7 days; WEEK and MONTH produce
    one point per week/month over 7 periods. The walk is biased slightly
    upwards and never goes below zero; the comparison series trails it.
    """
    points = HOURLY_POINTS if time_horizon in (TimeHorizon.HOUR, TimeHorizon.DAY) else PERIOD_POINTS
    current = base_value * (1 - variance * 0.5)

    data = []
    for i in range(points):
        change = (rng.random() - 0.4) * variance * base_value
        current = max(0.0, current + change)

        comparison_change = (rng.random() - 0.5) * variance * base_value * 0.5
        comparison = current * (0.85 + rng.random() * 0.15) + comparison_change

        data.append(
            SparklinePoint(
                date=_point_time(now, time_horizon, points - 1 - i),
                value=round(current, 2),
                comparison=round(comparison, 2),
            )
        )

    return SparklineData.from_points(data)


class MockAdapter(MetricsAdapter):
    """
    Mock metrics adapter with simulated latency.

    Args:
        latency_seconds: Simulated network delay per call
        seed: Seed for sparkline generation; the same seed yields the same
            snapshot on every call
        product: Product label reported in the snapshot filters
        region: Region label reported in the snapshot filters
        clock: Callable returning "now" (injectable for tests)
    """

    def __init__(
        self,
        latency_seconds: float = 0.1,
        seed: Optional[int] = None,
        product: str = "dooze",
        region: str = "global",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        super().__init__("mock")
        self.latency_seconds = latency_seconds
        self.seed = seed
        self.product = product
        self.region = region
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def get_metrics(self, time_horizon: TimeHorizon) -> DashboardData:
        time_horizon = TimeHorizon(time_horizon)
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)

        builder = _CatalogBuilder(
            time_horizon=time_horizon,
            rng=random.Random(self.seed),
            now=self._clock(),
        )
        categories = builder.build()

        self.logger.info(
            "mock_metrics_generated",
            time_horizon=time_horizon.value,
            categories=len(categories),
            metrics=sum(len(c.metrics) for c in categories),
        )

        return DashboardData(
            categories=categories,
            filters=DashboardFilters(
                time_horizon=time_horizon,
                product=self.product,
                region=self.region,
            ),
        )


class _CatalogBuilder:
    """Builds the fixed mock catalog for one horizon."""

    def __init__(self, time_horizon: TimeHorizon, rng: random.Random, now: datetime):
        self.time_horizon = time_horizon
        self.rng = rng
        self.now = now

    def metric(
        self,
        metric_id: str,
        name: str,
        base_value: float,
        format: ValueFormat = ValueFormat.NUMBER,
        growth_rate: float = DEFAULT_GROWTH_RATE,
        children: Optional[list[Metric]] = None,
        parent_label: Optional[str] = None,
    ) -> Metric:
        previous_value = base_value / (1 + growth_rate)
        return Metric(
            id=metric_id,
            name=name,
            parent_label=parent_label,
            level=MetricLevel.CHILD if parent_label else MetricLevel.PARENT,
            is_expandable=bool(children),
            last_period=MetricValue(value=base_value, previous_value=previous_value, format=format),
            period_to_date=MetricValue(
                value=base_value * PERIOD_TO_DATE_SHARE,
                previous_value=previous_value * PERIOD_TO_DATE_PREVIOUS_SHARE,
                format=format,
            ),
            sparkline=generate_sparkline(base_value, self.time_horizon, self.rng, self.now),
            rolling_period=MetricValue(
                value=base_value * ROLLING_SHARE,
                previous_value=previous_value * ROLLING_PREVIOUS_SHARE,
                format=format,
            ),
            children=children,
        )

    def child(self, parent_label: str, metric_id: str, name: str, base_value: float, **kwargs) -> Metric:
        return self.metric(metric_id, name, base_value, parent_label=parent_label, **kwargs)

    def build(self) -> list[MetricCategory]:
        m = self.metric
        c = self.child
        number = ValueFormat.NUMBER
        percent = ValueFormat.PERCENT
        currency = ValueFormat.CURRENCY
        ms = ValueFormat.MILLISECONDS

        return [
            MetricCategory(id="growth", name="GROWTH", hero_metric_id="signups", metrics=[
                m("downloads", "DMG Downloads", 2340, number, growth_rate=0.12),
                m("installs", "Installs", 1850, number, growth_rate=0.10),
                m("signups", "Signups", 892, number, growth_rate=0.15),
                m("active-users", "Active Users", 4230, number, growth_rate=0.09, children=[
                    c("Active Users", "active-free", "Free", 3450, growth_rate=0.07),
                    c("Active Users", "active-paid", "Paid", 780, growth_rate=0.18),
                ]),
            ]),
            MetricCategory(id="engagement", name="ENGAGEMENT", hero_metric_id="dau", metrics=[
                m("dau", "Daily Active Users", 1240, number, growth_rate=0.11, children=[
                    c("DAU", "dau-free", "Free", 980, growth_rate=0.08),
                    c("DAU", "dau-paid", "Paid", 260, growth_rate=0.22),
                ]),
                m("wau", "Weekly Active Users", 3420, number, growth_rate=0.09),
                m("mau", "Monthly Active Users", 4890, number, growth_rate=0.08),
            ]),
            MetricCategory(id="conversion", name="CONVERSION", hero_metric_id="free-to-paid", metrics=[
                m("download-to-install", "Download → Install", 79.1, percent, growth_rate=0.02),
                m("install-to-signup", "Install → Signup", 48.2, percent, growth_rate=0.04),
                m("signup-to-active", "Signup → Active", 62.4, percent, growth_rate=0.03),
                m("free-to-paid", "Free → Paid", 8.4, percent, growth_rate=0.15),
            ]),
            MetricCategory(id="churn", name="CHURN", hero_metric_id="churn-rate", metrics=[
                m("paid-to-free", "Paid → Free", 12, number, growth_rate=-0.08),
                m("inactive-free", "Inactive Free (2+ weeks)", 342, number, growth_rate=-0.05),
                m("churn-rate", "Churn Rate", 2.3, percent, growth_rate=-0.12),
            ]),
            MetricCategory(id="usage", name="USAGE", hero_metric_id="total-actions", metrics=[
                m("total-actions", "Total Actions", 28450, number, growth_rate=0.14, children=[
                    c("Actions", "ask-ai", "Ask AI", 12340, growth_rate=0.18),
                    c("Actions", "summarize", "Summarize", 8920, growth_rate=0.12),
                    c("Actions", "polish", "Polish", 7190, growth_rate=0.10),
                ]),
                m("actions-per-user", "Actions per User", 6.7, number, growth_rate=0.05),
                m("conversations", "Conversations Started", 4230, number, growth_rate=0.11),
            ]),
            MetricCategory(id="revenue", name="REVENUE", hero_metric_id="mrr", metrics=[
                m("mrr", "MRR", 7820, currency, growth_rate=0.12),
                m("arr", "ARR", 93840, currency, growth_rate=0.12),
                m("revenue-by-tier", "Revenue by Tier", 7820, currency, growth_rate=0.12, children=[
                    c("Revenue", "revenue-pro", "Pro", 4680, format=currency, growth_rate=0.10),
                    c("Revenue", "revenue-max", "Max", 3140, format=currency, growth_rate=0.16),
                ]),
            ]),
            MetricCategory(id="spend", name="SPEND", hero_metric_id="gross-margin", metrics=[
                m("daily-spend", "Daily API Spend", 42.5, currency, growth_rate=0.08),
                m("monthly-spend", "Monthly API Spend", 1275, currency, growth_rate=0.08),
                m("spend-per-user", "Spend per Active User", 0.34, currency, growth_rate=-0.03),
                m("gross-margin", "Gross Margin", 72.4, percent, growth_rate=0.02),
            ]),
            MetricCategory(id="performance", name="PERFORMANCE", hero_metric_id="error-rate", metrics=[
                m("error-rate", "Error Rate", 0.8, percent, growth_rate=-0.15),
                m("latency-p50", "Latency p50", 245, ms, growth_rate=-0.05),
                m("latency-p95", "Latency p95", 890, ms, growth_rate=-0.04),
                m("latency-p99", "Latency p99", 1450, ms, growth_rate=-0.03),
            ]),
        ]
