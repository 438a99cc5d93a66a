"""
Dashboard presenter: turns a DashboardData snapshot into a display-ready view.

Every MetricValue becomes a ValueCell (formatted value plus delta badge) in
the requested delta mode. Colour inversion is decided per metric id: for
latency, error rate, churn and spend an increase is bad, and child rows
inherit the decision from their parent.
"""

from datetime import datetime
from typing import Optional

import structlog

from pulseboard.models.enums import DeltaMode
from pulseboard.models.metrics import DashboardData, Metric, MetricCategory
from pulseboard.models.views import CategoryView, DashboardView, MetricRowView

from .formatting import build_value_cell
from .periods import get_chart_dates, get_column_headers

logger = structlog.get_logger()

# Metrics where positive change is actually bad
INVERTED_METRICS = frozenset({
    "error-rate",
    "latency-p50",
    "latency-p95",
    "latency-p99",
    "churn-rate",
    "paid-to-free",
    "daily-spend",
    "monthly-spend",
    "spend-per-user",
})


class DashboardPresenter:
    """
    Renders dashboard snapshots for one delta mode.

    Args:
        delta_mode: How deltas are expressed (pct or abs)
        inverted_metrics: Metric ids whose increase is unfavourable
    """

    def __init__(
        self,
        delta_mode: DeltaMode = DeltaMode.PCT,
        inverted_metrics: frozenset[str] = INVERTED_METRICS,
    ):
        self.delta_mode = DeltaMode(delta_mode)
        self.inverted_metrics = inverted_metrics

    def present(self, data: DashboardData, now: Optional[datetime] = None) -> DashboardView:
        """
        Render a full snapshot.

        Args:
            data: Snapshot returned by an adapter
            now: Reference time for chart axis labels (default: now)

        Returns:
            DashboardView with headers, chart dates and rendered categories
        """
        horizon = data.filters.time_horizon
        categories = [self.present_category(c) for c in data.categories]

        logger.info(
            "dashboard_rendered",
            time_horizon=horizon.value,
            delta_mode=self.delta_mode.value,
            categories=len(categories),
        )

        return DashboardView(
            time_horizon=horizon,
            delta_mode=self.delta_mode,
            headers=get_column_headers(horizon),
            chart_dates=get_chart_dates(horizon, now=now),
            filters=data.filters,
            categories=categories,
        )

    def present_category(self, category: MetricCategory) -> CategoryView:
        """Render a category; the preview row is its first metric."""
        rows = [self.present_metric(m) for m in category.metrics]
        return CategoryView(
            id=category.id,
            name=category.name,
            hero_metric_id=category.hero_metric_id,
            preview=rows[0] if rows else None,
            metrics=rows,
        )

    def present_metric(self, metric: Metric, invert_colors: Optional[bool] = None) -> MetricRowView:
        """
        Render a metric row and its children.

        Args:
            metric: Metric to render
            invert_colors: Forced inversion (used for children); looked up
                by metric id when None
        """
        if invert_colors is None:
            invert_colors = metric.id in self.inverted_metrics

        children = [
            self.present_metric(child, invert_colors=invert_colors)
            for child in metric.children or []
        ]

        return MetricRowView(
            id=metric.id,
            name=metric.name,
            parent_label=metric.parent_label,
            level=metric.level,
            is_expandable=metric.is_expandable and metric.has_children,
            invert_colors=invert_colors,
            last_period=build_value_cell(metric.last_period, self.delta_mode, invert_colors),
            period_to_date=build_value_cell(metric.period_to_date, self.delta_mode, invert_colors),
            rolling_period=build_value_cell(metric.rolling_period, self.delta_mode, invert_colors),
            sparkline=metric.sparkline,
            children=children,
        )
