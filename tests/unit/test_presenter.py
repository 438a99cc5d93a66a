"""
Unit tests for DashboardPresenter.
"""

import pytest

from pulseboard.engine.presenter import INVERTED_METRICS, DashboardPresenter
from pulseboard.models.enums import DeltaMode, MetricLevel, TimeHorizon, TrendDirection, ValueFormat
from tests.conftest import (
    make_category,
    make_child_metric,
    make_dashboard_data,
    make_metric,
)


class TestDashboardPresenterView:
    """Top-level view assembly."""

    def test_present_carries_headers_and_chart_dates(self, sample_dashboard, fixed_now):
        view = DashboardPresenter(DeltaMode.PCT).present(sample_dashboard, now=fixed_now)

        assert view.time_horizon == TimeHorizon.WEEK
        assert view.delta_mode == DeltaMode.PCT
        assert view.headers.last_period == "Last Completed Week"
        assert view.chart_dates[-1] == "3/9"
        assert len(view.chart_dates) == 7
        assert view.filters == sample_dashboard.filters

    def test_present_keeps_category_order(self, sample_dashboard, fixed_now):
        view = DashboardPresenter().present(sample_dashboard, now=fixed_now)
        assert [c.id for c in view.categories] == ["growth", "performance", "revenue"]

    def test_present_preview_is_first_metric(self, sample_dashboard, fixed_now):
        view = DashboardPresenter().present(sample_dashboard, now=fixed_now)
        performance = view.categories[1]
        assert performance.preview == performance.metrics[0]
        assert performance.preview.id == "latency-p95"

    def test_present_empty_category_has_no_preview(self, fixed_now):
        data = make_dashboard_data(categories=[make_category(metrics=[])])
        view = DashboardPresenter().present(data, now=fixed_now)
        assert view.categories[0].preview is None
        assert view.categories[0].metrics == []

    def test_presenter_accepts_plain_string_mode(self):
        assert DashboardPresenter("abs").delta_mode == DeltaMode.ABS

    def test_presenter_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            DashboardPresenter("ratio")


class TestDashboardPresenterRows:
    """Row rendering and colour inversion."""

    def test_present_metric_formats_all_windows(self):
        row = DashboardPresenter(DeltaMode.PCT).present_metric(
            make_metric("latency-p50", "Latency p50", 245, 200, ValueFormat.MILLISECONDS)
        )
        for cell in (row.last_period, row.period_to_date, row.rolling_period):
            assert cell.display == "245ms"
            assert cell.delta_display == "+22.5%"

    def test_inverted_metric_decrease_is_good(self):
        row = DashboardPresenter(DeltaMode.PCT).present_metric(
            make_metric("latency-p95", "Latency p95", 850, 890, ValueFormat.MILLISECONDS)
        )
        assert row.invert_colors is True
        assert row.last_period.direction == TrendDirection.DOWN
        assert row.last_period.is_good is True

    def test_regular_metric_decrease_is_bad(self):
        row = DashboardPresenter(DeltaMode.PCT).present_metric(
            make_metric("signups", "Signups", 800, 900)
        )
        assert row.invert_colors is False
        assert row.last_period.is_good is False

    def test_abs_mode_uses_metric_format(self):
        row = DashboardPresenter(DeltaMode.ABS).present_metric(
            make_metric("mrr", "MRR", 1500, 300, ValueFormat.CURRENCY)
        )
        assert row.last_period.display == "$1.50K"
        assert row.last_period.delta_display == "+$1.20K"

    def test_children_inherit_parent_inversion(self):
        parent = make_metric(
            "error-rate",
            "Error Rate",
            0.8,
            0.94,
            ValueFormat.PERCENT,
            children=[
                make_child_metric(
                    "Error Rate", "error-rate-api", "API",
                    value=1.2, previous_value=1.0, format=ValueFormat.PERCENT,
                ),
            ],
        )
        assert "error-rate-api" not in INVERTED_METRICS

        row = DashboardPresenter(DeltaMode.PCT).present_metric(parent)

        assert row.is_expandable is True
        child = row.children[0]
        assert child.level == MetricLevel.CHILD
        assert child.parent_label == "Error Rate"
        assert child.invert_colors is True
        assert child.last_period.is_good is False

    def test_expandable_without_children_is_not_expandable(self):
        row = DashboardPresenter().present_metric(
            make_metric("mau", "Monthly Active Users", is_expandable=True)
        )
        assert row.is_expandable is False
        assert row.children == []

    def test_custom_inverted_metrics(self):
        presenter = DashboardPresenter(DeltaMode.PCT, inverted_metrics=frozenset({"signups"}))
        row = presenter.present_metric(make_metric("signups", "Signups", 900, 800))
        assert row.last_period.is_good is False

    def test_sparkline_passes_through(self):
        metric = make_metric()
        row = DashboardPresenter().present_metric(metric)
        assert row.sparkline == metric.sparkline
