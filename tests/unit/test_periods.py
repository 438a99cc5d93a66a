"""
Unit tests for column headers and sparkline axis labels.
"""

from datetime import datetime

import pytest

from pulseboard.engine.periods import (
    CHART_POINTS,
    TIME_HORIZON_HEADERS,
    get_chart_dates,
    get_column_headers,
)
from pulseboard.models.enums import TimeHorizon


class TestColumnHeaders:
    """Static header lookup."""

    @pytest.mark.parametrize(
        "horizon,last_period,period_to_date,rolling_period",
        [
            (TimeHorizon.HOUR, "Last Hour", "Hour to Date", "Last 60 Min"),
            (TimeHorizon.DAY, "Yesterday", "Today to Date", "Last 24 Hours"),
            (TimeHorizon.WEEK, "Last Completed Week", "Week to Date", "Last 7 Days"),
            (TimeHorizon.MONTH, "Last Month", "Month to Date", "Last 28 Days"),
        ],
    )
    def test_get_column_headers(self, horizon, last_period, period_to_date, rolling_period):
        headers = get_column_headers(horizon)
        assert headers.last_period == last_period
        assert headers.period_to_date == period_to_date
        assert headers.rolling_period == rolling_period

    def test_get_column_headers_accepts_plain_string(self):
        assert get_column_headers("week").last_period == "Last Completed Week"

    def test_get_column_headers_unknown_horizon_raises(self):
        with pytest.raises(ValueError):
            get_column_headers("year")

    def test_headers_cover_every_horizon(self):
        assert set(TIME_HORIZON_HEADERS) == set(TimeHorizon)

    def test_headers_table_is_read_only(self):
        with pytest.raises(TypeError):
            TIME_HORIZON_HEADERS[TimeHorizon.WEEK] = get_column_headers(TimeHorizon.DAY)

    def test_header_entries_are_frozen(self):
        with pytest.raises(Exception):
            TIME_HORIZON_HEADERS[TimeHorizon.WEEK].last_period = "Changed"


class TestChartDates:
    """Seven axis labels, oldest first."""

    NOW = datetime(2024, 3, 9, 15, 30)

    @pytest.mark.parametrize("horizon", [TimeHorizon.HOUR, TimeHorizon.DAY])
    def test_chart_dates_hour_and_day_show_last_seven_days(self, horizon):
        assert get_chart_dates(horizon, now=self.NOW) == [
            "3/3", "3/4", "3/5", "3/6", "3/7", "3/8", "3/9",
        ]

    def test_chart_dates_week_steps_by_seven_days(self):
        assert get_chart_dates(TimeHorizon.WEEK, now=self.NOW) == [
            "1/27", "2/3", "2/10", "2/17", "2/24", "3/2", "3/9",
        ]

    def test_chart_dates_month_uses_month_names(self):
        assert get_chart_dates(TimeHorizon.MONTH, now=self.NOW) == [
            "Sep", "Oct", "Nov", "Dec", "Jan", "Feb", "Mar",
        ]

    def test_chart_dates_month_end_does_not_skip_months(self):
        assert get_chart_dates(TimeHorizon.MONTH, now=datetime(2024, 3, 31)) == [
            "Sep", "Oct", "Nov", "Dec", "Jan", "Feb", "Mar",
        ]

    def test_chart_dates_day_crosses_year_boundary(self):
        assert get_chart_dates(TimeHorizon.DAY, now=datetime(2024, 1, 3)) == [
            "12/28", "12/29", "12/30", "12/31", "1/1", "1/2", "1/3",
        ]

    @pytest.mark.parametrize("horizon", list(TimeHorizon))
    def test_chart_dates_always_seven_points(self, horizon):
        assert len(get_chart_dates(horizon)) == CHART_POINTS == 7
