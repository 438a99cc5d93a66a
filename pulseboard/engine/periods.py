"""
Column headers and sparkline axis labels per time horizon.

Headers are a static lookup; chart dates are derived from a reference time
so they can be pinned in tests.
"""

from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Mapping, Optional

from pulseboard.models.enums import TimeHorizon
from pulseboard.models.views import ColumnHeaders

CHART_POINTS = 7

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

TIME_HORIZON_HEADERS: Mapping[TimeHorizon, ColumnHeaders] = MappingProxyType({
    TimeHorizon.HOUR: ColumnHeaders(
        last_period="Last Hour",
        period_to_date="Hour to Date",
        rolling_period="Last 60 Min",
    ),
    TimeHorizon.DAY: ColumnHeaders(
        last_period="Yesterday",
        period_to_date="Today to Date",
        rolling_period="Last 24 Hours",
    ),
    TimeHorizon.WEEK: ColumnHeaders(
        last_period="Last Completed Week",
        period_to_date="Week to Date",
        rolling_period="Last 7 Days",
    ),
    TimeHorizon.MONTH: ColumnHeaders(
        last_period="Last Month",
        period_to_date="Month to Date",
        rolling_period="Last 28 Days",
    ),
})


def get_column_headers(time_horizon: TimeHorizon) -> ColumnHeaders:
    """Titles for the last-period, period-to-date and rolling columns."""
    return TIME_HORIZON_HEADERS[TimeHorizon(time_horizon)]


def _short_date(d: datetime) -> str:
    return f"{d.month}/{d.day}"


def _months_back(d: datetime, months: int) -> tuple[int, int]:
    """(year, month) that lies `months` calendar months before d."""
    index = d.year * 12 + (d.month - 1) - months
    return index // 12, index % 12 + 1


def get_chart_dates(time_horizon: TimeHorizon, now: Optional[datetime] = None) -> list[str]:
    """
    X-axis labels for the sparkline column, oldest first.

    Always CHART_POINTS labels:
    - HOUR / DAY: last 7 days (data points within are hourly)
    - WEEK: last 7 weeks, one label per week
    - MONTH: last 7 months, as month abbreviations

    Args:
        time_horizon: Horizon being displayed
        now: Reference time (default: current local time)

    Returns:
        List of axis labels such as ["3/3", ..., "3/9"] or ["Sep", ..., "Mar"]
    """
    horizon = TimeHorizon(time_horizon)
    now = now or datetime.now()
    dates: list[str] = []

    for i in range(CHART_POINTS - 1, -1, -1):
        if horizon == TimeHorizon.MONTH:
            _, month = _months_back(now, i)
            dates.append(MONTH_NAMES[month - 1])
        elif horizon == TimeHorizon.WEEK:
            dates.append(_short_date(now - timedelta(days=i * 7)))
        else:
            dates.append(_short_date(now - timedelta(days=i)))

    return dates
