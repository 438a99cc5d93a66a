"""
Dashboard engine: value formatting, period labels and view rendering.
"""

from .formatting import (
    NOT_AVAILABLE,
    build_value_cell,
    calculate_delta,
    format_currency,
    format_delta,
    format_milliseconds,
    format_number,
    format_percent,
    format_value,
)
from .periods import TIME_HORIZON_HEADERS, get_chart_dates, get_column_headers
from .presenter import INVERTED_METRICS, DashboardPresenter

__all__ = [
    "NOT_AVAILABLE",
    "build_value_cell",
    "calculate_delta",
    "format_currency",
    "format_delta",
    "format_milliseconds",
    "format_number",
    "format_percent",
    "format_value",
    "TIME_HORIZON_HEADERS",
    "get_chart_dates",
    "get_column_headers",
    "INVERTED_METRICS",
    "DashboardPresenter",
]
