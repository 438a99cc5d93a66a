"""
Enumeration types for the metrics dashboard.

All enums inherit from str so they serialize to their plain values in JSON
and compare equal to the raw strings used by API clients.
"""

from enum import Enum


class TimeHorizon(str, Enum):
    """
    Granularity filter for a metrics view.

    Drives the column headers, the sparkline resolution and the chart axis.
    """

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class ValueFormat(str, Enum):
    """
    Display unit/scale family for a metric value.

    Determines scaling (K/M, seconds), units and suffix when rendered.
    """

    NUMBER = "number"
    PERCENT = "percent"
    CURRENCY = "currency"
    MILLISECONDS = "milliseconds"


class DeltaMode(str, Enum):
    """How period-over-period change is expressed."""

    PCT = "pct"  # Percentage change relative to the previous value
    ABS = "abs"  # Absolute difference, rendered in the metric's own format


class MetricLevel(str, Enum):
    """Position of a metric row in the expandable table."""

    PARENT = "parent"
    CHILD = "child"


class TrendDirection(str, Enum):
    """Arrow shown next to a delta badge."""

    UP = "up"
    DOWN = "down"
