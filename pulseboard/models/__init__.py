"""
Pydantic v2 data models for the metrics dashboard.

Model Organization:
    - enums: Enumeration types (time horizon, value format, delta mode)
    - metrics: Adapter-facing data snapshot models
    - views: Rendered, display-ready response models

Usage:
    >>> from pulseboard.models import MetricValue, ValueFormat
    >>> mv = MetricValue(value=245.0, previous_value=200.0, format=ValueFormat.MILLISECONDS)
"""

from .enums import DeltaMode, MetricLevel, TimeHorizon, TrendDirection, ValueFormat
from .metrics import (
    DashboardData,
    DashboardFilters,
    Metric,
    MetricCategory,
    MetricValue,
    SparklineData,
    SparklinePoint,
)
from .views import CategoryView, ColumnHeaders, DashboardView, MetricRowView, ValueCell

__all__ = [
    # Enums
    "DeltaMode",
    "MetricLevel",
    "TimeHorizon",
    "TrendDirection",
    "ValueFormat",
    # Data
    "DashboardData",
    "DashboardFilters",
    "Metric",
    "MetricCategory",
    "MetricValue",
    "SparklineData",
    "SparklinePoint",
    # Views
    "CategoryView",
    "ColumnHeaders",
    "DashboardView",
    "MetricRowView",
    "ValueCell",
]
