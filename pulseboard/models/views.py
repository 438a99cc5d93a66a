"""
Rendered dashboard view models.

A view is what the API hands to a rendering layer: every MetricValue already
turned into display strings and a delta badge, so clients do no arithmetic.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import DeltaMode, MetricLevel, TimeHorizon, TrendDirection, ValueFormat
from .metrics import DashboardFilters, SparklineData


class ColumnHeaders(BaseModel):
    """Titles of the three comparison columns for a time horizon."""

    model_config = ConfigDict(frozen=True)

    last_period: str
    period_to_date: str
    rolling_period: str


class ValueCell(BaseModel):
    """
    A formatted value with its delta badge.

    Attributes:
        value: Raw current reading, None when not finite
        previous_value: Raw comparison reading, None when not finite
        format: Format family used for display
        display: Formatted current reading (e.g., "$7.82K")
        delta: Computed delta in the requested mode, None when not finite
        delta_display: Formatted delta (e.g., "+12.0%")
        direction: Arrow direction, None when the delta is not finite
        is_good: Whether the change is favourable, None when not finite
    """

    value: Optional[float] = None
    previous_value: Optional[float] = None
    format: ValueFormat
    display: str
    delta: Optional[float] = None
    delta_display: str
    direction: Optional[TrendDirection] = None
    is_good: Optional[bool] = None


class MetricRowView(BaseModel):
    """A rendered metric row."""

    id: str
    name: str
    parent_label: Optional[str] = None
    level: MetricLevel
    is_expandable: bool
    invert_colors: bool = False
    last_period: ValueCell
    period_to_date: ValueCell
    rolling_period: ValueCell
    sparkline: SparklineData
    children: list["MetricRowView"] = Field(default_factory=list)


class CategoryView(BaseModel):
    """A rendered category with the preview row shown while collapsed."""

    id: str
    name: str
    hero_metric_id: str
    preview: Optional[MetricRowView] = None
    metrics: list[MetricRowView] = Field(default_factory=list)


class DashboardView(BaseModel):
    """Fully rendered dashboard for one horizon and delta mode."""

    time_horizon: TimeHorizon
    delta_mode: DeltaMode
    headers: ColumnHeaders
    chart_dates: list[str]
    filters: DashboardFilters
    categories: list[CategoryView] = Field(default_factory=list)
