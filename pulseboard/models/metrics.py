"""
Metric data models.

These are the shapes adapters return: one DashboardData snapshot per time
horizon, holding categories of metrics, each metric carrying three comparison
windows and a sparkline series.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import MetricLevel, TimeHorizon, ValueFormat


class MetricValue(BaseModel):
    """
    One observed metric reading and its comparison baseline.

    Immutable once constructed.

    Attributes:
        value: Reading for the current window
        previous_value: Reading for the comparison window
        format: Display format family for both readings
    """

    model_config = ConfigDict(frozen=True)

    value: float = Field(description="Reading for the current window")
    previous_value: float = Field(description="Reading for the comparison window")
    format: ValueFormat = Field(
        default=ValueFormat.NUMBER, description="Display format family"
    )


class SparklinePoint(BaseModel):
    """Single point of a sparkline: current series and comparison series."""

    date: datetime
    value: float
    comparison: float


class SparklineData(BaseModel):
    """
    Sparkline series with its y-axis bounds.

    min/max span both the value and the comparison series so the two lines
    share one scale.
    """

    data: list[SparklinePoint] = Field(default_factory=list)
    min: float = 0.0
    max: float = 0.0

    @classmethod
    def from_points(cls, points: list[SparklinePoint]) -> "SparklineData":
        """Build a series and derive its bounds from the points."""
        if not points:
            return cls()
        all_values = [p.value for p in points] + [p.comparison for p in points]
        return cls(data=points, min=min(all_values), max=max(all_values))


class Metric(BaseModel):
    """
    A metric row in the dashboard table.

    Attributes:
        id: Stable identifier (e.g., "latency-p95")
        name: Display name
        parent_label: Label of the parent row, for child metrics
        level: Parent or child row
        is_expandable: Whether the row can be expanded to show children
        last_period: Last completed period vs the one before it
        period_to_date: Current partial period vs the same span last period
        sparkline: Trend series for the chart column
        rolling_period: Trailing window vs the preceding trailing window
        children: Breakdown rows (e.g., free vs paid)
    """

    id: str
    name: str
    parent_label: Optional[str] = None
    level: MetricLevel = MetricLevel.PARENT
    is_expandable: bool = False
    last_period: MetricValue
    period_to_date: MetricValue
    sparkline: SparklineData = Field(default_factory=SparklineData)
    rolling_period: MetricValue
    children: Optional[list["Metric"]] = None

    @property
    def has_children(self) -> bool:
        return bool(self.children)


class MetricCategory(BaseModel):
    """A collapsible group of metrics, headlined by its hero metric."""

    id: str
    name: str
    hero_metric_id: str
    metrics: list[Metric] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_hero_metric(self) -> "MetricCategory":
        if self.metrics and self.hero_metric_id not in {m.id for m in self.metrics}:
            raise ValueError(
                f"hero_metric_id '{self.hero_metric_id}' is not a metric of category '{self.id}'"
            )
        return self


class DashboardFilters(BaseModel):
    """Filters a snapshot was produced for."""

    time_horizon: TimeHorizon
    product: str
    region: str


class DashboardData(BaseModel):
    """Complete data snapshot for one time horizon."""

    categories: list[MetricCategory] = Field(default_factory=list)
    filters: DashboardFilters

    def find_metric(self, metric_id: str) -> Optional[Metric]:
        """Look up a metric (parent or child) by id."""
        for category in self.categories:
            for metric in category.metrics:
                if metric.id == metric_id:
                    return metric
                for child in metric.children or []:
                    if child.id == metric_id:
                        return child
        return None
