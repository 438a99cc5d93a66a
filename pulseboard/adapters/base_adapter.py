"""
Base adapter class for metrics data sources.

Every data source the dashboard can read from implements MetricsAdapter:
one asynchronous call that returns a full DashboardData snapshot for a
time horizon, or raises MetricsFetchError.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog

from pulseboard.models.enums import TimeHorizon
from pulseboard.models.metrics import DashboardData

logger = structlog.get_logger()


class MetricsFetchError(Exception):
    """Raised when an adapter cannot produce a dashboard snapshot."""

    def __init__(self, message: str, source: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.source = source
        self.status_code = status_code


class MetricsAdapter(ABC):
    """
    Abstract base class for metrics data adapters.

    Implement get_metrics() to connect a new data source. Adapters must return
    fully populated DashboardData (all three comparison windows per metric)
    and signal any failure through MetricsFetchError so callers can log it
    and fall back to an empty/loading state.

    Attributes:
        source_name: Identifier for the data source (e.g., "mock", "http")
    """

    def __init__(self, source_name: str):
        """
        Initialize the adapter with a source name.

        Args:
            source_name: Identifier for this data source
        """
        self.source_name = source_name
        self.logger = logger.bind(adapter=source_name)

    @abstractmethod
    async def get_metrics(self, time_horizon: TimeHorizon) -> DashboardData:
        """
        Fetch dashboard metrics for a given time horizon.

        Args:
            time_horizon: The time period to fetch metrics for

        Returns:
            Dashboard data snapshot

        Raises:
            MetricsFetchError: If the source cannot be read
        """

    async def aclose(self) -> None:
        """Release any resources held by the adapter."""
