"""
HTTP adapter for a real metrics backend.

Calls GET {base_url}/api/metrics?horizon=<horizon> and validates the JSON
response into DashboardData. Override transform() when the upstream payload
does not already match the DashboardData schema.
"""

import json
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from pulseboard.models.enums import TimeHorizon
from pulseboard.models.metrics import DashboardData

from .base_adapter import MetricsAdapter, MetricsFetchError


def _reject_non_finite(token: str) -> Any:
    # json.loads accepts NaN and Infinity, which are not valid JSON
    raise ValueError(f"non-finite number {token} in payload")


class HTTPMetricsAdapter(MetricsAdapter):
    """
    Metrics adapter backed by a REST API.

    Usable as an async context manager; otherwise the underlying client is
    created lazily and released by aclose().

    Args:
        base_url: Root URL of the metrics API
        timeout: Request timeout in seconds
        product: Product label used when the payload carries no filters
        region: Region label used when the payload carries no filters
        client: Pre-built httpx.AsyncClient (injectable for tests)
    """

    METRICS_PATH = "/api/metrics"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        product: str = "dooze",
        region: str = "global",
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__("http")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.product = product
        self.region = region
        self._http_client = client
        self._owns_client = client is None

        self.logger.info("adapter_initialized", base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> "HTTPMetricsAdapter":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def get_metrics(self, time_horizon: TimeHorizon) -> DashboardData:
        time_horizon = TimeHorizon(time_horizon)
        url = f"{self.base_url}{self.METRICS_PATH}"
        client = self._ensure_client()

        try:
            response = await client.get(url, params={"horizon": time_horizon.value})
            response.raise_for_status()
            payload = json.loads(response.content, parse_constant=_reject_non_finite)
        except httpx.HTTPStatusError as e:
            self.logger.error(
                "metrics_fetch_failed",
                url=url,
                status_code=e.response.status_code,
                reason=e.response.reason_phrase,
            )
            raise MetricsFetchError(
                f"Failed to fetch metrics: {e.response.reason_phrase}",
                source=self.source_name,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            self.logger.error("metrics_fetch_failed", url=url, error=str(e))
            raise MetricsFetchError(
                f"Failed to fetch metrics: {e}", source=self.source_name
            ) from e
        except ValueError as e:
            self.logger.error("metrics_payload_not_json", url=url, error=str(e))
            raise MetricsFetchError(
                "Metrics API returned a non-JSON body", source=self.source_name
            ) from e

        data = self.transform(payload, time_horizon)
        self.logger.info(
            "metrics_fetched",
            time_horizon=time_horizon.value,
            categories=len(data.categories),
        )
        return data

    def transform(self, payload: Any, time_horizon: TimeHorizon) -> DashboardData:
        """
        Map the upstream payload onto DashboardData.

        The default expects the DashboardData schema, filling in filters when
        the upstream omits them.

        Raises:
            MetricsFetchError: If the payload does not validate
        """
        if isinstance(payload, dict) and "filters" not in payload:
            payload = {
                **payload,
                "filters": {
                    "time_horizon": time_horizon.value,
                    "product": self.product,
                    "region": self.region,
                },
            }
        try:
            return DashboardData.model_validate(payload)
        except ValidationError as e:
            self.logger.error(
                "metrics_payload_invalid",
                error_count=e.error_count(),
                errors=e.errors(include_url=False)[:5],
            )
            raise MetricsFetchError(
                f"Metrics API returned an invalid payload ({e.error_count()} errors)",
                source=self.source_name,
            ) from e
