"""
Dashboard metrics router.

Wired to:
- MetricsAdapter for data snapshots
- DashboardPresenter for formatted values and delta badges
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pulseboard.adapters import MetricsAdapter, MetricsFetchError, get_metrics_adapter
from pulseboard.config import get_settings
from pulseboard.engine.periods import TIME_HORIZON_HEADERS, get_chart_dates, get_column_headers
from pulseboard.engine.presenter import DashboardPresenter
from pulseboard.models.enums import DeltaMode, TimeHorizon
from pulseboard.models.metrics import DashboardData
from pulseboard.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


async def _fetch_snapshot(adapter: MetricsAdapter, horizon: TimeHorizon) -> DashboardData:
    """Fetch a snapshot, turning adapter failures into 502 responses."""
    try:
        return await adapter.get_metrics(horizon)
    except MetricsFetchError as e:
        logger.error(
            "metrics_fetch_failed",
            source=e.source or adapter.source_name,
            time_horizon=horizon.value,
            upstream_status=e.status_code,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )


@router.get("/dashboard")
async def get_dashboard(
    horizon: Optional[TimeHorizon] = Query(None, description="Time horizon filter"),
    delta_mode: Optional[DeltaMode] = Query(None, description="Delta mode (pct|abs)"),
    adapter: MetricsAdapter = Depends(get_metrics_adapter),
):
    """
    Get the rendered dashboard.
    Every value comes pre-formatted with its delta badge for the requested mode.
    """
    settings = get_settings()
    horizon = horizon or settings.default_time_horizon
    delta_mode = delta_mode or settings.default_delta_mode

    logger.info("metrics_dashboard", time_horizon=horizon.value, delta_mode=delta_mode.value)

    data = await _fetch_snapshot(adapter, horizon)
    view = DashboardPresenter(delta_mode=delta_mode).present(data)

    return {"success": True, "data": view.model_dump(mode="json")}


@router.get("/raw")
async def get_raw_metrics(
    horizon: Optional[TimeHorizon] = Query(None, description="Time horizon filter"),
    adapter: MetricsAdapter = Depends(get_metrics_adapter),
):
    """Get the unrendered snapshot exactly as the adapter returned it."""
    horizon = horizon or get_settings().default_time_horizon
    logger.info("metrics_raw", time_horizon=horizon.value)

    data = await _fetch_snapshot(adapter, horizon)
    return {"success": True, "data": data.model_dump(mode="json")}


@router.get("/headers")
async def get_headers(
    horizon: Optional[TimeHorizon] = Query(None, description="Time horizon filter"),
):
    """Column titles and sparkline axis labels for a horizon."""
    horizon = horizon or get_settings().default_time_horizon
    return {
        "success": True,
        "data": {
            "time_horizon": horizon.value,
            "headers": get_column_headers(horizon).model_dump(),
            "chart_dates": get_chart_dates(horizon),
        },
    }


@router.get("/horizons")
async def list_horizons():
    """List supported time horizons with their column titles."""
    return {
        "success": True,
        "data": [
            {"time_horizon": horizon.value, "headers": headers.model_dump()}
            for horizon, headers in TIME_HORIZON_HEADERS.items()
        ],
    }
