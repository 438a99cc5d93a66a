"""
System health and diagnostics router.

Wired to:
- Settings for configuration
- Adapter registry for the active data source
"""

import time

from fastapi import APIRouter

from pulseboard import __version__
from pulseboard.adapters import list_adapters
from pulseboard.config import get_settings
from pulseboard.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()

# Track startup time for uptime calculation
_startup_time = time.time()


@router.get("/health")
async def system_health():
    """Report service status, uptime and the configured data source."""
    settings = get_settings()
    uptime = time.time() - _startup_time

    return {
        "success": True,
        "data": {
            "status": "healthy",
            "version": __version__,
            "uptime_seconds": round(uptime, 1),
            "metrics_adapter": settings.metrics_adapter,
            "available_adapters": list_adapters(),
        },
    }


@router.get("/config")
async def system_config():
    """Non-secret configuration relevant to dashboard clients."""
    settings = get_settings()
    return {
        "success": True,
        "data": {
            "default_time_horizon": settings.default_time_horizon.value,
            "default_delta_mode": settings.default_delta_mode.value,
            "product": settings.dashboard_product,
            "region": settings.dashboard_region,
            "dev_mode": settings.dev_mode,
        },
    }
