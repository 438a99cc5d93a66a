"""
Value formatting router.

Exposes the formatting rules so any rendering layer can format a reading or
a delta without re-implementing them.
"""

import math

from fastapi import APIRouter
from pydantic import BaseModel, Field

from pulseboard.engine.formatting import calculate_delta, format_delta, format_value
from pulseboard.models.enums import DeltaMode, TrendDirection, ValueFormat
from pulseboard.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


class FormatValueRequest(BaseModel):
    """Request to format a single reading."""

    value: float = Field(allow_inf_nan=False)
    format: ValueFormat = ValueFormat.NUMBER


class FormatDeltaRequest(BaseModel):
    """Request to compute and format a period-over-period delta."""

    value: float = Field(allow_inf_nan=False)
    previous_value: float = Field(allow_inf_nan=False)
    format: ValueFormat = ValueFormat.NUMBER
    mode: DeltaMode = Field(default=DeltaMode.PCT, description="pct or abs")


@router.post("/value")
async def format_value_endpoint(request: FormatValueRequest):
    """Format a reading, e.g. 1450 milliseconds -> "1.45s"."""
    display = format_value(request.value, request.format)
    logger.debug("value_formatted", format=request.format.value, display=display)
    return {"success": True, "data": {"display": display}}


@router.post("/delta")
async def format_delta_endpoint(request: FormatDeltaRequest):
    """Compute a delta and its badge string, e.g. 245 vs 200 in pct -> "+22.5%"."""
    delta = calculate_delta(request.value, request.previous_value, request.mode)
    display = format_delta(delta, request.mode, request.format)
    finite = math.isfinite(delta)
    direction = None
    if finite:
        direction = (TrendDirection.UP if delta >= 0 else TrendDirection.DOWN).value

    logger.debug("delta_formatted", mode=request.mode.value, delta=delta, display=display)

    return {
        "success": True,
        "data": {
            "delta": delta if finite else None,
            "display": display,
            "direction": direction,
        },
    }
