"""
Metric value formatting and delta computation.

Pure functions shared by every rendering path:
- format_value: (value, ValueFormat) -> display string ("$7.82K", "1.45s")
- calculate_delta: (value, previous, DeltaMode) -> signed delta
- format_delta: (delta, DeltaMode, ValueFormat) -> badge string ("+12.0%")

Rounding is fixed-point, half away from zero, on the exact binary value of
the float, so 1.005 renders as "1.00" and 0.125 as "0.13". A negative input
always renders with one leading minus sign ahead of any unit prefix
("-$50.00", "-1.50M", "-1.45s").

Non-finite input (NaN, +/-inf) renders as NOT_AVAILABLE instead of a number.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Callable, Optional, Union

from pulseboard.models.enums import DeltaMode, TrendDirection, ValueFormat
from pulseboard.models.metrics import MetricValue
from pulseboard.models.views import ValueCell

NOT_AVAILABLE = "n/a"

MILLION = 1_000_000
THOUSAND = 1_000

# Wide enough to hold every digit of the largest double plus decimals
_FIXED_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)

FormatLike = Union[ValueFormat, str]
DeltaModeLike = Union[DeltaMode, str]


def _to_fixed(n: float, digits: int) -> str:
    """Render n with exactly `digits` decimals, rounding half away from zero."""
    if n == 0:
        n = 0.0  # negative zero renders unsigned
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(n).quantize(quantum, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT)
    return format(rounded, "f")


def _sign(n: float) -> str:
    return "-" if n < 0 else ""


def _scaled(magnitude: float) -> str:
    """K/M scaling shared by numbers and currency. Expects a non-negative input."""
    if magnitude >= MILLION:
        return _to_fixed(magnitude / MILLION, 2) + "M"
    if magnitude >= THOUSAND:
        return _to_fixed(magnitude / THOUSAND, 2) + "K"
    return ""


def format_number(n: float) -> str:
    """
    Format a plain count.

    >= 1M -> "1.50M", >= 1K -> "2.34K", integers verbatim ("42"),
    everything else with two decimals ("6.70").
    """
    if not math.isfinite(n):
        return NOT_AVAILABLE
    magnitude = abs(n)
    scaled = _scaled(magnitude)
    if scaled:
        return _sign(n) + scaled
    if float(n).is_integer():
        return str(int(n))
    return _sign(n) + _to_fixed(magnitude, 2)


def format_currency(n: float) -> str:
    """Format a dollar amount. Small amounts always carry cents ("$42.00")."""
    if not math.isfinite(n):
        return NOT_AVAILABLE
    magnitude = abs(n)
    body = _scaled(magnitude) or _to_fixed(magnitude, 2)
    return _sign(n) + "$" + body


def format_percent(n: float) -> str:
    """Format a value that is already a percentage (8.43 -> "8.4%")."""
    if not math.isfinite(n):
        return NOT_AVAILABLE
    return _sign(n) + _to_fixed(abs(n), 1) + "%"


def format_milliseconds(n: float) -> str:
    """Format a duration in ms; one second and above switches to seconds."""
    if not math.isfinite(n):
        return NOT_AVAILABLE
    magnitude = abs(n)
    if magnitude >= 1000:
        return _sign(n) + _to_fixed(magnitude / 1000, 2) + "s"
    return _sign(n) + _to_fixed(magnitude, 0) + "ms"


_FORMATTERS: dict[ValueFormat, Callable[[float], str]] = {
    ValueFormat.CURRENCY: format_currency,
    ValueFormat.PERCENT: format_percent,
    ValueFormat.MILLISECONDS: format_milliseconds,
    ValueFormat.NUMBER: format_number,
}


def _coerce_format(format: FormatLike) -> ValueFormat:
    try:
        return ValueFormat(format)
    except ValueError:
        return ValueFormat.NUMBER


def format_value(value: float, format: FormatLike) -> str:
    """
    Format a metric reading for display.

    Args:
        value: Raw reading
        format: Format family; unknown tags fall back to plain number

    Returns:
        Display string, or NOT_AVAILABLE for non-finite values
    """
    formatter = _FORMATTERS[_coerce_format(format)]
    return formatter(value)


def calculate_delta(value: float, previous_value: float, mode: DeltaModeLike) -> float:
    """
    Compute the period-over-period change.

    abs mode returns value - previous_value as-is. pct mode returns the change
    relative to |previous_value| in percent; growth from a zero baseline counts
    as a full swing of +100 / -100 (0 when both are zero). Results are not
    clamped, so pct deltas can exceed +/-100.

    Args:
        value: Current reading
        previous_value: Comparison reading
        mode: DeltaMode.ABS or DeltaMode.PCT

    Returns:
        Signed delta
    """
    if mode == DeltaMode.ABS:
        return value - previous_value

    if previous_value == 0:
        if value > 0:
            return 100.0
        if value < 0:
            return -100.0
        return 0.0
    return ((value - previous_value) / abs(previous_value)) * 100


def format_delta(delta: float, mode: DeltaModeLike, format: FormatLike) -> str:
    """
    Format a delta for a badge.

    Non-negative deltas, zero included, get a leading "+". abs mode renders in
    the metric's own format ("+$1.20K", "-120ms"); pct mode ignores the format
    and always renders a percentage.
    """
    if not math.isfinite(delta):
        return NOT_AVAILABLE

    sign = "+" if delta >= 0 else ""
    if mode == DeltaMode.ABS:
        return sign + format_value(delta, format)
    return sign + _to_fixed(delta, 1) + "%"


def _finite_or_none(n: float) -> Optional[float]:
    return n if math.isfinite(n) else None


def build_value_cell(
    metric_value: MetricValue,
    delta_mode: DeltaModeLike,
    invert_colors: bool = False,
) -> ValueCell:
    """
    Render a MetricValue into a value cell with its delta badge.

    invert_colors flips is_good for metrics where an increase is bad
    (latency, error rate, spend). Non-finite readings and deltas, including
    an abs delta that overflows, come back as None so the cell stays JSON-safe.
    """
    value = metric_value.value
    previous_value = metric_value.previous_value
    fmt = metric_value.format

    delta = calculate_delta(value, previous_value, delta_mode)

    direction = None
    is_good = None
    if math.isfinite(delta):
        is_positive = delta >= 0
        direction = TrendDirection.UP if is_positive else TrendDirection.DOWN
        is_good = not is_positive if invert_colors else is_positive

    return ValueCell(
        value=_finite_or_none(value),
        previous_value=_finite_or_none(previous_value),
        format=fmt,
        display=format_value(value, fmt),
        delta=_finite_or_none(delta),
        delta_display=format_delta(delta, delta_mode, fmt),
        direction=direction,
        is_good=is_good,
    )
