#!/usr/bin/env python3
"""
Pulseboard CLI: print the metrics dashboard as a text table.

Reads from the configured adapter (mock unless METRICS_ADAPTER=http) and
renders the same view the API serves.

Usage:
    pulseboard                          # configured defaults, categories collapsed
    pulseboard --horizon day --abs      # absolute deltas
    pulseboard --expand                 # show every metric and breakdown row
"""

import argparse
import asyncio
import sys
from typing import Optional

from pulseboard.adapters import MetricsFetchError, create_metrics_adapter
from pulseboard.config import get_settings
from pulseboard.engine.presenter import DashboardPresenter
from pulseboard.models.enums import DeltaMode, TimeHorizon, TrendDirection
from pulseboard.models.views import DashboardView, MetricRowView, ValueCell

NAME_WIDTH = 28
CELL_WIDTH = 20
ARROWS = {TrendDirection.UP: "↑", TrendDirection.DOWN: "↓"}


def _cell(cell: ValueCell) -> str:
    arrow = ARROWS.get(cell.direction, "")
    return f"{cell.display} {cell.delta_display}{arrow}".rjust(CELL_WIDTH)


def _row(row: MetricRowView, label: str) -> str:
    cells = (row.last_period, row.period_to_date, row.rolling_period)
    return label[:NAME_WIDTH].ljust(NAME_WIDTH) + "".join(_cell(c) for c in cells)


def render_table(view: DashboardView, expand: bool = False) -> str:
    """
    Render a dashboard view as fixed-width text.

    Collapsed categories show only their preview row; expand shows every
    metric and its children.
    """
    headers = view.headers
    lines = [
        "".ljust(NAME_WIDTH)
        + headers.last_period.rjust(CELL_WIDTH)
        + headers.period_to_date.rjust(CELL_WIDTH)
        + headers.rolling_period.rjust(CELL_WIDTH),
        "-" * (NAME_WIDTH + 3 * CELL_WIDTH),
    ]

    for category in view.categories:
        if not expand:
            preview = category.preview
            if preview:
                lines.append(_row(preview, f"{category.name} · {preview.name}"))
            else:
                lines.append(category.name)
            continue

        lines.append(category.name)
        for row in category.metrics:
            lines.append(_row(row, "  " + row.name))
            for child in row.children:
                lines.append(_row(child, "    " + child.name))

    return "\n".join(lines)


async def _load(horizon: TimeHorizon, delta_mode: DeltaMode) -> DashboardView:
    adapter = create_metrics_adapter()
    try:
        data = await adapter.get_metrics(horizon)
    finally:
        await adapter.aclose()
    return DashboardPresenter(delta_mode=delta_mode).present(data)


def main(argv: Optional[list[str]] = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Print the Pulseboard metrics dashboard")
    parser.add_argument(
        "--horizon",
        choices=[h.value for h in TimeHorizon],
        default=settings.default_time_horizon.value,
        help=f"Time horizon (default: {settings.default_time_horizon.value})",
    )
    parser.add_argument("--abs", action="store_true", help="Show absolute deltas regardless of DEFAULT_DELTA_MODE")
    parser.add_argument("--expand", action="store_true", help="Expand all categories and breakdowns")
    args = parser.parse_args(argv)

    horizon = TimeHorizon(args.horizon)
    delta_mode = DeltaMode.ABS if args.abs else settings.default_delta_mode

    try:
        view = asyncio.run(_load(horizon, delta_mode))
    except MetricsFetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render_table(view, expand=args.expand))
    return 0


if __name__ == "__main__":
    sys.exit(main())
