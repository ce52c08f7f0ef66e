"""
Chart Renderers
================
Stateless functions turning a series into draw operations.

Every renderer walks the series newest sample first, starting at the right
edge of the panel and stepping one column to the left per sample. The
column width is ``width / capacity``, so a full buffer spans the panel
exactly.
"""

from __future__ import annotations

from typing import List, Optional, Union

from chart_series import RingBufferSeries, StackedSeries
from chart_settings import ChartColors, ChartStyle

from .draw_ops import DrawOp, FillRect, Point, StrokePath


SPARKLINE_WIDTH = 1.0


def _check_size(width: float, height: float) -> None:
    if not (width > 0 and height > 0):
        raise ValueError(f"Panel size must be positive, got {width}x{height}")


def _bar_height(value: float, scale: float, height: float) -> float:
    """Screen height of a sample, clamped to the panel."""
    return min(max(height * value / scale, 0.0), height)


def _background(width: float, height: float, colors: ChartColors) -> FillRect:
    return FillRect(0.0, 0.0, float(width), float(height), colors.background)


def render_strip_chart(
    series: RingBufferSeries,
    width: float,
    height: float,
    style: Union[ChartStyle, int, str] = ChartStyle.LINE,
    colors: Optional[ChartColors] = None,
) -> List[DrawOp]:
    """
    Render a single-series strip chart.

    In LINE style each sample is a square mark one column wide at the
    sample's height. In SOLID style each sample is a bar from the bottom.

    Args:
        series: Samples to draw
        width: Panel width
        height: Panel height
        style: LINE or SOLID
        colors: Chart colours (defaults to blue on red)

    Returns:
        Draw operations, background first
    """
    _check_size(width, height)
    colors = colors or ChartColors()
    style = ChartStyle.parse(style)

    ops: List[DrawOp] = [_background(width, height, colors)]
    dx = width / series.capacity
    scale = series.current_max

    x = float(width)
    for value in series.values_newest_first():
        x -= dx
        hh = _bar_height(value, scale, height)
        dh = dx if style == ChartStyle.LINE else hh
        ops.append(FillRect(x, height - hh, dx, dh, colors.foreground))
    return ops


def render_stacked_strip_chart(
    series: StackedSeries,
    width: float,
    height: float,
    style: Union[ChartStyle, int, str] = ChartStyle.LINE,
    colors: Optional[ChartColors] = None,
) -> List[DrawOp]:
    """
    Render a two-series stacked strip chart.

    The secondary series is painted first, stacked on top of the primary
    bar of the same column. The primary series is then painted over it
    from the bottom. Both use the shared scale of the series.

    Args:
        series: Two-channel samples to draw
        width: Panel width
        height: Panel height
        style: LINE or SOLID
        colors: Chart colours (defaults to blue, red and yellow)

    Returns:
        Draw operations, background first
    """
    _check_size(width, height)
    colors = colors or ChartColors()
    style = ChartStyle.parse(style)

    ops: List[DrawOp] = [_background(width, height, colors)]
    dx = width / series.capacity
    scale = series.current_max
    pairs = list(series.pairs_newest_first())

    # secondary series in the background
    x = float(width)
    for primary, secondary in pairs:
        x -= dx
        hh1 = _bar_height(primary, scale, height)
        hh2 = min(_bar_height(secondary, scale, height), height - hh1)
        dh = dx if style == ChartStyle.LINE else hh2
        ops.append(FillRect(x, height - (hh1 + hh2), dx, dh, colors.secondary))

    # primary series in the foreground
    x = float(width)
    for primary, _ in pairs:
        x -= dx
        hh = _bar_height(primary, scale, height)
        dh = dx if style == ChartStyle.LINE else hh
        ops.append(FillRect(x, height - hh, dx, dh, colors.foreground))
    return ops


def render_sparkline(
    series: RingBufferSeries,
    width: float,
    height: float,
    colors: Optional[ChartColors] = None,
) -> List[DrawOp]:
    """
    Render a sparkline: one connected line, no fill.

    A one pixel margin is kept above and below the line.

    Args:
        series: Samples to draw
        width: Panel width
        height: Panel height
        colors: Chart colours

    Returns:
        Background followed by a single path (omitted when empty)
    """
    _check_size(width, height)
    colors = colors or ChartColors()

    ops: List[DrawOp] = [_background(width, height, colors)]
    if len(series) == 0:
        return ops

    top = height - 1.0
    span = height - 2.0
    dx = width / series.capacity
    scale = series.current_max

    points: List[Point] = []
    x = float(width)
    for value in series.values_newest_first():
        points.append((x, top - span * value / scale))
        x -= dx

    ops.append(StrokePath(tuple(points), colors.foreground, SPARKLINE_WIDTH))
    return ops
