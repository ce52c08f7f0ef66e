"""
Visualization Package
======================
Rendering and painting of rolling strip charts and sparklines.
"""

from .draw_ops import DrawOp, FillRect, StrokePath
from .renderers import (
    render_strip_chart,
    render_stacked_strip_chart,
    render_sparkline,
)
from .widgets import (
    DEFAULT_WIDTH,
    DEFAULT_HEIGHT,
    ChartWidget,
    StripChart,
    StackedStripChart,
    SparkChart,
    build_chart,
)
from .plotting import (
    DrawingSurface,
    MatplotlibSurface,
    ChartBoard,
    paint,
)

__all__ = [
    "DrawOp",
    "FillRect",
    "StrokePath",
    "render_strip_chart",
    "render_stacked_strip_chart",
    "render_sparkline",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "ChartWidget",
    "StripChart",
    "StackedStripChart",
    "SparkChart",
    "build_chart",
    "DrawingSurface",
    "MatplotlibSurface",
    "ChartBoard",
    "paint",
]
