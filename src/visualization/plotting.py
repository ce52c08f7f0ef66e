"""
Chart Painting
===============
Drawing surfaces that execute renderer output.

This module provides:
- The DrawingSurface protocol expected by ``paint``
- A matplotlib-backed surface working in screen coordinates
- A board that lays out several charts on one figure for snapshots
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, Iterable, Optional, Protocol, Sequence, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle
from loguru import logger

from chart_settings import BoardConfig

from .draw_ops import DrawOp, FillRect, Point, StrokePath
from .widgets import ChartWidget, StackedStripChart, build_chart


SURFACE_DPI = 100
BOARD_BACKGROUND = "#0f0f1a"


class DrawingSurface(Protocol):
    """2D surface supplied by the host toolkit."""

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        ...

    def stroke_path(self, points: Sequence[Point], color: str, line_width: float) -> None:
        ...


def paint(ops: Iterable[DrawOp], surface: DrawingSurface) -> int:
    """
    Execute draw operations in order.

    Args:
        ops: Renderer output
        surface: Target surface

    Returns:
        Number of operations painted
    """
    count = 0
    for op in ops:
        if isinstance(op, FillRect):
            surface.fill_rect(op.x, op.y, op.width, op.height, op.color)
        elif isinstance(op, StrokePath):
            surface.stroke_path(op.points, op.color, op.line_width)
        else:
            raise TypeError(f"Unsupported draw operation: {op!r}")
        count += 1
    return count


class MatplotlibSurface:
    """
    Drawing surface backed by a matplotlib Axes.

    The axes are set up in screen coordinates: x from 0 to width, y from 0
    at the top to height at the bottom.
    """

    def __init__(self, width: float, height: float, ax: Optional[Axes] = None):
        """
        Initialize surface.

        Args:
            width: Panel width in pixels
            height: Panel height in pixels
            ax: Existing axes to draw into; a new pixel-sized figure is
                created when omitted
        """
        self.width = width
        self.height = height

        if ax is None:
            self.figure: Figure = plt.figure(figsize=(width / SURFACE_DPI, height / SURFACE_DPI),
                                             dpi=SURFACE_DPI)
            ax = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        else:
            self.figure = ax.figure
        self.ax = ax

        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_aspect("auto")
        self.ax.axis("off")

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.ax.add_patch(Rectangle((x, y), width, height, facecolor=color,
                                    edgecolor="none", linewidth=0))

    def stroke_path(self, points: Sequence[Point], color: str, line_width: float) -> None:
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        self.ax.plot(xs, ys, color=color, linewidth=line_width,
                     solid_capstyle="round", solid_joinstyle="round")

    def save(self, filepath: Union[str, Path], dpi: int = SURFACE_DPI) -> None:
        """
        Save the surface to an image file.

        Args:
            filepath: Output file path
            dpi: Resolution
        """
        self.figure.savefig(filepath, dpi=dpi)
        logger.info(f"Chart saved to {filepath}")

    def close(self) -> None:
        plt.close(self.figure)


class ChartBoard:
    """
    Several named charts rendered together.

    Combines the charts of a BoardConfig into one figure for snapshots.
    """

    def __init__(self, config: Optional[BoardConfig] = None):
        """
        Initialize board.

        Args:
            config: Board configuration (defaults to the built-in board)
        """
        self.config = config or BoardConfig()
        self.charts: Dict[str, ChartWidget] = {
            chart.name: build_chart(chart) for chart in self.config.charts
        }
        logger.info(f"Chart board initialized with {len(self.charts)} charts")

    def __getitem__(self, name: str) -> ChartWidget:
        return self.charts[name]

    def append(self, name: str, *values: float) -> None:
        """
        Add a sample to one chart.

        Args:
            name: Chart name
            *values: One value, or two for a stacked chart

        Raises:
            KeyError: If no chart has that name
            ValueError: If the number of values does not fit the chart
        """
        chart = self.charts[name]
        limit = 2 if isinstance(chart, StackedStripChart) else 1
        if not 1 <= len(values) <= limit:
            raise ValueError(f"Chart '{name}' takes at most {limit} value(s), got {len(values)}")
        chart.append(*values)

    def update(self, samples: Dict[str, Union[float, Tuple[float, float]]]) -> None:
        """
        Add one sample per chart.

        Args:
            samples: Chart name to value (or value pair for stacked charts)
        """
        for name, value in samples.items():
            if isinstance(value, tuple):
                self.append(name, *value)
            else:
                self.append(name, value)

    def create_figure(self) -> Figure:
        """
        Create a figure with every chart laid out on a grid.

        Returns:
            Matplotlib Figure object
        """
        columns = min(self.config.columns, max(len(self.charts), 1))
        rows = max(math.ceil(len(self.charts) / columns), 1)

        # Size the grid cells from the largest chart
        cell_w = max((c.width for c in self.charts.values()), default=80) / SURFACE_DPI
        cell_h = max((c.height for c in self.charts.values()), default=80) / SURFACE_DPI
        fig = plt.figure(figsize=(columns * cell_w * 2, rows * cell_h * 2 + 0.5),
                         facecolor=BOARD_BACKGROUND)
        fig.suptitle(self.config.title, color="white", fontweight="bold")
        gs = fig.add_gridspec(rows, columns, hspace=0.4, wspace=0.3)

        for i, (name, chart) in enumerate(self.charts.items()):
            ax = fig.add_subplot(gs[i // columns, i % columns])
            surface = MatplotlibSurface(chart.width, chart.height, ax=ax)
            paint(chart.render(), surface)
            ax.set_title(name, color="white", fontsize=10)

        return fig

    def save_snapshot(self, filepath: Union[str, Path], dpi: Optional[int] = None) -> None:
        """
        Save board snapshot to file.

        Args:
            filepath: Output path
            dpi: Resolution (defaults to the configured dpi)
        """
        fig = self.create_figure()
        fig.savefig(filepath, dpi=dpi or self.config.dpi, facecolor=fig.get_facecolor())
        plt.close(fig)
        logger.info(f"Board snapshot saved to {filepath}")
