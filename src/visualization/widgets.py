"""
Chart Widgets
==============
Toolkit-independent chart panels.

A widget owns its series, preferred size, colours and style. It never draws
by itself: every mutation notifies subscribers that a repaint is due, and
the host toolkit calls ``render()`` from its own redraw cycle, then paints
the returned operations on its surface.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple, Union

from loguru import logger

from chart_series import RingBufferSeries, StackedSeries
from chart_settings import ChartColors, ChartConfig, ChartKind, ChartStyle

from .draw_ops import DrawOp
from .renderers import render_sparkline, render_stacked_strip_chart, render_strip_chart


DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 80

RepaintCallback = Callable[["ChartWidget"], None]


class ChartWidget:
    """
    Base class for chart panels.

    The sample capacity equals the preferred width, one sample per column.
    """

    series: RingBufferSeries

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        colors: Optional[ChartColors] = None,
    ):
        """
        Initialize widget.

        Args:
            width: Preferred width in pixels, also the number of samples kept
            height: Preferred height in pixels
            colors: Chart colours
        """
        if height < 1:
            raise ValueError(f"height must be at least 1, got {height}")
        self.series = self._create_series(width)
        self.width = int(width)
        self.height = int(height)
        self.colors = colors or ChartColors()
        self._subscribers: List[RepaintCallback] = []

    def _create_series(self, capacity: int) -> RingBufferSeries:
        return RingBufferSeries(capacity)

    @property
    def preferred_size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def minimum_size(self) -> Tuple[int, int]:
        return self.width, self.height

    def subscribe(self, callback: RepaintCallback) -> None:
        """
        Register a repaint listener.

        Args:
            callback: Called with the widget after every change
        """
        self._subscribers.append(callback)

    def unsubscribe(self, callback: RepaintCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _request_repaint(self) -> None:
        for callback in self._subscribers:
            callback(self)

    def set_max(self, value: float) -> None:
        """
        Set the maximum scale. Also forces the vertical scale to be fixed
        rather than dynamically adjusting to the data.
        """
        self.series.set_max(value)
        self._request_repaint()

    def render(self, width: Optional[float] = None, height: Optional[float] = None) -> List[DrawOp]:
        """
        Produce draw operations for the current data.

        Args:
            width: Actual panel width (defaults to preferred width)
            height: Actual panel height (defaults to preferred height)
        """
        return self._render(
            self.width if width is None else width,
            self.height if height is None else height,
        )

    def _render(self, width: float, height: float) -> List[DrawOp]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.width}x{self.height}, {self.series!r})"


class StripChart(ChartWidget):
    """A panel that shows a single-series strip chart."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        colors: Optional[ChartColors] = None,
    ):
        super().__init__(width, height, colors)
        self.style = ChartStyle.LINE

    def set_style(self, style: Union[ChartStyle, int, str]) -> None:
        """Set the drawing style (LINE or SOLID)."""
        self.style = ChartStyle.parse(style)
        self._request_repaint()

    def append(self, value: float) -> None:
        """Add a data point to the strip chart."""
        self.series.append(value)
        self._request_repaint()

    def _render(self, width: float, height: float) -> List[DrawOp]:
        return render_strip_chart(self.series, width, height, self.style, self.colors)


class StackedStripChart(StripChart):
    """A panel that shows a strip chart graphing two stacked values."""

    series: StackedSeries

    def _create_series(self, capacity: int) -> StackedSeries:
        return StackedSeries(capacity)

    def append(self, primary: float, secondary: float = 0.0) -> None:  # type: ignore[override]
        """Add one data point for each series."""
        self.series.append(primary, secondary)
        self._request_repaint()

    def _render(self, width: float, height: float) -> List[DrawOp]:
        return render_stacked_strip_chart(self.series, width, height, self.style, self.colors)


class SparkChart(ChartWidget):
    """A panel that shows a sparkline chart."""

    def append(self, value: float) -> None:
        """Add a data point. Resets the scale if necessary."""
        self.series.append(value)
        self._request_repaint()

    def _render(self, width: float, height: float) -> List[DrawOp]:
        return render_sparkline(self.series, width, height, self.colors)


def build_chart(config: ChartConfig) -> ChartWidget:
    """
    Create a widget from its configuration.

    Args:
        config: Chart configuration

    Returns:
        Configured widget
    """
    if config.kind == ChartKind.SPARKLINE:
        chart: ChartWidget = SparkChart(config.width, config.height, config.colors)
    elif config.kind == ChartKind.STACKED:
        chart = StackedStripChart(config.width, config.height, config.colors)
    else:
        chart = StripChart(config.width, config.height, config.colors)

    if isinstance(chart, StripChart):
        chart.style = config.style
    if config.fixed_max is not None:
        chart.set_max(config.fixed_max)

    logger.debug(f"Built {config.kind.value} chart '{config.name}' ({config.width}x{config.height})")
    return chart
