"""
Test Suite for Chart Renderers
===============================
Geometry of the draw operations produced for each chart type.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from chart_series import RingBufferSeries, StackedSeries
from chart_settings import ChartColors, ChartStyle
from visualization import (
    FillRect,
    StrokePath,
    render_sparkline,
    render_stacked_strip_chart,
    render_strip_chart,
)


COLORS = ChartColors(background="#000000", foreground="#ff0000", secondary="#00ff00")


def make_series(capacity, values, fixed_max=10.0):
    series = RingBufferSeries(capacity)
    series.set_max(fixed_max)
    for v in values:
        series.append(v)
    return series


class TestStripChart:
    """Tests for the single-series strip chart."""

    def test_background_first(self):
        ops = render_strip_chart(make_series(4, []), 8, 20, colors=COLORS)

        assert ops == [FillRect(0.0, 0.0, 8.0, 20.0, "#000000")]

    def test_line_style_marks(self):
        """LINE draws a one-column square at the sample height."""
        series = make_series(4, [5.0, 10.0])
        ops = render_strip_chart(series, 8, 20, ChartStyle.LINE, COLORS)

        assert ops[1:] == [
            FillRect(6.0, 0.0, 2.0, 2.0, "#ff0000"),
            FillRect(4.0, 10.0, 2.0, 2.0, "#ff0000"),
        ]

    def test_solid_style_bars(self):
        """SOLID draws bars down to the bottom edge."""
        series = make_series(4, [5.0, 10.0])
        ops = render_strip_chart(series, 8, 20, ChartStyle.SOLID, COLORS)

        assert ops[1:] == [
            FillRect(6.0, 0.0, 2.0, 20.0, "#ff0000"),
            FillRect(4.0, 10.0, 2.0, 10.0, "#ff0000"),
        ]
        for op in ops[1:]:
            assert op.bottom == pytest.approx(20.0)

    def test_style_by_name_and_value(self):
        series = make_series(4, [5.0])
        by_name = render_strip_chart(series, 8, 20, "solid", COLORS)
        by_value = render_strip_chart(series, 8, 20, 1, COLORS)

        assert by_name == by_value == render_strip_chart(series, 8, 20, ChartStyle.SOLID, COLORS)

    def test_newest_sample_at_right_edge_after_wrap(self):
        series = make_series(2, [1.0, 2.0, 3.0])
        ops = render_strip_chart(series, 4, 10, ChartStyle.SOLID, COLORS)

        assert ops[1] == FillRect(2.0, 7.0, 2.0, 3.0, "#ff0000")
        assert ops[2] == FillRect(0.0, 8.0, 2.0, 2.0, "#ff0000")

    def test_one_column_per_sample(self):
        series = make_series(5, [1.0] * 12)
        ops = render_strip_chart(series, 100, 50, colors=COLORS)

        assert len(ops) == 1 + 5
        xs = [op.x for op in ops[1:]]
        assert xs == pytest.approx([80.0, 60.0, 40.0, 20.0, 0.0])

    def test_bars_clamped_to_panel(self):
        series = make_series(2, [25.0, -5.0])
        ops = render_strip_chart(series, 4, 10, ChartStyle.SOLID, COLORS)

        newest, oldest = ops[1], ops[2]
        assert newest == FillRect(2.0, 10.0, 2.0, 0.0, "#ff0000")
        assert oldest == FillRect(0.0, 0.0, 2.0, 10.0, "#ff0000")

    def test_default_colors(self):
        ops = render_strip_chart(make_series(2, [1.0]), 4, 4)
        assert ops[0].color == "#0000ff"
        assert ops[1].color == "#ff0000"

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 5)])
    def test_rejects_empty_panel(self, width, height):
        with pytest.raises(ValueError):
            render_strip_chart(make_series(2, [1.0]), width, height)

    def test_rejects_unknown_style(self):
        with pytest.raises(ValueError):
            render_strip_chart(make_series(2, [1.0]), 4, 4, "dotted")


class TestStackedStripChart:
    """Tests for the two-series stacked strip chart."""

    def setup_method(self):
        """Setup test fixtures."""
        self.series = StackedSeries(2)
        self.series.set_max(10.0)

    def test_solid_stack(self):
        self.series.append(2.0, 3.0)
        ops = render_stacked_strip_chart(self.series, 4, 10, ChartStyle.SOLID, COLORS)

        secondary, primary = ops[1], ops[2]
        assert secondary == FillRect(2.0, 5.0, 2.0, 3.0, "#00ff00")
        assert primary == FillRect(2.0, 8.0, 2.0, 2.0, "#ff0000")
        # secondary sits directly on top of the primary bar
        assert secondary.bottom == pytest.approx(primary.y)

    def test_line_stack(self):
        self.series.append(2.0, 3.0)
        ops = render_stacked_strip_chart(self.series, 4, 10, ChartStyle.LINE, COLORS)

        assert ops[1] == FillRect(2.0, 5.0, 2.0, 2.0, "#00ff00")
        assert ops[2] == FillRect(2.0, 8.0, 2.0, 2.0, "#ff0000")

    def test_secondary_pass_painted_first(self):
        for pair in [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]:
            self.series.append(*pair)
        ops = render_stacked_strip_chart(self.series, 4, 10, ChartStyle.SOLID, COLORS)

        colors = [op.color for op in ops[1:]]
        assert colors == ["#00ff00", "#00ff00", "#ff0000", "#ff0000"]
        # newest first in each pass
        assert ops[1].x == ops[3].x == 2.0
        assert ops[2].x == ops[4].x == 0.0

    def test_overflowing_stack_clipped_at_top(self):
        self.series.append(8.0, 5.0)
        ops = render_stacked_strip_chart(self.series, 4, 10, ChartStyle.SOLID, COLORS)

        assert ops[1] == FillRect(2.0, 0.0, 2.0, 2.0, "#00ff00")

    def test_autoscaled_stack_fits(self):
        series = StackedSeries(4)
        for pair in [(5.0, 5.0), (1.0, 8.0), (3.0, 2.0)]:
            series.append(*pair)
        ops = render_stacked_strip_chart(series, 8, 100, ChartStyle.SOLID, COLORS)

        for op in ops[1:]:
            assert op.y >= 0.0


class TestSparkline:
    """Tests for the sparkline path."""

    def test_empty_draws_background_only(self):
        ops = render_sparkline(make_series(4, []), 8, 12, COLORS)
        assert len(ops) == 1

    def test_single_path(self):
        series = make_series(4, [0.0, 10.0])
        ops = render_sparkline(series, 8, 12, COLORS)

        assert len(ops) == 2
        path = ops[1]
        assert isinstance(path, StrokePath)
        assert path.points == ((8.0, 1.0), (6.0, 11.0))
        assert path.color == "#ff0000"
        assert path.line_width == 1.0

    def test_starts_at_right_edge(self):
        series = make_series(3, [1.0, 2.0, 3.0, 4.0, 5.0])
        path = render_sparkline(series, 30, 12, COLORS)[1]

        assert len(path) == 3
        assert [p[0] for p in path.points] == pytest.approx([30.0, 20.0, 10.0])
        ys = [p[1] for p in path.points]
        # newest value is the largest, so it is highest on screen
        assert ys == sorted(ys)

    def test_single_sample_is_a_point(self):
        path = render_sparkline(make_series(4, [5.0]), 8, 12, COLORS)[1]
        assert path.points == ((8.0, 6.0),)
