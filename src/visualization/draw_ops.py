"""
Backend-neutral drawing instructions produced by the chart renderers.

Coordinates are screen coordinates: origin at the top-left corner, y grows
downward.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


Point = Tuple[float, float]


@dataclass(frozen=True)
class FillRect:
    """Filled axis-aligned rectangle."""
    x: float
    y: float
    width: float
    height: float
    color: str

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class StrokePath:
    """Open polyline drawn with round caps and joins."""
    points: Tuple[Point, ...]
    color: str
    line_width: float = 1.0

    def __len__(self) -> int:
        return len(self.points)


DrawOp = Union[FillRect, StrokePath]
