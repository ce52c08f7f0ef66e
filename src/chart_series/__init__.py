"""
Chart Series Package
=====================
Circular sample buffers with autoscaling vertical range.
"""

from .ring_buffer import (
    GROWTH_TRIGGER,
    HEADROOM,
    SCALE_EPSILON,
    INITIAL_MAX,
    RingBufferSeries,
    StackedSeries,
)

__all__ = [
    "GROWTH_TRIGGER",
    "HEADROOM",
    "SCALE_EPSILON",
    "INITIAL_MAX",
    "RingBufferSeries",
    "StackedSeries",
]
