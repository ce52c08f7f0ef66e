"""
Ring Buffer Series
===================
Fixed-capacity circular buffers backing the strip chart widgets.

Each buffer keeps the most recent ``capacity`` samples and tracks the
vertical scale used to draw them. With autoscaling on, the scale follows the
data: it grows as soon as a sample comes within 10% of the top, and it is
recomputed from the whole buffer when the sample holding the maximum is
overwritten.

Buffer layout:

    slots:  [ d  e  f  a  b  c ]
                   ^ write_index=2 (newest sample)
    display order (newest first): f e d c b a
"""

from __future__ import annotations

import math
import numbers
from typing import Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from loguru import logger


# Scale headroom applied when a new maximum is seen
GROWTH_TRIGGER = 1.1
HEADROOM = 1.10001

# Added after a rescan so the scale never collapses to zero
SCALE_EPSILON = 0.00001

INITIAL_MAX = 1.0


def _check_sample(value: float) -> float:
    """Coerce a sample to float, rejecting anything non-finite."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"Sample must be a real number, got {value!r}")
    sample = float(value)
    if not math.isfinite(sample):
        raise ValueError(f"Sample must be finite, got {value!r}")
    return sample


def _check_capacity(capacity: int) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, numbers.Integral):
        raise ValueError(f"capacity must be an integer, got {capacity!r}")
    if capacity < 1:
        raise ValueError(f"capacity must be at least 1, got {capacity}")
    return int(capacity)


class RingBufferSeries:
    """
    Circular buffer of doubles with an autoscaling maximum.

    The buffer is preallocated and never resized. Slots that have not been
    written yet hold ``0.0``.
    """

    def __init__(self, capacity: int):
        """
        Initialize an empty series.

        Args:
            capacity: Number of samples retained (usually the chart width)
        """
        self._capacity = _check_capacity(capacity)
        self._values: NDArray[np.float64] = np.zeros(self._capacity, dtype=np.float64)

        # Cursor state
        self._write_index = -1
        self._wrapped = False

        # Scale state (vertical range is always measured from zero)
        self._current_max = INITIAL_MAX
        self._max_index = 0
        self._autoscale = True

        logger.debug(f"{type(self).__name__} created with capacity {self._capacity}")

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def write_index(self) -> int:
        """Slot holding the newest sample, or -1 before the first append."""
        return self._write_index

    @property
    def wrapped(self) -> bool:
        """True once the cursor has passed the last slot at least once."""
        return self._wrapped

    @property
    def current_max(self) -> float:
        """Value drawn at the top of the chart."""
        return self._current_max

    @property
    def max_index(self) -> int:
        return self._max_index

    @property
    def autoscale(self) -> bool:
        return self._autoscale

    @property
    def latest(self) -> Optional[float]:
        """Most recent sample, or None if nothing was appended."""
        if self._write_index < 0:
            return None
        return self.value_at(self._write_index)

    def __len__(self) -> int:
        if self._wrapped:
            return self._capacity
        return self._write_index + 1

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def append(self, value: float) -> None:
        """
        Add a sample, overwriting the oldest one once the buffer is full.

        Args:
            value: Sample value (any finite real number)

        Raises:
            ValueError: If the value is NaN, infinite or not a number
        """
        sample = _check_sample(value)
        index = self._advance()
        self._values[index] = sample
        self._update_scale(index, sample)

    def set_max(self, value: float) -> None:
        """
        Pin the vertical scale and disable autoscaling.

        Args:
            value: Value shown at the top of the chart

        Raises:
            ValueError: If the value is not a positive finite number
        """
        fixed = _check_sample(value)
        if fixed <= 0:
            raise ValueError(f"Fixed maximum must be positive, got {value!r}")
        self._current_max = fixed
        self._autoscale = False
        logger.debug(f"Scale pinned at {fixed}")

    def _advance(self) -> int:
        """Move the write cursor to the next slot and return it."""
        self._write_index += 1
        if self._write_index == self._capacity:
            # wrap back to the beginning
            self._write_index = 0
            self._wrapped = True
        return self._write_index

    def _update_scale(self, index: int, height: float) -> None:
        if not self._autoscale:
            return
        if height * GROWTH_TRIGGER > self._current_max:
            self._current_max = height * HEADROOM
            self._max_index = index
        elif self._max_index == index:
            # the old maximum was just overwritten
            self._rescan()

    def _rescan(self) -> None:
        """Recompute the scale from every slot in the buffer."""
        heights = self._slot_heights()
        self._max_index = int(np.argmax(heights))
        peak = max(float(heights[self._max_index]), 0.0)
        self._current_max = peak * HEADROOM + SCALE_EPSILON
        logger.debug(f"Rescanned scale: max {self._current_max:.5g} at slot {self._max_index}")

    def _slot_heights(self) -> NDArray[np.float64]:
        """Per-slot value used for scaling."""
        return self._values

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def value_at(self, index: int) -> float:
        """Get the sample stored in a slot."""
        return float(self._values[index])

    def display_order(self) -> List[int]:
        """
        Slot indices in drawing order.

        Starts at the newest sample and walks backward to slot 0, then
        continues from the last slot down to the cursor, but only once the
        buffer has wrapped.

        Returns:
            List of slot indices, newest first
        """
        order = list(range(self._write_index, -1, -1))
        if self._wrapped:
            order.extend(range(self._capacity - 1, self._write_index, -1))
        return order

    def values_newest_first(self) -> Iterator[float]:
        for index in self.display_order():
            yield self.value_at(index)

    def snapshot(self) -> NDArray[np.float64]:
        """Copy of the held samples, oldest to newest."""
        return self._values[self.display_order()[::-1]].copy()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self._capacity}, samples={len(self)}, "
            f"current_max={self._current_max:.5g}, autoscale={self._autoscale})"
        )


class StackedSeries(RingBufferSeries):
    """
    Two-channel series sharing one cursor and one scale.

    The scale tracks the stacked height of each slot (primary plus
    secondary, negatives counted as zero), so a full column always fits.
    """

    def __init__(self, capacity: int):
        super().__init__(capacity)
        self._values = np.zeros((self._capacity, 2), dtype=np.float64)

    def append(self, primary: float, secondary: float = 0.0) -> None:
        """
        Add one sample to each channel.

        Args:
            primary: Sample for the first (foreground) channel
            secondary: Sample for the second (stacked) channel

        Raises:
            ValueError: If either value is NaN, infinite or not a number
        """
        first = _check_sample(primary)
        second = _check_sample(secondary)
        index = self._advance()
        self._values[index] = (first, second)
        self._update_scale(index, max(first, 0.0) + max(second, 0.0))

    def _slot_heights(self) -> NDArray[np.float64]:
        return np.clip(self._values, 0.0, None).sum(axis=1)

    def value_at(self, index: int) -> float:
        """Stacked height of a slot."""
        first, second = self._values[index]
        return max(float(first), 0.0) + max(float(second), 0.0)

    def primary_at(self, index: int) -> float:
        return float(self._values[index, 0])

    def secondary_at(self, index: int) -> float:
        return float(self._values[index, 1])

    def pairs_newest_first(self) -> Iterator[Tuple[float, float]]:
        for index in self.display_order():
            yield self.primary_at(index), self.secondary_at(index)

    def snapshot(self) -> NDArray[np.float64]:
        """Copy of the held (primary, secondary) rows, oldest to newest."""
        return self._values[self.display_order()[::-1]].copy()
