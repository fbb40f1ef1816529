"""Bounded trace of past Bloch vector samples."""

from __future__ import annotations

from collections import deque

import numpy as np
from numpy.typing import NDArray

from spin_precession.utils.constants import DEFAULT_TRACE_LENGTH


class TracePath:
    """Time-ordered buffer of the last `max_length` Bloch samples.

    Appending past capacity drops the oldest sample.
    """

    def __init__(self, max_length: int = DEFAULT_TRACE_LENGTH) -> None:
        if max_length < 1:
            raise ValueError(f"max_length must be >= 1, got {max_length}")
        self.max_length = max_length
        self._times: deque[float] = deque(maxlen=max_length)
        self._points: deque[NDArray[np.float64]] = deque(maxlen=max_length)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def is_full(self) -> bool:
        return len(self._points) == self.max_length

    @property
    def latest(self) -> NDArray[np.float64] | None:
        if not self._points:
            return None
        return self._points[-1].copy()

    def append(self, time: float, point: NDArray[np.float64]) -> None:
        self._times.append(float(time))
        self._points.append(np.asarray(point, dtype=np.float64).copy())

    def clear(self) -> None:
        self._times.clear()
        self._points.clear()

    def times(self) -> NDArray[np.float64]:
        return np.array(self._times, dtype=np.float64)

    def as_array(self) -> NDArray[np.float64]:
        """Samples as an (n, 3) array, oldest first."""
        if not self._points:
            return np.zeros((0, 3), dtype=np.float64)
        return np.stack(list(self._points))
