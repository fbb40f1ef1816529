"""Trajectory statistics from precession engine history."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from spin_precession.core.field import field, field_direction
from spin_precession.utils.math_helpers import angles_to_axis


class MetricExtractor:
    """Extract summary metrics from a PrecessionEngine history.

    Each history entry is the per-tick dict recorded by the engine
    (tick, time, theta, strength, x, y, z, magnitude, a, b).
    """

    def __init__(self, history: list[dict]) -> None:
        self.history = history

    def _points(self) -> NDArray[np.float64]:
        return np.array([[h["x"], h["y"], h["z"]] for h in self.history], dtype=np.float64)

    def trajectory_stats(self) -> dict:
        """Bloch vector length and component statistics."""
        if not self.history:
            return {
                "count": 0,
                "magnitude_mean": 0.0,
                "magnitude_drift": 0.0,
                "duration": 0.0,
            }

        points = self._points()
        mags = np.array([h["magnitude"] for h in self.history])
        times = np.array([h["time"] for h in self.history])

        return {
            "count": len(self.history),
            "magnitude_mean": float(np.mean(mags)),
            "magnitude_drift": float(np.max(mags) - np.min(mags)),
            "duration": float(times[-1] - times[0]),
            "x_mean": float(np.mean(points[:, 0])),
            "y_mean": float(np.mean(points[:, 1])),
            "z_mean": float(np.mean(points[:, 2])),
            "z_min": float(np.min(points[:, 2])),
            "z_max": float(np.max(points[:, 2])),
        }

    def precession_stats(self) -> dict:
        """Cone half-angle between the spin and the field vector.

        The angle is taken against the signed field, so a reversed field
        (negative strength) gives pi minus the angle to the forward axis.
        A zero field falls back to the forward direction. A steady field
        gives a constant angle (zero spread). Each sample is measured
        against the field in force at its own tick, so mid-run field
        changes show up as spread.
        """
        if not self.history:
            return {
                "cone_angle_mean": None,
                "cone_angle_spread": None,
            }

        points = self._points()
        angles = np.array([
            angles_to_axis(points[i], _field_axis(h["theta"], h["strength"]))[0]
            for i, h in enumerate(self.history)
        ])
        return {
            "cone_angle_mean": float(np.mean(angles)),
            "cone_angle_spread": float(np.max(angles) - np.min(angles)),
        }

    def full_report(self) -> dict:
        """Aggregate all metrics into a single report."""
        return {
            "trajectory_stats": self.trajectory_stats(),
            "precession_stats": self.precession_stats(),
        }


def _field_axis(theta: float, strength: float) -> NDArray[np.float64]:
    if strength == 0:
        return field_direction(theta)
    return field(theta, strength)
