"""Analytical reference trajectory and cross-checks for the evolution kernel.

None of this is on the per-tick path; it exists to validate the
closed-form state evolution against an independently derived answer.
"""

from __future__ import annotations

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from spin_precession.core.bloch import bloch_trajectory
from spin_precession.core.evolution import angular_frequency, precession_period, propagator
from spin_precession.core.field import field_direction
from spin_precession.core.operators import SX, SZ
from spin_precession.utils.constants import DEFAULT_SAMPLES, DEFAULT_TOLERANCE, HBAR, TWO_PI
from spin_precession.utils.math_helpers import vector_magnitude


def _larmor_frequency(strength: float) -> float:
    """Rotation rate of the Bloch vector: the eigenvalue gap 2E over HBAR."""
    return 2.0 * (strength * HBAR / 2.0) / HBAR


def analytical_x(
    theta: float, strength: float, time: float | NDArray[np.float64]
) -> float | NDArray[np.float64]:
    """x-component of a spin starting at +z and precessing about the field.

    Rotating +z about n = (sin theta, 0, cos theta) by the Larmor angle
    phi = Omega t gives x = sin(theta) cos(theta) (1 - cos phi).
    """
    phi = _larmor_frequency(strength) * np.asarray(time, dtype=np.float64)
    x = np.sin(theta) * np.cos(theta) * (1.0 - np.cos(phi))
    if np.ndim(x) == 0:
        return float(x)
    return x


def analytical_bloch_vector(
    theta: float, strength: float, time: float | NDArray[np.float64]
) -> NDArray[np.float64]:
    """Full closed-form precession of +z about the field axis.

    Returns (3,) for scalar time, (n, 3) for an array of times.
    """
    t = np.asarray(time, dtype=np.float64)
    phi = _larmor_frequency(strength) * t
    s, c = np.sin(theta), np.cos(theta)
    x = s * c * (1.0 - np.cos(phi))
    y = s * np.sin(phi)
    z = c**2 + s**2 * np.cos(phi)
    return np.stack([x, y, z], axis=-1)


class Validator:
    """Compare the kernel's trajectory against the analytical reference.

    Samples `samples` times spanning two Bloch-vector revolutions (or a
    fixed window when the field is zero).
    """

    def __init__(
        self,
        theta: float,
        strength: float,
        samples: int = DEFAULT_SAMPLES,
    ) -> None:
        if samples < 1:
            raise ValueError(f"samples must be >= 1, got {samples}")
        self.theta = theta
        self.strength = strength
        larmor = abs(_larmor_frequency(strength))
        span = 2.0 * TWO_PI / larmor if larmor > 0 else 10.0
        self.times = np.linspace(0.0, span, samples)
        self._trajectory: NDArray[np.float64] | None = None

    @property
    def trajectory(self) -> NDArray[np.float64]:
        if self._trajectory is None:
            self._trajectory = bloch_trajectory(self.theta, self.strength, self.times)
        return self._trajectory

    def analytical_x_deviation(self) -> float:
        """Max |<Sx> - analytical_x| over the sampled times."""
        expected = analytical_x(self.theta, self.strength, self.times)
        return float(np.max(np.abs(self.trajectory[:, 0] - expected)))

    def analytical_deviation(self) -> float:
        """Max component-wise deviation from analytical_bloch_vector."""
        expected = analytical_bloch_vector(self.theta, self.strength, self.times)
        return float(np.max(np.abs(self.trajectory - expected)))

    def magnitude_drift(self) -> float:
        """Spread (max - min) of the Bloch vector length over time."""
        mags = vector_magnitude(self.trajectory)
        return float(np.max(mags) - np.min(mags))

    def periodicity_error(self) -> float:
        """Max |B(t) - B(t + T)| with T the state period 2 pi / omega.

        For a zero field the state must not move at all, so the error is
        measured against the t=0 sample instead.
        """
        period = precession_period(self.strength)
        if not np.isfinite(period):
            return float(np.max(np.abs(self.trajectory - self.trajectory[0])))
        shifted = bloch_trajectory(self.theta, self.strength, self.times + period)
        return float(np.max(np.abs(shifted - self.trajectory)))

    def propagator_deviation(self) -> float:
        """Closed-form propagator vs scipy's matrix exponential of the generator."""
        omega = angular_frequency(self.strength)
        n = field_direction(self.theta)
        n_dot_sigma = n[0] * SX + n[2] * SZ
        worst = 0.0
        for t in self.times:
            expected = scipy.linalg.expm(1j * omega * t * n_dot_sigma)
            actual = propagator(self.theta, self.strength, float(t))
            worst = max(worst, float(np.max(np.abs(actual - expected))))
        return worst

    def summary(self) -> dict:
        """Full validation summary."""
        return {
            "theta": self.theta,
            "strength": self.strength,
            "samples": len(self.times),
            "analytical_x_deviation": self.analytical_x_deviation(),
            "analytical_deviation": self.analytical_deviation(),
            "magnitude_drift": self.magnitude_drift(),
            "periodicity_error": self.periodicity_error(),
            "propagator_deviation": self.propagator_deviation(),
        }

    def passes(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        summary = self.summary()
        checks = [
            "analytical_x_deviation",
            "analytical_deviation",
            "magnitude_drift",
            "periodicity_error",
            "propagator_deviation",
        ]
        return all(summary[k] <= tolerance for k in checks)

