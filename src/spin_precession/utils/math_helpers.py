"""Complex and vector utilities for the spin precession model."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def expi(phase: float | NDArray[np.float64]) -> complex | NDArray[np.complex128]:
    """e^(i * phase), computed as cos + i sin.

    Scalars in, scalar complex out; arrays in, complex128 array out.
    """
    phase = np.asarray(phase, dtype=np.float64)
    result = np.cos(phase) + 1j * np.sin(phase)
    if result.ndim == 0:
        return complex(result)
    return result


def vector_magnitude(v: NDArray[np.float64]) -> float | NDArray[np.float64]:
    """Euclidean length of a (3,) vector, or of each row of an (n, 3) array."""
    v = np.asarray(v, dtype=np.float64)
    if v.ndim == 1:
        return float(np.linalg.norm(v))
    return np.linalg.norm(v, axis=-1)


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize a vector to unit length. Handles zero vectors gracefully."""
    v = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm == 0.0:
        return v
    return v / norm


def angles_to_axis(
    vectors: NDArray[np.float64], axis: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Angle between each row of an (n, 3) array and a fixed axis.

    Rows of zero length map to 0.
    """
    vectors = np.atleast_2d(np.asarray(vectors, dtype=np.float64))
    unit_axis = normalize(axis)
    norms = np.linalg.norm(vectors, axis=1)
    safe = np.where(norms > 0, norms, 1.0)
    dots = (vectors @ unit_axis) / safe
    np.clip(dots, -1.0, 1.0, out=dots)
    return np.where(norms > 0, np.arccos(dots), 0.0)
