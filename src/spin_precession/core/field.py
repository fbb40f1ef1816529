"""Field model: static magnetic field in the x-z plane."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def field_direction(theta: float) -> NDArray[np.float64]:
    """Unit vector at polar angle theta from +z, in the x-z plane."""
    return np.array([np.sin(theta), 0.0, np.cos(theta)], dtype=np.float64)


def field(theta: float, strength: float) -> NDArray[np.float64]:
    """Field vector (sin theta, 0, cos theta) * strength.

    Negative strength reverses the field. NaN inputs give NaN components.
    """
    return field_direction(theta) * strength
