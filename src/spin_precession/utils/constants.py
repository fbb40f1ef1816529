"""Physical and numerical constants for the spin precession model."""

import numpy as np

# -- Physics --
# Model value, not the physical constant. It cancels out of omega = E / HBAR
# but sets the energy scale E = strength * HBAR / 2.
HBAR: float = 2.0
SPIN_MAGNITUDE: float = 1.0  # Pauli units: eigenvalues of Sz are +1 / -1

# -- Animation --
DEFAULT_DT: float = 0.01
DEFAULT_TRACE_LENGTH: int = 500

# -- Validation --
DEFAULT_TOLERANCE: float = 1e-4
DEFAULT_SAMPLES: int = 256

# -- Derived --
TWO_PI: float = 2.0 * np.pi
