"""Spin-1/2 precession in a static magnetic field."""

from spin_precession.analysis.validation import analytical_bloch_vector, analytical_x
from spin_precession.core.bloch import bloch_trajectory, bloch_vector, bloch_vector_of_state
from spin_precession.core.evolution import (
    angular_frequency,
    energy_splitting,
    evolved_amplitudes,
    evolved_state,
    precession_period,
    propagator,
)
from spin_precession.core.field import field, field_direction
from spin_precession.core.operators import PAULI_OPERATORS, SX, SY, SZ, expectation
from spin_precession.utils.types import (
    SZ_NEGATIVE_STATE,
    SZ_POSITIVE_STATE,
    EvolutionMode,
    PrecessionConfig,
    SpinState,
)

__version__ = "0.1.0"

__all__ = [
    "PAULI_OPERATORS",
    "SX",
    "SY",
    "SZ",
    "SZ_NEGATIVE_STATE",
    "SZ_POSITIVE_STATE",
    "EvolutionMode",
    "PrecessionConfig",
    "SpinState",
    "analytical_bloch_vector",
    "analytical_x",
    "angular_frequency",
    "bloch_trajectory",
    "bloch_vector",
    "bloch_vector_of_state",
    "energy_splitting",
    "evolved_amplitudes",
    "evolved_state",
    "expectation",
    "field",
    "field_direction",
    "precession_period",
    "propagator",
]
