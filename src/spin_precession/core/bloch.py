"""Bloch (spin-expectation) vectors from evolved states."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from spin_precession.core.evolution import evolved_amplitudes, evolved_state
from spin_precession.core.operators import PAULI_OPERATORS, expectation
from spin_precession.utils.types import EvolutionMode, SpinState


def bloch_vector_of_state(state: SpinState | ArrayLike) -> NDArray[np.float64]:
    """(<Sx>, <Sy>, <Sz>) for a state, without normalizing it."""
    return np.array([expectation(state, op) for op in PAULI_OPERATORS], dtype=np.float64)


def bloch_vector(
    theta: float,
    strength: float,
    time: float,
    mode: EvolutionMode | str = EvolutionMode.FIELD_EIGENBASIS,
    initial_state: SpinState | ArrayLike | None = None,
) -> NDArray[np.float64]:
    """Expectation vector of the evolved state at `time`."""
    state = evolved_state(theta, strength, time, mode=mode, initial_state=initial_state)
    return bloch_vector_of_state(state)


def bloch_trajectory(
    theta: float,
    strength: float,
    times: ArrayLike,
    mode: EvolutionMode | str = EvolutionMode.FIELD_EIGENBASIS,
    initial_state: SpinState | ArrayLike | None = None,
) -> NDArray[np.float64]:
    """Bloch vectors for a sequence of times.

    Returns:
        (n, 3) array, row i is bloch_vector(theta, strength, times[i]).
    """
    psi = evolved_amplitudes(theta, strength, times, mode=mode, initial_state=initial_state)
    operators = np.stack(PAULI_OPERATORS)
    return np.einsum("ni,kij,nj->nk", psi.conj(), operators, psi).real
