"""Pauli spin operators and the expectation-value calculator."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from spin_precession.utils.types import SpinState


def _constant(rows: list[list[complex]]) -> NDArray[np.complex128]:
    op = np.array(rows, dtype=np.complex128)
    op.setflags(write=False)
    return op


# Conventional basis: Sz diagonal with eigenvalues +1 / -1.
SX: NDArray[np.complex128] = _constant([[0, 1], [1, 0]])
SY: NDArray[np.complex128] = _constant([[0, -1j], [1j, 0]])
SZ: NDArray[np.complex128] = _constant([[1, 0], [0, -1]])
IDENTITY: NDArray[np.complex128] = _constant([[1, 0], [0, 1]])

PAULI_OPERATORS: tuple[NDArray[np.complex128], ...] = (SX, SY, SZ)


def as_state_array(state: SpinState | ArrayLike) -> NDArray[np.complex128]:
    """Coerce a SpinState or length-2 sequence into a (2,) complex array."""
    if isinstance(state, SpinState):
        return state.as_array()
    arr = np.asarray(state, dtype=np.complex128).ravel()
    if arr.shape != (2,):
        raise ValueError(f"Spin state needs exactly 2 amplitudes, got {arr.size}")
    return arr


def expectation(state: SpinState | ArrayLike, operator: NDArray[np.complex128]) -> float:
    """Re(psi^dagger . O . psi).

    No normalization is applied: an unnormalized state scales the result by
    its squared norm.
    """
    psi = as_state_array(state)
    return float(np.vdot(psi, operator @ psi).real)
