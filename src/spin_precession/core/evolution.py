"""Closed-form time evolution of a spin-1/2 in a static field.

The Hamiltonian is a two-level system with energy splitting
E = strength * HBAR / 2 and angular frequency omega = E / HBAR. Its
(unnormalized) eigenstates follow directly from the field angle:

    psi_1 = (cos theta + 1, sin theta)    phase e^(+i omega t)
    psi_2 = (cos theta - 1, sin theta)    phase e^(-i omega t)

Two evolution modes are supported (see EvolutionMode):

1. FIELD_EIGENBASIS: the fixed combination (psi_1 e^(i w t) - psi_2 e^(-i w t)) / 2,
   which starts at |up> for every theta.
2. FREE_INITIAL_STATE: an arbitrary psi_0 propagated by
   U(t) = cos(w t) I + i sin(w t) (n . sigma), the operator that gives the
   eigenstates above exactly those phases.

Neither mode normalizes its input or output.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from spin_precession.core.operators import IDENTITY, SX, SZ, as_state_array
from spin_precession.utils.constants import HBAR, TWO_PI
from spin_precession.utils.math_helpers import expi
from spin_precession.utils.types import EvolutionMode, SpinState


def energy_splitting(strength: float) -> float:
    """E = strength * HBAR / 2 (same magnitude for both eigenstates)."""
    return strength * HBAR / 2.0


def angular_frequency(strength: float) -> float:
    """omega = E / HBAR."""
    return energy_splitting(strength) / HBAR


def precession_period(strength: float) -> float:
    """Period 2 pi / |omega| of the state. Infinite for a zero field."""
    omega = abs(angular_frequency(strength))
    if omega == 0.0:
        return math.inf
    return TWO_PI / omega


def eigenstates(theta: float) -> tuple[NDArray[np.complex128], NDArray[np.complex128]]:
    """Unnormalized energy eigenstates (psi_1, psi_2) for field angle theta."""
    c, s = np.cos(theta), np.sin(theta)
    psi_1 = np.array([c + 1.0, s], dtype=np.complex128)
    psi_2 = np.array([c - 1.0, s], dtype=np.complex128)
    return psi_1, psi_2


def propagator(theta: float, strength: float, time: float) -> NDArray[np.complex128]:
    """Closed-form 2x2 evolution operator cos(w t) I + i sin(w t) (n . sigma)."""
    wt = angular_frequency(strength) * time
    n_dot_sigma = np.sin(theta) * SX + np.cos(theta) * SZ
    return np.cos(wt) * IDENTITY + 1j * np.sin(wt) * n_dot_sigma


def _eigenbasis_state(theta: float, strength: float, time: float) -> NDArray[np.complex128]:
    wt = angular_frequency(strength) * time
    psi_1, psi_2 = eigenstates(theta)
    return (psi_1 * expi(wt) - psi_2 * expi(-wt)) / 2.0


def _resolve_mode(
    mode: EvolutionMode | str, initial_state: SpinState | ArrayLike | None
) -> EvolutionMode:
    mode = EvolutionMode.parse(mode)
    if mode is EvolutionMode.FIELD_EIGENBASIS:
        if initial_state is not None:
            raise ValueError(
                "FIELD_EIGENBASIS evolution does not take an initial state; "
                "use FREE_INITIAL_STATE to propagate one"
            )
    elif initial_state is None:
        raise ValueError("FREE_INITIAL_STATE evolution requires an initial state")
    return mode


def evolved_state(
    theta: float,
    strength: float,
    time: float,
    mode: EvolutionMode | str = EvolutionMode.FIELD_EIGENBASIS,
    initial_state: SpinState | ArrayLike | None = None,
) -> SpinState:
    """Spin state at `time` for a field at angle theta with the given strength.

    Raises:
        ValueError: if FREE_INITIAL_STATE is requested without an initial
            state, or FIELD_EIGENBASIS is given one it would have to ignore.
    """
    mode = _resolve_mode(mode, initial_state)
    if mode is EvolutionMode.FIELD_EIGENBASIS:
        psi = _eigenbasis_state(theta, strength, time)
    else:
        psi = propagator(theta, strength, time) @ as_state_array(initial_state)
    return SpinState(complex(psi[0]), complex(psi[1]))


def evolved_amplitudes(
    theta: float,
    strength: float,
    times: ArrayLike,
    mode: EvolutionMode | str = EvolutionMode.FIELD_EIGENBASIS,
    initial_state: SpinState | ArrayLike | None = None,
) -> NDArray[np.complex128]:
    """Amplitudes (a, b) at every time in `times`, as an (n, 2) array.

    Row i equals evolved_state(theta, strength, times[i], ...) and the same
    mode rules apply.
    """
    mode = _resolve_mode(mode, initial_state)
    wt = angular_frequency(strength) * np.atleast_1d(np.asarray(times, dtype=np.float64))
    if mode is EvolutionMode.FIELD_EIGENBASIS:
        psi_1, psi_2 = eigenstates(theta)
        return (np.outer(expi(wt), psi_1) - np.outer(expi(-wt), psi_2)) / 2.0
    psi_0 = as_state_array(initial_state)
    n_dot_sigma = np.sin(theta) * SX + np.cos(theta) * SZ
    return np.outer(np.cos(wt), psi_0) + 1j * np.outer(np.sin(wt), n_dot_sigma @ psi_0)
