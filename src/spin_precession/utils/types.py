"""Dataclass definitions for the spin precession model."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from spin_precession.utils.constants import DEFAULT_DT, DEFAULT_TRACE_LENGTH


@dataclass(frozen=True)
class SpinState:
    """Two-component spin-1/2 state (amplitudes of |up> and |down> along z).

    The state is not required to be normalized. Expectation values are only
    physically meaningful when |a|^2 + |b|^2 == 1.
    """

    a: complex
    b: complex

    @classmethod
    def from_array(cls, values: ArrayLike) -> SpinState:
        arr = np.asarray(values, dtype=np.complex128).ravel()
        if arr.shape != (2,):
            raise ValueError(f"Spin state needs exactly 2 amplitudes, got {arr.size}")
        return cls(complex(arr[0]), complex(arr[1]))

    def as_array(self) -> NDArray[np.complex128]:
        return np.array([self.a, self.b], dtype=np.complex128)

    @property
    def norm_squared(self) -> float:
        """|a|^2 + |b|^2."""
        return abs(self.a) ** 2 + abs(self.b) ** 2

    @property
    def is_normalized(self) -> bool:
        return bool(np.isclose(self.norm_squared, 1.0))

    def normalized(self) -> SpinState:
        """Return a unit-norm copy. Never called by the kernel itself."""
        norm = np.sqrt(self.norm_squared)
        if norm == 0.0:
            raise ValueError("Cannot normalize the zero state")
        return SpinState(self.a / norm, self.b / norm)


SZ_POSITIVE_STATE = SpinState(1 + 0j, 0j)
SZ_NEGATIVE_STATE = SpinState(0j, 1 + 0j)


class EvolutionMode(enum.Enum):
    """Which initial state the evolution engine propagates.

    FIELD_EIGENBASIS: fixed combination of the theta-derived eigenstates,
        which always starts at |up>. No initial state is accepted.
    FREE_INITIAL_STATE: an explicit, caller-supplied initial state.
    """

    FIELD_EIGENBASIS = "eigenbasis"
    FREE_INITIAL_STATE = "free"

    @classmethod
    def parse(cls, value: EvolutionMode | str) -> EvolutionMode:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown evolution mode {value!r} (expected one of: {choices})") from None


@dataclass
class PrecessionConfig:
    """Configuration for an animated precession run.

    ``initial_state`` belongs to FREE_INITIAL_STATE mode only; free mode
    without one starts at |up>.
    """

    theta: float = 0.0
    strength: float = 1.0
    mode: EvolutionMode = EvolutionMode.FIELD_EIGENBASIS
    initial_state: SpinState | None = None
    dt: float = DEFAULT_DT
    trace_length: int = DEFAULT_TRACE_LENGTH

    def __post_init__(self) -> None:
        self.mode = EvolutionMode.parse(self.mode)
        if self.mode is EvolutionMode.FIELD_EIGENBASIS:
            if self.initial_state is not None:
                raise ValueError(
                    "FIELD_EIGENBASIS evolution does not take an initial state; "
                    "use mode='free' to propagate one"
                )
        elif self.initial_state is None:
            self.initial_state = SZ_POSITIVE_STATE
        elif not isinstance(self.initial_state, SpinState):
            self.initial_state = SpinState.from_array(self.initial_state)
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.trace_length < 1:
            raise ValueError(f"trace_length must be >= 1, got {self.trace_length}")


@dataclass
class PrecessionSample:
    """Snapshot of the spin at one animation tick."""

    tick: int
    time: float
    state: SpinState
    bloch: NDArray[np.float64]  # (3,) expectation vector
    field: NDArray[np.float64]  # (3,) applied field

    @property
    def magnitude(self) -> float:
        return float(np.linalg.norm(self.bloch))
