"""Per-tick precession driver.

Advances a clock and samples the closed-form kernel once per tick, the
way an animation loop would. Each tick recomputes the state from scratch
at the current time; nothing is integrated step to step.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from spin_precession.core.bloch import bloch_vector_of_state
from spin_precession.core.evolution import evolved_state
from spin_precession.core.field import field
from spin_precession.core.trace import TracePath
from spin_precession.utils.types import (
    EvolutionMode,
    PrecessionConfig,
    PrecessionSample,
    SpinState,
)


class PrecessionEngine:
    """Sample the spin-1/2 precession at successive animation ticks.

    The field angle and strength may be changed between ticks (slider
    input); the trace keeps its history across such changes.
    """

    def __init__(self, config: PrecessionConfig | None = None) -> None:
        self.config = config or PrecessionConfig()
        self.theta: float = self.config.theta
        self.strength: float = self.config.strength

        self.time: float = 0.0
        self.tick: int = 0
        self.trace = TracePath(self.config.trace_length)
        self.history: list[dict] = []

    @property
    def mode(self) -> EvolutionMode:
        return self.config.mode

    @property
    def state(self) -> SpinState:
        """Spin state at the current time."""
        return evolved_state(
            self.theta,
            self.strength,
            self.time,
            mode=self.mode,
            initial_state=self.config.initial_state,
        )

    @property
    def bloch(self) -> NDArray[np.float64]:
        """Expectation vector at the current time."""
        return bloch_vector_of_state(self.state)

    @property
    def field_vector(self) -> NDArray[np.float64]:
        return field(self.theta, self.strength)

    def set_field(self, theta: float | None = None, strength: float | None = None) -> None:
        """Change the field between ticks. Time and trace are kept."""
        if theta is not None:
            self.theta = theta
        if strength is not None:
            self.strength = strength

    def reset(self) -> None:
        """Rewind to t=0 with an empty trace and history."""
        self.time = 0.0
        self.tick = 0
        self.trace.clear()
        self.history = []

    def sample(self) -> PrecessionSample:
        """Snapshot at the current time without advancing the clock."""
        state = self.state
        return PrecessionSample(
            tick=self.tick,
            time=self.time,
            state=state,
            bloch=bloch_vector_of_state(state),
            field=self.field_vector,
        )

    def step(self, dt: float | None = None) -> PrecessionSample:
        """Advance one tick and record exactly one new Bloch sample."""
        self.tick += 1
        self.time += self.config.dt if dt is None else dt
        snapshot = self.sample()
        self.trace.append(snapshot.time, snapshot.bloch)
        self._record_history(snapshot)
        return snapshot

    def run(self, num_steps: int, dt: float | None = None) -> list[dict]:
        """Run for num_steps ticks. Return history."""
        for _ in range(num_steps):
            self.step(dt)
        return self.history

    def _record_history(self, snapshot: PrecessionSample) -> None:
        x, y, z = snapshot.bloch
        self.history.append({
            "tick": snapshot.tick,
            "time": snapshot.time,
            "theta": self.theta,
            "strength": self.strength,
            "x": float(x),
            "y": float(y),
            "z": float(z),
            "magnitude": snapshot.magnitude,
            "a": snapshot.state.a,
            "b": snapshot.state.b,
        })
