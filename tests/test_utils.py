"""Tests for the utility layer: constants, types, math_helpers."""

import numpy as np
import pytest

from spin_precession.utils.constants import (
    DEFAULT_TRACE_LENGTH,
    HBAR,
    SPIN_MAGNITUDE,
    TWO_PI,
)
from spin_precession.utils.math_helpers import (
    angles_to_axis,
    expi,
    normalize,
    vector_magnitude,
)
from spin_precession.utils.types import (
    SZ_NEGATIVE_STATE,
    SZ_POSITIVE_STATE,
    EvolutionMode,
    PrecessionConfig,
    SpinState,
)


class TestConstants:
    def test_hbar_model_value(self):
        assert HBAR == 2.0

    def test_spin_magnitude(self):
        assert SPIN_MAGNITUDE == 1.0

    def test_two_pi(self):
        assert TWO_PI == pytest.approx(6.283185307179586)


class TestSpinState:
    def test_basis_states(self):
        assert SZ_POSITIVE_STATE == SpinState(1 + 0j, 0j)
        assert SZ_NEGATIVE_STATE == SpinState(0j, 1 + 0j)

    def test_as_array(self):
        arr = SpinState(1 + 2j, 3 - 1j).as_array()
        assert arr.dtype == np.complex128
        np.testing.assert_array_equal(arr, [1 + 2j, 3 - 1j])

    def test_from_array(self):
        state = SpinState.from_array([0.6, 0.8j])
        assert state.a == pytest.approx(0.6)
        assert state.b == pytest.approx(0.8j)

    def test_from_array_wrong_length(self):
        with pytest.raises(ValueError):
            SpinState.from_array([1, 0, 0])

    def test_norm_squared(self):
        assert SpinState(3 + 0j, 4j).norm_squared == pytest.approx(25.0)

    def test_is_normalized(self):
        assert SZ_POSITIVE_STATE.is_normalized
        assert not SpinState(2 + 0j, 0j).is_normalized

    def test_normalized(self):
        state = SpinState(3 + 0j, 4j).normalized()
        assert state.norm_squared == pytest.approx(1.0)
        assert state.a == pytest.approx(0.6)
        assert state.b == pytest.approx(0.8j)

    def test_normalized_zero_state(self):
        with pytest.raises(ValueError):
            SpinState(0j, 0j).normalized()

    def test_immutable(self):
        with pytest.raises(AttributeError):
            SZ_POSITIVE_STATE.a = 0j


class TestEvolutionMode:
    def test_parse_string(self):
        assert EvolutionMode.parse("eigenbasis") is EvolutionMode.FIELD_EIGENBASIS
        assert EvolutionMode.parse("free") is EvolutionMode.FREE_INITIAL_STATE

    def test_parse_passthrough(self):
        assert EvolutionMode.parse(EvolutionMode.FREE_INITIAL_STATE) is EvolutionMode.FREE_INITIAL_STATE

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown evolution mode"):
            EvolutionMode.parse("stepper")


class TestPrecessionConfig:
    def test_defaults(self):
        cfg = PrecessionConfig()
        assert cfg.theta == 0.0
        assert cfg.strength == 1.0
        assert cfg.mode is EvolutionMode.FIELD_EIGENBASIS
        assert cfg.initial_state is None
        assert cfg.trace_length == DEFAULT_TRACE_LENGTH

    def test_mode_from_string(self):
        cfg = PrecessionConfig(mode="free")
        assert cfg.mode is EvolutionMode.FREE_INITIAL_STATE

    def test_initial_state_from_sequence(self):
        cfg = PrecessionConfig(mode="free", initial_state=[0, 1])
        assert cfg.initial_state == SZ_NEGATIVE_STATE

    def test_eigenbasis_rejects_initial_state(self):
        with pytest.raises(ValueError, match="does not take an initial state"):
            PrecessionConfig(mode="eigenbasis", initial_state=SZ_NEGATIVE_STATE)

    def test_free_defaults_to_up(self):
        cfg = PrecessionConfig(mode="free")
        assert cfg.initial_state == SZ_POSITIVE_STATE

    def test_rejects_bad_dt(self):
        with pytest.raises(ValueError):
            PrecessionConfig(dt=0.0)

    def test_rejects_nan_dt(self):
        with pytest.raises(ValueError):
            PrecessionConfig(dt=float("nan"))

    def test_rejects_bad_trace_length(self):
        with pytest.raises(ValueError):
            PrecessionConfig(trace_length=0)


class TestExpi:
    def test_zero(self):
        assert expi(0.0) == 1 + 0j

    def test_quarter_turn(self):
        assert expi(np.pi / 2) == pytest.approx(1j)

    def test_array(self):
        out = expi(np.array([0.0, np.pi]))
        np.testing.assert_allclose(out, [1.0, -1.0], atol=1e-15)

    def test_unit_modulus(self):
        phases = np.linspace(-10, 10, 50)
        np.testing.assert_allclose(np.abs(expi(phases)), 1.0)


class TestVectorHelpers:
    def test_magnitude_single(self):
        assert vector_magnitude(np.array([3.0, 4.0, 0.0])) == pytest.approx(5.0)

    def test_magnitude_rows(self):
        mags = vector_magnitude(np.array([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]]))
        np.testing.assert_allclose(mags, [1.0, 2.0])

    def test_normalize(self):
        np.testing.assert_allclose(normalize(np.array([3.0, 4.0, 0.0])), [0.6, 0.8, 0.0])

    def test_normalize_zero(self):
        np.testing.assert_allclose(normalize(np.zeros(3)), 0.0)

    def test_angles_to_axis(self):
        vectors = np.array([[0, 0, 1.0], [1.0, 0, 0], [0, 0, -2.0], [0, 0, 0]])
        angles = angles_to_axis(vectors, np.array([0, 0, 1.0]))
        np.testing.assert_allclose(angles, [0.0, np.pi / 2, np.pi, 0.0], atol=1e-12)
