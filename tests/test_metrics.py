"""Tests for trajectory metric extraction."""

import numpy as np
import pytest

from spin_precession.analysis.metrics import MetricExtractor
from spin_precession.core.precession_engine import PrecessionEngine
from spin_precession.utils.types import PrecessionConfig


def make_history(theta: float = 0.7, strength: float = 1.5, steps: int = 200) -> list[dict]:
    engine = PrecessionEngine(PrecessionConfig(theta=theta, strength=strength, dt=0.05))
    return engine.run(steps)


class TestTrajectoryStats:
    def test_with_history(self):
        stats = MetricExtractor(make_history()).trajectory_stats()
        assert stats["count"] == 200
        assert stats["magnitude_mean"] == pytest.approx(1.0)
        assert stats["magnitude_drift"] < 1e-9
        assert stats["duration"] == pytest.approx(199 * 0.05)
        assert -1.0 <= stats["z_min"] <= stats["z_max"] <= 1.0

    def test_empty_history(self):
        stats = MetricExtractor([]).trajectory_stats()
        assert stats["count"] == 0
        assert stats["magnitude_drift"] == 0.0


class TestPrecessionStats:
    @pytest.mark.parametrize("theta", [0.3, 0.7, 1.2, 2.0])
    def test_cone_angle_equals_field_angle(self, theta):
        # Spin starts at +z, so it stays theta away from the field axis.
        stats = MetricExtractor(make_history(theta=theta)).precession_stats()
        assert stats["cone_angle_mean"] == pytest.approx(theta, abs=1e-6)
        assert stats["cone_angle_spread"] < 1e-6

    @pytest.mark.parametrize("theta", [0.3, 1.2])
    def test_reversed_field_measures_against_signed_axis(self, theta):
        stats = MetricExtractor(make_history(theta=theta, strength=-1.5)).precession_stats()
        assert stats["cone_angle_mean"] == pytest.approx(np.pi - theta, abs=1e-6)
        assert stats["cone_angle_spread"] < 1e-6

    def test_zero_field_uses_forward_axis(self):
        stats = MetricExtractor(make_history(theta=0.4, strength=0.0, steps=20)).precession_stats()
        assert stats["cone_angle_mean"] == pytest.approx(0.4, abs=1e-9)

    def test_field_change_shows_spread(self):
        engine = PrecessionEngine(PrecessionConfig(theta=0.3, dt=0.1))
        engine.run(20)
        engine.set_field(theta=1.2)
        engine.run(20)
        stats = MetricExtractor(engine.history).precession_stats()
        assert stats["cone_angle_spread"] > 0.1

    def test_empty_history(self):
        stats = MetricExtractor([]).precession_stats()
        assert stats["cone_angle_mean"] is None


class TestFullReport:
    def test_keys(self):
        report = MetricExtractor(make_history(steps=10)).full_report()
        assert set(report) == {"trajectory_stats", "precession_stats"}
