"""
Tests for environments/bisector_field.py

The full tick: clock, steering, integration, snapshots.
"""

import numpy as np
import pytest

from bisector_swarm.core.partnership import PartnershipGraph
from bisector_swarm.environments.bisector_field import BisectorField, FieldConfig


def scenario_field(paused=False):
    field = BisectorField(
        positions=np.array([[5.0, 0.0], [-10.0, 0.0], [10.0, 0.0]]),
        graph=PartnershipGraph([1, 2, 0], [2, 0, 1]),
    )
    if paused:
        field.toggle_pause()
    return field


class TestFieldConfig:
    """Tests for FieldConfig dataclass."""

    def test_default_config(self):
        config = FieldConfig()
        assert config.n_points == 40
        assert config.speed_multiplier == 0.1
        assert config.x_bounds == (-300.0, 300.0)
        assert config.y_bounds == (-200.0, 200.0)
        assert config.seed is None


class TestBisectorField:
    """Tests for BisectorField."""

    def test_initialization_default(self):
        field = BisectorField()
        assert len(field.store) == 40
        assert len(field.graph) == 40
        assert field.time == 0
        assert field.controls.paused is False
        assert field.controls.speed_multiplier == 0.1

    def test_initial_positions_within_bounds(self):
        field = BisectorField(FieldConfig(seed=0))
        positions = field.get_positions()
        assert np.all((positions[:, 0] >= -300.0) & (positions[:, 0] <= 300.0))
        assert np.all((positions[:, 1] >= -200.0) & (positions[:, 1] <= 200.0))
        assert np.allclose(field.get_velocities(), 0.0)

    def test_colors(self):
        field = BisectorField(FieldConfig(n_points=10, seed=0))
        assert field.colors.shape == (10, 3)
        assert np.all((field.colors >= 0.0) & (field.colors <= 1.0))

    def test_seed_reproducible(self):
        first = BisectorField(FieldConfig(seed=11))
        second = BisectorField(FieldConfig(seed=11))
        assert np.array_equal(first.get_positions(), second.get_positions())
        assert first.get_partners() == second.get_partners()

    def test_partnership_invariant(self):
        field = BisectorField(FieldConfig(seed=2))
        for point_id, (p1, p2) in enumerate(field.get_partners()):
            assert p1 != point_id and p2 != point_id and p1 != p2

    def test_too_few_points(self):
        with pytest.raises(ValueError):
            BisectorField(FieldConfig(n_points=2))

    def test_invalid_speed(self):
        with pytest.raises(ValueError):
            BisectorField(FieldConfig(speed_multiplier=0.0))

    def test_invalid_graph_rejected(self):
        with pytest.raises(ValueError):
            BisectorField(
                positions=np.zeros((3, 2)),
                graph=PartnershipGraph([0, 2, 0], [2, 0, 1]),
            )

    def test_step_scenario(self):
        field = scenario_field()

        report = field.step(1.0)

        assert field.time == 1
        assert np.isclose(report.distances[0], 5.0)
        assert np.allclose(field.get_velocities()[0], [-0.5, 0.0])
        assert np.allclose(field.get_positions()[0], [4.5, 0.0])

    def test_paused_step_freezes_positions_not_velocities(self):
        field = scenario_field(paused=True)
        before = field.get_positions()

        field.step(1.0)

        assert np.array_equal(field.get_positions(), before)
        assert np.allclose(field.get_velocities()[0], [-0.5, 0.0])
        assert field.time == 1

    def test_resume_uses_fresh_velocity(self):
        field = scenario_field(paused=True)
        field.step(1.0)
        field.toggle_pause()

        field.step(2.0)

        assert np.allclose(field.get_positions()[0], [4.0, 0.0])

    def test_double_toggle_no_displacement(self):
        field = BisectorField(FieldConfig(seed=3))
        before = field.get_positions()

        field.toggle_pause()
        field.toggle_pause()

        assert field.controls.paused is False
        assert np.array_equal(field.get_positions(), before)

    def test_many_steps_stay_finite(self):
        field = BisectorField(FieldConfig(seed=4))
        for _ in range(200):
            field.step(0.016)
        assert np.all(np.isfinite(field.get_positions()))
        assert field.clock.elapsed == pytest.approx(200 * 0.016)

    def test_snapshot_before_step(self):
        field = BisectorField(FieldConfig(n_points=5, seed=0))
        snapshot = field.snapshot()
        assert snapshot.time == 0
        assert snapshot.headings == (None,) * 5
        assert np.all(np.isnan(snapshot.indicator_lengths))

    def test_snapshot_after_step(self):
        field = scenario_field()
        field.step(1.0)

        snapshot = field.snapshot()

        assert snapshot.time == 1
        assert snapshot.paused is False
        assert snapshot.speed_multiplier == 0.1
        assert np.isclose(snapshot.headings[0], np.pi)
        assert np.isclose(snapshot.indicator_lengths[0], 0.5)

    def test_snapshot_read_only(self):
        field = scenario_field()
        field.step(1.0)
        snapshot = field.snapshot()

        with pytest.raises(ValueError):
            snapshot.positions[0, 0] = 100.0
        assert field.get_positions()[0, 0] != 100.0

    def test_repr(self):
        field = scenario_field()
        field.step(0.1)
        repr_str = repr(field)
        assert "BisectorField" in repr_str
        assert "points=3" in repr_str
        assert "time=1" in repr_str
