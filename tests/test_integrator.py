"""
Tests for core/integrator.py

position += velocity, unless paused.
"""

import numpy as np

from bisector_swarm.core.controls import SimulationControls
from bisector_swarm.core.integrator import integrate
from bisector_swarm.core.point import PointStore


class TestIntegrate:
    """Tests for integrate."""

    def test_applies_velocity(self):
        store = PointStore([[0.0, 0.0], [1.0, 1.0]], velocities=[[0.5, 0.0], [0.0, -1.0]])

        assert integrate(store, SimulationControls()) is True

        assert np.allclose(store.positions, [[0.5, 0.0], [1.0, 0.0]])

    def test_velocity_not_rescaled(self):
        store = PointStore([[0.0, 0.0]], velocities=[[2.0, 0.0]])
        integrate(store, SimulationControls(speed_multiplier=0.5))
        assert np.allclose(store.positions, [[2.0, 0.0]])

    def test_paused_leaves_positions(self):
        rng = np.random.default_rng(0)
        store = PointStore(rng.uniform(-10, 10, (8, 2)), velocities=rng.uniform(-10, 10, (8, 2)))
        before = store.snapshot_positions()

        assert integrate(store, SimulationControls(paused=True)) is False

        assert np.array_equal(store.positions, before)

    def test_velocities_untouched(self):
        store = PointStore([[0.0, 0.0]], velocities=[[1.0, 1.0]])
        integrate(store, SimulationControls())
        assert np.allclose(store.velocities, [[1.0, 1.0]])
