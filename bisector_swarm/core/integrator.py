"""
core/integrator.py

position += velocity

Velocity already carries delta_time and the speed multiplier,
so integration is a plain vector addition.
"""

from __future__ import annotations

from .controls import SimulationControls
from .point import PointStore


def integrate(store: PointStore, controls: SimulationControls) -> bool:
    """
    Move every point by its velocity unless paused.

    The pause flag is read once, before any point moves.
    Returns True if positions were updated.
    """
    if controls.paused:
        return False

    store.positions += store.velocities
    return True
