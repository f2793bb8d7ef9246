"""
Core components of the bisector swarm.

- geometry: Bisector kernel - pure functions
- point: Per-point position and velocity store
- partnership: Fixed partner pairs
- motion: Steering toward the bisector
- integrator: Applying velocity to position
- controls: Speed, pause and clock
"""

from .point import PointState, PointStore
from .partnership import PartnershipGraph, build_partnerships
from .controls import SimulationControls, PauseToggle, SimulationClock
from .motion import MotionUpdateEngine, SteeringReport
from .integrator import integrate

__all__ = [
    "PointState",
    "PointStore",
    "PartnershipGraph",
    "build_partnerships",
    "SimulationControls",
    "PauseToggle",
    "SimulationClock",
    "MotionUpdateEngine",
    "SteeringReport",
    "integrate",
]
