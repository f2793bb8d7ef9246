"""
environments/bisector_field.py

The plane the swarm lives in.

Holds the points, their partners and the controls,
and advances them one tick at a time in a fixed order:
clock, steering, integration.

Inspired by:
- Reynolds boids simulation
- Particle physics sandboxes
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging
import numpy as np

from bisector_swarm.core.controls import SimulationControls, SimulationClock
from bisector_swarm.core.integrator import integrate
from bisector_swarm.core.motion import MotionUpdateEngine, SteeringReport
from bisector_swarm.core.partnership import PartnershipGraph, build_partnerships
from bisector_swarm.core.point import PointStore

logger = logging.getLogger(__name__)


@dataclass
class FieldConfig:
    """Configuration for the bisector field."""
    n_points: int = 40                                    # Fixed population
    speed_multiplier: float = 0.1                         # Global velocity scale
    x_bounds: Tuple[float, float] = (-300.0, 300.0)       # Initial spread, horizontal
    y_bounds: Tuple[float, float] = (-200.0, 200.0)       # Initial spread, vertical
    seed: Optional[int] = None                            # None draws fresh entropy


@dataclass(frozen=True)
class FieldSnapshot:
    """
    Read-only view of the field after a tick.

    Arrays are copies; mutating them does not touch the field.
    """
    time: int
    elapsed: float
    paused: bool
    speed_multiplier: float
    positions: np.ndarray
    velocities: np.ndarray
    headings: Tuple[Optional[float], ...]
    indicator_lengths: np.ndarray


class BisectorField:
    """
    2D plane of points steering toward their partners' bisectors.

    Each step:
    1. Advance the clock by delta_time
    2. Steer: recompute every velocity from one snapshot
    3. Integrate: move every point, unless paused
    """

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        positions: Optional[np.ndarray] = None,
        graph: Optional[PartnershipGraph] = None
    ):
        self.config = config or FieldConfig()
        self.rng = np.random.default_rng(self.config.seed)

        if positions is None:
            positions = np.column_stack([
                self.rng.uniform(*self.config.x_bounds, size=self.config.n_points),
                self.rng.uniform(*self.config.y_bounds, size=self.config.n_points),
            ])
        self.store = PointStore(positions)

        if graph is None:
            graph = build_partnerships(len(self.store), self.rng)
        else:
            graph.validate(len(self.store))
        self.graph = graph

        self.controls = SimulationControls(speed_multiplier=self.config.speed_multiplier)
        self.clock = SimulationClock()
        self.engine = MotionUpdateEngine()

        # One colour per point, fixed for the run
        self.colors = self.rng.uniform(0.0, 1.0, size=(len(self.store), 3))

        self.last_report: Optional[SteeringReport] = None

        logger.info(f"Created {len(self.store)} points")

    @property
    def time(self) -> int:
        return self.clock.ticks

    def step(self, delta_time: float) -> SteeringReport:
        """Advance the simulation by one tick of delta_time seconds."""
        delta_time = self.clock.tick(delta_time)

        report = self.engine.update(self.store, self.graph, self.controls, delta_time)
        integrate(self.store, self.controls)

        self.last_report = report
        return report

    def toggle_pause(self) -> bool:
        return self.controls.toggle_pause()

    def snapshot(self) -> FieldSnapshot:
        """Poll the current state without being able to change it."""
        if self.last_report is not None:
            headings = tuple(self.last_report.headings)
            indicator_lengths = self.last_report.indicator_lengths
        else:
            headings = (None,) * len(self.store)
            indicator_lengths = np.full(len(self.store), np.nan)

        positions = self.get_positions()
        velocities = self.get_velocities()
        indicator_lengths = indicator_lengths.copy()
        for array in (positions, velocities, indicator_lengths):
            array.setflags(write=False)

        return FieldSnapshot(
            time=self.time,
            elapsed=self.clock.elapsed,
            paused=self.controls.paused,
            speed_multiplier=self.controls.speed_multiplier,
            positions=positions,
            velocities=velocities,
            headings=headings,
            indicator_lengths=indicator_lengths,
        )

    def get_positions(self) -> np.ndarray:
        """Get positions of all points as array."""
        return self.store.positions.copy()

    def get_velocities(self) -> np.ndarray:
        """Get velocities of all points as array."""
        return self.store.velocities.copy()

    def get_partners(self) -> List[Tuple[int, int]]:
        return [self.graph.partners(i) for i in range(len(self.graph))]

    def __repr__(self) -> str:
        return (
            f"BisectorField(points={len(self.store)}, "
            f"time={self.time}, "
            f"paused={self.controls.paused})"
        )
