"""
core/motion.py

The heart of the swarm: every point steers toward the
perpendicular bisector of its two partners.

velocity = side * distance * delta_time * speed_multiplier

Farther from the bisector, faster toward it. Nothing caps the step,
so a large delta_time can carry a point past the line.

Read everything, then write everything. No point sees
another point's answer from the same tick.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import logging
import numpy as np

from .controls import SimulationControls
from .geometry import (
    midpoint,
    perpendicular_direction,
    distance_to_line,
    choose_side_direction,
    heading,
)
from .partnership import PartnershipGraph
from .point import PointStore

logger = logging.getLogger(__name__)

# Heading indicator length per unit of bisector distance
INDICATOR_SCALE = 0.1


@dataclass
class SteeringReport:
    """
    What one motion update produced, for whoever draws the swarm.

    distances[i] is NaN for a point whose update was skipped.
    headings[i] is None when the point's velocity is zero.
    """
    distances: np.ndarray
    headings: List[Optional[float]]
    skipped: List[int] = field(default_factory=list)

    @property
    def indicator_lengths(self) -> np.ndarray:
        return self.distances * INDICATOR_SCALE


class MotionUpdateEngine:
    """
    Computes a new velocity for every point from a consistent snapshot.

    Runs even while paused: steering keeps up with the world,
    so resuming starts from a fresh velocity.
    """

    def steer(
        self,
        point: np.ndarray,
        partner_1: np.ndarray,
        partner_2: np.ndarray,
        scale: float
    ) -> Optional[tuple]:
        """
        Velocity for one point given its partners' positions.

        scale is delta_time * speed_multiplier.
        Returns (velocity, distance), or None if the partners coincide.
        """
        direction = perpendicular_direction(partner_1, partner_2)
        side = choose_side_direction(point, partner_1, partner_2)
        if direction is None or side is None:
            return None

        distance = distance_to_line(point, midpoint(partner_1, partner_2), direction)
        return side * distance * scale, distance

    def update(
        self,
        store: PointStore,
        graph: PartnershipGraph,
        controls: SimulationControls,
        delta_time: float
    ) -> SteeringReport:
        """
        One full read-compute-write pass over every point.

        Skipped points keep their previous velocity.
        """
        n_points = len(store)
        scale = delta_time * controls.speed_multiplier

        # Phase 1: Read
        positions = store.snapshot_positions()
        new_velocities = store.velocities.copy()
        distances = np.full(n_points, np.nan)
        skipped = []

        # Phase 2: Compute
        for point_id in store:
            if not graph.resolves(point_id, n_points):
                logger.warning(
                    f"Point {point_id}: partner lookup failed, skipping update"
                )
                skipped.append(point_id)
                continue

            p1, p2 = graph.partners(point_id)
            result = self.steer(positions[point_id], positions[p1], positions[p2], scale)
            if result is None:
                logger.debug(
                    f"Point {point_id}: partners {p1} and {p2} coincide, "
                    f"keeping previous velocity"
                )
                skipped.append(point_id)
                continue

            new_velocities[point_id], distances[point_id] = result

        # Phase 3: Write
        store.velocities[:] = new_velocities

        return SteeringReport(
            distances=distances,
            headings=[heading(v) for v in store.velocities],
            skipped=skipped,
        )
