"""
core/point.py

What a point IS at this moment: where it is, where it is going.

Points do not know their partners. The store owns their data;
relationships live elsewhere.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional
import numpy as np


@dataclass
class PointState:
    """
    A single point's state.

    Not what it steers toward. Just its current being.
    """
    position: np.ndarray          # Where in the plane
    velocity: np.ndarray          # Displacement applied on the next integration

    def __post_init__(self):
        # Ensure arrays are proper numpy arrays
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)


class PointStore:
    """
    Arena of point states, indexed by integer identifier.

    Positions and velocities are held as (n, 2) arrays.
    The population is fixed at construction and never changes.
    """

    def __init__(
        self,
        positions: np.ndarray,
        velocities: Optional[np.ndarray] = None
    ):
        positions = np.array(positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 2:
            raise ValueError(f"positions must have shape (n, 2), got {positions.shape}")

        if velocities is None:
            velocities = np.zeros_like(positions)
        else:
            velocities = np.array(velocities, dtype=np.float64)
            if velocities.shape != positions.shape:
                raise ValueError(
                    f"velocities shape {velocities.shape} does not match "
                    f"positions shape {positions.shape}"
                )

        self.positions = positions
        self.velocities = velocities

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, point_id: int) -> bool:
        return 0 <= point_id < len(self)

    def __iter__(self) -> Iterator[int]:
        return iter(range(len(self)))

    def get(self, point_id: int) -> PointState:
        """Copy of one point's state."""
        return PointState(
            position=self.positions[point_id].copy(),
            velocity=self.velocities[point_id].copy()
        )

    def position(self, point_id: int) -> np.ndarray:
        return self.positions[point_id]

    def velocity(self, point_id: int) -> np.ndarray:
        return self.velocities[point_id]

    def set_velocity(self, point_id: int, velocity: np.ndarray) -> None:
        self.velocities[point_id] = velocity

    def snapshot_positions(self) -> np.ndarray:
        """Positions as they are now, detached from later writes."""
        return self.positions.copy()

    def __repr__(self) -> str:
        return f"PointStore(points={len(self)})"
