"""
core/partnership.py

Every point is given two partners at birth and keeps them for life.

The graph is directional: my partners have partners of their own,
and I need not be one of them.
"""

from __future__ import annotations
from typing import Iterator, Optional, Tuple
import logging
import numpy as np

logger = logging.getLogger(__name__)

# Fewer points than this leave no two distinct partners besides self
MIN_POINTS = 3


class PartnershipGraph:
    """
    Fixed mapping from each point to an ordered pair of partners.

    Stored as two parallel identifier arrays. The arrays are
    write-protected: the graph is read-only once built.
    Holds identifiers only, never point state.
    """

    def __init__(self, partner_1: np.ndarray, partner_2: np.ndarray):
        partner_1 = np.array(partner_1, dtype=np.int64)
        partner_2 = np.array(partner_2, dtype=np.int64)
        if partner_1.shape != partner_2.shape or partner_1.ndim != 1:
            raise ValueError("partner arrays must be one-dimensional and the same length")

        partner_1.setflags(write=False)
        partner_2.setflags(write=False)
        self.partner_1 = partner_1
        self.partner_2 = partner_2

    def __len__(self) -> int:
        return len(self.partner_1)

    def partners(self, point_id: int) -> Tuple[int, int]:
        return int(self.partner_1[point_id]), int(self.partner_2[point_id])

    def __iter__(self) -> Iterator[Tuple[int, int, int]]:
        """Yield (point_id, partner_1, partner_2)."""
        for point_id in range(len(self)):
            yield (point_id, *self.partners(point_id))

    def resolves(self, point_id: int, n_points: int) -> bool:
        """Whether this point and both its partners are live points."""
        if not 0 <= point_id < len(self):
            return False
        p1, p2 = self.partners(point_id)
        return 0 <= p1 < n_points and 0 <= p2 < n_points

    def validate(self, n_points: int) -> None:
        """
        Check the partnership invariant for a population of n_points.

        partner_1 != partner_2, neither is self, all ids resolve.
        A violation is a fatal configuration error.
        """
        if len(self) != n_points:
            raise ValueError(
                f"graph covers {len(self)} points but population is {n_points}"
            )

        ids = np.arange(n_points)
        for name, partners in (("partner_1", self.partner_1), ("partner_2", self.partner_2)):
            out_of_range = (partners < 0) | (partners >= n_points)
            if out_of_range.any():
                bad = int(ids[out_of_range][0])
                raise ValueError(
                    f"point {bad}: {name}={int(partners[bad])} does not resolve "
                    f"to a point in [0, {n_points})"
                )
            if (partners == ids).any():
                bad = int(ids[partners == ids][0])
                raise ValueError(f"point {bad} is its own {name}")

        same = self.partner_1 == self.partner_2
        if same.any():
            bad = int(ids[same][0])
            raise ValueError(f"point {bad} has the same partner twice")

    def __repr__(self) -> str:
        return f"PartnershipGraph(points={len(self)})"


def build_partnerships(
    n_points: int,
    rng: Optional[np.random.Generator] = None
) -> PartnershipGraph:
    """
    Assign two distinct random partners to every point.

    Each partner is drawn uniformly from [0, n_points) excluding the
    point itself; the pair is redrawn while both picks are equal.
    Rejection sampling, bounded only by n_points >= 3.
    """
    if n_points < MIN_POINTS:
        raise ValueError(
            f"need at least {MIN_POINTS} points to assign two distinct partners, "
            f"got {n_points}"
        )

    rng = rng or np.random.default_rng()

    partner_1 = np.empty(n_points, dtype=np.int64)
    partner_2 = np.empty(n_points, dtype=np.int64)

    for i in range(n_points):
        first = second = _draw_except(i, n_points, rng)
        while first == second:
            first = _draw_except(i, n_points, rng)
            second = _draw_except(i, n_points, rng)
        partner_1[i] = first
        partner_2[i] = second

    graph = PartnershipGraph(partner_1, partner_2)
    graph.validate(n_points)
    logger.debug(f"Assigned partners for {n_points} points")
    return graph


def _draw_except(excluded: int, n_points: int, rng: np.random.Generator) -> int:
    choice = int(rng.integers(0, n_points))
    while choice == excluded:
        choice = int(rng.integers(0, n_points))
    return choice
