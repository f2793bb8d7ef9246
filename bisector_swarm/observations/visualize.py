"""
observations/visualize.py

Watch the swarm find its lines.

Each point is a coloured dot with a white arrow showing where it is
heading and, by its length, how far it is from its bisector.
Space pauses and resumes.

Inspired by:
- Scientific visualization
- Debugger interfaces
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING
import logging
import time
import numpy as np

from bisector_swarm.core.controls import PauseToggle

if TYPE_CHECKING:
    from bisector_swarm.environments.bisector_field import BisectorField

logger = logging.getLogger(__name__)

ARROW_LENGTH = 10.0     # Arrow length at unit indicator length, before scaling
ARROW_SCALE = 5.0       # Drawn size relative to the base arrow
PAUSE_KEY = " "


class SwarmVisualizer:
    """
    Presentation of a BisectorField with matplotlib.

    Reads positions and headings after every tick; writes nothing
    back except pause toggles from the keyboard.
    """

    def __init__(
        self,
        field: BisectorField,
        figsize: tuple = (12, 8),
        margin: float = 50.0
    ):
        self.field = field
        self.figsize = figsize
        self.margin = margin
        self.pause_toggle = PauseToggle(field.controls)

        n_points = len(field.store)
        # Last known arrow state; kept when a heading is undefined
        self.arrow_angles = np.zeros(n_points)
        self.arrow_lengths = np.zeros(n_points)

        # Lazy import matplotlib
        self._plt = None
        self._fig = None
        self._ax = None

    def _setup_plot(self):
        """Initialize matplotlib figure and keyboard hooks."""
        import matplotlib.pyplot as plt
        self._plt = plt

        self._fig, self._ax = plt.subplots(figsize=self.figsize)
        self._ax.set_aspect('equal')
        self._ax.set_facecolor('#1a1a2e')
        self._fig.patch.set_facecolor('#16213e')

        self._fig.canvas.mpl_connect('key_press_event', self._on_key_press)
        self._fig.canvas.mpl_connect('key_release_event', self._on_key_release)

    def _on_key_press(self, event) -> None:
        if event.key == PAUSE_KEY:
            self.pause_toggle.update(True)

    def _on_key_release(self, event) -> None:
        if event.key == PAUSE_KEY:
            self.pause_toggle.update(False)

    def update_arrows(self) -> None:
        """
        Refresh arrow orientation and length from the latest tick.

        Undefined heading: previous orientation stays.
        Skipped update: previous length stays.
        """
        snapshot = self.field.snapshot()

        for i, angle in enumerate(snapshot.headings):
            if angle is not None:
                self.arrow_angles[i] = angle

        lengths = snapshot.indicator_lengths
        known = np.isfinite(lengths)
        self.arrow_lengths[known] = lengths[known] * ARROW_LENGTH * ARROW_SCALE

    def arrow_components(self) -> np.ndarray:
        """Arrow vectors as an (n, 2) array, ready for quiver."""
        return np.column_stack([
            self.arrow_lengths * np.cos(self.arrow_angles),
            self.arrow_lengths * np.sin(self.arrow_angles),
        ])

    def render(self) -> None:
        """Render current state of the swarm."""
        if self._plt is None:
            self._setup_plot()

        self.update_arrows()
        positions = self.field.get_positions()
        arrows = self.arrow_components()

        self._ax.clear()
        self._ax.set_facecolor('#1a1a2e')

        if len(positions) == 0:
            return

        low = positions.min(axis=0) - self.margin
        high = positions.max(axis=0) + self.margin
        self._ax.set_xlim(low[0], high[0])
        self._ax.set_ylim(low[1], high[1])

        self._ax.scatter(
            positions[:, 0], positions[:, 1],
            c=self.field.colors, s=50, alpha=0.9,
            edgecolors='white', linewidths=0.5
        )

        self._ax.quiver(
            positions[:, 0], positions[:, 1],
            arrows[:, 0], arrows[:, 1],
            color='white', angles='xy', scale_units='xy', scale=1,
            width=0.002
        )

        state = "paused" if self.field.controls.paused else "running"
        self._ax.set_title(
            f"Tick: {self.field.time} | Points: {len(positions)} | "
            f"Speed: {self.field.controls.speed_multiplier:g} | {state}",
            color='white', fontsize=12
        )

        self._plt.pause(0.001)

    def save_frame(self, path: str) -> None:
        """Save current frame to file."""
        if self._fig is not None:
            self._fig.savefig(path, dpi=150, facecolor=self._fig.get_facecolor())

    def close(self) -> None:
        """Close the visualization."""
        if self._plt is not None:
            self._plt.close(self._fig)


def animate(
    field: BisectorField,
    steps: Optional[int] = None,
    save_path: Optional[str] = None
) -> None:
    """
    Drive the field from the render loop.

    Each tick is fed the wall-clock time since the previous one.
    steps=None runs until the window is closed.
    """
    viz = SwarmVisualizer(field)
    last = time.perf_counter()
    step = 0

    try:
        while steps is None or step < steps:
            now = time.perf_counter()
            field.step(now - last)
            last = now

            viz.render()
            step += 1

            if steps is None and not viz._plt.fignum_exists(viz._fig.number):
                logger.info("Window closed")
                break

        if save_path:
            viz.save_frame(save_path)

    finally:
        viz.close()
