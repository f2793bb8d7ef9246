"""
core/controls.py

Knobs the outside world may turn: how fast, and whether at all.

Passed explicitly to whoever needs them. No hidden globals.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass
class SimulationControls:
    """Global speed multiplier and pause flag."""
    speed_multiplier: float = 0.1     # Scales every computed velocity
    paused: bool = False              # Freezes integration, not steering

    def __post_init__(self):
        if not self.speed_multiplier > 0:
            raise ValueError(
                f"speed_multiplier must be positive, got {self.speed_multiplier}"
            )

    def toggle_pause(self) -> bool:
        """Flip the pause flag exactly once. Returns the new value."""
        self.paused = not self.paused
        logger.info("Simulation paused" if self.paused else "Simulation resumed")
        return self.paused


class PauseToggle:
    """
    Edge detector between an input control and the pause flag.

    Only a released -> pressed transition toggles.
    Holding the control does nothing further.
    """

    def __init__(self, controls: SimulationControls):
        self.controls = controls
        self._pressed = False

    def update(self, pressed: bool) -> bool:
        """
        Feed the current control state (polled once per tick).

        Returns True if this call toggled the pause flag.
        """
        just_pressed = pressed and not self._pressed
        self._pressed = pressed
        if just_pressed:
            self.controls.toggle_pause()
        return just_pressed

    def press(self) -> None:
        """A discrete press event: one toggle, whatever came before."""
        self.controls.toggle_pause()

    def __repr__(self) -> str:
        return f"PauseToggle(pressed={self._pressed}, paused={self.controls.paused})"


class SimulationClock:
    """Elapsed time per tick, total elapsed time, tick count."""

    def __init__(self):
        self.delta_time = 0.0
        self.elapsed = 0.0
        self.ticks = 0

    def tick(self, delta_time: float) -> float:
        """Record one tick of delta_time seconds. Returns delta_time."""
        if delta_time < 0:
            raise ValueError(f"delta_time must be non-negative, got {delta_time}")
        self.delta_time = float(delta_time)
        self.elapsed += self.delta_time
        self.ticks += 1
        return self.delta_time

    def __repr__(self) -> str:
        return (
            f"SimulationClock(ticks={self.ticks}, "
            f"elapsed={self.elapsed:.2f}, "
            f"delta_time={self.delta_time:.4f})"
        )
