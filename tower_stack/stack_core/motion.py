"""
Motion Model
============

Maps the global oscillation phase to the moving block's horizontal position.

The phase is one continuous clock for the whole session. It is never reset
when a new block spawns, so a block's motion depends only on the clock and
not on how long that block has been airborne.
"""

from __future__ import annotations

import math

TWO_PI = 2.0 * math.pi


def advance_phase(phase: float, dt: float, period: float) -> float:
    """
    Advance the phase by `dt` time units, wrapping into [0, 2*pi).

    Args:
        phase: Current phase.
        dt: Elapsed time since the previous tick.
        period: Time units per full cycle.

    Returns:
        New phase in [0, 2*pi).
    """
    phase = (phase + TWO_PI * dt / period) % TWO_PI
    # Float modulo can land exactly on 2*pi for tiny negative remainders
    if phase >= TWO_PI:
        phase = 0.0
    return phase


def block_x(phase: float, width: float, screen_width: float) -> float:
    """
    Horizontal center of a block of `width` at the given phase.

    The sine is mapped from [-1, 1] onto the movement range so both block
    edges stay within [0, screen_width].
    """
    normalized = (math.sin(phase) + 1.0) / 2.0
    movement_range = screen_width - width
    return width / 2.0 + normalized * movement_range


class MotionModel:
    """Phase clock bound to a fixed period."""

    def __init__(self, period: float):
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self._period = period

    @property
    def period(self) -> float:
        return self._period

    def advance(self, phase: float, dt: float) -> float:
        return advance_phase(phase, dt, self._period)

    def position(self, phase: float, width: float, screen_width: float) -> float:
        return block_x(phase, width, screen_width)
