"""
Spawn Scheduler
===============

Cancellable deferred spawn driven by the same clock as ticks.

Time only passes when the host ticks, so scheduled spawns are as
deterministic as the tick sequence itself. Each scheduled spawn is tagged
with the game generation it belongs to; a spawn that outlives its
generation (because the game was reset) never fires.
"""

from __future__ import annotations

from typing import Optional


class SpawnScheduler:
    """Holds at most one pending spawn."""

    def __init__(self):
        self._remaining: Optional[float] = None
        self._generation: int = -1

    @property
    def pending(self) -> bool:
        """True while a spawn is waiting to fire."""
        return self._remaining is not None

    @property
    def remaining(self) -> float:
        """Time left before the pending spawn fires, 0 if none."""
        return self._remaining if self._remaining is not None else 0.0

    @property
    def generation(self) -> int:
        return self._generation

    def schedule(self, delay: float, generation: int) -> None:
        """Schedule a spawn `delay` time units from now, replacing any pending one."""
        self._remaining = max(0.0, delay)
        self._generation = generation

    def cancel(self) -> None:
        """Drop the pending spawn, if any."""
        self._remaining = None

    def advance(self, dt: float, generation: int) -> bool:
        """
        Let `dt` time units pass.

        Args:
            dt: Elapsed time.
            generation: Generation of the game currently being ticked.

        Returns:
            True exactly once, on the tick where the pending spawn becomes due.
        """
        if self._remaining is None:
            return False

        if generation != self._generation:
            # Stale spawn from a previous game
            self._remaining = None
            return False

        self._remaining -= dt
        if self._remaining <= 0:
            self._remaining = None
            return True
        return False
