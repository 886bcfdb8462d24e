"""
Block
=====

Immutable block value shared by the stack, the moving block and renderers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from tower_stack.stack_core.config_loader import PALETTE_SIZE


FOUNDATION_LEVEL = 0


@dataclass(frozen=True)
class Block:
    """
    A single block of the tower.

    Coordinates use a y-up world: `x` is the horizontal center, `y` the
    bottom edge.
    """
    x: float
    y: float
    width: float
    height: float
    level: int

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def is_foundation(self) -> bool:
        return self.level == FOUNDATION_LEVEL

    @property
    def color_index(self) -> int:
        """Palette slot: 0 for the foundation, then cycling through 1..10."""
        if self.is_foundation:
            return 0
        return 1 + (self.level - 1) % PALETTE_SIZE

    def with_x(self, x: float) -> "Block":
        return replace(self, x=x)

    def with_width(self, width: float) -> "Block":
        return replace(self, width=width)

    def to_dict(self) -> dict:
        """Plain dict for JSON replays and debugging."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "level": self.level,
        }
