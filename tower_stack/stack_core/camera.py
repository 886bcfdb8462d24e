"""
Camera Model
============

Vertical view offset that keeps a growing tower on screen.
"""

from __future__ import annotations

from typing import Optional

from tower_stack.stack_core.config_loader import GameConfig, get_config


def camera_offset(level: int, activation_level: int, block_height: float) -> float:
    """
    Magnitude of the vertical shift for a given level.

    Zero below `activation_level`, then one block height per level past
    `activation_level - 1`.
    """
    if level < activation_level:
        return 0.0
    return (level - (activation_level - 1)) * block_height


class CameraModel:
    """Applies the configured direction to the camera offset magnitude."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._activation_level = config.camera.activation_level
        self._sign = config.camera.sign
        self._block_height = config.board.block_height

    @property
    def activation_level(self) -> int:
        return self._activation_level

    @property
    def sign(self) -> int:
        return self._sign

    def offset(self, level: int) -> float:
        """Signed offset for `level`, as stored in the game state."""
        return self._sign * camera_offset(level, self._activation_level, self._block_height)
