"""
Solid Renderer
==============

Fast numpy-based renderer that draws the scene rectangles as solid colors.
Used for rgb_array rendering in the Gymnasium environment.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from tower_stack.stack_core.config_loader import GameConfig, get_config
from tower_stack.stack_core.state_snapshot import GameSnapshot


class SolidRenderer:
    """
    Renders a snapshot's scene into an RGB array.

    World y grows upwards; image rows grow downwards, so rows are flipped.
    The world is scaled to fit the viewport width into the image width.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._bg_color = np.array([24, 24, 32], dtype=np.uint8)
        self._moving_outline = np.array([255, 255, 255], dtype=np.uint8)

    def render(self, snapshot: GameSnapshot, width: int, height: int) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            snapshot: Snapshot to draw.
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.empty((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        screen_width = snapshot.screen_width
        if not screen_width:
            return img

        scale = width / screen_width
        for rect in snapshot.scene():
            x0 = int(round(rect.left * scale))
            x1 = int(round((rect.left + rect.width) * scale))
            # Flip into image rows
            y0 = height - int(round((rect.bottom + rect.height) * scale))
            y1 = height - int(round(rect.bottom * scale))

            x0, x1 = max(0, x0), min(width, x1)
            y0, y1 = max(0, y0), min(height, y1)
            if x0 >= x1 or y0 >= y1:
                continue

            color = np.array(self._config.palette.color_for(rect.color_index), dtype=np.uint8)
            img[y0:y1, x0:x1] = color
            if rect.is_moving:
                img[y0, x0:x1] = self._moving_outline
                img[y1 - 1, x0:x1] = self._moving_outline

        return img

    def close(self) -> None:
        """Nothing to release; kept for renderer interface parity."""
