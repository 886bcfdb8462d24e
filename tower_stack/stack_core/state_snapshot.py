"""
State Snapshot
==============

Read-only view of the game for renderers and learning agents.

`scene()` produces the rectangles to draw; `to_obs_dict()` packs the same
information into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from tower_stack.stack_core.block import Block
from tower_stack.stack_core.state import GameState


@dataclass(frozen=True)
class SceneRect:
    """A rectangle to draw, in world units with the camera offset applied."""
    left: float
    bottom: float
    width: float
    height: float
    color_index: int
    is_moving: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs to draw one frame."""
    placed_blocks: Tuple[Block, ...]
    moving_block: Optional[Block]
    camera_offset_y: float
    score: int
    best_score: int
    current_level: int
    current_block_width: float
    phase: float
    screen_width: Optional[float]
    is_started: bool
    is_game_over: bool
    termination_reason: str
    spawn_pending: bool

    @classmethod
    def from_state(cls, state: GameState, spawn_pending: bool = False) -> "GameSnapshot":
        """Build a snapshot from current game state."""
        return cls(
            placed_blocks=state.placed_blocks,
            moving_block=state.moving_block,
            camera_offset_y=state.camera_offset_y,
            score=state.score,
            best_score=state.best_score,
            current_level=state.current_level,
            current_block_width=state.current_block_width,
            phase=state.phase,
            screen_width=state.screen_width,
            is_started=state.is_started,
            is_game_over=state.is_game_over,
            termination_reason=state.termination_reason,
            spawn_pending=spawn_pending
        )

    @property
    def support_block(self) -> Optional[Block]:
        """Top of the stack, the block the next placement lands on."""
        return self.placed_blocks[-1] if self.placed_blocks else None

    def scene(self) -> List[SceneRect]:
        """
        Rectangles in draw order: stack from the foundation up, then the
        moving block.

        `bottom` is shifted by the camera offset; renderers only flip the
        y axis into screen space.
        """
        rects = [self._rect(block, False) for block in self.placed_blocks]
        if self.moving_block is not None:
            rects.append(self._rect(self.moving_block, True))
        return rects

    def _rect(self, block: Block, is_moving: bool) -> SceneRect:
        return SceneRect(
            left=block.left,
            bottom=block.y - self.camera_offset_y,
            width=block.width,
            height=block.height,
            color_index=block.color_index,
            is_moving=is_moving
        )

    def to_obs_dict(self, max_blocks: int) -> Dict[str, np.ndarray]:
        """
        Convert to a Gymnasium observation dictionary.

        Block arrays hold the most recent `max_blocks` placed blocks, oldest
        first, padded and masked.
        """
        block_x = np.zeros(max_blocks, dtype=np.float32)
        block_y = np.zeros(max_blocks, dtype=np.float32)
        block_width = np.zeros(max_blocks, dtype=np.float32)
        block_mask = np.zeros(max_blocks, dtype=bool)

        visible = self.placed_blocks[-max_blocks:]
        for i, block in enumerate(visible):
            block_x[i] = block.x
            block_y[i] = block.y
            block_width[i] = block.width
            block_mask[i] = True

        moving = self.moving_block
        support = self.support_block
        return {
            "screen_width": np.array(self.screen_width or 0.0, dtype=np.float32),
            "phase": np.array(self.phase, dtype=np.float32),
            "airborne": np.array(int(moving is not None), dtype=np.int8),
            "moving_x": np.array(moving.x if moving else 0.0, dtype=np.float32),
            "moving_width": np.array(moving.width if moving else 0.0, dtype=np.float32),
            "support_x": np.array(support.x if support else 0.0, dtype=np.float32),
            "support_width": np.array(support.width if support else 0.0, dtype=np.float32),
            "current_level": np.array(self.current_level, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "camera_offset_y": np.array(self.camera_offset_y, dtype=np.float32),
            "block_x": block_x,
            "block_y": block_y,
            "block_width": block_width,
            "block_mask": block_mask,
        }

