"""
Game Rules
==========

Handles caller contract checks, foundation sizing, termination conditions,
and bundles the pure models used by the state reducer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from tower_stack.stack_core.block import Block
from tower_stack.stack_core.camera import CameraModel
from tower_stack.stack_core.config_loader import GameConfig, get_config
from tower_stack.stack_core.motion import MotionModel
from tower_stack.stack_core.scoring import ScoreModel, make_score_model


class InvalidViewportError(ValueError):
    """Viewport width is not a positive finite number."""


class InvalidTickError(ValueError):
    """Tick duration is negative or not finite."""


def validate_viewport(screen_width: float) -> float:
    """
    Check a viewport width supplied by the host.

    Returns:
        The width as a float.

    Raises:
        InvalidViewportError: If the width is non-positive or non-finite.
    """
    try:
        width = float(screen_width)
    except (TypeError, ValueError):
        raise InvalidViewportError(f"screen_width must be a number, got {screen_width!r}")
    if not math.isfinite(width) or width <= 0:
        raise InvalidViewportError(f"screen_width must be positive and finite, got {screen_width}")
    return width


def validate_dt(dt: float) -> float:
    """Check a tick duration. Raises InvalidTickError on bad input."""
    try:
        value = float(dt)
    except (TypeError, ValueError):
        raise InvalidTickError(f"dt must be a number, got {dt!r}")
    if not math.isfinite(value) or value < 0:
        raise InvalidTickError(f"dt must be non-negative and finite, got {dt}")
    return value


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    truncated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, False, reason)

    @staticmethod
    def truncation(reason: str) -> "TerminationResult":
        return TerminationResult(False, True, reason)


class TerminationRules:
    """
    Handles game termination conditions.

    - Too thin: the trimmed block is at or below the minimum width
    - Frame cap: only enforced by learning environments
    """

    REASON_TOO_THIN = "too_thin"
    REASON_FRAME_CAP = "frame_cap"

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._min_block_width = config.board.min_block_width
        self._max_frames = config.caps.max_frames

    @property
    def min_block_width(self) -> float:
        """Widths at or below this end the game."""
        return self._min_block_width

    @property
    def max_frames(self) -> int:
        return self._max_frames

    def check_placement(self, trimmed: Block) -> TerminationResult:
        """
        Check whether a trimmed block may join the stack.

        The comparison is inclusive: a block exactly `min_block_width` wide
        ends the game.
        """
        if trimmed.width <= self._min_block_width:
            return TerminationResult.game_over(self.REASON_TOO_THIN)
        return TerminationResult.none()

    def check_frames(self, frames: int) -> TerminationResult:
        """Truncation check for environments that cap episode length."""
        if frames >= self._max_frames:
            return TerminationResult.truncation(self.REASON_FRAME_CAP)
        return TerminationResult.none()


def foundation_width(config: GameConfig, screen_width: float) -> float:
    """Foundation width adapted to narrow viewports."""
    return min(
        config.board.starting_width,
        screen_width * config.board.foundation_width_ratio
    )


class GameRules:
    """
    Combined interface for all game rules.

    Bundles the pure models a placement needs so the state reducer receives
    them as one argument.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        score_model: Optional[ScoreModel] = None
    ):
        if config is None:
            config = get_config()

        self.config = config
        self.termination = TerminationRules(config)
        self.motion = MotionModel(config.motion.period)
        self.camera = CameraModel(config)
        self.score_model = score_model if score_model is not None else make_score_model(config)

    @property
    def block_height(self) -> float:
        return self.config.board.block_height

    @property
    def noise_floor(self) -> float:
        return self.config.board.overlap_noise_floor

    @property
    def spawn_delay(self) -> float:
        return self.config.timing.spawn_delay

    def foundation_width(self, screen_width: float) -> float:
        return foundation_width(self.config, screen_width)
