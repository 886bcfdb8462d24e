"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the tower stacking game.
One step is one frame: an optional tap followed by one tick.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from tower_stack.stack_core.config_loader import GameConfig, load_config
from tower_stack.stack_core.game import CoreGame
from tower_stack.stack_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)

ACTION_WAIT = 0
ACTION_TAP = 1


class StackEnv(gym.Env):
    """
    Tower stacking game as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 waits for the next frame, 1 taps (places the
        airborne block) before the frame advances.

    Observation Space:
        Dict with the moving block, its support, the score and fixed-size
        arrays of the most recent placed blocks.

    Reward:
        Score gained during the step.

    Info:
        Contains score, delta_score, best_score, current_level, frames, etc.
    """

    metadata = {
        "render_modes": ["rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        screen_width: float = 400.0,
        render_mode: Optional[str] = None,
        image_width: int = 200,
        image_height: int = 300,
        debug: bool = False,
    ):
        """
        Initialize the environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            screen_width: Viewport width the game is played on.
            render_mode: "rgb_array" for numpy frames, None for headless.
            image_width: Rendered frame width.
            image_height: Rendered frame height.
            debug: If True, log every placement at DEBUG level.
        """
        super().__init__()

        self._config = load_config(config_path)
        self._screen_width = float(screen_width)
        self._frame_dt = self._config.motion.frame_dt
        self._max_blocks = self._config.caps.max_observed_blocks

        self.render_mode = render_mode
        self._img_width = image_width
        self._img_height = image_height
        self._renderer = None

        self._debug = debug

        self._game = CoreGame(config=self._config)
        self._frames: int = 0

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

        logger.debug(
            "StackEnv initialized: viewport %.1f, frame dt %.4f",
            self._screen_width, self._frame_dt
        )

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        n = self._max_blocks
        w = self._screen_width
        big = np.float32(np.finfo(np.float32).max)

        return spaces.Dict({
            "screen_width": spaces.Box(low=0, high=big, shape=(), dtype=np.float32),
            "phase": spaces.Box(low=0, high=2 * np.pi, shape=(), dtype=np.float32),
            "airborne": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "moving_x": spaces.Box(low=0, high=w, shape=(), dtype=np.float32),
            "moving_width": spaces.Box(low=0, high=w, shape=(), dtype=np.float32),
            "support_x": spaces.Box(low=0, high=w, shape=(), dtype=np.float32),
            "support_width": spaces.Box(low=0, high=w, shape=(), dtype=np.float32),
            "current_level": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "camera_offset_y": spaces.Box(low=-big, high=big, shape=(), dtype=np.float32),
            "block_x": spaces.Box(low=0, high=w, shape=(n,), dtype=np.float32),
            "block_y": spaces.Box(low=0, high=big, shape=(n,), dtype=np.float32),
            "block_width": spaces.Box(low=0, high=w, shape=(n,), dtype=np.float32),
            "block_mask": spaces.MultiBinary(n),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Accepted for API compatibility; the game has no randomness.
            options: May contain "screen_width" to change the viewport.

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        if options and "screen_width" in options:
            self._screen_width = float(options["screen_width"])
            self.observation_space = self._build_observation_space()

        snapshot = self._game.reset(self._screen_width)
        self._frames = 0

        info = self._build_info(delta_score=0)
        return self._snapshot_to_obs(snapshot), info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one frame.

        Args:
            action: 0 to wait, 1 to tap.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())

        score_before = self._game.score
        if int(action) == ACTION_TAP:
            outcome = self._game.place()
            if outcome is not None and self._debug:
                logger.debug(
                    "Frame %d: tap -> width %.2f, +%d%s",
                    self._frames, outcome.trimmed.width, outcome.points,
                    " (game over)" if outcome.game_over else ""
                )

        snapshot = self._game.tick(self._frame_dt, self._screen_width)
        self._frames += 1

        delta_score = self._game.score - score_before
        terminated = self._game.is_over
        truncated = (
            not terminated
            and self._game.rules.termination.check_frames(self._frames).truncated
        )

        info = self._build_info(delta_score=delta_score)
        if truncated:
            info["terminated_reason"] = self._game.rules.termination.REASON_FRAME_CAP

        return self._snapshot_to_obs(snapshot), float(delta_score), terminated, truncated, info

    def _build_info(self, delta_score: int) -> Dict[str, Any]:
        info = self._game.get_info()
        info["delta_score"] = delta_score
        info["frames"] = self._frames
        return info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        return snapshot.to_obs_dict(self._max_blocks)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode != "rgb_array":
            return None

        if self._renderer is None:
            from tower_stack.stack_core.render_solid import SolidRenderer
            self._renderer = SolidRenderer(self._config)

        return self._renderer.render(self._game.snapshot(), self._img_width, self._img_height)

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
