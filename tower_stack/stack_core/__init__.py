"""
Stack Core - The game logic of the tower stacking game.

This module provides the pure models (motion, trimming, scoring, camera),
the state reducer, the orchestrating game class and a Gymnasium wrapper.

Main exports:
- CoreGame: Game orchestrator driven by ticks and taps
- GameState / reduce: Immutable state and its event reducer
- StackEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
"""

from tower_stack.stack_core.config_loader import GameConfig, load_config
from tower_stack.stack_core.block import Block
from tower_stack.stack_core.motion import MotionModel
from tower_stack.stack_core.trimmer import SupportNotFoundError, trim
from tower_stack.stack_core.scoring import (
    ScoreModel,
    PrecisionScoreModel,
    LinearScoreModel,
    make_score_model,
)
from tower_stack.stack_core.camera import CameraModel, camera_offset
from tower_stack.stack_core.rules import GameRules, InvalidViewportError, InvalidTickError
from tower_stack.stack_core.state import GameState, reduce
from tower_stack.stack_core.state_snapshot import GameSnapshot, SceneRect
from tower_stack.stack_core.best_score import (
    BestScoreStore,
    InMemoryBestScoreStore,
    JsonBestScoreStore,
)
from tower_stack.stack_core.game import CoreGame
from tower_stack.stack_core.env_gym import StackEnv
from tower_stack.stack_core.replay_recorder import (
    ReplayRecorder,
    load_replay,
    replay,
    generate_replay_filename,
)

__all__ = [
    "GameConfig",
    "load_config",
    "Block",
    "MotionModel",
    "SupportNotFoundError",
    "trim",
    "ScoreModel",
    "PrecisionScoreModel",
    "LinearScoreModel",
    "make_score_model",
    "CameraModel",
    "camera_offset",
    "GameRules",
    "InvalidViewportError",
    "InvalidTickError",
    "GameState",
    "reduce",
    "GameSnapshot",
    "SceneRect",
    "BestScoreStore",
    "InMemoryBestScoreStore",
    "JsonBestScoreStore",
    "CoreGame",
    "StackEnv",
    "ReplayRecorder",
    "load_replay",
    "replay",
    "generate_replay_filename",
]
