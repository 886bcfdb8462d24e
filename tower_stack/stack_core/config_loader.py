"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


SCORING_POLICIES = ("precision", "linear")
PALETTE_SIZE = 10


@dataclass(frozen=True)
class BoardConfig:
    """Block geometry and placement thresholds."""
    block_height: float           # Height shared by every block
    starting_width: float         # Foundation width on wide viewports
    foundation_width_ratio: float # Max share of the viewport for the foundation
    min_block_width: float        # Trimmed width <= this is game over
    overlap_noise_floor: float    # Overlaps below this are treated as zero


@dataclass(frozen=True)
class MotionConfig:
    """Oscillation clock parameters."""
    period: float      # Time units per full sine cycle
    tick_rate: int     # Nominal ticks per time unit

    @property
    def frame_dt(self) -> float:
        """Nominal duration of a single tick."""
        return 1.0 / self.tick_rate


@dataclass(frozen=True)
class TimingConfig:
    """Deferred event timing."""
    spawn_delay: float


@dataclass(frozen=True)
class CameraConfig:
    """Camera tracking parameters."""
    activation_level: int
    sign: int


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring policy selection and its parameters."""
    policy: str
    base_points: int
    precision_weight: int


@dataclass(frozen=True)
class PaletteConfig:
    """Cosmetic block colors, indexed by Block.color_index."""
    foundation: Tuple[int, int, int]
    blocks: Tuple[Tuple[int, int, int], ...]

    def color_for(self, color_index: int) -> Tuple[int, int, int]:
        """RGB color for a block color index (0 = foundation)."""
        if color_index == 0:
            return self.foundation
        return self.blocks[(color_index - 1) % len(self.blocks)]


@dataclass(frozen=True)
class CapsConfig:
    """Limits for learning environments."""
    max_frames: int
    max_observed_blocks: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    motion: MotionConfig
    timing: TimingConfig
    camera: CameraConfig
    scoring: ScoringConfig
    palette: PaletteConfig
    caps: CapsConfig

    @property
    def block_height(self) -> float:
        """Height of every block."""
        return self.board.block_height


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    board = config.board
    if board.block_height <= 0:
        raise ValueError(f"block_height must be positive, got {board.block_height}")
    if board.starting_width <= 0:
        raise ValueError(f"starting_width must be positive, got {board.starting_width}")
    if not 0 < board.foundation_width_ratio <= 1:
        raise ValueError(
            f"foundation_width_ratio must be in (0, 1], got {board.foundation_width_ratio}"
        )
    if board.min_block_width < 0:
        raise ValueError(f"min_block_width must be >= 0, got {board.min_block_width}")
    if board.overlap_noise_floor < 0:
        raise ValueError(f"overlap_noise_floor must be >= 0, got {board.overlap_noise_floor}")

    if config.motion.period <= 0:
        raise ValueError(f"motion period must be positive, got {config.motion.period}")
    if config.motion.tick_rate <= 0:
        raise ValueError(f"tick_rate must be positive, got {config.motion.tick_rate}")

    if config.timing.spawn_delay < 0:
        raise ValueError(f"spawn_delay must be >= 0, got {config.timing.spawn_delay}")

    if config.camera.activation_level < 1:
        raise ValueError(
            f"camera activation_level must be >= 1, got {config.camera.activation_level}"
        )
    if config.camera.sign not in (-1, 1):
        raise ValueError(f"camera sign must be -1 or 1, got {config.camera.sign}")

    if config.scoring.policy not in SCORING_POLICIES:
        raise ValueError(
            f"scoring policy must be one of {SCORING_POLICIES}, got '{config.scoring.policy}'"
        )

    if len(config.palette.blocks) != PALETTE_SIZE:
        raise ValueError(
            f"palette must define {PALETTE_SIZE} block colors, got {len(config.palette.blocks)}"
        )

    if config.caps.max_frames <= 0:
        raise ValueError(f"max_frames must be positive, got {config.caps.max_frames}")
    if config.caps.max_observed_blocks <= 0:
        raise ValueError(
            f"max_observed_blocks must be positive, got {config.caps.max_observed_blocks}"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        block_height=float(board_data["block_height"]),
        starting_width=float(board_data["starting_width"]),
        foundation_width_ratio=float(board_data.get("foundation_width_ratio", 0.8)),
        min_block_width=float(board_data["min_block_width"]),
        overlap_noise_floor=float(board_data.get("overlap_noise_floor", 0.1))
    )

    motion_data = raw["motion"]
    motion = MotionConfig(
        period=float(motion_data["period"]),
        tick_rate=int(motion_data.get("tick_rate", 60))
    )

    timing = TimingConfig(
        spawn_delay=float(raw.get("timing", {}).get("spawn_delay", 0.2))
    )

    camera_data = raw["camera"]
    camera = CameraConfig(
        activation_level=int(camera_data["activation_level"]),
        sign=int(camera_data.get("sign", 1))
    )

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        policy=str(scoring_data.get("policy", "precision")),
        base_points=int(scoring_data.get("base_points", 10)),
        precision_weight=int(scoring_data.get("precision_weight", 50))
    )

    palette_data = raw["palette"]
    palette = PaletteConfig(
        foundation=_parse_color(palette_data["foundation"]),
        blocks=tuple(_parse_color(c) for c in palette_data["blocks"])
    )

    # Caps are optional for hosts that never build an environment
    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_frames=int(caps_data.get("max_frames", 36000)),
        max_observed_blocks=int(caps_data.get("max_observed_blocks", 64))
    )

    config = GameConfig(
        board=board,
        motion=motion,
        timing=timing,
        camera=camera,
        scoring=scoring,
        palette=palette,
        caps=caps
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
