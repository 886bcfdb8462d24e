"""
Scoring System
==============

Swappable score policies for successful placements.

Two policies are supported and one is selected per session through
`scoring.policy` in game_config.yaml:

- precision: (base + round(width_ratio * weight)) * new_level
- linear:    one point per placement, so the running score equals
             new_level - 1, the number of blocks placed on the foundation
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from tower_stack.stack_core.block import Block
from tower_stack.stack_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    level: int
    width_ratio: float

    def __repr__(self) -> str:
        return f"ScoreEvent(level={self.level}, points={self.points}, ratio={self.width_ratio:.3f})"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ScoreModel:
    """
    Base class for scoring policies.

    Subclasses implement `score_placement`. Models are stateless; the running
    total lives in the game state.
    """

    name = "base"

    def score_placement(
        self,
        trimmed: Block,
        previous: Optional[Block],
        new_level: int
    ) -> int:
        """
        Points awarded for placing `trimmed` on top of `previous`.

        Args:
            trimmed: The block that survived trimming.
            previous: The last block of the stack before this placement,
                or None when nothing precedes it.
            new_level: Level counter after this placement.
        """
        raise NotImplementedError

    def event(self, trimmed: Block, previous: Optional[Block], new_level: int) -> ScoreEvent:
        """Score a placement and wrap it in a ScoreEvent."""
        ratio = 0.0
        if previous is not None and previous.width > 0:
            ratio = trimmed.width / previous.width
        return ScoreEvent(
            points=self.score_placement(trimmed, previous, new_level),
            level=new_level,
            width_ratio=ratio
        )


class PrecisionScoreModel(ScoreModel):
    """Rewards keeping as much width as possible, scaled by level."""

    name = "precision"

    def __init__(self, base_points: int = 10, precision_weight: int = 50):
        self._base_points = base_points
        self._precision_weight = precision_weight

    def score_placement(self, trimmed, previous, new_level):
        # Nothing is scored for the foundation
        if previous is None or previous.width <= 0:
            return 0
        ratio = trimmed.width / previous.width
        precision_bonus = _round_half_up(ratio * self._precision_weight)
        return (self._base_points + precision_bonus) * new_level


class LinearScoreModel(ScoreModel):
    """
    One point per block placed after the foundation.

    The per-placement delta is deliberately not max(0, new_level - 1); it is
    the running total that equals new_level - 1.
    """

    name = "linear"

    def score_placement(self, trimmed, previous, new_level):
        # Keeps the running total at max(0, new_level - 1)
        return 1 if new_level > 1 else 0


def make_score_model(config: Optional[GameConfig] = None) -> ScoreModel:
    """
    Build the scoring policy named in the configuration.

    Raises:
        ValueError: If the policy name is unknown.
    """
    if config is None:
        config = get_config()

    policy = config.scoring.policy
    if policy == PrecisionScoreModel.name:
        return PrecisionScoreModel(
            base_points=config.scoring.base_points,
            precision_weight=config.scoring.precision_weight
        )
    if policy == LinearScoreModel.name:
        return LinearScoreModel()
    raise ValueError(f"Unknown scoring policy: '{policy}'")
