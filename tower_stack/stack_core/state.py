"""
Game State
==========

Immutable game state and the reducer that applies events to it.

Every transition is `(state, event) -> state`. The reducer never touches
clocks, timers or storage; the orchestrating CoreGame feeds it events one
at a time and owns everything with side effects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from tower_stack.stack_core.block import Block, FOUNDATION_LEVEL
from tower_stack.stack_core.rules import GameRules, validate_dt, validate_viewport
from tower_stack.stack_core.scoring import ScoreEvent
from tower_stack.stack_core.trimmer import trim

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """
    The single owned aggregate of a game session.

    `current_level` is 0 before the foundation exists and equals
    `len(placed_blocks)` afterwards. Once `is_game_over` is set the stack,
    the moving block, the score and the level never change again.
    """
    placed_blocks: Tuple[Block, ...] = ()
    moving_block: Optional[Block] = None
    current_level: int = 0
    current_block_width: float = 0.0
    score: int = 0
    best_score: int = 0
    camera_offset_y: float = 0.0
    phase: float = 0.0
    screen_width: Optional[float] = None
    is_started: bool = False
    is_game_over: bool = False
    termination_reason: str = ""

    @property
    def top_block(self) -> Optional[Block]:
        """Last placed block, or None before the foundation exists."""
        return self.placed_blocks[-1] if self.placed_blocks else None

    @property
    def stack_top(self) -> float:
        """Y coordinate of the highest placed block's top edge."""
        top = 0.0
        for block in self.placed_blocks:
            if block.top > top:
                top = block.top
        return top


# Events -------------------------------------------------------------------

@dataclass(frozen=True)
class Start:
    screen_width: float


@dataclass(frozen=True)
class Tick:
    dt: float
    screen_width: float


@dataclass(frozen=True)
class Tap:
    pass


@dataclass(frozen=True)
class SpawnNext:
    screen_width: float


Event = Union[Start, Tick, Tap, SpawnNext]


@dataclass(frozen=True)
class PlacementOutcome:
    """What a tap did to the game."""
    trimmed: Block
    game_over: bool
    score_event: Optional[ScoreEvent] = None
    camera_offset_y: float = 0.0

    @property
    def points(self) -> int:
        return self.score_event.points if self.score_event is not None else 0


@dataclass(frozen=True)
class Transition:
    """Result of reducing one event."""
    state: GameState
    placement: Optional[PlacementOutcome] = None

    @property
    def spawn_requested(self) -> bool:
        """True when a successful placement wants the next block scheduled."""
        return self.placement is not None and not self.placement.game_over


# Reducer ------------------------------------------------------------------

def start(state: GameState, screen_width: float, rules: GameRules) -> GameState:
    """Place the foundation and spawn the first moving block. Idempotent."""
    screen_width = validate_viewport(screen_width)
    if state.is_started:
        return state

    width = rules.foundation_width(screen_width)
    foundation = Block(
        x=screen_width / 2,
        y=rules.block_height,
        width=width,
        height=rules.block_height,
        level=FOUNDATION_LEVEL
    )
    state = replace(
        state,
        placed_blocks=(foundation,),
        current_level=1,
        current_block_width=width,
        screen_width=screen_width,
        is_started=True
    )
    logger.debug("Foundation placed: width %.2f on viewport %.2f", width, screen_width)
    return spawn_next(state, screen_width, rules)


def spawn_next(state: GameState, screen_width: float, rules: GameRules) -> GameState:
    """
    Put a new moving block on top of the stack.

    The block starts at the far edge of the viewport; the next tick moves
    it onto the motion curve. No-op before start, after game over, or while
    a block is already airborne.
    """
    screen_width = validate_viewport(screen_width)
    if not state.is_started or state.is_game_over or state.moving_block is not None:
        return state

    moving = Block(
        x=screen_width,
        y=state.stack_top,
        width=state.current_block_width,
        height=rules.block_height,
        level=state.current_level
    )
    return replace(state, moving_block=moving, screen_width=screen_width)


def tick(state: GameState, dt: float, screen_width: float, rules: GameRules) -> GameState:
    """Advance the motion clock and reposition the airborne block."""
    screen_width = validate_viewport(screen_width)
    dt = validate_dt(dt)
    if state.is_game_over:
        return state

    phase = rules.motion.advance(state.phase, dt)
    moving = state.moving_block
    if moving is not None:
        moving = moving.with_x(rules.motion.position(phase, moving.width, screen_width))
    return replace(state, phase=phase, moving_block=moving, screen_width=screen_width)


def place(state: GameState, rules: GameRules) -> Transition:
    """Drop the airborne block onto the stack. No-op without one."""
    moving = state.moving_block
    if moving is None or state.is_game_over:
        return Transition(state)

    trimmed = trim(moving, state.placed_blocks, state.screen_width, rules.noise_floor)

    result = rules.termination.check_placement(trimmed)
    if result.terminated:
        state = replace(
            state,
            moving_block=None,
            is_game_over=True,
            termination_reason=result.reason,
            best_score=max(state.best_score, state.score)
        )
        return Transition(state, PlacementOutcome(
            trimmed=trimmed,
            game_over=True,
            camera_offset_y=state.camera_offset_y
        ))

    new_level = state.current_level + 1
    score_event = rules.score_model.event(trimmed, state.top_block, new_level)
    score = state.score + score_event.points
    camera_offset_y = rules.camera.offset(new_level)

    state = replace(
        state,
        placed_blocks=state.placed_blocks + (trimmed,),
        moving_block=None,
        current_level=new_level,
        current_block_width=trimmed.width,
        score=score,
        best_score=max(state.best_score, score),
        camera_offset_y=camera_offset_y
    )
    return Transition(state, PlacementOutcome(
        trimmed=trimmed,
        game_over=False,
        score_event=score_event,
        camera_offset_y=camera_offset_y
    ))


def reduce(state: GameState, event: Event, rules: GameRules) -> Transition:
    """Apply a single event to the state."""
    if isinstance(event, Tick):
        return Transition(tick(state, event.dt, event.screen_width, rules))
    if isinstance(event, Tap):
        return place(state, rules)
    if isinstance(event, SpawnNext):
        return Transition(spawn_next(state, event.screen_width, rules))
    if isinstance(event, Start):
        return Transition(start(state, event.screen_width, rules))
    raise TypeError(f"Unknown event: {event!r}")
