"""
Core Game
=========

Main game orchestrator combining motion, trimming, scoring, camera and rules.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from tower_stack.stack_core.best_score import BestScoreStore, InMemoryBestScoreStore
from tower_stack.stack_core.config_loader import GameConfig, get_config
from tower_stack.stack_core.rules import GameRules, validate_dt, validate_viewport
from tower_stack.stack_core.scheduler import SpawnScheduler
from tower_stack.stack_core.scoring import ScoreModel
from tower_stack.stack_core import state as reducer
from tower_stack.stack_core.state import GameState, PlacementOutcome
from tower_stack.stack_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - The immutable game state and its reducer
    - The deferred spawn after each placement
    - Best score persistence

    The host feeds two event streams, ticks and taps, one call at a time.
    Each call runs to completion before the next one is accepted.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        score_model: Optional[ScoreModel] = None,
        best_score_store: Optional[BestScoreStore] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            score_model: Scoring policy. Built from config if None.
            best_score_store: Best score persistence. In-memory if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rules = GameRules(config, score_model)
        self._store = best_score_store if best_score_store is not None else InMemoryBestScoreStore()
        self._scheduler = SpawnScheduler()

        # Bumped on every reset so a spawn scheduled by an earlier game never fires
        self._generation: int = 0
        self._saved_best: int = self._store.load()
        self._state = GameState(best_score=self._saved_best)

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def state(self) -> GameState:
        """Current immutable game state."""
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def score(self) -> int:
        """Current score."""
        return self._state.score

    @property
    def best_score(self) -> int:
        return self._state.best_score

    @property
    def current_level(self) -> int:
        return self._state.current_level

    @property
    def is_started(self) -> bool:
        return self._state.is_started

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._state.is_game_over

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._state.termination_reason

    @property
    def spawn_pending(self) -> bool:
        """True while the next block is waiting out the spawn delay."""
        return self._scheduler.pending

    def start(self, screen_width: float) -> GameSnapshot:
        """
        Place the foundation and the first moving block.

        Calling start again on a started game does nothing.
        """
        if not self._state.is_started:
            logger.info("Starting game on viewport width %.1f", float(screen_width))
        self._state = reducer.start(self._state, screen_width, self._rules)
        return self.snapshot()

    def spawn_next(self, screen_width: float) -> GameSnapshot:
        """Spawn the next moving block now, skipping any pending delay."""
        screen_width = validate_viewport(screen_width)
        if not self._state.is_game_over and self._state.moving_block is None:
            self._scheduler.cancel()
        self._state = reducer.spawn_next(self._state, screen_width, self._rules)
        return self.snapshot()

    def tick(self, dt: float, screen_width: float) -> GameSnapshot:
        """
        Advance the game clock by `dt`.

        Repositions the airborne block, then lets the spawn delay elapse.
        A block spawned by this tick keeps its placeholder position until the
        next tick.
        """
        screen_width = validate_viewport(screen_width)
        dt = validate_dt(dt)

        self._state = reducer.tick(self._state, dt, screen_width, self._rules)

        if self._scheduler.advance(dt, self._generation):
            self._state = reducer.spawn_next(self._state, screen_width, self._rules)

        return self.snapshot()

    def place(self) -> Optional[PlacementOutcome]:
        """
        Drop the airborne block (the tap action).

        Returns:
            The placement outcome, or None if there was nothing to place.
        """
        transition = reducer.place(self._state, self._rules)
        self._state = transition.state
        outcome = transition.placement
        if outcome is None:
            return None

        if outcome.game_over:
            logger.info(
                "Game over at level %d (%s), final score %d",
                self._state.current_level, self._state.termination_reason, self._state.score
            )
            self.persist_best_score()
            return outcome

        logger.debug(
            "Placed level %d: width %.2f, +%d points, camera %.1f",
            outcome.trimmed.level, outcome.trimmed.width, outcome.points, outcome.camera_offset_y
        )
        if transition.spawn_requested:
            self._scheduler.schedule(self._rules.spawn_delay, self._generation)
        return outcome

    def reset(self, screen_width: Optional[float] = None) -> GameSnapshot:
        """
        Start a fresh game, keeping only the best score.

        Any pending spawn from the previous game is cancelled.

        Args:
            screen_width: Viewport for the new game. Defaults to the last
                viewport seen; if none was ever supplied the game stays idle.
        """
        if screen_width is None:
            screen_width = self._state.screen_width
        else:
            screen_width = validate_viewport(screen_width)

        best_score = self._state.best_score
        self._generation += 1
        self._scheduler.cancel()
        self._state = GameState(best_score=best_score)
        logger.info("Game reset (generation %d), best score %d", self._generation, best_score)

        if screen_width is not None:
            return self.start(screen_width)
        return self.snapshot()

    def dispatch(self, event: reducer.Event) -> Optional[PlacementOutcome]:
        """
        Route a reducer event through the game, with its side effects.

        Returns:
            The placement outcome for taps, None for other events.
        """
        if isinstance(event, reducer.Tick):
            self.tick(event.dt, event.screen_width)
        elif isinstance(event, reducer.Tap):
            return self.place()
        elif isinstance(event, reducer.SpawnNext):
            self.spawn_next(event.screen_width)
        elif isinstance(event, reducer.Start):
            self.start(event.screen_width)
        else:
            raise TypeError(f"Unknown event: {event!r}")
        return None

    def persist_best_score(self) -> None:
        """
        Save the best score if this game beat the stored one.

        Called automatically on game over. Hosts that quit mid-game call it
        themselves so a record set in an unfinished game is not lost.
        """
        best = self._state.best_score
        if best > self._saved_best:
            logger.info("New best score: %d (was %d)", best, self._saved_best)
            self._store.save(best)
            self._saved_best = best

    def snapshot(self) -> GameSnapshot:
        """Read-only view of the current state."""
        return GameSnapshot.from_state(self._state, spawn_pending=self._scheduler.pending)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._state.score,
            "best_score": self._state.best_score,
            "current_level": self._state.current_level,
            "current_block_width": self._state.current_block_width,
            "terminated_reason": self._state.termination_reason,
        }
