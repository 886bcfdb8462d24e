"""
Replay Recorder
===============

Records the event stream fed to a CoreGame so a session can be replayed.

The game is deterministic given its event sequence: the same ticks and taps,
with the same durations and viewport widths, always produce the same tower.

Usage:
    from tower_stack.stack_core import CoreGame, ReplayRecorder

    recorder = ReplayRecorder(CoreGame(), name="session")
    recorder.start(400)
    recorder.tick(1 / 60, 400)
    recorder.place()
    recorder.save("session.json")

    game = replay(load_replay("session.json"))
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tower_stack.stack_core.config_loader import GameConfig
from tower_stack.stack_core.game import CoreGame
from tower_stack.stack_core.state import PlacementOutcome
from tower_stack.stack_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)

REPLAY_VERSION = 1


def generate_replay_filename(
    name: str = "replay",
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {name}_{YYYYMMDD_HHMMSS}.json
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"{name}_{timestamp}.json"
    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: GameConfig) -> str:
    """Hash of every parameter that affects gameplay."""
    hash_data = {
        "board": asdict(config.board),
        "motion": asdict(config.motion),
        "timing": asdict(config.timing),
        "camera": asdict(config.camera),
        "scoring": asdict(config.scoring),
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records game calls for replay.

    Exposes the same start/tick/place/reset calls as CoreGame and forwards
    them after appending them to the event log.
    """

    def __init__(self, game: CoreGame, name: str = "unknown"):
        self.game = game
        self.name = name
        self._events: List[Dict[str, Any]] = []
        self._config_hash = compute_config_hash(game.config)

    @property
    def events(self) -> List[Dict[str, Any]]:
        return list(self._events)

    def start(self, screen_width: float) -> GameSnapshot:
        snapshot = self.game.start(screen_width)
        self._events.append({"type": "start", "screen_width": float(screen_width)})
        return snapshot

    def tick(self, dt: float, screen_width: float) -> GameSnapshot:
        snapshot = self.game.tick(dt, screen_width)
        self._events.append({"type": "tick", "dt": float(dt), "screen_width": float(screen_width)})
        return snapshot

    def place(self) -> Optional[PlacementOutcome]:
        outcome = self.game.place()
        self._events.append({"type": "tap"})
        return outcome

    def reset(self, screen_width: Optional[float] = None) -> GameSnapshot:
        snapshot = self.game.reset(screen_width)
        event: Dict[str, Any] = {"type": "reset"}
        if screen_width is not None:
            event["screen_width"] = float(screen_width)
        self._events.append(event)
        return snapshot

    def get_replay_data(self) -> Dict[str, Any]:
        """
        Get the current replay data as a dictionary.

        Returns:
            Dictionary containing all replay data.
        """
        state = self.game.state
        return {
            "version": REPLAY_VERSION,
            "name": self.name,
            "config_hash": self._config_hash,
            "events": self.events,
            "final_score": state.score,
            "final_level": state.current_level,
            "best_score": state.best_score,
            "game_over": state.is_game_over,
        }

    def save(
        self,
        path: Optional[Union[str, Path]] = None,
        overwrite: bool = True,
        directory: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Path to save the replay. If None, auto-generates a timestamped name.
            overwrite: If True, overwrite existing file.
            directory: Directory for auto-generated filename (only used if path is None).

        Returns:
            Path where the replay was saved.
        """
        if path is None:
            path = generate_replay_filename(name=self.name, directory=directory)
        else:
            path = Path(path)

        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)

        replay_data = self.get_replay_data()
        with open(path, "w") as f:
            json.dump(replay_data, f, indent=2)

        logger.info(
            "Replay saved: %s (%d events, final score %d)",
            path, len(self._events), replay_data["final_score"]
        )
        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """Load replay data saved by ReplayRecorder.save()."""
    with open(path, "r") as f:
        data = json.load(f)
    if data.get("version") != REPLAY_VERSION:
        raise ValueError(f"Unsupported replay version: {data.get('version')}")
    return data


def replay(
    data: Dict[str, Any],
    config: Optional[GameConfig] = None,
    strict: bool = True
) -> CoreGame:
    """
    Re-feed a recorded event stream to a fresh game.

    Args:
        data: Replay data from get_replay_data() or load_replay().
        config: Game configuration. Uses default if None.
        strict: If True, refuse replays recorded under a different config and
            check the final score matches the recording.

    Returns:
        The game after all events have been applied.

    Raises:
        ValueError: On a config mismatch, an unknown event, or (strict) a
            final score that differs from the recording.
    """
    game = CoreGame(config=config)

    if strict and data.get("config_hash") != compute_config_hash(game.config):
        raise ValueError(
            f"Replay config hash {data.get('config_hash')} does not match "
            f"current config {compute_config_hash(game.config)}"
        )

    for event in data["events"]:
        kind = event.get("type")
        if kind == "start":
            game.start(event["screen_width"])
        elif kind == "tick":
            game.tick(event["dt"], event["screen_width"])
        elif kind == "tap":
            game.place()
        elif kind == "reset":
            game.reset(event.get("screen_width"))
        else:
            raise ValueError(f"Unknown replay event: {event!r}")

    if strict and game.score != data.get("final_score"):
        raise ValueError(
            f"Replay diverged: final score {game.score}, recorded {data.get('final_score')}"
        )
    return game
