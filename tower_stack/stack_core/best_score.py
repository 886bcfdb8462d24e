"""
Best Score Storage
==================

Persistence collaborators for the best score. The game only reads the value
once per session and writes it after a game over that beat it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class BestScoreStore:
    """Interface for best score persistence."""

    def load(self) -> int:
        raise NotImplementedError

    def save(self, best_score: int) -> None:
        raise NotImplementedError


class InMemoryBestScoreStore(BestScoreStore):
    """Keeps the best score for the lifetime of the process only."""

    def __init__(self, initial: int = 0):
        self._value = max(0, int(initial))
        self.save_count = 0

    def load(self) -> int:
        return self._value

    def save(self, best_score: int) -> None:
        self._value = int(best_score)
        self.save_count += 1


class JsonBestScoreStore(BestScoreStore):
    """
    Stores the best score in a small JSON file: {"best_score": n}.

    A missing or unreadable file counts as a best score of 0.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> int:
        if not self._path.exists():
            return 0
        try:
            with open(self._path, "r") as f:
                data = json.load(f)
            return max(0, int(data.get("best_score", 0)))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable best score file %s: %s", self._path, e)
            return 0

    def save(self, best_score: int) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump({"best_score": int(best_score)}, f, indent=2)
        logger.info("Best score %d saved to %s", best_score, self._path)
