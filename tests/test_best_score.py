"""
Tests for best score storage.
"""

import json

from tower_stack.stack_core.best_score import InMemoryBestScoreStore, JsonBestScoreStore
from tower_stack.stack_core.game import CoreGame


class TestInMemoryStore:

    def test_initial_value(self):
        assert InMemoryBestScoreStore().load() == 0
        assert InMemoryBestScoreStore(initial=42).load() == 42

    def test_save(self):
        store = InMemoryBestScoreStore()
        store.save(120)
        assert store.load() == 120
        assert store.save_count == 1


class TestJsonStore:
    """Test the file-backed store."""

    def test_missing_file_loads_zero(self, tmp_path):
        assert JsonBestScoreStore(tmp_path / "best.json").load() == 0

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "best.json"
        JsonBestScoreStore(path).save(540)
        assert json.loads(path.read_text()) == {"best_score": 540}
        assert JsonBestScoreStore(path).load() == 540

    def test_corrupt_file_loads_zero(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text("{not json")
        assert JsonBestScoreStore(path).load() == 0

    def test_wrong_shape_loads_zero(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text("[1, 2, 3]")
        assert JsonBestScoreStore(path).load() == 0
        path.write_text('{"best_score": "lots"}')
        assert JsonBestScoreStore(path).load() == 0

    def test_game_reads_stored_value(self, tmp_path):
        path = tmp_path / "best.json"
        JsonBestScoreStore(path).save(777)
        game = CoreGame(best_score_store=JsonBestScoreStore(path))
        assert game.best_score == 777
        game.start(400)
        assert game.snapshot().best_score == 777
