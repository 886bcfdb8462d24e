"""
Tests for replay recording and playback.
"""

import pytest

from tower_stack.stack_core.game import CoreGame
from tower_stack.stack_core.replay_recorder import (
    ReplayRecorder,
    generate_replay_filename,
    load_replay,
    replay,
)


@pytest.fixture
def recorder():
    """Recorder holding a short session with two placements."""
    recorder = ReplayRecorder(CoreGame(), name="test")
    recorder.start(400)
    recorder.tick(0.0, 400)
    recorder.place()
    recorder.tick(0.25, 400)
    recorder.tick(0.5, 400)
    recorder.place()
    for _ in range(30):
        recorder.tick(1 / 60, 400)
    return recorder


class TestReplayRecorder:

    def test_records_events(self, recorder):
        kinds = [event["type"] for event in recorder.events]
        assert kinds[:3] == ["start", "tick", "tap"]
        assert len(kinds) == 36

    def test_replay_reproduces_game(self, recorder):
        data = recorder.get_replay_data()
        game = replay(data)
        assert game.score == recorder.game.score
        assert game.state.placed_blocks == recorder.game.state.placed_blocks
        assert game.state.moving_block == recorder.game.state.moving_block

    def test_save_and_load(self, recorder, tmp_path):
        path = recorder.save(tmp_path / "session.json")
        data = load_replay(path)
        assert data["name"] == "test"
        assert data["final_score"] == recorder.game.score
        assert replay(data).score == recorder.game.score

    def test_refuses_overwrite(self, recorder, tmp_path):
        path = recorder.save(tmp_path / "session.json")
        with pytest.raises(FileExistsError):
            recorder.save(path, overwrite=False)

    def test_generated_filename(self, tmp_path):
        path = generate_replay_filename("run", directory=tmp_path)
        assert path.parent == tmp_path
        assert path.name.startswith("run_")
        assert path.suffix == ".json"

    def test_reset_recorded(self, recorder):
        recorder.reset()
        game = replay(recorder.get_replay_data())
        assert game.score == 0
        assert game.generation == 1


class TestReplayValidation:

    def test_config_mismatch(self, recorder):
        data = recorder.get_replay_data()
        data["config_hash"] = "deadbeef"
        with pytest.raises(ValueError):
            replay(data)

    def test_divergence_detected(self, recorder):
        data = recorder.get_replay_data()
        data["final_score"] += 1
        with pytest.raises(ValueError):
            replay(data)

    def test_unknown_event(self, recorder):
        data = recorder.get_replay_data()
        data["events"].append({"type": "jump"})
        with pytest.raises(ValueError):
            replay(data, strict=False)

    def test_version_checked(self, recorder, tmp_path):
        path = recorder.save(tmp_path / "session.json")
        path.write_text(path.read_text().replace('"version": 1', '"version": 99'))
        with pytest.raises(ValueError):
            load_replay(path)
