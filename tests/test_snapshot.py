"""
Tests for snapshots, scene output and observation packing.
"""

from dataclasses import replace

import numpy as np
import pytest

from tower_stack.stack_core.block import Block
from tower_stack.stack_core.config_loader import TimingConfig, load_config
from tower_stack.stack_core.game import CoreGame
from tower_stack.stack_core.state import GameState
from tower_stack.stack_core.state_snapshot import GameSnapshot


@pytest.fixture
def tall_game():
    """A game with nine placed blocks and the camera engaged."""
    config = replace(load_config(), timing=TimingConfig(spawn_delay=0.0))
    game = CoreGame(config=config)
    game.start(400)
    for _ in range(8):
        game.tick(0.0, 400)
        game.place()
        game.tick(0.0, 400)
    return game


class TestBlockColors:
    """Test palette slot assignment."""

    def test_foundation_slot(self):
        assert Block(200.0, 40.0, 180.0, 40.0, level=0).color_index == 0

    def test_slots_cycle(self):
        assert Block(200.0, 80.0, 180.0, 40.0, level=1).color_index == 1
        assert Block(200.0, 80.0, 180.0, 40.0, level=10).color_index == 10
        assert Block(200.0, 80.0, 180.0, 40.0, level=11).color_index == 1


class TestScene:
    """Test renderer-facing rectangles."""

    def test_draw_order(self, tall_game):
        scene = tall_game.snapshot().scene()
        assert len(scene) == 10
        assert not any(rect.is_moving for rect in scene[:-1])
        assert scene[-1].is_moving
        assert scene[0].color_index == 0

    def test_camera_applied(self, tall_game):
        snapshot = tall_game.snapshot()
        assert snapshot.camera_offset_y == 40.0
        scene = snapshot.scene()
        assert scene[0].bottom == pytest.approx(0.0)
        assert scene[1].bottom == pytest.approx(40.0)

    def test_no_camera_before_activation(self):
        game = CoreGame()
        game.start(400)
        scene = game.snapshot().scene()
        assert scene[0].bottom == 40.0
        assert scene[0].left == pytest.approx(110.0)

    def test_idle_scene_is_empty(self):
        assert GameSnapshot.from_state(GameState()).scene() == []


class TestObservation:
    """Test fixed-size observation arrays."""

    def test_shapes_and_types(self, tall_game):
        obs = tall_game.snapshot().to_obs_dict(16)
        assert obs["block_x"].shape == (16,)
        assert obs["block_mask"].dtype == bool
        assert obs["score"].dtype == np.int64
        assert obs["airborne"] == 1
        assert obs["block_mask"].sum() == 9
        assert obs["current_level"] == 9

    def test_keeps_most_recent_blocks(self, tall_game):
        snapshot = tall_game.snapshot()
        obs = snapshot.to_obs_dict(4)
        assert obs["block_mask"].all()
        assert obs["block_y"][-1] == pytest.approx(snapshot.placed_blocks[-1].y)
        assert obs["support_x"] == pytest.approx(snapshot.placed_blocks[-1].x)

    def test_idle_observation(self):
        obs = GameSnapshot.from_state(GameState()).to_obs_dict(8)
        assert obs["airborne"] == 0
        assert obs["screen_width"] == 0.0
        assert not obs["block_mask"].any()
