"""
Tests for camera tracking.
"""

from dataclasses import replace

import pytest

from tower_stack.stack_core.camera import CameraModel, camera_offset
from tower_stack.stack_core.config_loader import CameraConfig, load_config


@pytest.fixture
def config():
    return load_config()


class TestCameraOffset:
    """Test offset magnitude per level."""

    def test_static_below_activation(self):
        for level in range(0, 9):
            assert camera_offset(level, activation_level=9, block_height=40.0) == 0.0

    def test_one_block_at_activation(self):
        assert camera_offset(9, activation_level=9, block_height=40.0) == 40.0

    def test_grows_one_block_per_level(self):
        assert camera_offset(10, activation_level=9, block_height=40.0) == 80.0
        assert camera_offset(15, activation_level=9, block_height=40.0) == 280.0

    def test_custom_activation_level(self):
        assert camera_offset(11, activation_level=12, block_height=40.0) == 0.0
        assert camera_offset(12, activation_level=12, block_height=40.0) == 40.0


class TestCameraModel:
    """Test the configured camera."""

    def test_default_direction(self, config):
        camera = CameraModel(config)
        assert camera.activation_level == 9
        assert camera.offset(8) == 0.0
        assert camera.offset(9) == 40.0
        assert camera.offset(10) == 80.0

    def test_inverted_direction(self, config):
        inverted = replace(config, camera=CameraConfig(activation_level=9, sign=-1))
        camera = CameraModel(inverted)
        assert camera.sign == -1
        assert camera.offset(9) == -40.0
        assert camera.offset(8) == 0.0
