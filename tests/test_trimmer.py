"""
Tests for overlap trimming.
"""

import pytest

from tower_stack.stack_core.block import Block
from tower_stack.stack_core.rules import InvalidViewportError
from tower_stack.stack_core.trimmer import SupportNotFoundError, find_support, trim


def make_support(x=100.0, width=180.0):
    return Block(x=x, y=40.0, width=width, height=40.0, level=0)


def make_moving(x, width=180.0, y=80.0, level=1):
    return Block(x=x, y=y, width=width, height=40.0, level=level)


class TestOverlap:
    """Test intersection width and center."""

    def test_partial_overlap(self):
        """Support [10, 190] and moving [50, 230] keep [50, 190]."""
        trimmed = trim(make_moving(140.0), [make_support()], screen_width=400)
        assert trimmed.width == pytest.approx(140.0)
        assert trimmed.x == pytest.approx(120.0)
        assert trimmed.y == 80.0
        assert trimmed.level == 1

    def test_perfect_alignment_keeps_width(self):
        """A perfectly aligned block loses nothing."""
        trimmed = trim(make_moving(100.0), [make_support()], screen_width=400)
        assert trimmed.width == pytest.approx(180.0)
        assert trimmed.x == pytest.approx(100.0)

    def test_no_overlap_is_zero_width(self):
        """Disjoint intervals trim to nothing."""
        trimmed = trim(make_moving(400.0, width=100.0), [make_support()], screen_width=500)
        assert trimmed.width == 0.0

    def test_touching_edges_is_zero_width(self):
        """Edges that only touch do not overlap."""
        trimmed = trim(make_moving(240.0, width=100.0), [make_support()], screen_width=500)
        assert trimmed.width == 0.0

    def test_overlap_below_noise_floor_is_discarded(self):
        """A 0.05 sliver counts as no overlap."""
        moving = make_moving(189.95 + 50.0, width=100.0)
        trimmed = trim(moving, [make_support()], screen_width=500)
        assert trimmed.width == 0.0

    def test_overlap_above_noise_floor_is_kept(self):
        """A 0.15 sliver survives trimming."""
        moving = make_moving(189.85 + 50.0, width=100.0)
        trimmed = trim(moving, [make_support()], screen_width=500)
        assert trimmed.width == pytest.approx(0.15)
        assert trimmed.x == pytest.approx(189.925)

    def test_custom_noise_floor(self):
        """The noise floor is a parameter."""
        moving = make_moving(189.0 + 50.0, width=100.0)
        assert trim(moving, [make_support()], 500, noise_floor=2.0).width == 0.0
        assert trim(moving, [make_support()], 500, noise_floor=0.5).width == pytest.approx(1.0)

    @pytest.mark.parametrize("offset", [-170.0, -90.0, -12.5, 0.0, 3.3, 60.0, 179.0])
    def test_trimmed_block_lies_within_both_intervals(self, offset):
        """Trimmed width never grows and stays inside both intervals."""
        support = make_support()
        moving = make_moving(100.0 + offset)
        trimmed = trim(moving, [support], screen_width=400)
        assert trimmed.width <= moving.width
        assert trimmed.width <= support.width
        assert trimmed.left >= support.left - 1e-9
        assert trimmed.right <= support.right + 1e-9
        assert trimmed.left >= moving.left - 1e-9
        assert trimmed.right <= moving.right + 1e-9

    def test_center_clamped_to_viewport(self):
        """
        The surviving block is kept fully on screen.

        The clamp wins over containment: here the block is pushed left of
        the moving interval [60, 240].
        """
        trimmed = trim(make_moving(150.0), [make_support()], screen_width=170)
        assert trimmed.width == pytest.approx(130.0)
        assert trimmed.x == pytest.approx(105.0)
        assert trimmed.right <= 170.0
        assert trimmed.left < 60.0


class TestSupport:
    """Test support selection."""

    def test_picks_highest_block_below(self):
        """The support is the highest block whose top is at or below the moving bottom."""
        foundation = make_support()
        middle = Block(x=120.0, y=80.0, width=150.0, height=40.0, level=1)
        moving = make_moving(130.0, width=150.0, y=120.0, level=2)
        assert find_support(moving, [foundation, middle]) is middle

    def test_ignores_blocks_above(self):
        """Blocks higher than the moving block are never supports."""
        foundation = make_support()
        high = Block(x=100.0, y=400.0, width=180.0, height=40.0, level=5)
        assert find_support(make_moving(100.0), [foundation, high]) is foundation

    def test_missing_support_raises(self):
        """A moving block below every placed block is an internal fault."""
        moving = make_moving(100.0, y=0.0)
        with pytest.raises(SupportNotFoundError):
            trim(moving, [make_support()], screen_width=400)

    def test_empty_stack_raises(self):
        with pytest.raises(SupportNotFoundError):
            trim(make_moving(100.0), [], screen_width=400)


class TestViewport:
    """Test viewport validation."""

    @pytest.mark.parametrize("screen_width", [0, -10.0, float("nan"), float("inf")])
    def test_invalid_viewport_rejected(self, screen_width):
        with pytest.raises(InvalidViewportError):
            trim(make_moving(100.0), [make_support()], screen_width=screen_width)
