"""
Tests for the deferred spawn scheduler.
"""

from tower_stack.stack_core.scheduler import SpawnScheduler


class TestSpawnScheduler:
    """Test scheduling, firing and cancellation."""

    def test_idle_never_fires(self):
        scheduler = SpawnScheduler()
        assert not scheduler.pending
        assert scheduler.advance(10.0, generation=0) is False

    def test_fires_once_delay_elapsed(self):
        """A spawn fires on the tick that uses up its delay, and only once."""
        scheduler = SpawnScheduler()
        scheduler.schedule(0.2, generation=0)
        assert scheduler.advance(0.15, generation=0) is False
        assert scheduler.pending
        assert scheduler.advance(0.15, generation=0) is True
        assert not scheduler.pending
        assert scheduler.advance(0.15, generation=0) is False

    def test_zero_delay_fires_on_next_advance(self):
        scheduler = SpawnScheduler()
        scheduler.schedule(0.0, generation=3)
        assert scheduler.advance(0.0, generation=3) is True

    def test_cancel_drops_pending(self):
        scheduler = SpawnScheduler()
        scheduler.schedule(0.2, generation=0)
        scheduler.cancel()
        assert not scheduler.pending
        assert scheduler.advance(1.0, generation=0) is False

    def test_stale_generation_never_fires(self):
        """A spawn scheduled by an earlier game is discarded."""
        scheduler = SpawnScheduler()
        scheduler.schedule(0.2, generation=0)
        assert scheduler.advance(1.0, generation=1) is False
        assert not scheduler.pending

    def test_reschedule_replaces_pending(self):
        scheduler = SpawnScheduler()
        scheduler.schedule(0.2, generation=0)
        scheduler.schedule(1.0, generation=1)
        assert scheduler.generation == 1
        assert scheduler.remaining == 1.0
        assert scheduler.advance(0.5, generation=1) is False
