"""
Baseline Aligner Agent - Taps when the moving block is over the tower.

This is a simple heuristic agent that compares the moving block's center
with the center of the block it would land on and taps once they are close.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark to compare other agents against
3. A verification that the environment API works correctly

Strategy:
- Wait while no block is airborne
- Measure the horizontal distance between moving_x and support_x
- Tap when the distance is within a tolerance, scaled by the block width
"""

import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

ACTION_WAIT = 0
ACTION_TAP = 1


class AlignerAgent:
    """
    Baseline agent that taps on alignment.

    The tolerance must exceed half the distance the block travels in one
    frame, otherwise the agent can step over the aligned position.
    """

    def __init__(self, tolerance_ratio: float = 0.02, min_tolerance: float = 2.0):
        """
        Initialize the agent.

        Args:
            tolerance_ratio: Allowed offset as a fraction of the block width.
            min_tolerance: Lower bound on the allowed offset, in world units.
        """
        self.tolerance_ratio = tolerance_ratio
        self.min_tolerance = min_tolerance

    def reset(self) -> None:
        """Reset agent state for a new episode. The agent is stateless."""

    def act(self, observation: Dict[str, Any]) -> int:
        """
        Choose whether to tap this frame.

        Args:
            observation: Dict of numpy arrays from the environment.

        Returns:
            1 to tap, 0 to wait.
        """
        if not int(observation["airborne"]):
            return ACTION_WAIT

        moving_x = float(observation["moving_x"])
        support_x = float(observation["support_x"])
        width = float(observation["moving_width"])

        tolerance = max(self.min_tolerance, self.tolerance_ratio * width)
        offset = abs(moving_x - support_x)
        if offset <= tolerance:
            logger.debug("Tap: offset %.2f within %.2f (width %.2f)", offset, tolerance, width)
            return ACTION_TAP
        return ACTION_WAIT


# Convenience function to create agent
def create_agent(**kwargs) -> AlignerAgent:
    """Factory function to create an agent instance."""
    return AlignerAgent(**kwargs)
