"""
Overlap Trimmer
===============

Reduces a moving block to its horizontal intersection with the block beneath.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from tower_stack.stack_core.block import Block
from tower_stack.stack_core.rules import validate_viewport

logger = logging.getLogger(__name__)

DEFAULT_NOISE_FLOOR = 0.1


class SupportNotFoundError(RuntimeError):
    """No placed block lies beneath the moving block.

    A foundation always exists under any airborne block, so this is an
    internal-consistency fault and never a normal game over.
    """


def find_support(moving: Block, stack: Sequence[Block]) -> Optional[Block]:
    """
    Highest block whose top does not exceed the moving block's bottom.

    Returns:
        The support block, or None if the stack has no candidate.
    """
    support = None
    best_top = float("-inf")
    for block in stack:
        top = block.top
        if top <= moving.y and top > best_top:
            best_top = top
            support = block
    return support


def trim(
    moving: Block,
    stack: Sequence[Block],
    screen_width: float,
    noise_floor: float = DEFAULT_NOISE_FLOOR
) -> Block:
    """
    Trim `moving` to the part that overlaps its support block.

    Args:
        moving: The airborne block at the moment of placement.
        stack: Placed blocks, foundation first.
        screen_width: Current viewport width, used to clamp the result.
        noise_floor: Overlaps narrower than this are treated as zero.

    Returns:
        The trimmed block. A width of 0 means nothing survived.

    Raises:
        SupportNotFoundError: If no block lies beneath `moving`.
        InvalidViewportError: If `screen_width` is not positive and finite.
    """
    screen_width = validate_viewport(screen_width)

    support = find_support(moving, stack)
    if support is None:
        raise SupportNotFoundError(
            f"No support block under level {moving.level} at y={moving.y}"
        )

    overlap_left = max(moving.left, support.left)
    overlap_right = min(moving.right, support.right)
    width = max(0.0, overlap_right - overlap_left)

    if width < noise_floor:
        width = 0.0

    if width == 0.0:
        logger.debug(
            "No overlap: moving [%.2f, %.2f] support [%.2f, %.2f]",
            moving.left, moving.right, support.left, support.right
        )
        return moving.with_width(0.0)

    midpoint = (overlap_left + overlap_right) / 2.0
    center = max(width / 2.0, min(screen_width - width / 2.0, midpoint))

    logger.debug(
        "Trimmed level %d: width %.2f -> %.2f, center %.2f",
        moving.level, moving.width, width, center
    )
    return Block(
        x=center,
        y=moving.y,
        width=width,
        height=moving.height,
        level=moving.level
    )
