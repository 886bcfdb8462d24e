"""
Tower Stack
===========

Deterministic core of a block-stacking precision game. A block sweeps back
and forth above the tower; tapping drops it, and only the part that overlaps
the block beneath survives. The game ends when nothing usable survives.

The package exposes the game logic only. Hosts supply the viewport width and
a clock tick every frame, forward taps, and draw the scene the core returns.

All tunable parameters are in game_config.yaml.
"""
