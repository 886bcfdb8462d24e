"""
Baseline Aligner Agent Package

A simple heuristic agent that taps when the moving block lines up with
the top of the tower. Serves as a benchmark and example.
"""

from .agent import AlignerAgent, create_agent

__all__ = ["AlignerAgent", "create_agent"]
