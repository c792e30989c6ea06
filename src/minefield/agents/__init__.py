"""
Baseline solvers for the minefield engine.

- BaseAgent: interface every solver implements
- RandomAgent: uniform random reveals, the baseline to beat
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
]
