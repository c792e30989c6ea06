"""
Minefield engine.

Provides the grid model, mine placement, cascading reveal, flag cycling,
win/loss detection and combo scoring of a Minesweeper-style game.
"""
from .cell import Cell, CellState
from .config import (
    Difficulty,
    GameConfig,
    ScoreConfig,
    DIFFICULTY_CONFIGS,
    SCORE_CONFIGS,
    NOVICE,
    AGENT,
    HACKER,
)
from .errors import MinefieldError, OutOfBoundsError, ConfigurationError
from .grid import Grid
from .scoring import ScoreKeeper
from .engine import (
    GameSummary,
    MinefieldEngine,
    Phase,
    RevealOutcome,
    RunState,
    is_won,
)
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Difficulty",
    "GameConfig",
    "ScoreConfig",
    "DIFFICULTY_CONFIGS",
    "SCORE_CONFIGS",
    "NOVICE",
    "AGENT",
    "HACKER",
    "MinefieldError",
    "OutOfBoundsError",
    "ConfigurationError",
    "Grid",
    "ScoreKeeper",
    "GameSummary",
    "MinefieldEngine",
    "Phase",
    "RevealOutcome",
    "RunState",
    "is_won",
    "MinesweeperEnv",
]
