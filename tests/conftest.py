"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import (
    Cell,
    Difficulty,
    GameConfig,
    Grid,
    MinefieldEngine,
    ScoreConfig,
)


# ============================================================================
# Clock
# ============================================================================

class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at t=1000ms."""
    return FakeClock()


# ============================================================================
# Engine Fixtures
# ============================================================================

# Mirrors the NOVICE table so expected scores are easy to compute by hand
TEST_SCORES = ScoreConfig(
    base_reveal_score=10,
    combo_multiplier=0.5,
    combo_time_threshold_ms=1000,
    time_bonus_multiplier=0.01,
    completion_bonus=500,
    perfect_flag_bonus=200,
)

LayoutFactory = Callable[..., MinefieldEngine]


@pytest.fixture
def make_engine(clock: FakeClock) -> LayoutFactory:
    """
    Build an engine with mines at fixed positions.

    Usage: make_engine(width, height, [(x, y), ...])
    """
    def factory(
        width: int,
        height: int,
        mines: List[Tuple[int, int]],
        on_game_over: Optional[Callable] = None,
    ) -> MinefieldEngine:
        engine = MinefieldEngine(
            GameConfig(width, height, len(mines)),
            score_config=TEST_SCORES,
            clock=clock,
            on_game_over=on_game_over,
        )
        engine.load_layout(mines)
        return engine

    return factory


@pytest.fixture
def default_engine(clock: FakeClock) -> MinefieldEngine:
    """Create a seeded 9x9 engine with 10 mines."""
    return MinefieldEngine(GameConfig(9, 9, 10), clock=clock, seed=1234)


@pytest.fixture
def empty_engine(clock: FakeClock) -> MinefieldEngine:
    """Create a 5x5 engine with no mines for cascade testing."""
    return MinefieldEngine(
        GameConfig(5, 5, 0), score_config=TEST_SCORES, clock=clock, seed=7
    )


@pytest.fixture
def corner_mine_engine(make_engine: LayoutFactory) -> MinefieldEngine:
    """9x9 board with its only mine in the bottom-right corner."""
    return make_engine(9, 9, [(8, 8)])


@pytest.fixture
def strip_engine(make_engine: LayoutFactory) -> MinefieldEngine:
    """
    5x1 strip with a mine in the middle.

    Numbers: 0 1 * 1 0
    """
    return make_engine(5, 1, [(2, 0)])


# ============================================================================
# Grid and Cell Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def grid() -> Grid:
    """Create an empty 9x9 grid."""
    return Grid(9, 9)


@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(2, 3)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(0, 0, is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> GameConfig:
    """Create a valid board configuration."""
    return GameConfig(9, 9, 10, Difficulty.NOVICE)


@pytest.fixture
def expert_config() -> GameConfig:
    """Largest preset configuration."""
    return GameConfig(30, 16, 99, Difficulty.HACKER)
