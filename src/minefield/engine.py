"""
Minefield engine.

Owns the grid and run state of one game and applies the reveal, flag and
reset commands to them. Every command runs to completion before returning,
including the whole flood fill of a cascade, so callers never observe a
half-opened region.
"""
import dataclasses
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, CellState, NEXT_MARK
from .config import Difficulty, GameConfig, ScoreConfig, SCORE_CONFIGS
from .errors import ConfigurationError
from .grid import Grid
from .scoring import ScoreKeeper

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


# ============================================================================
# Constants
# ============================================================================

class Phase(Enum):
    """Lifecycle of a single game."""

    READY = auto()
    ACTIVE = auto()
    SUCCESS = auto()
    FAILED = auto()


TERMINAL_PHASES = (Phase.SUCCESS, Phase.FAILED)


class RevealOutcome(Enum):
    """Result of a reveal command."""

    REJECTED = auto()
    OPENED = auto()
    EXPLODED = auto()
    WON = auto()


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


# ============================================================================
# Run State
# ============================================================================

@dataclass
class RunState:
    """
    Counters and lifecycle of the current game.

    Attributes:
        phase: Current lifecycle phase.
        first_click_pending: True until the first accepted reveal.
        start_time: Clock value of the first accepted reveal.
        end_time: Clock value when the game was won or lost.
        cells_revealed: Safe cells revealed so far.
        flags_placed: Cells currently flagged.
        score: Running score (final score once won).
        combo_count: Length of the current cascade combo.
        best_combo: Longest combo reached this game.
        last_reveal_time: Clock value of the last combo-relevant reveal.
    """

    phase: Phase = Phase.READY
    first_click_pending: bool = True
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    cells_revealed: int = 0
    flags_placed: int = 0
    score: int = 0
    combo_count: int = 0
    best_combo: int = 0
    last_reveal_time: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        """Check if the game has ended."""
        return self.phase in TERMINAL_PHASES


@dataclass(frozen=True)
class GameSummary:
    """Finished-game record handed to statistics collaborators."""

    difficulty: Difficulty
    start_time: Optional[int]
    end_time: Optional[int]
    duration_ms: int
    success: bool
    cells_revealed: int
    flags_used: int
    score: int
    best_combo: int


def is_won(cells_revealed: int, config: GameConfig) -> bool:
    """Win predicate: every safe cell has been revealed."""
    return cells_revealed == config.safe_cells


# ============================================================================
# Engine
# ============================================================================

class MinefieldEngine:
    """
    Authoritative state machine for one minefield.

    Mines are placed on the first accepted reveal, never on the revealed
    cell. The engine holds no global state; time comes from ``clock`` and
    randomness from ``rng``, so independent instances never interfere.

    Not thread-safe: callers must serialize access to one instance.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        score_config: Optional[ScoreConfig] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        on_game_over: Optional[Callable[[GameSummary], None]] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            score_config: Score table (default: the config's difficulty).
            clock: Callable returning milliseconds (default: wall clock).
            rng: Random source for mine placement.
            seed: Seed for a private random source when rng is not given.
            on_game_over: Called with a GameSummary whenever a game ends.
        """
        self.config = config or GameConfig()
        self.score_config = score_config or SCORE_CONFIGS[self.config.difficulty]
        self._clock = clock or wall_clock_ms
        self._rng = rng or random.Random(seed)
        self._on_game_over = on_game_over
        self._scorer = ScoreKeeper(self.score_config)
        self._grid = Grid(self.config.width, self.config.height)
        self._run = RunState()

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Start a new round with the same configuration.

        Args:
            seed: Switch to a private random source seeded with this
                value. An injected rng is left untouched, so engines
                sharing one are not affected.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._grid = Grid(self.config.width, self.config.height)
        self._run = RunState()

    def load_layout(self, positions: Sequence[Tuple[int, int]]) -> bool:
        """
        Place mines at fixed positions before the first reveal.

        Used to replay recorded boards. The first reveal will not move
        mines, so a reveal on one of these positions explodes.

        Args:
            positions: Exactly ``mine_count`` distinct (x, y) positions.

        Returns:
            False if mines were already placed this round.

        Raises:
            ConfigurationError: If the positions don't match the mine count.
            OutOfBoundsError: If a position lies outside the grid.
        """
        if self._grid.mines_placed or self._run.phase != Phase.READY:
            return False
        unique = set(positions)
        if len(unique) != len(positions) or len(unique) != self.config.mine_count:
            raise ConfigurationError(
                f"Layout needs {self.config.mine_count} distinct positions, "
                f"got {len(positions)}"
            )
        self._grid.place_mines_at(list(positions))
        return True

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, x: int, y: int) -> RevealOutcome:
        """
        Reveal a cell.

        On the first accepted reveal, places mines avoiding this cell.
        A zero-adjacency cell opens its whole connected empty region plus
        the numbered border around it.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            REJECTED if the command had no effect, EXPLODED on a mine,
            WON if this reveal completed the board, OPENED otherwise.
        """
        if not self._can_reveal(x, y):
            logger.debug("Reveal rejected at (%d, %d)", x, y)
            return RevealOutcome.REJECTED

        now = self._clock()
        if self._run.first_click_pending:
            self._handle_first_click(x, y, now)

        cell = self._grid.set_state(x, y, CellState.REVEALED)
        if cell.is_mine:
            self._explode(now)
            return RevealOutcome.EXPLODED

        self._run.cells_revealed += 1
        self._scorer.record_reveal(self._run, cell.adjacent_mines, now, cascaded=False)
        if cell.adjacent_mines == 0:
            opened = self._flood_fill(x, y, now)
            logger.debug("Cascade from (%d, %d) opened %d cells", x, y, opened)

        if is_won(self._run.cells_revealed, self.config):
            self._win(now)
            return RevealOutcome.WON
        return RevealOutcome.OPENED

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Cycle the mark on a cell: hidden, flagged, questioned, hidden.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            True if the mark changed, False otherwise.
        """
        if self._run.is_terminal or not self._grid.is_valid_position(x, y):
            logger.debug("Flag rejected at (%d, %d)", x, y)
            return False
        cell = self._grid.cell_at(x, y)
        if cell.is_revealed:
            return False

        new_state = NEXT_MARK[cell.state]
        if cell.state == CellState.FLAGGED:
            self._run.flags_placed -= 1
        elif new_state == CellState.FLAGGED:
            self._run.flags_placed += 1
        self._grid.set_state(x, y, new_state)
        return True

    # ========================================================================
    # Command Internals
    # ========================================================================

    def _can_reveal(self, x: int, y: int) -> bool:
        """Check if a cell can be revealed."""
        if self._run.is_terminal:
            return False
        if not self._grid.is_valid_position(x, y):
            return False
        return self._grid.cell_at(x, y).is_hidden

    def _handle_first_click(self, x: int, y: int, now: int) -> None:
        """Handle first click: place mines and start the game."""
        if not self._grid.mines_placed:
            self._grid.place_mines(x, y, self.config.mine_count, self._rng)
        self._run.first_click_pending = False
        self._run.phase = Phase.ACTIVE
        self._run.start_time = now

    def _flood_fill(self, x: int, y: int, now: int) -> int:
        """
        Open the empty region around (x, y) using an explicit stack.

        Cells are marked revealed before being pushed, so each cell is
        opened at most once. Flagged and questioned cells stay closed.

        Returns:
            Number of cells opened besides (x, y).
        """
        opened = 0
        stack = [(x, y)]
        while stack:
            current_x, current_y = stack.pop()
            for neighbor_x, neighbor_y in self._grid.neighbors(current_x, current_y):
                neighbor = self._grid.cell_at(neighbor_x, neighbor_y)
                if not neighbor.is_hidden or neighbor.is_mine:
                    continue
                self._grid.set_state(neighbor_x, neighbor_y, CellState.REVEALED)
                self._run.cells_revealed += 1
                opened += 1
                self._scorer.record_reveal(
                    self._run, neighbor.adjacent_mines, now, cascaded=True
                )
                if neighbor.adjacent_mines == 0:
                    stack.append((neighbor_x, neighbor_y))
        return opened

    def _explode(self, now: int) -> None:
        """Lose the game and uncover every mine."""
        self._run.phase = Phase.FAILED
        self._run.end_time = now
        for mine_x, mine_y in self._grid.mine_positions():
            self._grid.set_state(mine_x, mine_y, CellState.REVEALED)
        self._finish()

    def _win(self, now: int) -> None:
        """Win the game and apply end-of-game bonuses."""
        self._run.phase = Phase.SUCCESS
        self._run.end_time = now
        self._run.score = self._scorer.final_score(
            self._run, self.config.mine_count, self.elapsed_ms
        )
        self._finish()

    def _finish(self) -> None:
        summary = self.summary()
        logger.info(
            "Game over (%s): %s, score %d in %d ms",
            self.config.difficulty.value,
            "won" if summary.success else "lost",
            summary.score,
            summary.duration_ms,
        )
        if self._on_game_over is not None:
            self._on_game_over(summary)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._run.phase

    @property
    def is_terminal(self) -> bool:
        """Check if the game has ended."""
        return self._run.is_terminal

    @property
    def run_state(self) -> RunState:
        """Get a copy of the current run state."""
        return dataclasses.replace(self._run)

    @property
    def score(self) -> int:
        """Get the running (or final) score."""
        return self._run.score

    @property
    def remaining_mine_estimate(self) -> int:
        """Mines minus flags placed; negative when over-flagged."""
        return self.config.mine_count - self._run.flags_placed

    @property
    def elapsed_ms(self) -> int:
        """Milliseconds since the first reveal, frozen once the game ends."""
        if self._run.start_time is None:
            return 0
        end = self._run.end_time
        if end is None:
            end = self._clock()
        return end - self._run.start_time

    def cell_at(self, x: int, y: int) -> Cell:
        """
        Get a copy of the cell at a position.

        Raises:
            OutOfBoundsError: If (x, y) lies outside the grid.
        """
        return dataclasses.replace(self._grid.cell_at(x, y))

    def snapshot(self) -> np.ndarray:
        """Get the grid as an observation array (see Grid.to_observation)."""
        return self._grid.to_observation()

    def render_ansi(self) -> str:
        """Render the grid as ASCII text."""
        return self._grid.render_ansi()

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get positions that can currently be revealed.

        Returns:
            List of (x, y) positions; empty once the game has ended.
        """
        if self._run.is_terminal:
            return []
        return self._grid.hidden_positions()

    def summary(self) -> Optional[GameSummary]:
        """Get the finished-game summary, or None while still playing."""
        if not self._run.is_terminal:
            return None
        return GameSummary(
            difficulty=self.config.difficulty,
            start_time=self._run.start_time,
            end_time=self._run.end_time,
            duration_ms=self.elapsed_ms,
            success=self._run.phase == Phase.SUCCESS,
            cells_revealed=self._run.cells_revealed,
            flags_used=self._run.flags_placed,
            score=self._run.score,
            best_combo=self._run.best_combo,
        )
