"""
Grid module for the minefield engine.

Implements the cell grid with mine placement, adjacency calculation,
neighbor lookup and read-only snapshots.
"""
import logging
import random
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState
from .errors import OutOfBoundsError

logger = logging.getLogger(__name__)


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Fixed-size grid of cells addressed by (x, y).

    Cells are stored row-major, so cell (x, y) lives at ``rows[y][x]``.
    The grid is the only writer of cell state; callers go through
    ``place_mines`` and ``set_state``.
    """

    def __init__(self, width: int, height: int) -> None:
        """
        Create a grid with every cell hidden and mine-free.

        Args:
            width: Number of columns.
            height: Number of rows.
        """
        self.width = width
        self.height = height
        self._rows: List[List[Cell]] = [
            [Cell(x, y) for x in range(width)]
            for y in range(height)
        ]
        self._mines_placed = False

    # ========================================================================
    # Addressing (Low-level)
    # ========================================================================

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Cell:
        """
        Get the cell at a position.

        Raises:
            OutOfBoundsError: If (x, y) lies outside the grid.
        """
        if not self.is_valid_position(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return self._rows[y][x]

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring positions (Moore neighborhood, clipped).

        Args:
            x: Column of the center cell.
            y: Row of the center cell.

        Returns:
            List of (x, y) tuples for valid neighbors.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over all cells, row by row."""
        for row in self._rows:
            yield from row

    # ========================================================================
    # Mine Placement and Adjacency (Mid-level)
    # ========================================================================

    @property
    def mines_placed(self) -> bool:
        """Whether mine placement has happened on this grid."""
        return self._mines_placed

    def place_mines(
        self,
        exclude_x: int,
        exclude_y: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> List[Tuple[int, int]]:
        """
        Place mines randomly, keeping one cell mine-free.

        Picks a uniformly random entry from a shrinking pool of candidate
        positions until ``mine_count`` mines are placed or the pool runs
        out, then computes adjacency counts.

        Args:
            exclude_x: Column to keep mine-free.
            exclude_y: Row to keep mine-free.
            mine_count: Number of mines to place.
            rng: Random source (default: a fresh random.Random).

        Returns:
            Positions that received a mine, in placement order.
        """
        rng = rng or random.Random()
        pool = [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) != (exclude_x, exclude_y)
        ]

        placed = []
        while len(placed) < mine_count and pool:
            x, y = pool.pop(rng.randrange(len(pool)))
            self._rows[y][x].is_mine = True
            placed.append((x, y))

        self._mines_placed = True
        logger.debug(
            "Placed %d mines excluding (%d, %d): %s",
            len(placed), exclude_x, exclude_y, placed,
        )
        self.calculate_adjacent_mines()
        return placed

    def place_mines_at(self, positions: List[Tuple[int, int]]) -> None:
        """
        Place mines at fixed positions, e.g. to replay a recorded layout.

        Raises:
            OutOfBoundsError: If any position lies outside the grid.
        """
        cells = [self.cell_at(x, y) for x, y in positions]
        for cell in cells:
            cell.is_mine = True
        self._mines_placed = True
        logger.debug("Loaded fixed layout with %d mines", len(set(positions)))
        self.calculate_adjacent_mines()

    def calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for cell in self:
            if cell.is_mine:
                cell.adjacent_mines = 0
            else:
                cell.adjacent_mines = self._count_adjacent_mines(cell.x, cell.y)

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            if self._rows[neighbor_y][neighbor_x].is_mine:
                count += 1
        return count

    def set_state(self, x: int, y: int, state: CellState) -> Cell:
        """Set the visibility state of a cell and return it."""
        cell = self.cell_at(x, y)
        cell.state = state
        return cell

    # ========================================================================
    # Queries and Snapshots (High-level)
    # ========================================================================

    def mine_positions(self) -> List[Tuple[int, int]]:
        """Get (x, y) positions of all mines."""
        return [(cell.x, cell.y) for cell in self if cell.is_mine]

    def hidden_positions(self) -> List[Tuple[int, int]]:
        """Get (x, y) positions of all hidden cells."""
        return [(cell.x, cell.y) for cell in self if cell.is_hidden]

    def to_observation(self) -> np.ndarray:
        """
        Get grid state as a numpy array indexed [y, x].

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                -3 = questioned
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for cell in self:
            obs[cell.y, cell.x] = cell.to_observation()
        return obs

    def render_ansi(self) -> str:
        """Render grid as ASCII text, one line per row."""
        symbols = {-1: ".", -2: "F", -3: "?", 9: "*", 0: " "}
        lines = []
        for row in self.to_observation():
            lines.append(
                " ".join(symbols.get(int(val), str(int(val))) for val in row)
            )
        return "\n".join(lines)
