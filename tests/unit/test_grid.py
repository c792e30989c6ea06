"""
Unit tests for Grid class.

Tests addressing, mine placement, adjacency calculation and snapshots.
"""
import random

import numpy as np
import pytest
from minefield import CellState, Grid, OutOfBoundsError


def brute_force_count(grid: Grid, x: int, y: int) -> int:
    """Count mines around (x, y) without using Grid.neighbors."""
    count = 0
    for other in grid:
        if (other.x, other.y) == (x, y):
            continue
        if abs(other.x - x) <= 1 and abs(other.y - y) <= 1 and other.is_mine:
            count += 1
    return count


# ============================================================================
# Initialization and Addressing Tests
# ============================================================================

class TestGridInitialization:
    """Test grid creation and addressing."""

    def test_new_grid_all_cells_hidden_and_safe(self, grid: Grid) -> None:
        """Every cell starts hidden, mine-free, with no count."""
        for cell in grid:
            assert cell.is_hidden is True
            assert cell.is_mine is False
            assert cell.adjacent_mines == 0
        assert grid.mines_placed is False

    def test_cell_at_returns_matching_coordinates(self) -> None:
        """cell_at(x, y) addresses column x of row y."""
        grid = Grid(4, 2)
        cell = grid.cell_at(3, 1)
        assert (cell.x, cell.y) == (3, 1)

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (9, 0), (0, 9)])
    def test_cell_at_out_of_bounds_raises(self, grid: Grid, x: int, y: int) -> None:
        """Positions outside the grid raise OutOfBoundsError."""
        with pytest.raises(OutOfBoundsError):
            grid.cell_at(x, y)

    def test_out_of_bounds_is_index_error(self, grid: Grid) -> None:
        """OutOfBoundsError can be caught as IndexError."""
        with pytest.raises(IndexError, match="outside a 9x9 grid"):
            grid.cell_at(9, 9)

    def test_iteration_covers_every_cell_once(self) -> None:
        """Iterating yields width * height distinct cells."""
        grid = Grid(4, 3)
        positions = {(cell.x, cell.y) for cell in grid}
        assert len(positions) == 12


class TestNeighbors:
    """Test Moore neighborhood clipping."""

    @pytest.mark.parametrize(
        "x, y, expected",
        [(0, 0, 3), (8, 8, 3), (4, 0, 5), (0, 4, 5), (4, 4, 8)],
    )
    def test_neighbor_counts(self, grid: Grid, x: int, y: int, expected: int) -> None:
        """Corners have 3 neighbors, edges 5, interior 8."""
        assert len(grid.neighbors(x, y)) == expected

    def test_neighbors_exclude_center(self, grid: Grid) -> None:
        """A cell is not its own neighbor."""
        assert (4, 4) not in grid.neighbors(4, 4)

    def test_single_cell_grid_has_no_neighbors(self) -> None:
        """1x1 grid has an empty neighborhood."""
        assert Grid(1, 1).neighbors(0, 0) == []


# ============================================================================
# Mine Placement Tests
# ============================================================================

class TestMinePlacement:
    """Test random placement with first-click exclusion."""

    @pytest.mark.parametrize("seed", range(25))
    def test_exact_mine_count_and_safe_exclusion(self, seed: int) -> None:
        """Placement puts exactly mine_count mines, never on the excluded cell."""
        grid = Grid(9, 9)
        rng = random.Random(seed)
        exclude = (rng.randrange(9), rng.randrange(9))

        placed = grid.place_mines(exclude[0], exclude[1], 10, rng)

        assert len(placed) == 10
        assert len(grid.mine_positions()) == 10
        assert grid.cell_at(*exclude).is_mine is False
        assert grid.mines_placed is True

    def test_dense_board_fills_everything_but_excluded(
        self, rng: random.Random
    ) -> None:
        """With mine_count = cells - 1 only the excluded cell is safe."""
        grid = Grid(3, 3)
        grid.place_mines(1, 1, 8, rng)
        assert len(grid.mine_positions()) == 8
        assert grid.cell_at(1, 1).is_mine is False
        assert grid.cell_at(1, 1).adjacent_mines == 8

    def test_placement_stops_when_pool_exhausted(
        self, rng: random.Random
    ) -> None:
        """Asking for more mines than candidates fills the pool only."""
        grid = Grid(3, 3)
        placed = grid.place_mines(0, 0, 100, rng)
        assert len(placed) == 8
        assert grid.cell_at(0, 0).is_mine is False

    def test_same_seed_same_layout(self) -> None:
        """Placement is deterministic for a given random source."""
        first = Grid(16, 16)
        second = Grid(16, 16)
        first.place_mines(5, 5, 40, random.Random(99))
        second.place_mines(5, 5, 40, random.Random(99))
        assert first.mine_positions() == second.mine_positions()

    def test_fixed_layout(self, grid: Grid) -> None:
        """place_mines_at puts mines exactly where asked."""
        grid.place_mines_at([(0, 0), (8, 8)])
        assert grid.mine_positions() == [(0, 0), (8, 8)]
        assert grid.cell_at(1, 1).adjacent_mines == 1

    def test_fixed_layout_out_of_bounds(self, grid: Grid) -> None:
        """Fixed layouts are bounds-checked before any mine is placed."""
        with pytest.raises(OutOfBoundsError):
            grid.place_mines_at([(0, 0), (9, 0)])
        assert grid.mine_positions() == []


# ============================================================================
# Adjacency Tests
# ============================================================================

class TestAdjacency:
    """Test adjacency counts after placement."""

    @pytest.mark.parametrize("seed", range(10))
    def test_counts_match_brute_force(self, seed: int) -> None:
        """Every non-mine count equals its mine neighbors; mines hold 0."""
        grid = Grid(16, 16)
        grid.place_mines(0, 0, 40, random.Random(seed))
        for cell in grid:
            if cell.is_mine:
                assert cell.adjacent_mines == 0
            else:
                assert cell.adjacent_mines == brute_force_count(grid, cell.x, cell.y)

    def test_recalculation_is_idempotent(self, rng: random.Random) -> None:
        """Running the calculator again changes nothing."""
        grid = Grid(9, 9)
        grid.place_mines(4, 4, 10, rng)
        before = [cell.adjacent_mines for cell in grid]
        grid.calculate_adjacent_mines()
        assert [cell.adjacent_mines for cell in grid] == before


# ============================================================================
# Snapshot Tests
# ============================================================================

class TestSnapshots:
    """Test observation array and text rendering."""

    def test_observation_shape_is_height_by_width(self) -> None:
        """Observation is indexed [y, x]."""
        obs = Grid(7, 3).to_observation()
        assert obs.shape == (3, 7)
        assert obs.dtype == np.int8

    def test_new_grid_observation_all_hidden(self, grid: Grid) -> None:
        """New grid observation is all -1."""
        assert np.all(grid.to_observation() == -1)

    def test_observation_codes(self) -> None:
        """Each state maps to its code at [y, x]."""
        grid = Grid(3, 2)
        grid.place_mines_at([(2, 1)])
        grid.set_state(0, 0, CellState.FLAGGED)
        grid.set_state(1, 0, CellState.QUESTIONED)
        grid.set_state(1, 1, CellState.REVEALED)
        grid.set_state(2, 1, CellState.REVEALED)

        obs = grid.to_observation()

        assert obs[0, 0] == -2
        assert obs[0, 1] == -3
        assert obs[0, 2] == -1
        assert obs[1, 1] == 1
        assert obs[1, 2] == 9

    def test_render_ansi(self) -> None:
        """Text rendering uses one line per row."""
        grid = Grid(3, 2)
        grid.place_mines_at([(2, 1)])
        grid.set_state(0, 0, CellState.FLAGGED)
        grid.set_state(1, 1, CellState.REVEALED)
        grid.set_state(2, 1, CellState.REVEALED)
        assert grid.render_ansi() == "F . .\n. 1 *"
