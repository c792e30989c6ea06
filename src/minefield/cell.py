"""
Cell module for the minefield engine.

Represents individual cells on the grid with their identity (x, y),
content (mine/number) and visibility state.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visibility states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()
    QUESTIONED = auto()


# Marking cycle applied by the flag state machine
NEXT_MARK = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.QUESTIONED,
    CellState.QUESTIONED: CellState.HIDDEN,
}

# Observation codes for non-revealed states
HIDDEN_CODE = -1
FLAGGED_CODE = -2
QUESTIONED_CODE = -3
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minefield grid.

    Attributes:
        x: Column index, fixed at creation.
        y: Row index, fixed at creation.
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visibility state.
    """

    x: int = 0
    y: int = 0
    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    @property
    def id(self) -> str:
        """Stable identifier of the form 'x-y'."""
        return f"{self.x}-{self.y}"

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_questioned(self) -> bool:
        """Check if cell is marked with a question mark."""
        return self.state == CellState.QUESTIONED

    def to_observation(self) -> int:
        """
        Convert cell to an integer code for renderers and agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Questioned cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_CODE
        if self.state == CellState.FLAGGED:
            return FLAGGED_CODE
        if self.state == CellState.QUESTIONED:
            return QUESTIONED_CODE
        if self.is_mine:
            return MINE_CODE
        return self.adjacent_mines
