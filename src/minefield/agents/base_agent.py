"""
Base agent interface for minefield solvers.

Agents see only the observation array; they never touch the engine.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from ..cell import HIDDEN_CODE


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for solvers.

    Subclasses implement select_action to choose which cell to reveal
    from the current observation.
    """

    def __init__(self, board_width: int, board_height: int) -> None:
        """
        Initialize the agent.

        Args:
            board_width: Number of columns in the board.
            board_height: Number of rows in the board.
        """
        self.board_width = board_width
        self.board_height = board_height
        self.total_cells = board_width * board_height

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell codes indexed [y, x].
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (y * width + x).
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return action % self.board_width, action // self.board_width

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """Mask of hidden cells; flagged and questioned cells are excluded."""
        return observation.flatten() == HIDDEN_CODE

    def reset(self) -> None:
        """Reset agent state for a new game."""
