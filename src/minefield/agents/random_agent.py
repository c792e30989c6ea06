"""
Random agent for the minefield engine.

Serves as a baseline by revealing uniformly random hidden cells.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """
    Agent that selects hidden cells uniformly at random.

    Expected win rate on NOVICE is only a few percent, which makes it a
    useful floor when comparing solvers.
    """

    def __init__(
        self,
        board_width: int = 9,
        board_height: int = 9,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(board_width, board_height)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid action.

        Returns:
            Random action index from valid actions, or 0 when none remain.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.flatnonzero(valid_actions)
        if len(valid_indices) == 0:
            return 0
        return int(self.rng.choice(valid_indices))
