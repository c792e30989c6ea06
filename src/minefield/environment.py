"""
Gymnasium environment wrapper for the minefield engine.

Provides a standard RL interface so solvers can play many games.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import GameConfig
from .engine import MinefieldEngine, RevealOutcome


# Reward per reveal outcome
REWARDS = {
    RevealOutcome.REJECTED: -0.1,
    RevealOutcome.OPENED: 1.0,
    RevealOutcome.EXPLODED: -10.0,
    RevealOutcome.WON: 10.0,
}


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment over a MinefieldEngine.

    Observation:
        2D array indexed [y, x] where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = questioned cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals cell (i % width, i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for a rejected action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.engine = MinefieldEngine(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.engine.reset(seed=seed)
        self._steps = 0
        return self.engine.snapshot(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self.action_to_position(action)
        self._steps += 1

        outcome = self.engine.reveal(x, y)
        reward = REWARDS[outcome]

        terminated = self.engine.is_terminal
        info = self._get_info()
        info["outcome"] = outcome.name

        return self.engine.snapshot(), reward, terminated, False, info

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return int(action) % self.config.width, int(action) // self.config.width

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        run = self.engine.run_state
        return {
            "steps": self._steps,
            "revealed": run.cells_revealed,
            "total_safe": self.config.safe_cells,
            "score": run.score,
            "best_combo": run.best_combo,
            "game_state": run.phase.name,
            "valid_actions": len(self.engine.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.engine.render_ansi()
        if self.render_mode == "human":
            print(self.engine.render_ansi())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.engine.get_valid_actions():
            mask[y * self.config.width + x] = True
        return mask
