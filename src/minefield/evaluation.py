"""
Evaluation of solvers across many independent games.

Each evaluation builds its own environment, so evaluators never share
engine state.
"""
import logging
from typing import Dict, Optional

from .agents.base_agent import BaseAgent
from .config import GameConfig
from .environment import MinesweeperEnv

logger = logging.getLogger(__name__)


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agents.

    Provides standardized metrics (win rate, reward, steps, revealed
    cells and engine score) over a fixed number of games.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        num_episodes: int = 100,
        max_steps: int = 1000,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            config: Board configuration for evaluation.
            num_episodes: Number of evaluation games.
            max_steps: Maximum steps per game.
            seed: Base seed; game i uses seed + i.
        """
        self.config = config or GameConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps
        self.seed = seed

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.config)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0
        total_score = 0

        for episode in range(self.num_episodes):
            seed = None if self.seed is None else self.seed + episode
            observation, info = env.reset(seed=seed)
            agent.reset()

            for _ in range(self.max_steps):
                action = agent.select_action(observation, env.get_action_mask())
                observation, reward, terminated, truncated, info = env.step(action)

                total_reward += float(reward)
                total_steps += 1

                if terminated or truncated:
                    break

            if info["game_state"] == "SUCCESS":
                wins += 1
            total_revealed += info["revealed"]
            total_score += info["score"]

        logger.debug(
            "Evaluated %s over %d games: %d wins",
            type(agent).__name__, self.num_episodes, wins,
        )
        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
            "avg_score": total_score / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            logger.info("Evaluating %s...", name)
            results[name] = self.evaluate(agent)
        return results
