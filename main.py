#!/usr/bin/env python3
"""
Minefield engine - command line entry point.

Usage:
    python main.py evaluate [--difficulty NOVICE] [--games N] [--seed S]
    python main.py show [--difficulty NOVICE] [--seed S]
"""
import argparse
import logging

from minefield import GameConfig, MinesweeperEnv
from minefield.agents import RandomAgent
from minefield.errors import ConfigurationError
from minefield.evaluation import Evaluator


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate the random baseline agent."""
    config = GameConfig.for_difficulty(args.difficulty)
    agent = RandomAgent(config.width, config.height, seed=args.seed)
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    print(f"\nEvaluating Random over {args.games} games on {config.difficulty.value}...")
    results = evaluator.evaluate(agent)

    print("Results for Random:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")
    print(f"  Avg score: {results['avg_score']:.1f}")


def show(args: argparse.Namespace) -> None:
    """Play one random game and print the final board."""
    config = GameConfig.for_difficulty(args.difficulty)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    agent = RandomAgent(config.width, config.height, seed=args.seed)

    observation, info = env.reset(seed=args.seed)
    terminated = False
    while not terminated:
        action = agent.select_action(observation, env.get_action_mask())
        observation, _, terminated, _, info = env.step(action)

    print(env.render())
    print(
        f"\n{info['game_state']} after {info['steps']} moves | "
        f"Score: {info['score']} | Best combo: {info['best_combo']}"
    )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield engine - run solvers against the engine"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate the random agent")
    eval_parser.add_argument(
        "--difficulty", default="NOVICE", help="NOVICE, AGENT, HACKER or CUSTOM"
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    eval_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    show_parser = subparsers.add_parser("show", help="Play and print one game")
    show_parser.add_argument(
        "--difficulty", default="NOVICE", help="NOVICE, AGENT, HACKER or CUSTOM"
    )
    show_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "evaluate":
            evaluate(args)
        elif args.command == "show":
            show(args)
        else:
            parser.print_help()
    except ConfigurationError as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
