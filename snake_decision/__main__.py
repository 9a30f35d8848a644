"""Command-line entry point: play episodes with one agent, optionally in a window."""

from __future__ import annotations

import argparse
import logging
import sys

from snake_decision.agents import AGENTS, MinimaxAgent, create_agent
from snake_decision.config import (
    BATTLE_FPS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_TICKS,
    DEFAULT_SEED,
    GRID_SIZE,
    RunConfig,
    SearchConfig,
)
from snake_decision.errors import SnakeDecisionError
from snake_decision.game import GameState
from snake_decision.render import PygameRenderer
from snake_decision.runner import GameRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snake-decision", description=__doc__)
    parser.add_argument("--agent", choices=sorted(AGENTS), default=MinimaxAgent.name)
    parser.add_argument("--size", type=int, default=GRID_SIZE, help="board width and height in cells")
    parser.add_argument("--seed", default=DEFAULT_SEED, help="food placement seed")
    parser.add_argument("--episodes", type=int, default=1)
    parser.add_argument("--max-ticks", type=int, default=DEFAULT_MAX_TICKS)
    parser.add_argument("--depth", type=int, default=DEFAULT_MAX_DEPTH, help="minimax depth cap")
    parser.add_argument("--learn", action="store_true", help="update the q-learning agent while playing")
    parser.add_argument("--render", action="store_true", help="open a pygame window")
    parser.add_argument("--fps", type=int, default=BATTLE_FPS)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = RunConfig(size=args.size, seed=args.seed, max_ticks=args.max_ticks, episodes=args.episodes)
        kwargs = {"config": SearchConfig(max_depth=args.depth)} if args.agent == MinimaxAgent.name else {}
        agent = create_agent(args.agent, **kwargs)
    except SnakeDecisionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    renderer = None
    if args.render:
        renderer = PygameRenderer(config.size, config.size, agent_name=agent.name, fps=args.fps)

    runner = GameRunner(agent, renderer=renderer, max_ticks=config.max_ticks, learn=args.learn)
    print(f"=== Snake Decision Engine | Agent: {agent.name} | Board: {config.size}x{config.size} | Seed: {config.seed} ===")
    scores = []
    for episode in range(config.episodes):
        state = GameState(config.size, config.size, seed=config.episode_seed(episode))
        result = runner.run_episode(state)
        scores.append(result.score)
        print(
            f"Episode {episode + 1}/{config.episodes} | Score: {result.score} | "
            f"Length: {result.length} | Ticks: {result.ticks} | Outcome: {result.outcome.value}"
        )
        if runner.renderer.closed:
            break

    print(f"=== Finished | Best Score: {max(scores)} | Mean Score: {sum(scores) / len(scores):.2f} ===")
    if renderer is not None:
        renderer.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
