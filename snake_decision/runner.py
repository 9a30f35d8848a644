"""Synchronous game loop driving an agent against a live game state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from snake_decision.agents.base import Agent
from snake_decision.config import DEFAULT_MAX_TICKS, RunConfig
from snake_decision.errors import BoardFullError
from snake_decision.game import GameState, move_name
from snake_decision.render import HeadlessRenderer, Renderer

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Why an episode ended."""

    COLLISION = "collision"    # head hit a wall or the body
    TRAPPED = "trapped"        # no legal move left
    BOARD_FULL = "board_full"  # nowhere left to place food
    TICK_LIMIT = "tick_limit"
    STOPPED = "stopped"        # renderer closed, no more ticks scheduled


@dataclass(frozen=True)
class EpisodeResult:
    """Summary of one finished episode."""

    agent: str
    score: int
    ticks: int
    length: int
    outcome: Outcome


class GameRunner:
    """Runs ticks to completion, one at a time, never re-entrantly.

    Each tick: stop if no legal move exists, ask the agent for a move, apply
    it to the live state, render, then check for a collision. The agent only
    ever sees the live state; it never mutates it.
    """

    def __init__(
        self,
        agent: Agent,
        renderer: Renderer | None = None,
        max_ticks: int = DEFAULT_MAX_TICKS,
        learn: bool = False,
    ) -> None:
        self.agent = agent
        self.renderer = renderer if renderer is not None else HeadlessRenderer()
        self.max_ticks = max_ticks
        # Feed transitions to agents that expose learn(state, move, next_state)
        self.learn = learn and hasattr(agent, "learn")

    def tick(self, state: GameState) -> Outcome | None:
        """Advance ``state`` by one agent move; returns an outcome once the episode ends."""
        if not state.get_valid_next_positions():
            return Outcome.TRAPPED
        before = state.copy() if self.learn else None
        try:
            move = self.agent.get_next_move(state)
            state.advance(move)
        except BoardFullError:
            logger.info("%s filled the board at score %d", self.agent.name, state.score)
            return Outcome.BOARD_FULL
        if before is not None:
            self.agent.learn(before, move, state)
        logger.debug("%s moved %s -> %s", self.agent.name, move_name(state.snake[1], move), tuple(move))
        self.renderer.render(state)
        if state.is_game_over():
            return Outcome.COLLISION
        return None

    def run_episode(self, state: GameState) -> EpisodeResult:
        """Play ``state`` until it ends or the tick limit is reached."""
        self.renderer.clear()
        self.renderer.render(state)
        outcome = Outcome.TICK_LIMIT
        ticks = 0
        while ticks < self.max_ticks:
            if self.renderer.closed:
                outcome = Outcome.STOPPED
                break
            result = self.tick(state)
            if result is not Outcome.TRAPPED:
                ticks += 1
            if result is not None:
                outcome = result
                break
        logger.info(
            "%s episode ended: %s after %d ticks, score %d, length %d",
            self.agent.name,
            outcome.value,
            ticks,
            state.score,
            state.length,
        )
        return EpisodeResult(self.agent.name, state.score, ticks, state.length, outcome)


def compare_agents(agents: Mapping[str, Agent], config: RunConfig | None = None) -> dict[str, list[EpisodeResult]]:
    """Play every agent on identically seeded boards, episode by episode."""
    config = config or RunConfig()
    results: dict[str, list[EpisodeResult]] = {name: [] for name in agents}
    for episode in range(config.episodes):
        seed = config.episode_seed(episode)
        for name, agent in agents.items():
            state = GameState(config.size, config.size, seed=seed)
            result = GameRunner(agent, max_ticks=config.max_ticks).run_episode(state)
            results[name].append(result)
    return results
