"""Interchangeable move-selection agents and a small registry."""

from __future__ import annotations

from snake_decision.agents.base import Agent
from snake_decision.agents.minimax import MinimaxAgent
from snake_decision.agents.pathfinder import PathfinderAgent
from snake_decision.agents.qlearning import QLearningAgent
from snake_decision.errors import InvalidConfigurationError

__all__ = [
    "AGENTS",
    "Agent",
    "MinimaxAgent",
    "PathfinderAgent",
    "QLearningAgent",
    "create_agent",
]

AGENTS = {
    PathfinderAgent.name: PathfinderAgent,
    MinimaxAgent.name: MinimaxAgent,
    QLearningAgent.name: QLearningAgent,
}


def create_agent(name: str, **kwargs) -> Agent:
    """Instantiate a registered agent by name."""
    try:
        factory = AGENTS[name]
    except KeyError:
        raise InvalidConfigurationError(
            f"unknown agent {name!r}; choose from {sorted(AGENTS)}"
        ) from None
    return factory(**kwargs)
