"""Decision engine for grid snake: game state, A*, flood fill, heuristics and search agents."""

from snake_decision.agents import MinimaxAgent, PathfinderAgent, QLearningAgent, create_agent
from snake_decision.errors import BoardFullError, InvalidConfigurationError, SnakeDecisionError
from snake_decision.game import DOWN, LEFT, MOVE_ORDER, RIGHT, UP, GameState, Position

__all__ = [
    "DOWN",
    "LEFT",
    "MOVE_ORDER",
    "RIGHT",
    "UP",
    "BoardFullError",
    "GameState",
    "InvalidConfigurationError",
    "MinimaxAgent",
    "PathfinderAgent",
    "Position",
    "QLearningAgent",
    "SnakeDecisionError",
    "create_agent",
]

__version__ = "0.1.0"
