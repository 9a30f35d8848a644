"""Greedy agent following the shortest path to food, with a survival fallback chain."""

from __future__ import annotations

import logging

from snake_decision.agents.base import first_step_on, straight_ahead
from snake_decision.flood_fill import is_move_safe
from snake_decision.game import GameState, Position, move_name
from snake_decision.pathfinding import PathCache, a_star, bfs_path

logger = logging.getLogger(__name__)


class PathfinderAgent:
    """Follow A* to the food; fall back to BFS, then to safe moves, then to any move.

    Fallback chain, first success wins:

    1. the only legal move, without any search;
    2. the first step of the A* path (whole body blocked);
    3. the first step of a BFS path that treats the tail as passable, since
       the tail moves away on the next tick;
    4. the first legal move that leaves at least ``len(snake)`` reachable
       free cells;
    5. the first legal move, even if it is risky.

    ``last_strategy`` records which rung produced the last move.
    """

    name = "pathfinder"

    def __init__(self, use_cache: bool = True, blend_euclidean: bool = False) -> None:
        self.blend_euclidean = blend_euclidean
        self.path_cache = PathCache(blend_euclidean=blend_euclidean) if use_cache else None
        self.last_strategy = "none"

    def find_path(self, state: GameState) -> list[Position]:
        if self.path_cache is not None:
            return self.path_cache.path_for(state)
        return a_star(state.snake, state.food, state.width, state.height, self.blend_euclidean)

    def get_next_move(self, state: GameState) -> Position:
        legal = state.get_valid_next_positions()
        move, self.last_strategy = self._choose(state, legal)
        logger.debug(
            "%s chose %s via %s (score=%d, length=%d)",
            self.name,
            move_name(state.head, move),
            self.last_strategy,
            state.score,
            state.length,
        )
        return move

    def _choose(self, state: GameState, legal: list[Position]) -> tuple[Position, str]:
        if not legal:
            return straight_ahead(state), "none"
        if len(legal) == 1:
            return legal[0], "single"

        move = first_step_on(self.find_path(state), legal)
        if move is not None:
            return move, "a_star"

        body_without_tail = state.snake[1:-1]
        move = first_step_on(
            bfs_path(state.head, state.food, state.width, state.height, body_without_tail),
            legal,
        )
        if move is not None:
            return move, "bfs"

        for move in legal:
            if is_move_safe(state, move):
                return move, "safe"

        return legal[0], "any"
