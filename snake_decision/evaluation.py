"""Scalar desirability score for a game state.

Higher is better. Terminal states score ``-inf`` so a maximising search never
prefers them. The score blends:

* the game score (dominant),
* the A* distance to food, as a linear penalty plus an exponential proximity
  bonus scaled by ``board area / snake length``,
* a continuous self-collision risk from body segments near the head,
* shape penalties for a U-turn and for a straight run close to the board width,
* a large penalty when the head sits in a split-off pocket of the board.
"""

from __future__ import annotations

import math
from typing import Sequence

from snake_decision.config import EvaluatorWeights
from snake_decision.flood_fill import splits_space
from snake_decision.game import GameState, Position, manhattan
from snake_decision.pathfinding import PathCache, a_star


def self_collision_risk(snake: Sequence[Position], constant: float) -> float:
    """Sum of ``constant / d`` over body segments within Manhattan distance 2 of the head."""
    head = snake[0]
    risk = 0.0
    for segment in snake[1:]:
        distance = manhattan(head, segment)
        if 0 < distance <= 2:
            risk += constant / distance
    return risk


def has_u_shape(snake: Sequence[Position]) -> bool:
    """Head back on the cell of the 4th segment."""
    return len(snake) >= 4 and snake[0] == snake[3]


def longest_straight_run(snake: Sequence[Position]) -> int:
    """Most consecutive segments lying on one line in one direction."""
    if not snake:
        return 0
    best = run = 1
    prev_step = None
    for a, b in zip(snake, snake[1:]):
        step = (b[0] - a[0], b[1] - a[1])
        run = run + 1 if step == prev_step else 2
        prev_step = step
        best = max(best, run)
    return best


class HeuristicEvaluator:
    """Weighted multi-factor evaluation of a :class:`GameState`."""

    def __init__(self, weights: EvaluatorWeights | None = None, path_cache: PathCache | None = None) -> None:
        self.weights = weights or EvaluatorWeights()
        self.path_cache = path_cache

    def path_distance(self, state: GameState) -> int:
        """Steps along the A* path to food; the board area when food is unreachable."""
        if self.path_cache is not None:
            path = self.path_cache.path_for(state)
        else:
            path = a_star(state.snake, state.food, state.width, state.height)
        return len(path) - 1 if path else state.area

    def evaluate(self, state: GameState) -> float:
        if state.is_game_over():
            return -math.inf

        w = self.weights
        area = state.area
        distance = self.path_distance(state)

        value = state.get_score() * w.score_weight
        value -= distance * w.path_weight
        # Proximity bonus: matters most for short snakes, vanishes with distance
        value += math.exp(-distance) * (area / state.length)
        value -= self_collision_risk(state.snake, w.collision_constant) * w.collision_weight
        # Head on segment 3 is a self collision, so after the return above this never fires
        if has_u_shape(state.snake):
            value -= w.u_shape_penalty
        if longest_straight_run(state.snake) >= state.width - w.long_side_margin:
            value -= w.long_side_penalty
        if splits_space(state):
            value -= area * w.split_weight
        return value

    __call__ = evaluate
