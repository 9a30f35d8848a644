"""Depth-limited minimax with alpha-beta pruning over self-play rollouts."""

from __future__ import annotations

import logging
import math
from collections import deque

from snake_decision.agents.base import straight_ahead
from snake_decision.config import BASE_DEPTH, SCORE_PER_DEPTH, SearchConfig
from snake_decision.errors import BoardFullError
from snake_decision.evaluation import HeuristicEvaluator
from snake_decision.game import GameState, Position, move_name
from snake_decision.pathfinding import PathCache

logger = logging.getLogger(__name__)


class MinimaxAgent:
    """Pick the move whose lookahead subtree scores best under the heuristic evaluator.

    There is no opponent: the minimising ply explores the snake's own move
    generator, so it acts as a pessimistic self-play rollout. It stays as a
    separate ply so a hostile player can be slotted in later.
    """

    name = "minimax"

    def __init__(self, config: SearchConfig | None = None, evaluator: HeuristicEvaluator | None = None) -> None:
        self.config = config or SearchConfig()
        if evaluator is None:
            cache = PathCache() if self.config.use_path_cache else None
            evaluator = HeuristicEvaluator(path_cache=cache)
        self.evaluator = evaluator
        # Cells recently chosen; excluded from candidates to stop oscillation
        self.recent_moves: deque[Position] = deque(maxlen=self.config.recent_moves)
        self.last_node_count = 0

    def search_depth(self, state: GameState) -> int:
        """Deepen by one ply per ``SCORE_PER_DEPTH`` food eaten, capped at ``max_depth``."""
        return min(self.config.max_depth, state.get_score() // SCORE_PER_DEPTH + BASE_DEPTH)

    @staticmethod
    def expand(state: GameState, move: Position) -> GameState | None:
        """Child state after ``move``, or None when eating there fills the board."""
        try:
            return state.get_next_game_state(move)
        except BoardFullError:
            return None

    def child_value(
        self, state: GameState, move: Position, depth: int, maximizing: bool, alpha: float, beta: float
    ) -> float:
        """Search value of ``move``; filling the board is a win and scores +inf."""
        child = self.expand(state, move)
        if child is None:
            self.last_node_count += 1
            return math.inf
        return self.minimax(child, depth, maximizing, alpha, beta)

    def minimax(self, state: GameState, depth: int, maximizing: bool, alpha: float, beta: float) -> float:
        self.last_node_count += 1
        if depth <= 0 or state.is_game_over():
            return self.evaluator.evaluate(state)

        moves = state.get_valid_next_positions()
        if not moves:
            # Boxed in: the next tick is a collision whatever happens
            return -math.inf

        if maximizing:
            best = -math.inf
            for move in moves:
                value = self.child_value(state, move, depth - 1, False, alpha, beta)
                best = max(best, value)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return best

        best = math.inf
        for move in moves:
            value = self.child_value(state, move, depth - 1, True, alpha, beta)
            best = min(best, value)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return best

    def score_moves(self, state: GameState, moves: list[Position]) -> list[tuple[Position, float]]:
        """Subtree value of each move, in the order given."""
        depth = self.search_depth(state)
        return [
            (move, self.child_value(state, move, depth - 1, False, -math.inf, math.inf))
            for move in moves
        ]

    def get_next_move(self, state: GameState) -> Position:
        self.last_node_count = 0
        legal = state.get_valid_next_positions()
        if not legal:
            return straight_ahead(state)
        if len(legal) == 1:
            return legal[0]

        candidates = [move for move in legal if move not in self.recent_moves] or legal
        scored = self.score_moves(state, candidates)

        # Strict comparison: ties keep the earlier move (Right, Left, Down, Up)
        best_move, best_score = scored[0]
        for move, score in scored[1:]:
            if score > best_score:
                best_move, best_score = move, score

        self.recent_moves.append(best_move)
        logger.debug(
            "%s chose %s (value=%.1f, depth=%d, nodes=%d)",
            self.name,
            move_name(state.head, best_move),
            best_score,
            self.search_depth(state),
            self.last_node_count,
        )
        return best_move
