"""Breadth-first flood fill over free cells: safe-space counts and space-split detection."""

from __future__ import annotations

from collections import deque
from typing import Iterable

import numpy as np

from snake_decision.config import SPLIT_DEPTH_DIVISOR, SPLIT_SPACE_RATIO
from snake_decision.errors import BoardFullError
from snake_decision.game import GameState, Position, in_bounds, neighbours


def flood_fill(
    start: tuple[int, int],
    obstacles: Iterable[tuple[int, int]],
    width: int,
    height: int,
    max_depth: float | None = None,
) -> int:
    """Count cells reachable from ``start`` (``start`` included).

    4-connected, never leaves the board, never enters an obstacle and never
    visits a cell twice. With ``max_depth`` set, cells further than that many
    steps from ``start`` are not counted.
    """
    start = Position(*start)
    if not in_bounds(start, width, height):
        return 0
    blocked = np.zeros((width, height), dtype=bool)
    for cell in obstacles:
        if in_bounds(cell, width, height):
            blocked[cell[0], cell[1]] = True
    blocked[start.x, start.y] = False

    visited = np.zeros((width, height), dtype=bool)
    visited[start.x, start.y] = True
    queue = deque([(start, 0)])
    count = 0
    while queue:
        current, depth = queue.popleft()
        count += 1
        if max_depth is not None and depth + 1 > max_depth:
            continue
        for neighbour in neighbours(current, width, height):
            if visited[neighbour.x, neighbour.y] or blocked[neighbour.x, neighbour.y]:
                continue
            visited[neighbour.x, neighbour.y] = True
            queue.append((neighbour, depth + 1))
    return count


def count_safe_space(state: GameState) -> int:
    """Free cells reachable from the head; the head itself is not counted."""
    if not in_bounds(state.head, state.width, state.height):
        return 0
    return flood_fill(state.head, state.snake[1:], state.width, state.height) - 1


def is_move_safe(state: GameState, move: Position) -> bool:
    """True when the head still reaches at least as many free cells as the snake is long.

    A move that fills the board ends the game in a win and is always safe.
    """
    try:
        next_state = state.get_next_game_state(move)
    except BoardFullError:
        return True
    if next_state.is_game_over():
        return False
    return count_safe_space(next_state) >= state.length


def split_depth(snake_length: int) -> float:
    """Depth bound for split detection: body length (head excluded) / 5 + 1."""
    return (snake_length - 1) / SPLIT_DEPTH_DIVISOR + 1


def splits_space(state: GameState) -> bool:
    """Shallow flood fill from the head estimating local fragmentation.

    The fill is depth bounded on purpose: it approximates how boxed-in the
    head is, not global reachability. True when the visited fraction of the
    board is below ``SPLIT_SPACE_RATIO``.
    """
    visited = flood_fill(
        state.head,
        state.snake[1:],
        state.width,
        state.height,
        max_depth=split_depth(state.length),
    )
    return visited / state.area < SPLIT_SPACE_RATIO
