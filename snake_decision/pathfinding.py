"""Shortest paths on the snake board: A*, breadth-first search and a path cache."""

from __future__ import annotations

import heapq
import itertools
import math
from collections import OrderedDict, deque
from typing import Iterable, Sequence

import numpy as np

from snake_decision.config import PATH_CACHE_SIZE
from snake_decision.game import Position, in_bounds, manhattan, neighbours


def euclidean(a: Position, b: Position) -> float:
    """Straight-line distance between cell centres."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def blended_distance(a: Position, b: Position, snake_length: int, width: int) -> float:
    """Euclidean near the goal, Manhattan further away.

    "Near" shrinks as the snake grows relative to the board. Both branches
    are lower bounds on the grid distance, so the estimate stays admissible.
    """
    dist = manhattan(a, b)
    factor = 1 + (snake_length / width) * 3
    if dist > width / factor:
        return dist
    return euclidean(a, b)


def reconstruct_path(came_from: dict[Position, Position], current: Position) -> list[Position]:
    """Walk predecessor links back to the start and return start..current."""
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def a_star(
    snake: Sequence[tuple[int, int]],
    food: tuple[int, int],
    width: int,
    height: int,
    blend_euclidean: bool = False,
) -> list[Position]:
    """A* from the snake head to the food over the 4-connected grid.

    Every snake segment is impassable apart from the head (the start); the
    goal is always passable. Steps cost 1. The open set is a binary heap keyed
    by ``(f, insertion order)``, so equal ``f`` values expand first-found
    first. Returns the cells from head to food inclusive, or ``[]``.
    """
    start = Position(*snake[0])
    goal = Position(*food)
    if not in_bounds(start, width, height) or not in_bounds(goal, width, height):
        return []

    obstacles = set(map(Position._make, snake[1:]))
    obstacles.discard(start)
    obstacles.discard(goal)
    snake_length = len(snake)

    if blend_euclidean:
        def heuristic(pos: Position) -> float:
            return blended_distance(pos, goal, snake_length, width)
    else:
        def heuristic(pos: Position) -> float:
            return manhattan(pos, goal)

    g_score = np.full((width, height), np.inf)
    f_score = np.full((width, height), np.inf)
    closed = np.zeros((width, height), dtype=bool)
    came_from: dict[Position, Position] = {}

    g_score[start.x, start.y] = 0
    f_score[start.x, start.y] = heuristic(start)
    counter = itertools.count()
    open_heap = [(f_score[start.x, start.y], next(counter), start)]

    while open_heap:
        f_current, _, current = heapq.heappop(open_heap)
        if closed[current.x, current.y] or f_current > f_score[current.x, current.y]:
            continue  # stale heap entry
        if current == goal:
            return reconstruct_path(came_from, current)
        closed[current.x, current.y] = True

        for neighbour in neighbours(current, width, height):
            if neighbour in obstacles or closed[neighbour.x, neighbour.y]:
                continue
            tentative = g_score[current.x, current.y] + 1
            if tentative >= g_score[neighbour.x, neighbour.y]:
                continue
            came_from[neighbour] = current
            g_score[neighbour.x, neighbour.y] = tentative
            f_score[neighbour.x, neighbour.y] = tentative + heuristic(neighbour)
            heapq.heappush(open_heap, (f_score[neighbour.x, neighbour.y], next(counter), neighbour))

    return []


def bfs_path(
    start: tuple[int, int],
    goal: tuple[int, int],
    width: int,
    height: int,
    obstacles: Iterable[tuple[int, int]] = (),
) -> list[Position]:
    """Plain breadth-first search; same return convention as :func:`a_star`."""
    start = Position(*start)
    goal = Position(*goal)
    blocked = set(map(Position._make, obstacles))
    blocked.discard(start)
    blocked.discard(goal)
    if not in_bounds(start, width, height) or not in_bounds(goal, width, height):
        return []

    came_from: dict[Position, Position] = {}
    seen = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == goal:
            return reconstruct_path(came_from, current)
        for neighbour in neighbours(current, width, height):
            if neighbour in seen or neighbour in blocked:
                continue
            seen.add(neighbour)
            came_from[neighbour] = current
            queue.append(neighbour)
    return []


class PathCache:
    """Bounded LRU of A* paths keyed by ``(head, food)``.

    The key ignores the body shape: a cached path may have been computed for
    an earlier body. Agents accept that approximation for speed and always
    check the next step against the current legal moves.
    """

    def __init__(self, maxsize: int = PATH_CACHE_SIZE, blend_euclidean: bool = False) -> None:
        self.maxsize = maxsize
        self.blend_euclidean = blend_euclidean
        self._paths: OrderedDict[tuple[Position, Position], list[Position]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._paths)

    def get(self, snake: Sequence[Position], food: Position, width: int, height: int) -> list[Position]:
        """Cached A* path for this head and food; computes and stores it on a miss."""
        key = (Position(*snake[0]), Position(*food))
        path = self._paths.get(key)
        if path is not None:
            self.hits += 1
            self._paths.move_to_end(key)
            return path
        self.misses += 1
        path = a_star(snake, food, width, height, self.blend_euclidean)
        self._paths[key] = path
        if len(self._paths) > self.maxsize:
            self._paths.popitem(last=False)
        return path

    def path_for(self, state) -> list[Position]:
        """Cached A* path from the head of ``state`` to its food."""
        return self.get(state.snake, state.food, state.width, state.height)

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._paths.clear()
        self.hits = 0
        self.misses = 0
