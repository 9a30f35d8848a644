"""Grid positions and the snake game state used for play and lookahead."""

from __future__ import annotations

import logging
import random
from typing import Iterable, NamedTuple

import numpy as np

from snake_decision.config import DEFAULT_SEED, INITIAL_SNAKE_LENGTH, MAX_FOOD_RETRIES
from snake_decision.errors import BoardFullError, InvalidConfigurationError

logger = logging.getLogger(__name__)


# -------------------------- Grid Position --------------------------
class Position(NamedTuple):
    """Integer cell coordinate; (0, 0) is the top-left cell, y grows downwards."""

    x: int
    y: int

    def __add__(self, other):  # type: ignore[override]
        # Vector add, so head + RIGHT is the cell to the right
        return Position(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        # Step from other to self
        return Position(self.x - other[0], self.y - other[1])


RIGHT = Position(1, 0)
LEFT = Position(-1, 0)
DOWN = Position(0, 1)
UP = Position(0, -1)

# Enumeration order for moves everywhere: also the tie-break order
MOVE_ORDER = (RIGHT, LEFT, DOWN, UP)
MOVE_NAMES = {RIGHT: "Right", LEFT: "Left", DOWN: "Down", UP: "Up"}


def manhattan(a: Position, b: Position) -> int:
    """Grid distance between two cells (4-connected steps)."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def in_bounds(pos: Position, width: int, height: int) -> bool:
    """True if ``pos`` lies on a ``width`` x ``height`` board."""
    return 0 <= pos[0] < width and 0 <= pos[1] < height


def neighbours(pos: Position, width: int, height: int) -> list[Position]:
    """In-bounds 4-neighbours of ``pos`` in Right, Left, Down, Up order."""
    result = []
    for dx, dy in MOVE_ORDER:
        nxt = Position(pos[0] + dx, pos[1] + dy)
        if in_bounds(nxt, width, height):
            result.append(nxt)
    return result


def move_name(head: Position, move: Position) -> str:
    """Name of the step from ``head`` to the adjacent cell ``move``."""
    return MOVE_NAMES.get(Position(move[0] - head[0], move[1] - head[1]), "None")


# -------------------------- Game State --------------------------
class GameState:
    """Snapshot of one snake game: body, food, board extent, direction and score.

    The live loop mutates a state in place with :meth:`advance`; search code
    only ever calls :meth:`get_next_game_state`, which returns an independent
    clone with its own body list and its own copy of the food generator, so a
    search branch can never alias an ancestor.
    """

    def __init__(
        self,
        width: int,
        height: int,
        snake: Iterable[tuple[int, int]] | None = None,
        food: tuple[int, int] | None = None,
        direction: tuple[int, int] = RIGHT,
        score: int = 0,
        seed: str | int | None = DEFAULT_SEED,
        rng: random.Random | None = None,
    ) -> None:
        if width < 1 or height < 1:
            raise InvalidConfigurationError(
                f"board dimensions must be positive, got {width}x{height}"
            )
        self.width = width
        self.height = height
        # Food generator owned by this state (seeded, reproducible)
        self._rng = rng if rng is not None else random.Random(seed)

        if snake is None:
            snake = self._initial_snake(width, height)
        self.snake = [Position(*segment) for segment in snake]
        self._validate_snake()

        direction = Position(*direction)
        if direction not in MOVE_NAMES:
            raise InvalidConfigurationError(f"direction must be a unit step, got {direction}")
        self.dx, self.dy = direction
        if score < 0:
            raise InvalidConfigurationError("score must be >= 0")
        self.score = score

        if food is None:
            self.food = self.generate_food()
        else:
            self.food = Position(*food)
            if not in_bounds(self.food, width, height):
                raise InvalidConfigurationError(f"food {self.food} is outside the board")
            if self.food in self.snake:
                raise InvalidConfigurationError(f"food {self.food} is on the snake")

    @staticmethod
    def _initial_snake(width: int, height: int) -> list[Position]:
        """3 contiguous cells centred on the board, head first, tail to the left."""
        if width < INITIAL_SNAKE_LENGTH:
            raise InvalidConfigurationError(
                f"board width must be >= {INITIAL_SNAKE_LENGTH} for the default snake"
            )
        cx, cy = width // 2, height // 2
        return [Position(cx - i, cy) for i in range(INITIAL_SNAKE_LENGTH)]

    def _validate_snake(self) -> None:
        """Reject empty, overlapping, off-board or broken bodies."""
        if not self.snake:
            raise InvalidConfigurationError("snake must have at least one segment")
        if len(set(self.snake)) != len(self.snake):
            raise InvalidConfigurationError("snake has duplicate segments")
        for segment in self.snake:
            if not in_bounds(segment, self.width, self.height):
                raise InvalidConfigurationError(f"snake segment {segment} is outside the board")
        for prev, curr in zip(self.snake, self.snake[1:]):
            if manhattan(prev, curr) != 1:
                raise InvalidConfigurationError(f"snake segments {prev} and {curr} are not adjacent")

    # ---- read-only views ----
    @property
    def head(self) -> Position:
        """First snake segment."""
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def direction(self) -> Position:
        return Position(self.dx, self.dy)

    @property
    def direction_name(self) -> str:
        return MOVE_NAMES[self.direction]

    @property
    def area(self) -> int:
        return self.width * self.height

    def get_score(self) -> int:
        """Food eaten so far."""
        return self.score

    def body_set(self) -> set[Position]:
        """Snake segments as a set, for membership tests."""
        return set(self.snake)

    def free_cells(self) -> list[Position]:
        """Cells not covered by the snake, scanned row by row."""
        occupied = self.body_set()
        return [
            Position(x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) not in occupied
        ]

    def occupancy_grid(self) -> np.ndarray:
        """Boolean grid indexed ``[x, y]``; True where a snake segment sits."""
        grid = np.zeros((self.width, self.height), dtype=bool)
        for segment in self.snake:
            if in_bounds(segment, self.width, self.height):
                grid[segment.x, segment.y] = True
        return grid

    # ---- rules ----
    def generate_food(self) -> Position:
        """Draw a food cell off the snake from this state's seeded generator.

        Redraws at most ``MAX_FOOD_RETRIES`` times, then picks among the free
        cells directly; raises :class:`BoardFullError` when none are left.
        """
        occupied = self.body_set()
        if len(occupied) >= self.area:
            raise BoardFullError(f"no free cell left on a {self.width}x{self.height} board")
        for _ in range(MAX_FOOD_RETRIES):
            pos = Position(self._rng.randrange(self.width), self._rng.randrange(self.height))
            if pos not in occupied:
                return pos
        free = self.free_cells()
        logger.debug("Food retries exhausted, choosing among %d free cells", len(free))
        return self._rng.choice(free)

    def get_valid_next_positions(self) -> list[Position]:
        """Head neighbours that are on the board and not on the snake (Right, Left, Down, Up)."""
        occupied = self.body_set()
        return [pos for pos in neighbours(self.head, self.width, self.height) if pos not in occupied]

    def advance(self, move: tuple[int, int]) -> bool:
        """Step the snake onto ``move`` in place; returns True if food was eaten.

        Raises :class:`BoardFullError` when eating fills the board; the state
        is left exactly as it was before the call.
        """
        move = Position(*move)
        direction = move - self.head
        self.snake.insert(0, move)
        if move == self.food:
            # Grow: keep the tail, redraw food
            try:
                food = self.generate_food()
            except BoardFullError:
                del self.snake[0]
                raise
            self.food = food
            self.score += 1
            self.dx, self.dy = direction
            return True
        self.snake.pop()
        self.dx, self.dy = direction
        return False

    def get_next_game_state(self, move: tuple[int, int]) -> "GameState":
        """Independent clone of this state advanced by ``move``.

        Propagates :class:`BoardFullError` from :meth:`advance`.
        """
        nxt = self.copy()
        nxt.advance(move)
        return nxt

    def is_game_over(self) -> bool:
        """Head off the board or on top of another segment."""
        head = self.head
        if not in_bounds(head, self.width, self.height):
            return True
        return head in self.snake[1:]

    def copy(self) -> "GameState":
        """Snapshot sharing nothing mutable with this state."""
        rng = random.Random()
        rng.setstate(self._rng.getstate())
        clone = GameState.__new__(GameState)
        clone.width = self.width
        clone.height = self.height
        clone._rng = rng
        clone.snake = list(self.snake)
        clone.food = self.food
        clone.dx, clone.dy = self.dx, self.dy
        clone.score = self.score
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.snake == other.snake
            and self.food == other.food
            and (self.dx, self.dy) == (other.dx, other.dy)
            and self.score == other.score
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"GameState({self.width}x{self.height}, head={tuple(self.head)}, "
            f"length={self.length}, food={tuple(self.food)}, score={self.score})"
        )
