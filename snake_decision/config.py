"""Global configuration constants and validated config dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from snake_decision.errors import InvalidConfigurationError

# -------------------------- Board Configuration --------------------------
# Default board size: 15*15 discrete grid
GRID_SIZE = 15
# Seed string for the per-state food generator (reproducible fixtures)
DEFAULT_SEED = "42"
# Snake is seeded as 3 contiguous cells centred on the board
INITIAL_SNAKE_LENGTH = 3
# Random draws tried before falling back to scanning the free cells
MAX_FOOD_RETRIES = 100

# -------------------------- Search Configuration --------------------------
DEFAULT_MAX_DEPTH = 6     # Upper bound on minimax lookahead (plies)
BASE_DEPTH = 3            # Depth used while score < SCORE_PER_DEPTH
SCORE_PER_DEPTH = 5       # One extra ply per 5 food eaten
RECENT_MOVE_MEMORY = 5    # Cells remembered to stop oscillation
PATH_CACHE_SIZE = 4096    # Bounded (head, food) -> path cache entries
SPLIT_DEPTH_DIVISOR = 5   # Split detection depth: body length / 5 + 1
SPLIT_SPACE_RATIO = 0.5   # Reachable fraction below this splits the space

# -------------------------- Heuristic Weights --------------------------
SCORE_WEIGHT = 1000.0     # Dominant long-run driver
PATH_WEIGHT = 10.0        # Linear penalty per step to food
COLLISION_WEIGHT = 50.0   # Scales the self-collision risk sum
COLLISION_CONSTANT = 5.0  # k in k / distance
U_SHAPE_PENALTY = 100.0
LONG_SIDE_PENALTY = 100.0
LONG_SIDE_MARGIN = 3      # Straight run within 3 cells of the board width
SPLIT_WEIGHT = 20.0       # Multiplies board area when the space splits

# -------------------------- Q-Learning Hyperparameters --------------------------
LEARNING_RATE = 0.1       # α: Q-value update step size
DISCOUNT_FACTOR = 0.9     # γ: weight of future reward
INIT_EPSILON = 1.0        # Initial exploration rate (100% random actions)
EPSILON_DECAY = 0.995     # Exponential decay factor for epsilon
MIN_EPSILON = 0.01        # Exploration floor

# Reward shaping used by the tabular learner
REWARD_COLLISION = -20
REWARD_FOOD = 10
REWARD_TOWARD_FOOD = 2
REWARD_TOWARD_OBSTACLE = -3
REWARD_SURVIVE = 1

# -------------------------- Rendering Configuration --------------------------
CELL_SIZE = 40            # Pixel size of each grid cell
PANEL_WIDTH = 320         # Right-side info panel
BATTLE_FPS = 8            # Ticks per second when rendering
DEFAULT_MAX_TICKS = 5000  # Episode tick limit for the runner

COLOR_BG = (245, 242, 238)
COLOR_GRID = (208, 204, 199)
COLOR_SNAKE_HEAD = (237, 85, 101)
COLOR_SNAKE_BODY = (82, 183, 136)
COLOR_FOOD = (250, 202, 87)
COLOR_TEXT = (54, 54, 54)
COLOR_BORDER = (129, 126, 123)


# -------------------------- Config Dataclasses --------------------------


@dataclass(frozen=True)
class EvaluatorWeights:
    """Tunable weights of the heuristic evaluator.

    Only the relative ordering and signs matter: the score term dominates,
    the space-split penalty is large, path and shape penalties are moderate.
    """

    score_weight: float = SCORE_WEIGHT
    path_weight: float = PATH_WEIGHT
    collision_weight: float = COLLISION_WEIGHT
    collision_constant: float = COLLISION_CONSTANT
    u_shape_penalty: float = U_SHAPE_PENALTY
    long_side_penalty: float = LONG_SIDE_PENALTY
    long_side_margin: int = LONG_SIDE_MARGIN
    split_weight: float = SPLIT_WEIGHT

    def __post_init__(self) -> None:
        for name in (
            "score_weight",
            "path_weight",
            "collision_weight",
            "collision_constant",
            "u_shape_penalty",
            "long_side_penalty",
            "long_side_margin",
            "split_weight",
        ):
            if getattr(self, name) < 0:
                raise InvalidConfigurationError(f"{name} must be >= 0")


@dataclass(frozen=True)
class SearchConfig:
    """Knobs for the minimax agent."""

    max_depth: int = DEFAULT_MAX_DEPTH
    recent_moves: int = RECENT_MOVE_MEMORY
    use_path_cache: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise InvalidConfigurationError("max_depth must be >= 1")
        if self.recent_moves < 0:
            raise InvalidConfigurationError("recent_moves must be >= 0")


@dataclass(frozen=True)
class QLearningConfig:
    """Hyperparameters of the tabular Q-learning agent."""

    learning_rate: float = LEARNING_RATE
    discount_factor: float = DISCOUNT_FACTOR
    epsilon: float = INIT_EPSILON
    epsilon_decay: float = EPSILON_DECAY
    min_epsilon: float = MIN_EPSILON

    def __post_init__(self) -> None:
        if not 0.0 < self.learning_rate <= 1.0:
            raise InvalidConfigurationError("learning_rate must be in (0, 1]")
        if not 0.0 <= self.discount_factor <= 1.0:
            raise InvalidConfigurationError("discount_factor must be in [0, 1]")
        if not 0.0 <= self.min_epsilon <= self.epsilon <= 1.0:
            raise InvalidConfigurationError(
                "epsilon values must satisfy 0 <= min_epsilon <= epsilon <= 1"
            )
        if not 0.0 < self.epsilon_decay <= 1.0:
            raise InvalidConfigurationError("epsilon_decay must be in (0, 1]")


@dataclass(frozen=True)
class RunConfig:
    """Episode settings shared by the runner, comparisons and the CLI."""

    size: int = GRID_SIZE
    seed: str = DEFAULT_SEED
    max_ticks: int = DEFAULT_MAX_TICKS
    episodes: int = 1

    def __post_init__(self) -> None:
        if self.size < INITIAL_SNAKE_LENGTH:
            raise InvalidConfigurationError(
                f"size must be >= {INITIAL_SNAKE_LENGTH}"
            )
        if self.max_ticks < 1:
            raise InvalidConfigurationError("max_ticks must be >= 1")
        if self.episodes < 1:
            raise InvalidConfigurationError("episodes must be >= 1")

    def episode_seed(self, episode: int) -> str:
        """Seed for the given episode; episode 0 uses the base seed."""
        return self.seed if episode == 0 else f"{self.seed}-{episode}"
