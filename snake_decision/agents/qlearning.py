"""Tabular Q-learning agent observing the game through the shared state interface."""

from __future__ import annotations

import logging
import random

import numpy as np

from snake_decision.agents.base import straight_ahead
from snake_decision.config import (
    REWARD_COLLISION,
    REWARD_FOOD,
    REWARD_SURVIVE,
    REWARD_TOWARD_FOOD,
    REWARD_TOWARD_OBSTACLE,
    QLearningConfig,
)
from snake_decision.game import MOVE_ORDER, GameState, Position, in_bounds

logger = logging.getLogger(__name__)

StateKey = tuple[int, int, int, int]


class QLearningAgent:
    """Epsilon-greedy learner over a table of state -> 4 action values.

    Only reads ``snake``, ``food``, ``get_valid_next_positions``,
    ``get_next_game_state``, ``get_score`` and ``is_game_over`` from the state.
    """

    name = "qlearning"

    def __init__(self, config: QLearningConfig | None = None, seed: int | str | None = None) -> None:
        self.config = config or QLearningConfig()
        self.lr = self.config.learning_rate       # Learning Rate (α)
        self.gamma = self.config.discount_factor  # Discount Factor (γ)
        self.epsilon = self.config.epsilon        # Current exploration rate
        self.epsilon_decay = self.config.epsilon_decay
        self.min_epsilon = self.config.min_epsilon
        # Action space in the shared move order: Right, Left, Down, Up
        self.actions = MOVE_ORDER
        self.n_actions = len(self.actions)
        # Q-Table: {state_key: array([q_right, q_left, q_down, q_up])}
        self.q_table: dict[StateKey, np.ndarray] = {}
        self.rng = random.Random(seed)

    def get_state(self, state: GameState) -> StateKey:
        """Discretise a game state: head cell plus food offset from the head."""
        head, food = state.snake[0], state.food
        return (head.x, head.y, food.x - head.x, food.y - head.y)

    def q_values(self, key: StateKey) -> np.ndarray:
        """Action values for ``key``, zero-initialised for unseen states."""
        if key not in self.q_table:
            self.q_table[key] = np.zeros(self.n_actions)
        return self.q_table[key]

    def action_index(self, head: Position, move: Position) -> int:
        return self.actions.index(Position(*move) - head)

    def choose_action(self, state: GameState) -> Position:
        """Explore with probability epsilon, otherwise exploit; legal moves only.

        Ties in the exploit branch go to the first move in enumeration order.
        """
        legal = state.get_valid_next_positions()
        if not legal:
            return straight_ahead(state)
        if self.rng.uniform(0, 1) < self.epsilon:
            return self.rng.choice(legal)
        values = self.q_values(self.get_state(state))
        indices = [self.action_index(state.head, move) for move in legal]
        return legal[int(np.argmax(values[indices]))]

    get_next_move = choose_action

    def update_q_table(self, key: StateKey, action: int, reward: float, next_key: StateKey, done: bool) -> None:
        """Bellman update: Q(s,a) += α * (r + γ * max Q(s',·) - Q(s,a))."""
        values = self.q_values(key)
        current_q = values[action]
        # Terminal transition: no future reward
        if done:
            target_q = reward
        else:
            target_q = reward + self.gamma * np.max(self.q_values(next_key))
        values[action] = current_q + self.lr * (target_q - current_q)

    def decay_epsilon(self) -> None:
        """Exponential decay of the exploration rate, floored at ``min_epsilon``."""
        self.epsilon = max(self.epsilon * self.epsilon_decay, self.min_epsilon)

    def calculate_reward(self, state: GameState, next_state: GameState) -> int:
        """Shaped reward for the transition ``state`` -> ``next_state``."""
        if next_state.is_game_over():
            return REWARD_COLLISION
        if next_state.get_score() > state.get_score():
            return REWARD_FOOD
        if self._is_toward_food(state, next_state):
            return REWARD_TOWARD_FOOD
        if self._is_toward_obstacle(next_state):
            return REWARD_TOWARD_OBSTACLE
        return REWARD_SURVIVE

    @staticmethod
    def _is_toward_food(state: GameState, next_state: GameState) -> bool:
        """The step taken moved along an axis on which the food lies ahead."""
        hx, hy = state.head
        fx, fy = state.food
        dx, dy = next_state.dx, next_state.dy
        return (fx > hx and dx == 1) or (fx < hx and dx == -1) or (fy > hy and dy == 1) or (fy < hy and dy == -1)

    @staticmethod
    def _is_toward_obstacle(state: GameState) -> bool:
        """Continuing straight would hit a wall or the body."""
        ahead = state.head + state.direction
        return not in_bounds(ahead, state.width, state.height) or ahead in state.snake[1:]

    def learn(self, state: GameState, move: Position, next_state: GameState) -> int:
        """Reward, update and decay for one observed transition; returns the reward."""
        reward = self.calculate_reward(state, next_state)
        done = next_state.is_game_over()
        self.update_q_table(
            self.get_state(state),
            self.action_index(state.head, move),
            reward,
            self.get_state(next_state),
            done,
        )
        self.decay_epsilon()
        logger.debug("q-update reward=%d epsilon=%.3f states=%d", reward, self.epsilon, len(self.q_table))
        return reward
