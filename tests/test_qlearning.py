"""Tests for the tabular Q-learning agent."""

from __future__ import annotations

import pytest

from snake_decision.agents import QLearningAgent
from snake_decision.config import (
    REWARD_COLLISION,
    REWARD_FOOD,
    REWARD_SURVIVE,
    REWARD_TOWARD_FOOD,
    REWARD_TOWARD_OBSTACLE,
    QLearningConfig,
)
from snake_decision.errors import InvalidConfigurationError
from snake_decision.game import DOWN, MOVE_ORDER, RIGHT, GameState, Position

GREEDY = QLearningConfig(epsilon=0.0, min_epsilon=0.0)


@pytest.fixture
def agent() -> QLearningAgent:
    return QLearningAgent(seed=0)


class TestStateKey:
    def test_head_and_food_offset(self, agent) -> None:
        assert agent.get_state(GameState(15, 15, food=(11, 7))) == (7, 7, 4, 0)

    def test_unseen_state_starts_at_zero(self, agent) -> None:
        values = agent.q_values((0, 0, 1, 1))
        assert values.shape == (4,)
        assert not values.any()

    def test_action_index_follows_move_order(self, agent) -> None:
        head = Position(3, 3)
        for index, step in enumerate(MOVE_ORDER):
            assert agent.action_index(head, head + step) == index
        assert agent.action_index(head, (3, 4)) == MOVE_ORDER.index(DOWN)


class TestChooseAction:
    def test_greedy_ties_take_first_legal_move(self) -> None:
        agent = QLearningAgent(GREEDY)
        assert agent.choose_action(GameState(15, 15, food=(0, 0))) == (8, 7)

    def test_greedy_follows_highest_value(self) -> None:
        agent = QLearningAgent(GREEDY)
        state = GameState(15, 15, food=(0, 0))
        agent.q_values(agent.get_state(state))[MOVE_ORDER.index(DOWN)] = 5.0
        assert agent.choose_action(state) == (7, 8)

    def test_illegal_action_is_never_chosen(self) -> None:
        agent = QLearningAgent(GREEDY)
        state = GameState(15, 15, food=(0, 0))
        # Left runs into the neck
        agent.q_values(agent.get_state(state))[MOVE_ORDER.index(Position(-1, 0))] = 99.0
        assert agent.choose_action(state) == (8, 7)

    def test_exploration_stays_legal(self, agent) -> None:
        state = GameState(15, 15, food=(0, 0))
        legal = state.get_valid_next_positions()
        assert {agent.choose_action(state) for _ in range(200)} <= set(legal)

    def test_same_seed_same_choices(self) -> None:
        state = GameState(15, 15, food=(0, 0))
        a, b = QLearningAgent(seed="x"), QLearningAgent(seed="x")
        assert [a.choose_action(state) for _ in range(20)] == [b.choose_action(state) for _ in range(20)]

    def test_no_legal_move_goes_straight(self, agent) -> None:
        state = GameState(3, 3, snake=[(0, 0), (1, 0), (1, 1), (0, 1)], food=(2, 2))
        assert agent.get_next_move(state) == (1, 0)


class TestUpdate:
    def test_terminal_update_uses_reward_only(self, agent) -> None:
        agent.update_q_table((1, 1, 0, 0), 0, 10, (2, 1, 0, 0), done=True)
        assert agent.q_table[(1, 1, 0, 0)][0] == pytest.approx(1.0)
        agent.update_q_table((5, 5, 0, 0), 3, -20, (5, 4, 0, 0), done=True)
        assert agent.q_table[(5, 5, 0, 0)][3] == pytest.approx(-2.0)

    def test_bootstraps_from_best_next_value(self, agent) -> None:
        agent.q_values((2, 1, 0, 0))[:] = [5.0, 0.0, 0.0, 0.0]
        agent.update_q_table((1, 1, 0, 0), 0, 1, (2, 1, 0, 0), done=False)
        assert agent.q_table[(1, 1, 0, 0)][0] == pytest.approx(0.55)

    def test_epsilon_decays_to_floor(self) -> None:
        agent = QLearningAgent()
        agent.decay_epsilon()
        assert agent.epsilon == pytest.approx(0.995)
        agent.epsilon = 0.011
        agent.decay_epsilon()
        assert agent.epsilon == pytest.approx(0.01)


class TestRewards:
    def test_food(self, agent) -> None:
        state = GameState(15, 15, food=(8, 7))
        assert agent.calculate_reward(state, state.get_next_game_state(Position(8, 7))) == REWARD_FOOD

    def test_collision(self, agent) -> None:
        state = GameState(5, 5, snake=[(4, 2), (3, 2), (2, 2)], food=(0, 0))
        assert agent.calculate_reward(state, state.get_next_game_state(Position(5, 2))) == REWARD_COLLISION

    def test_toward_food(self, agent) -> None:
        state = GameState(15, 15, food=(11, 7))
        assert agent.calculate_reward(state, state.get_next_game_state(Position(8, 7))) == REWARD_TOWARD_FOOD

    def test_plain_survival(self, agent) -> None:
        state = GameState(15, 15, food=(11, 7))
        assert agent.calculate_reward(state, state.get_next_game_state(Position(7, 8))) == REWARD_SURVIVE

    def test_heading_at_wall(self, agent) -> None:
        state = GameState(5, 5, snake=[(3, 2), (2, 2), (1, 2)], food=(0, 0))
        nxt = state.get_next_game_state(Position(4, 2))
        assert nxt.direction == RIGHT
        assert agent.calculate_reward(state, nxt) == REWARD_TOWARD_OBSTACLE


class TestLearn:
    def test_learn_updates_table_and_decays(self, agent) -> None:
        state = GameState(15, 15, food=(8, 7))
        nxt = state.get_next_game_state(Position(8, 7))
        reward = agent.learn(state, Position(8, 7), nxt)
        assert reward == REWARD_FOOD
        assert agent.q_table[(7, 7, 1, 0)][0] == pytest.approx(1.0)
        assert agent.epsilon < 1.0

    def test_invalid_config_rejected(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            QLearningConfig(epsilon=0.001, min_epsilon=0.01)
