"""Tests for the game loop and agent comparison."""

from __future__ import annotations

from snake_decision.agents import MinimaxAgent, PathfinderAgent, QLearningAgent
from snake_decision.agents.base import straight_ahead
from snake_decision.config import RunConfig
from snake_decision.game import GameState
from snake_decision.runner import GameRunner, Outcome, compare_agents


class StraightAgent:
    """Never turns."""

    name = "straight"

    def get_next_move(self, state: GameState):
        return straight_ahead(state)


class RecordingRenderer:
    def __init__(self, close_after: int | None = None) -> None:
        self.closed = False
        self.close_after = close_after
        self.clears = 0
        self.frames: list[tuple] = []

    def clear(self) -> None:
        self.clears += 1

    def render(self, state: GameState) -> None:
        self.frames.append(tuple(state.snake))
        if self.close_after is not None and len(self.frames) >= self.close_after:
            self.closed = True


class TestGameRunner:
    def test_trapped_ends_before_any_tick(self) -> None:
        state = GameState(3, 3, snake=[(0, 0), (1, 0), (1, 1), (0, 1)], food=(2, 2))
        result = GameRunner(PathfinderAgent()).run_episode(state)
        assert result.outcome is Outcome.TRAPPED
        assert result.ticks == 0

    def test_straight_line_hits_wall(self) -> None:
        state = GameState(15, 15, food=(0, 0))
        result = GameRunner(StraightAgent()).run_episode(state)
        assert result.outcome is Outcome.COLLISION
        assert result.ticks == 8
        assert result.score == 0
        assert result.agent == "straight"

    def test_tick_limit(self) -> None:
        result = GameRunner(PathfinderAgent(), max_ticks=3).run_episode(GameState(15, 15))
        assert result.outcome is Outcome.TICK_LIMIT
        assert result.ticks == 3

    def test_board_full(self) -> None:
        state = GameState(3, 1, snake=[(1, 0), (0, 0)], food=(2, 0))
        result = GameRunner(PathfinderAgent()).run_episode(state)
        assert result.outcome is Outcome.BOARD_FULL

    def test_lookahead_on_nearly_full_board_keeps_playing(self) -> None:
        state = GameState(3, 3, snake=[(1, 0), (0, 0), (0, 1), (0, 2), (1, 2), (2, 2)], food=(1, 1))
        assert GameRunner(MinimaxAgent()).tick(state) is None
        assert state.head in [(2, 0), (1, 1)]

    def test_board_full_only_when_last_cell_is_eaten(self) -> None:
        state = GameState(3, 3, snake=[(1, 0), (0, 0), (0, 1), (0, 2), (1, 2), (2, 2)], food=(1, 1))
        result = GameRunner(MinimaxAgent(), max_ticks=50).run_episode(state)
        if result.outcome is Outcome.BOARD_FULL:
            assert state.free_cells() == [state.food]

    def test_renders_initial_state_then_every_tick(self) -> None:
        renderer = RecordingRenderer()
        state = GameState(5, 5, food=(0, 0))
        result = GameRunner(StraightAgent(), renderer=renderer).run_episode(state)
        assert result.ticks == 3
        assert renderer.clears == 1
        assert len(renderer.frames) == 1 + 3
        assert renderer.frames[0] == ((2, 2), (1, 2), (0, 2))

    def test_closed_renderer_stops_scheduling(self) -> None:
        renderer = RecordingRenderer(close_after=2)
        result = GameRunner(PathfinderAgent(), renderer=renderer).run_episode(GameState(15, 15))
        assert result.outcome is Outcome.STOPPED
        assert result.ticks == 1

    def test_learning_agent_is_trained(self) -> None:
        agent = QLearningAgent(seed=1)
        GameRunner(agent, max_ticks=5, learn=True).run_episode(GameState(10, 10, seed="train"))
        assert agent.q_table
        assert agent.epsilon < 1.0

    def test_learn_flag_ignored_for_search_agents(self) -> None:
        assert not GameRunner(PathfinderAgent(), learn=True).learn


class TestCompareAgents:
    def test_same_boards_for_every_agent(self) -> None:
        config = RunConfig(size=8, seed="cmp", max_ticks=50, episodes=2)
        first = compare_agents({"a": PathfinderAgent(), "b": PathfinderAgent()}, config)
        assert set(first) == {"a", "b"}
        assert len(first["a"]) == 2
        assert [(r.score, r.ticks, r.outcome) for r in first["a"]] == [
            (r.score, r.ticks, r.outcome) for r in first["b"]
        ]

    def test_reproducible(self) -> None:
        config = RunConfig(size=8, seed="cmp", max_ticks=50)
        first = compare_agents({"pathfinder": PathfinderAgent()}, config)
        second = compare_agents({"pathfinder": PathfinderAgent()}, config)
        assert first == second
