"""Tests for snake_decision.flood_fill."""

from __future__ import annotations

import pytest

from snake_decision.flood_fill import (
    count_safe_space,
    flood_fill,
    is_move_safe,
    split_depth,
    splits_space,
)
from snake_decision.game import GameState, Position

# Head at (2, 0) left of a full-height wall of body along x = 3
BISECTED = [(2, 0)] + [(3, y) for y in range(10)]

# Head at (1, 0); column x = 0 is a 4-cell pocket, x = 2..3 is open
POCKET = [(1, 0), (1, 1), (1, 2), (1, 3), (2, 3), (3, 3)]


class TestFloodFill:
    @pytest.mark.parametrize("start", [(x, y) for x in range(1, 9) for y in range(1, 9)])
    def test_open_board_visits_every_cell(self, start) -> None:
        assert flood_fill(start, [], 10, 10) == 100

    def test_wall_limits_reach(self) -> None:
        assert flood_fill((2, 0), BISECTED[1:], 10, 10) == 30
        assert flood_fill((5, 5), BISECTED[1:], 10, 10) == 60

    def test_depth_bound(self) -> None:
        assert flood_fill((5, 5), [], 10, 10, max_depth=0) == 1
        assert flood_fill((5, 5), [], 10, 10, max_depth=1) == 5
        assert flood_fill((5, 5), [], 10, 10, max_depth=2) == 13

    def test_fractional_depth_bound_floors(self) -> None:
        assert flood_fill((5, 5), [], 10, 10, max_depth=1.4) == 5

    def test_start_off_board(self) -> None:
        assert flood_fill((10, 0), [], 10, 10) == 0


class TestSafeSpace:
    def test_open_board_excludes_snake_and_head(self) -> None:
        assert count_safe_space(GameState(15, 15)) == 225 - 3

    def test_move_into_pocket_is_unsafe(self) -> None:
        state = GameState(4, 4, snake=POCKET, food=(3, 0))
        assert state.get_valid_next_positions() == [(2, 0), (0, 0)]
        assert count_safe_space(state.get_next_game_state(Position(0, 0))) == 3
        assert not is_move_safe(state, Position(0, 0))

    def test_move_that_fills_board_is_safe(self) -> None:
        state = GameState(3, 1, snake=[(1, 0), (0, 0)], food=(2, 0))
        assert is_move_safe(state, Position(2, 0))

    def test_move_into_open_side_is_safe(self) -> None:
        state = GameState(4, 4, snake=POCKET, food=(3, 0))
        assert count_safe_space(state.get_next_game_state(Position(2, 0))) == 6
        assert is_move_safe(state, Position(2, 0))


class TestSplitsSpace:
    def test_depth_grows_with_length(self) -> None:
        assert split_depth(1) == 1
        assert split_depth(11) == 3

    def test_bisected_board_splits(self) -> None:
        state = GameState(10, 10, snake=BISECTED, food=(9, 9))
        assert splits_space(state)

    def test_small_open_board_does_not_split(self) -> None:
        state = GameState(3, 3, snake=[(1, 1)], food=(0, 0))
        assert not splits_space(state)

    def test_shallow_fill_flags_short_snake_on_large_board(self) -> None:
        assert splits_space(GameState(15, 15))
