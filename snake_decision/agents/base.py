"""The capability every agent exposes to the game loop."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from snake_decision.game import GameState, Position


@runtime_checkable
class Agent(Protocol):
    """Chooses the next head cell for a state it must not mutate."""

    name: str

    def get_next_move(self, state: GameState) -> Position: ...


def straight_ahead(state: GameState) -> Position:
    """Cell in front of the head; returned when no legal move exists so the loop ends the episode."""
    return state.head + state.direction


def first_step_on(path: Sequence[Position], legal_moves: Sequence[Position]) -> Position | None:
    """The legal move matching the step after the head on ``path``, if any."""
    if len(path) < 2:
        return None
    step = path[1]
    for move in legal_moves:
        if move == step:
            return move
    return None
