"""
Pytest fixtures for Crossing tests.
"""

import pytest

from ..engine_core.state import GameState, Location
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..games.family_thief import create_initial_state


# A known 17-crossing solution: each entry is who rides the ferry.
SOLUTION = [
    ("police", "thief"),
    ("police",),
    ("police", "son1"),
    ("police", "thief"),
    ("father", "son2"),
    ("father",),
    ("father", "mother"),
    ("mother",),
    ("police", "thief"),
    ("father",),
    ("father", "mother"),
    ("mother",),
    ("mother", "daughter1"),
    ("police", "thief"),
    ("police", "daughter2"),
    ("police",),
    ("police", "thief"),
]


@pytest.fixture
def initial_state() -> GameState:
    """Fresh game, everyone on the start shore."""
    return create_initial_state()


@pytest.fixture
def reducer() -> Reducer:
    return Reducer()


@pytest.fixture
def solution_moves() -> list[tuple[str, ...]]:
    return list(SOLUTION)


@pytest.fixture
def cross(reducer):
    """
    Board the given actors and sail.

    Returns the ActionResult of the sail.
    """
    def _cross(state: GameState, *actor_ids: str):
        for actor_id in actor_ids:
            result = reducer.apply(state, Action.select_actor(actor_id))
            assert result.accepted, result.new_state.message
            state = result.new_state
        return reducer.apply(state, Action.sail())

    return _cross


@pytest.fixture
def state_after(initial_state, cross):
    """Apply the first n crossings of the known solution."""
    def _state_after(n: int) -> GameState:
        state = initial_state
        for riders in SOLUTION[:n]:
            result = cross(state, *riders)
            assert result.accepted and not result.new_state.is_over, result.new_state.message
            state = result.new_state
        return state

    return _state_after


@pytest.fixture
def check_invariants():
    """Structural invariants that must hold for every reachable state."""
    def _check(state: GameState) -> None:
        counts = state.location_counts()
        assert sum(counts.values()) == 8
        assert counts[Location.FERRY] <= 2
        assert not (state.is_over and state.is_won)
        assert len({a.actor_id for a in state.actors}) == 8

    return _check
