"""
Family and Thief setup - builds the canonical starting state.
"""

from __future__ import annotations

from ...engine_core.state import GameState, Location, Severity
from .roster import create_initial_actors


WELCOME_MESSAGE = "Click characters to board the ferry, then sail across!"
RESET_MESSAGE = "Game reset! Click characters to board the ferry, then sail across!"


def create_initial_state(reset: bool = False) -> GameState:
    """
    Create a fresh game: everyone on the start shore, ferry docked there,
    no moves, no history.

    Args:
        reset: Use the reset message instead of the welcome message
    """
    return GameState(
        actors=create_initial_actors(),
        ferry_side=Location.START,
        move_count=0,
        is_over=False,
        is_won=False,
        message=RESET_MESSAGE if reset else WELCOME_MESSAGE,
        severity=Severity.INFO,
        history=(),
    )
