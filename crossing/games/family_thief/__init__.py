"""
Family and Thief - The built-in puzzle.

A father, a mother, two sons, two daughters, a police officer and a thief
must cross a river on a two-seat ferry. Only the parents and the police can
drive. Nobody may be left in a dangerous company:
- the thief with any family member unless the police is there
- a daughter with the father unless the mother is there
- a son with the mother unless the father is there

This module contains:
- The fixed roster and rule text
- Initial state construction
"""

from .roster import (
    ACTOR_IDS,
    PUZZLE_ID,
    PUZZLE_NAME,
    ROSTER,
    RULES,
    ActorDefinition,
    create_initial_actors,
)
from .setup import create_initial_state, RESET_MESSAGE, WELCOME_MESSAGE

__all__ = [
    "ACTOR_IDS",
    "PUZZLE_ID",
    "PUZZLE_NAME",
    "ROSTER",
    "RULES",
    "ActorDefinition",
    "create_initial_actors",
    "create_initial_state",
    "RESET_MESSAGE",
    "WELCOME_MESSAGE",
]
