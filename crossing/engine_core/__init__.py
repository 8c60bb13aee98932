"""
Engine Core - Deterministic puzzle state management and rule checking.

The engine is the runtime that:
1. Holds the immutable GameState
2. Checks the safety rules after every crossing
3. Applies intents via the reducer
4. Lists the intents currently available
"""

from .state import (
    Actor,
    ActorRole,
    GameState,
    Location,
    MachineStatus,
    Severity,
    Snapshot,
    FERRY_CAPACITY,
    ACTOR_COUNT,
    SHORES,
    other_shore,
)
from .constraints import Violation, ViolationRule, check_violation, describe_location
from .action import Action, ActionType, ActionPayload, ActionResult, Outcome, RejectionCode
from .reducer import Reducer, apply_action, check_win
from .action_generator import ActionGenerator, legal_actions

__all__ = [
    "Actor",
    "ActorRole",
    "GameState",
    "Location",
    "MachineStatus",
    "Severity",
    "Snapshot",
    "FERRY_CAPACITY",
    "ACTOR_COUNT",
    "SHORES",
    "other_shore",
    "Violation",
    "ViolationRule",
    "check_violation",
    "describe_location",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Outcome",
    "RejectionCode",
    "Reducer",
    "apply_action",
    "check_win",
    "ActionGenerator",
    "legal_actions",
]
