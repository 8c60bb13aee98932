"""
Action System - Intents, payloads, and results.

Actions represent the four intents the presentation layer can forward:
select an actor, sail, undo, reset.

All state changes flow through actions. A refused intent is not an error:
it comes back as an ActionResult carrying the unchanged state and a message.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of intents the machine accepts."""
    SELECT_ACTOR = "select_actor"  # Board or step off, depending on location
    SAIL = "sail"
    UNDO = "undo"
    RESET = "reset"


class Outcome(Enum):
    """How an action ended."""
    APPLIED = "applied"
    PRECONDITION_REJECTED = "precondition_rejected"
    CONSTRAINT_VIOLATED = "constraint_violated"


class RejectionCode(Enum):
    """Why an intent was refused."""
    GAME_FINISHED = "GAME_FINISHED"
    UNKNOWN_ACTOR = "UNKNOWN_ACTOR"
    WRONG_SHORE = "WRONG_SHORE"
    FERRY_FULL = "FERRY_FULL"
    FERRY_EMPTY = "FERRY_EMPTY"
    NO_DRIVER = "NO_DRIVER"
    NOTHING_TO_UNDO = "NOTHING_TO_UNDO"


@dataclass(frozen=True)
class ActionPayload:
    """Parameters of an action. Only SELECT_ACTOR carries one."""
    actor_id: str | None = None


@dataclass(frozen=True)
class Action:
    """A complete intent to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def select_actor(cls, actor_id: str) -> Action:
        """Factory for select (board / step off) action."""
        return cls(
            action_type=ActionType.SELECT_ACTOR,
            payload=ActionPayload(actor_id=actor_id),
        )

    @classmethod
    def sail(cls) -> Action:
        return cls(action_type=ActionType.SAIL)

    @classmethod
    def undo(cls) -> Action:
        return cls(action_type=ActionType.UNDO)

    @classmethod
    def reset(cls) -> Action:
        return cls(action_type=ActionType.RESET)

    def describe(self) -> str:
        if self.action_type == ActionType.SELECT_ACTOR:
            return f"select {self.payload.actor_id}"
        return self.action_type.value


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - The outcome (applied, rejected, or applied-and-lost)
    - The state to render next; on rejection only its message differs
    - Rejection code / violation details
    - Human-readable changes for logs and UIs
    """
    outcome: Outcome
    new_state: Any  # GameState
    rejection_code: RejectionCode | None = None
    violation: Any | None = None  # Violation
    changes: list[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        """True when the action changed the game (a losing sail included)."""
        return self.outcome != Outcome.PRECONDITION_REJECTED

    @property
    def rejected(self) -> bool:
        return self.outcome == Outcome.PRECONDITION_REJECTED

    @classmethod
    def applied(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a result for an applied action."""
        return cls(
            outcome=Outcome.APPLIED,
            new_state=state,
            changes=changes or [],
        )

    @classmethod
    def rejected_with(cls, state: Any, code: RejectionCode) -> ActionResult:
        """Create a result for a refused action."""
        return cls(
            outcome=Outcome.PRECONDITION_REJECTED,
            new_state=state,
            rejection_code=code,
        )

    @classmethod
    def violated(
        cls,
        state: Any,
        violation: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a result for a sail that broke a safety rule."""
        return cls(
            outcome=Outcome.CONSTRAINT_VIOLATED,
            new_state=state,
            violation=violation,
            changes=changes or [],
        )
