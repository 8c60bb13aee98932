"""
Reducer - Applies intents to the puzzle state.

The reducer is the single point of state change.
All transitions must go through apply_action().

Design principles:
- Pure function: (state, action) -> ActionResult carrying the next state
- Validates preconditions before applying; a refusal only changes the message
- Runs the constraint checker after every sail
- Evaluates the win condition after every applied transition
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging

from .state import GameState, Location, Severity, FERRY_CAPACITY, other_shore
from .action import Action, ActionType, ActionResult, RejectionCode
from .constraints import check_violation, describe_location


logger = logging.getLogger(__name__)


REJECTION_MESSAGES = {
    RejectionCode.GAME_FINISHED: (
        "The game has ended. Undo the last move or reset to play again.",
        Severity.WARNING,
    ),
    RejectionCode.WRONG_SHORE: ("The ferry is on the other side!", Severity.WARNING),
    RejectionCode.FERRY_FULL: (
        f"The ferry is full! (Max {FERRY_CAPACITY} people)",
        Severity.WARNING,
    ),
    RejectionCode.FERRY_EMPTY: ("Nobody on the ferry!", Severity.WARNING),
    RejectionCode.NO_DRIVER: (
        "No driver on the ferry! (Father, Mother, or Police must drive)",
        Severity.ERROR,
    ),
    RejectionCode.NOTHING_TO_UNDO: ("Nothing to undo.", Severity.INFO),
}


def _default_new_game() -> GameState:
    from ..games.family_thief import create_initial_state
    return create_initial_state(reset=True)


@dataclass
class Reducer:
    """
    Reducer applies intents to game state.

    Stateless - all state is in GameState.
    new_game builds the state a reset starts from.
    """
    new_game: Callable[[], GameState] | None = None

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Never raises for a refused intent; the returned result always carries
        the state to render next.
        """
        handler = self._get_handler(action.action_type)
        result = handler(state, action)

        if result.accepted:
            logger.debug(
                "Applied %s: move=%d ferry=%s status=%s",
                action.describe(),
                result.new_state.move_count,
                result.new_state.ferry_side.value,
                result.new_state.status.value,
            )
        else:
            logger.debug(
                "Rejected %s: %s",
                action.describe(),
                result.rejection_code.value,
            )
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SELECT_ACTOR: self._handle_select_actor,
            ActionType.SAIL: self._handle_sail,
            ActionType.UNDO: self._handle_undo,
            ActionType.RESET: self._handle_reset,
        }
        return handlers[action_type]

    def _reject(
        self,
        state: GameState,
        code: RejectionCode,
        message: str | None = None,
    ) -> ActionResult:
        default_message, severity = REJECTION_MESSAGES.get(
            code, ("That is not possible right now.", Severity.WARNING)
        )
        return ActionResult.rejected_with(
            state.with_message(message or default_message, severity),
            code,
        )

    def _handle_select_actor(self, state: GameState, action: Action) -> ActionResult:
        """
        Toggle an actor's seat on the ferry.

        Aboard: step off onto the shore the ferry is docked at.
        On the docked shore: board, if there is a free seat.
        """
        if state.is_terminal:
            return self._reject(state, RejectionCode.GAME_FINISHED)

        actor_id = action.payload.actor_id
        actor = state.get_actor(actor_id) if actor_id else None
        if actor is None:
            return self._reject(
                state,
                RejectionCode.UNKNOWN_ACTOR,
                f"Unknown character: {actor_id!r}",
            )

        if actor.location == Location.FERRY:
            new_state = state.with_actor_location(actor.actor_id, state.ferry_side)
            change = f"{actor.name} stepped off the ferry."
        elif actor.location != state.ferry_side:
            return self._reject(state, RejectionCode.WRONG_SHORE)
        elif len(state.aboard) >= FERRY_CAPACITY:
            return self._reject(state, RejectionCode.FERRY_FULL)
        else:
            new_state = state.with_actor_location(actor.actor_id, Location.FERRY)
            change = f"{actor.name} boarded the ferry."

        new_state = new_state.with_message(change, Severity.INFO)
        return ActionResult.applied(check_win(new_state), changes=[change])

    def _handle_sail(self, state: GameState, action: Action) -> ActionResult:
        """
        Cross the river with whoever is aboard.

        Everyone aboard steps off on arrival. A crossing that leaves someone
        in unsafe company still counts; it ends the game with the failing
        arrangement shown.
        """
        if state.is_terminal:
            return self._reject(state, RejectionCode.GAME_FINISHED)

        aboard = state.aboard
        if not aboard:
            return self._reject(state, RejectionCode.FERRY_EMPTY)
        if not state.has_driver_aboard:
            return self._reject(state, RejectionCode.NO_DRIVER)

        new_side = other_shore(state.ferry_side)
        crossing_ids = {a.actor_id for a in aboard}
        new_actors = tuple(
            a.with_location(new_side) if a.actor_id in crossing_ids else a
            for a in state.actors
        )
        move_number = state.move_count + 1
        new_state = state._copy_with(
            actors=new_actors,
            ferry_side=new_side,
            move_count=move_number,
            history=state.history + (state.snapshot(),),
        )

        names = " and ".join(a.name for a in aboard)
        changes = [f"{names} sailed to the {describe_location(new_side)}"]

        violation = check_violation(new_state.actors)
        if violation:
            logger.info("Move #%d broke a rule: %s", move_number, violation.rule.value)
            lost_state = new_state._copy_with(
                is_over=True,
                message=violation.message,
                severity=Severity.ERROR,
            )
            return ActionResult.violated(lost_state, violation, changes=changes)

        new_state = new_state.with_message(
            f"Sailed to the {describe_location(new_side)}! (Move #{move_number})",
            Severity.INFO,
        )
        return ActionResult.applied(check_win(new_state), changes=changes)

    def _handle_undo(self, state: GameState, action: Action) -> ActionResult:
        """Step back to the snapshot taken before the last sail."""
        if not state.history:
            return self._reject(state, RejectionCode.NOTHING_TO_UNDO)

        snapshot = state.history[-1]
        new_state = state.restore(snapshot)._copy_with(
            is_over=False,
            is_won=False,
            history=state.history[:-1],
            message="Move undone!",
            severity=Severity.INFO,
        )
        return ActionResult.applied(
            check_win(new_state),
            changes=[f"Undid move #{state.move_count}"],
        )

    def _handle_reset(self, state: GameState, action: Action) -> ActionResult:
        """Replace the whole state with a fresh game."""
        factory = self.new_game or _default_new_game
        return ActionResult.applied(factory(), changes=["Game reset"])


def check_win(state: GameState) -> GameState:
    """
    Mark the game won if everyone has reached the destination shore.

    Only call on a state without a violation; a lost game is never won.
    """
    if state.is_won or state.is_over:
        return state
    if not state.all_at(Location.DESTINATION):
        return state
    logger.info("Puzzle solved in %d moves", state.move_count)
    return state._copy_with(
        is_won=True,
        message=f"Congratulations! You solved it in {state.move_count} moves!",
        severity=Severity.SUCCESS,
    )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    return Reducer().apply(state, action)


def select_actor(state: GameState, actor_id: str) -> ActionResult:
    return apply_action(state, Action.select_actor(actor_id))


def sail(state: GameState) -> ActionResult:
    return apply_action(state, Action.sail())


def undo(state: GameState) -> ActionResult:
    return apply_action(state, Action.undo())


def reset(state: GameState | None = None) -> ActionResult:
    """Start over. The current state is ignored."""
    return Reducer().apply(state, Action.reset())
