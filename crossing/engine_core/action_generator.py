"""
Action Generator - Lists the intents whose preconditions currently hold.

Used by:
1. UIs to enable or disable affordances (actor buttons, Sail, Undo)
2. Validation in tests (is this action in legal_actions?)

It only mirrors the reducer's precondition checks. It does not look ahead,
so a listed SAIL may still lose the game.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, Location, FERRY_CAPACITY
from .action import Action


@dataclass
class ActionGenerator:
    """Generates the currently available actions for a state."""

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all available actions.

        Returns fully-specified Action objects. RESET is always present.
        """
        actions: list[Action] = []

        if not state.is_terminal:
            actions.extend(self._generate_select_actions(state))
            if state.aboard and state.has_driver_aboard:
                actions.append(Action.sail())

        if state.history:
            actions.append(Action.undo())

        actions.append(Action.reset())
        return actions

    def _generate_select_actions(self, state: GameState) -> list[Action]:
        has_room = len(state.aboard) < FERRY_CAPACITY
        actions = []
        for actor in state.actors:
            if actor.location == Location.FERRY:
                actions.append(Action.select_actor(actor.actor_id))
            elif actor.location == state.ferry_side and has_room:
                actions.append(Action.select_actor(actor.actor_id))
        return actions

    def selectable_actor_ids(self, state: GameState) -> list[str]:
        """IDs of actors a click would currently move."""
        if state.is_terminal:
            return []
        return [a.payload.actor_id for a in self._generate_select_actions(state)]


def legal_actions(state: GameState) -> list[Action]:
    """Convenience function to get available actions."""
    return ActionGenerator().generate(state)
