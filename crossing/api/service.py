"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine intents
2. Manages sessions
3. Formats state snapshots for clients

This layer is framework-agnostic (can be used with FastAPI, a CLI, tests, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    # Responses
    GameStateResponse,
    IntentResponse,
    SessionResponse,
    RulesResponse,
    ErrorResponse,
    # Shared
    ActorInfo,
    AvailableAction,
    RoleInfo,
    ViolationInfo,
    # Enums
    ErrorCode,
    GameStatus,
    IntentOutcome,
    LocationName,
    MessageSeverity,
    RejectionReason,
)
from ..engine_core.state import GameState, FERRY_CAPACITY
from ..engine_core.action import Action, ActionResult
from ..engine_core.action_generator import legal_actions
from ..games.family_thief import PUZZLE_ID, PUZZLE_NAME, ROSTER, RULES
from ..session import SessionManager, Session


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Start a game
        session = service.create_session(CreateSessionRequest(player_name="Ada"))

        # Forward intents
        service.select_actor(session.session_id, "father")
        service.sail(session.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Idle sessions older than this are dropped when a new one is created
    session_ttl_seconds: int = 3600

    def create_session(self, request: CreateSessionRequest | None = None) -> SessionResponse:
        """Create a new puzzle session."""
        request = request or CreateSessionRequest()
        self.session_manager.cleanup_stale_sessions(self.session_ttl_seconds)
        session = self.session_manager.create_session(player_name=request.player_name)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session metadata and state."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._session_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get the current state snapshot."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._state_to_response(session_id, session.game_state)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Intents
    # =========================================================================

    def select_actor(self, session_id: str, actor_id: str) -> IntentResponse | ErrorResponse:
        return self.dispatch(session_id, Action.select_actor(actor_id))

    def sail(self, session_id: str) -> IntentResponse | ErrorResponse:
        return self.dispatch(session_id, Action.sail())

    def undo(self, session_id: str) -> IntentResponse | ErrorResponse:
        return self.dispatch(session_id, Action.undo())

    def reset(self, session_id: str) -> IntentResponse | ErrorResponse:
        return self.dispatch(session_id, Action.reset())

    def dispatch(self, session_id: str, action: Action) -> IntentResponse | ErrorResponse:
        """Forward an intent to a session and report the outcome."""
        result = self.session_manager.dispatch(session_id, action)
        if result is None:
            return self._session_not_found(session_id)
        return self._result_to_response(session_id, result)

    def get_rules(self) -> RulesResponse:
        """Describe the puzzle for a rules screen."""
        return RulesResponse(
            puzzle_id=PUZZLE_ID,
            puzzle_name=PUZZLE_NAME,
            ferry_capacity=FERRY_CAPACITY,
            roster=[
                RoleInfo(
                    actor_id=d.actor_id,
                    name=d.name,
                    role=d.role.value,
                    is_driver=d.is_driver,
                    emoji=d.emoji,
                )
                for d in ROSTER
            ],
            rules=list(RULES),
        )

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            player_name=session.player_name,
            created_at=session.created_at,
            puzzle_name=PUZZLE_NAME,
            state=self._state_to_response(session.session_id, session.game_state),
        )

    def _state_to_response(self, session_id: str, state: GameState) -> GameStateResponse:
        return GameStateResponse(
            session_id=session_id,
            actors=[
                ActorInfo(
                    actor_id=a.actor_id,
                    name=a.name,
                    role=a.role.value,
                    is_driver=a.is_driver,
                    location=LocationName(a.location.value),
                    emoji=a.emoji,
                    color=a.color,
                    bg_color=a.bg_color,
                )
                for a in state.actors
            ],
            ferry_side=LocationName(state.ferry_side.value),
            move_count=state.move_count,
            is_over=state.is_over,
            is_won=state.is_won,
            status=GameStatus(state.status.value),
            message=state.message,
            severity=MessageSeverity(state.severity.value),
            history_depth=state.history_depth,
            can_undo=state.history_depth > 0,
            available_actions=[
                AvailableAction(
                    action_type=action.action_type.value,
                    actor_id=action.payload.actor_id,
                )
                for action in legal_actions(state)
            ],
        )

    def _result_to_response(self, session_id: str, result: ActionResult) -> IntentResponse:
        violation = None
        if result.violation:
            violation = ViolationInfo(
                rule=result.violation.rule.value,
                location=LocationName(result.violation.location.value),
                message=result.violation.message,
                actor_id=result.violation.actor_id,
            )
        return IntentResponse(
            session_id=session_id,
            accepted=result.accepted,
            outcome=IntentOutcome(result.outcome.value),
            rejection_code=(
                RejectionReason(result.rejection_code.value)
                if result.rejection_code else None
            ),
            violation=violation,
            changes=result.changes,
            state=self._state_to_response(session_id, result.new_state),
        )
