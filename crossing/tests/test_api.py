"""
Tests for API layer.

Tests:
- API service methods
- Session lifecycle via API
- Intent outcomes and state snapshots
- Error handling
"""

import pytest

from ..api.schemas import (
    CreateSessionRequest,
    ErrorCode,
    ErrorResponse,
    GameStatus,
    IntentOutcome,
    LocationName,
    MessageSeverity,
    RejectionReason,
)
from ..api.service import APIService


@pytest.fixture
def service():
    """Create a fresh API service."""
    return APIService()


@pytest.fixture
def session_id(service):
    return service.create_session(CreateSessionRequest(player_name="Tester")).session_id


class TestAPIService:
    """Tests for APIService."""

    def test_create_session(self, service):
        response = service.create_session(CreateSessionRequest(player_name="Tester"))

        assert response.session_id
        assert response.player_name == "Tester"
        assert response.puzzle_name == "Family and Thief River Crossing"
        state = response.state
        assert len(state.actors) == 8
        assert all(a.location == LocationName.START for a in state.actors)
        assert state.status == GameStatus.PLAYING
        assert state.history_depth == 0
        assert not state.can_undo

    def test_create_session_without_request(self, service):
        response = service.create_session()
        assert response.player_name == "Player"

    def test_get_nonexistent_session(self, service):
        response = service.get_session("nonexistent-id")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_end_session(self, service, session_id):
        assert service.end_session(session_id)
        assert isinstance(service.get_session(session_id), ErrorResponse)

    def test_list_sessions(self, service):
        for _ in range(3):
            service.create_session()
        assert len(service.list_sessions()) == 3

    def test_rules(self, service):
        rules = service.get_rules()

        assert rules.ferry_capacity == 2
        assert [r.actor_id for r in rules.roster] == [
            "father", "mother", "son1", "son2",
            "daughter1", "daughter2", "police", "thief",
        ]
        assert any("Thief" in rule for rule in rules.rules)


class TestIntents:

    def test_select_actor(self, service, session_id):
        response = service.select_actor(session_id, "father")

        assert response.accepted
        assert response.outcome == IntentOutcome.APPLIED
        father = next(a for a in response.state.actors if a.actor_id == "father")
        assert father.location == LocationName.FERRY

    def test_rejection_is_not_an_error(self, service, session_id):
        service.select_actor(session_id, "son1")
        service.select_actor(session_id, "daughter1")
        response = service.sail(session_id)

        assert not response.accepted
        assert response.outcome == IntentOutcome.PRECONDITION_REJECTED
        assert response.rejection_code == RejectionReason.NO_DRIVER
        assert response.state.severity == MessageSeverity.ERROR
        assert response.state.move_count == 0

    def test_losing_sail_reports_violation(self, service, session_id):
        service.select_actor(session_id, "father")
        service.select_actor(session_id, "daughter1")
        response = service.sail(session_id)

        assert response.accepted
        assert response.outcome == IntentOutcome.CONSTRAINT_VIOLATED
        assert response.violation.rule == "sons_without_father"
        assert response.violation.location == LocationName.START
        assert response.state.is_over
        assert response.state.status == GameStatus.LOST
        assert response.state.can_undo
        assert [a.action_type for a in response.state.available_actions] == ["undo", "reset"]

    def test_undo_and_reset(self, service, session_id):
        service.select_actor(session_id, "police")
        service.sail(session_id)

        undone = service.undo(session_id)
        assert undone.state.move_count == 0
        assert undone.state.message == "Move undone!"

        reset = service.reset(session_id)
        assert reset.state.history_depth == 0
        assert all(a.location == LocationName.START for a in reset.state.actors)

    def test_intent_on_unknown_session(self, service):
        response = service.sail("missing")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_win_through_service(self, service, session_id, solution_moves):
        response = None
        for riders in solution_moves:
            for actor_id in riders:
                service.select_actor(session_id, actor_id)
            response = service.sail(session_id)

        assert response.state.is_won
        assert response.state.status == GameStatus.WON
        assert response.state.severity == MessageSeverity.SUCCESS
        assert response.state.move_count == len(solution_moves)
