"""
Tests for API schemas and the HTTP surface.

Tests:
- Pydantic schema validation
- OpenAPI schema generation
- Endpoints via the FastAPI test client
- WebSocket state updates
"""

import pytest
from fastapi.openapi.utils import get_openapi
from fastapi.testclient import TestClient
from fastapi import WebSocketDisconnect
from pydantic import ValidationError

from ..api.app import create_app
from ..api.schemas import CreateSessionRequest, ErrorCode, GameStateResponse
from ..api.service import APIService


@pytest.fixture
def client():
    # One event loop for HTTP and WebSocket traffic so broadcasts reach open sockets
    with TestClient(create_app(APIService())) as test_client:
        yield test_client


@pytest.fixture
def session_id(client):
    response = client.post("/api/v1/sessions", json={"player_name": "Web"})
    assert response.status_code == 200
    return response.json()["session_id"]


class TestSchemas:

    def test_player_name_required_non_empty(self):
        with pytest.raises(ValidationError):
            CreateSessionRequest(player_name="")

    def test_move_count_not_negative(self):
        with pytest.raises(ValidationError):
            GameStateResponse(
                session_id="s",
                actors=[],
                ferry_side="start",
                move_count=-1,
                status="playing",
                message="",
                severity="info",
                history_depth=0,
            )

    def test_error_code_values_are_strings(self):
        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_response_models_in_schema(self):
        app = create_app(APIService())
        schema = get_openapi(title=app.title, version=app.version, routes=app.routes)

        schemas = schema["components"]["schemas"]
        for name in ("GameStateResponse", "IntentResponse", "SessionResponse", "ErrorResponse"):
            assert name in schemas, f"Missing schema: {name}"

        paths = schema["paths"]
        assert "/api/v1/sessions/{session_id}/sail" in paths
        assert "/api/v1/sessions/{session_id}/actors/{actor_id}/select" in paths
        assert "200" in paths["/api/v1/sessions/{session_id}/undo"]["post"]["responses"]


class TestEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_session_without_body(self, client):
        response = client.post("/api/v1/sessions")

        assert response.status_code == 200
        assert response.json()["player_name"] == "Player"

    def test_invalid_body_is_validation_error(self, client):
        response = client.post("/api/v1/sessions", json={"player_name": ""})

        body = response.json()
        assert response.status_code == 422
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"]["errors"]

    def test_get_state(self, client, session_id):
        response = client.get(f"/api/v1/sessions/{session_id}/state")

        body = response.json()
        assert response.status_code == 200
        assert body["ferry_side"] == "start"
        assert body["move_count"] == 0
        assert len(body["actors"]) == 8

    def test_unknown_session_is_404(self, client):
        response = client.post("/api/v1/sessions/nope/sail")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SESSION_NOT_FOUND"

    def test_play_a_crossing(self, client, session_id):
        base = f"/api/v1/sessions/{session_id}"
        client.post(f"{base}/actors/police/select")
        client.post(f"{base}/actors/thief/select")
        response = client.post(f"{base}/sail")

        body = response.json()
        assert response.status_code == 200
        assert body["accepted"] is True
        assert body["outcome"] == "applied"
        assert body["state"]["ferry_side"] == "destination"
        assert body["state"]["move_count"] == 1
        assert body["state"]["can_undo"] is True

    def test_refused_intent_is_200(self, client, session_id):
        response = client.post(f"/api/v1/sessions/{session_id}/undo")

        body = response.json()
        assert response.status_code == 200
        assert body["accepted"] is False
        assert body["rejection_code"] == "NOTHING_TO_UNDO"

    def test_unknown_actor(self, client, session_id):
        response = client.post(f"/api/v1/sessions/{session_id}/actors/dragon/select")

        assert response.status_code == 200
        assert response.json()["rejection_code"] == "UNKNOWN_ACTOR"

    def test_end_session(self, client, session_id):
        response = client.delete(f"/api/v1/sessions/{session_id}")
        assert response.json()["success"] is True
        assert client.get(f"/api/v1/sessions/{session_id}").status_code == 404

    def test_rules(self, client):
        body = client.get("/api/v1/rules").json()
        assert body["ferry_capacity"] == 2
        assert len(body["roster"]) == 8


class TestWebSocket:

    def test_initial_state_and_updates(self, client, session_id):
        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            first = ws.receive_json()
            assert first["type"] == "state_update"
            assert first["payload"]["move_count"] == 0

            client.post(f"/api/v1/sessions/{session_id}/actors/mother/select")
            update = ws.receive_json()
            assert update["type"] == "state_update"
            assert update["payload"]["message"] == "Mother boarded the ferry."

            ws.send_json({"type": "ping"})
            assert ws.receive_json() == {"type": "pong"}

    def test_unknown_session(self, client):
        with client.websocket_connect("/api/v1/sessions/missing/ws") as ws:
            message = ws.receive_json()
            assert message["type"] == "error"
            assert message["payload"]["error_code"] == "SESSION_NOT_FOUND"

    def test_closing_last_socket_forgets_session(self, client, session_id):
        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            ws.receive_json()
            assert session_id in client.app.state.ws_connections

        assert session_id not in client.app.state.ws_connections

    def test_ending_session_closes_sockets(self, client, session_id):
        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            ws.receive_json()

            response = client.delete(f"/api/v1/sessions/{session_id}")
            assert response.json()["success"] is True
            assert session_id not in client.app.state.ws_connections

            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()
