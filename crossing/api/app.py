"""
FastAPI Application - REST API for puzzle clients.

Endpoints:
    POST   /api/v1/sessions                                  Create session
    GET    /api/v1/sessions                                  List sessions
    GET    /api/v1/sessions/{id}                             Get session + state
    DELETE /api/v1/sessions/{id}                             End session
    GET    /api/v1/sessions/{id}/state                       Get state snapshot
    POST   /api/v1/sessions/{id}/actors/{actor_id}/select    Board / step off
    POST   /api/v1/sessions/{id}/sail                        Cross the river
    POST   /api/v1/sessions/{id}/undo                        Undo last crossing
    POST   /api/v1/sessions/{id}/reset                       Start over
    GET    /api/v1/rules                                     Roster and rules
    WS     /api/v1/sessions/{id}/ws                          Real-time state updates

Every intent endpoint answers with the full state snapshot. Refused intents
are ordinary outcomes (HTTP 200, accepted=false); only an unknown session
is an HTTP error.
"""

from typing import Annotated, Optional, Union
import json
import logging
import os

from fastapi import Body, FastAPI, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .service import APIService
from .schemas import (
    # Request models
    CreateSessionRequest,
    # Response models
    GameStateResponse,
    IntentResponse,
    SessionResponse,
    SessionListResponse,
    EndSessionResponse,
    RulesResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

# Environment configuration
CROSSING_ENV = os.getenv("CROSSING_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
SESSION_TTL_SECONDS = int(os.getenv("CROSSING_SESSION_TTL", "3600"))

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Crossing Engine API",
        description="""
Family and Thief river crossing puzzle.

## Flow

1. `POST /sessions` to start a game
2. `POST /actors/{actor_id}/select` to board or step off the ferry
3. `POST /sail` to cross
4. `POST /undo` or `POST /reset` at any time

## Outcomes

| Outcome | Meaning |
|---------|---------|
| `applied` | The intent changed the game |
| `precondition_rejected` | Nothing changed except the message |
| `constraint_violated` | The crossing broke a rule; the game is lost |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(session_ttl_seconds=SESSION_TTL_SECONDS)
    logger.info("Crossing API configured (env=%s, origins=%s)", CROSSING_ENV, ALLOWED_ORIGINS)

    # WebSocket connections, keyed by session; a key exists only while it has sockets
    ws_connections: dict[str, list[WebSocket]] = {}
    app.state.ws_connections = ws_connections

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def not_found(response: ErrorResponse) -> JSONResponse:
        return make_error_response(response.error_code, response.error, status_code=404)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    def drop_connection(session_id: str, websocket: WebSocket):
        connections = ws_connections.get(session_id, [])
        if websocket in connections:
            connections.remove(websocket)
        if not connections:
            ws_connections.pop(session_id, None)

    async def broadcast_to_session(session_id: str, message: dict):
        """Broadcast a message to all WebSocket connections for a session."""
        dead_connections = []
        for ws in ws_connections.get(session_id, []):
            try:
                await ws.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                dead_connections.append(ws)
        for ws in dead_connections:
            drop_connection(session_id, ws)

    async def close_session_sockets(session_id: str):
        """Close every socket still watching an ended session."""
        for ws in ws_connections.pop(session_id, []):
            try:
                await ws.close()
            except RuntimeError:
                logger.debug("WebSocket for session %s already closed", session_id)

    async def respond_to_intent(
        session_id: str,
        response: Union[IntentResponse, ErrorResponse],
    ) -> Union[IntentResponse, JSONResponse]:
        if isinstance(response, ErrorResponse):
            return not_found(response)
        await broadcast_to_session(session_id, {
            "type": "state_update",
            "payload": response.state.model_dump(mode="json"),
        })
        return response

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new puzzle session",
    )
    async def create_session(
        body: Annotated[Optional[CreateSessionRequest], Body()] = None,
    ) -> SessionResponse:
        """Start a new game with everyone on the start shore."""
        return api_service.create_session(body)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a puzzle session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a session and release its state."""
        success = api_service.end_session(session_id, reason)
        await close_session_sockets(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    # =========================================================================
    # Intent Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/actors/{actor_id}/select",
        response_model=IntentResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Board an actor, or step them off the ferry",
    )
    async def select_actor(session_id: str, actor_id: str) -> Union[IntentResponse, JSONResponse]:
        return await respond_to_intent(session_id, api_service.select_actor(session_id, actor_id))

    @app.post(
        "/api/v1/sessions/{session_id}/sail",
        response_model=IntentResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Sail the ferry to the other shore",
    )
    async def sail(session_id: str) -> Union[IntentResponse, JSONResponse]:
        return await respond_to_intent(session_id, api_service.sail(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/undo",
        response_model=IntentResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Undo the last crossing",
    )
    async def undo(session_id: str) -> Union[IntentResponse, JSONResponse]:
        return await respond_to_intent(session_id, api_service.undo(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=IntentResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start the puzzle over",
    )
    async def reset(session_id: str) -> Union[IntentResponse, JSONResponse]:
        return await respond_to_intent(session_id, api_service.reset(session_id))

    @app.get(
        "/api/v1/rules",
        response_model=RulesResponse,
        tags=["Game"],
        summary="Describe the roster and the safety rules",
    )
    async def get_rules() -> RulesResponse:
        return api_service.get_rules()

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game state changed
        - error: Unknown session or bad message

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            await websocket.send_json({
                "type": "error",
                "payload": {"message": response.error, "error_code": response.error_code.value},
            })
            await websocket.close()
            return

        ws_connections.setdefault(session_id, []).append(websocket)
        try:
            await websocket.send_json({
                "type": "state_update",
                "payload": response.model_dump(mode="json"),
            })

            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if isinstance(message, dict) and message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})

        except WebSocketDisconnect:
            logger.debug("WebSocket closed for session %s", session_id)
        finally:
            drop_connection(session_id, websocket)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="crossing-engine",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Crossing Engine API",
            "version": API_VERSION,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn crossing.api.app:app
app = create_app()
