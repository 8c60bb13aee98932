"""
API Module - Client interface.

Exposes the puzzle engine via REST and WebSocket. A client:
1. Creates a session
2. Forwards intents (select actor, sail, undo, reset)
3. Renders the state snapshot returned with every response

All state is session-scoped. No user accounts, nothing persisted.
"""

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
    ViolationInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    # Responses
    "GameStateResponse",
    "IntentResponse",
    "SessionResponse",
    "RulesResponse",
    "ErrorResponse",
    # Shared
    "ActorInfo",
    "AvailableAction",
    "ViolationInfo",
    # Service
    "APIService",
    "create_app",
]
