"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a client UI and the engine.
Every state-changing endpoint returns the full state snapshot so the client
can simply re-render.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- VALIDATION_ERROR: Request body or parameters failed validation (HTTP 422)

Refused intents (ferry full, no driver, ...) are NOT errors: they come back
with HTTP 200, accepted=false and a rejection_code.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class LocationName(str, Enum):
    """Where an actor stands."""
    START = "start"
    FERRY = "ferry"
    DESTINATION = "destination"


class GameStatus(str, Enum):
    """Machine status."""
    PLAYING = "playing"
    LOST = "lost"
    WON = "won"


class MessageSeverity(str, Enum):
    """Severity tag of the status message."""
    INFO = "info"
    ERROR = "error"
    SUCCESS = "success"
    WARNING = "warning"


class IntentOutcome(str, Enum):
    APPLIED = "applied"
    PRECONDITION_REJECTED = "precondition_rejected"
    CONSTRAINT_VIOLATED = "constraint_violated"


class RejectionReason(str, Enum):
    """Why an intent was refused."""
    GAME_FINISHED = "GAME_FINISHED"
    UNKNOWN_ACTOR = "UNKNOWN_ACTOR"
    WRONG_SHORE = "WRONG_SHORE"
    FERRY_FULL = "FERRY_FULL"
    FERRY_EMPTY = "FERRY_EMPTY"
    NO_DRIVER = "NO_DRIVER"
    NOTHING_TO_UNDO = "NOTHING_TO_UNDO"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ActorInfo(BaseModel):
    """Actor information for display."""
    actor_id: str
    name: str
    role: str
    is_driver: bool
    location: LocationName
    emoji: str = ""
    color: str = ""
    bg_color: str = ""


class AvailableAction(BaseModel):
    """An intent whose preconditions currently hold."""
    action_type: str = Field(description="select_actor, sail, undo, reset")
    actor_id: Optional[str] = None


class ViolationInfo(BaseModel):
    """The safety rule a losing crossing broke."""
    rule: str
    location: LocationName
    message: str
    actor_id: Optional[str] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to start a new puzzle session."""
    player_name: str = Field("Player", min_length=1, max_length=64)


# =============================================================================
# Response Models
# =============================================================================

class GameStateResponse(BaseModel):
    """
    Full state snapshot for rendering.

    history_depth / can_undo let the client enable the Undo button;
    available_actions covers the rest of the affordances.
    """
    session_id: str
    actors: list[ActorInfo]
    ferry_side: LocationName
    move_count: int = Field(ge=0)
    is_over: bool = False
    is_won: bool = False
    status: GameStatus
    message: str
    severity: MessageSeverity
    history_depth: int = Field(ge=0)
    can_undo: bool = False
    available_actions: list[AvailableAction] = Field(default_factory=list)


class IntentResponse(BaseModel):
    """Response to a forwarded intent."""
    session_id: str
    accepted: bool
    outcome: IntentOutcome
    rejection_code: Optional[RejectionReason] = None
    violation: Optional[ViolationInfo] = None
    changes: list[str] = Field(default_factory=list)
    state: GameStateResponse


class SessionResponse(BaseModel):
    """Session metadata plus the current state."""
    session_id: str
    player_name: str
    created_at: float
    puzzle_name: str
    state: GameStateResponse


class SessionListResponse(BaseModel):
    """List of active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class RoleInfo(BaseModel):
    """One roster entry, for the rules screen."""
    actor_id: str
    name: str
    role: str
    is_driver: bool
    emoji: str = ""


class RulesResponse(BaseModel):
    """Puzzle description."""
    puzzle_id: str
    puzzle_name: str
    ferry_capacity: int
    roster: list[RoleInfo]
    rules: list[str]


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    service: str = "crossing-engine"
    version: str = "1.0.0"
