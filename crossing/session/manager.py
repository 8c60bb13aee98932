"""
Session Manager - Creates and manages puzzle sessions.

LIFECYCLE:
1. Player starts a game -> create an in-memory session with a fresh state
2. During play:
   - The presentation layer forwards an intent
   - The session applies it through the reducer (one at a time)
   - The new state replaces the old one wholesale
3. Player leaves -> session ended, state dropped

PERSISTENCE RULES:
- NO database; sessions live in memory only
- Each session owns exactly one GameState
- Transitions on one session are serialized by the session lock
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import threading
import time
import uuid

from ..engine_core.state import GameState
from ..engine_core.action import Action, ActionResult, ActionType
from ..engine_core.reducer import Reducer


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a puzzle session."""
    ACTIVE = "active"
    ENDED = "ended"


def _default_new_game() -> GameState:
    from ..games.family_thief import create_initial_state
    return create_initial_state()


@dataclass
class Session:
    """
    An in-memory puzzle session.

    Contains:
    - The current canonical game state
    - The reducer that produces the next one
    - A lock so only one transition is in flight

    The presentation layer never touches game_state directly.
    """
    session_id: str
    game_state: GameState
    created_at: float
    player_name: str = "Player"
    reducer: Reducer = field(default_factory=Reducer)

    state: SessionState = SessionState.ACTIVE
    last_active_at: float = 0.0
    transitions: int = 0

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def apply(self, action: Action) -> ActionResult:
        """Apply one intent and keep the resulting state."""
        with self._lock:
            result = self.reducer.apply(self.game_state, action)
            self.game_state = result.new_state
            self.transitions += 1
            self.last_active_at = time.time()
        return result


class SessionManager:
    """
    Manages puzzle sessions.

    Responsibilities:
    - Create sessions with a fresh puzzle
    - Route intents to the right session
    - Clean up idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, new_game: Callable[[], GameState] | None = None):
        self._sessions: dict[str, Session] = {}
        self._new_game = new_game or _default_new_game
        # None: reset falls back to the reducer's own fresh game
        self._reset_game = new_game
        self._lock = threading.Lock()

    def create_session(self, player_name: str = "Player") -> Session:
        """
        Create a new puzzle session.

        Args:
            player_name: Display name for the player

        Returns:
            New Session with the initial state
        """
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            game_state=self._new_game(),
            created_at=now,
            player_name=player_name,
            last_active_at=now,
            reducer=Reducer(new_game=self._reset_game),
        )
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Created session %s for %s", session.session_id, player_name)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def dispatch(self, session_id: str, action: Action) -> ActionResult | None:
        """
        Apply an intent to a session.

        Returns None if the session does not exist.
        """
        session = self.get_session(session_id)
        if not session or not session.is_active():
            return None
        result = session.apply(action)
        if action.action_type == ActionType.RESET:
            logger.info("Session %s reset", session_id)
        return result

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop its state.

        Returns False if there was no such session.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ENDED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions idle for longer than max_age_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        stale = [
            session_id
            for session_id, session in list(self._sessions.items())
            if current_time - session.last_active_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return len(stale)
