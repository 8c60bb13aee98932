"""
Session Module - Manages in-memory puzzle sessions.

A session represents one player's game:
- Created when the player starts a game
- Owns the current game state
- Serializes the intents forwarded to it
- Dropped when the player leaves

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
