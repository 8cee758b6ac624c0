"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created with a shuffled deck
- Holds every state the game went through
- Supports undo and replay
- Removed when the caller ends it
"""

from .manager import SessionManager, Session, SessionState, replay
from .checksum import compute_checksum, state_to_dict, card_to_dict

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "replay",
    "compute_checksum",
    "state_to_dict",
    "card_to_dict",
]
