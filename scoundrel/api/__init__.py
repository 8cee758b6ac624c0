"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Creates a game session
2. Posts actions (draw, avoid, fight, heal, equip)
3. Reads the state and the legal actions
4. Ends the session once the game is over

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    ActionRequest,
    CardRef,
    # Responses
    SessionResponse,
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    UndoResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    WeaponInfo,
    LegalAction,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "ActionRequest",
    "CardRef",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "ActionResponse",
    "LegalActionsResponse",
    "UndoResponse",
    "ErrorResponse",
    # Shared
    "CardInfo",
    "WeaponInfo",
    "LegalAction",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
