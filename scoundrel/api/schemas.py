"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- INVALID_ACTION: Action is missing its required payload
- SESSION_NOT_FOUND: Session does not exist or has been ended
- VALIDATION_ERROR: Request could not be interpreted
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from ..engine_core.cards import RANKS, Suit, normalize_suit


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class CardKind(str, Enum):
    """Card variants as exposed to clients."""
    MONSTER = "monster"
    WEAPON = "weapon"
    HEALTH_POTION = "health_potion"


class ActionKind(str, Enum):
    """Action kinds accepted by POST /actions."""
    DRAW_ROOM = "draw_room"
    AVOID_ROOM = "avoid_room"
    FIGHT_MONSTER = "fight_monster"
    USE_WEAPON = "use_weapon"
    USE_HEALTH_POTION = "use_health_potion"
    EQUIP_WEAPON = "equip_weapon"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_ACTION = "INVALID_ACTION"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardRef(BaseModel):
    """Reference to a card by suit and rank, as sent by clients."""
    suit: str = Field(..., description="S, H, D, C or a suit glyph")
    rank: str = Field(..., description="2-10, J, Q, K or A")

    @field_validator("suit")
    @classmethod
    def suit_must_be_known(cls, value: str) -> str:
        suit = normalize_suit(value)
        if not isinstance(suit, Suit):
            raise ValueError(f"Unknown suit: {value}")
        return suit.value

    @field_validator("rank")
    @classmethod
    def rank_must_be_known(cls, value: str) -> str:
        rank = value.upper()
        if rank not in RANKS:
            raise ValueError(f"Unknown rank: {value}")
        return rank


class CardInfo(BaseModel):
    """Card information for display."""
    card_type: CardKind
    suit: str
    rank: str
    label: str = Field(description="Short label, e.g. 10♠")
    damage: Optional[int] = None
    healing: Optional[int] = None

    model_config = {"from_attributes": True}


class WeaponInfo(CardInfo):
    """The equipped weapon and everything it has slain."""
    monsters_slain: list[CardInfo] = Field(default_factory=list)


class GameStateResponse(BaseModel):
    """
    The game state as a client sees it.

    The dungeon is face down, so only its size is exposed.
    """
    session_id: str
    status: SessionStatus
    health: int
    max_health: int
    dungeon_count: int
    room: list[CardInfo] = Field(default_factory=list)
    discard_count: int = 0
    discard_top: Optional[CardInfo] = None
    equipped_weapon: Optional[WeaponInfo] = None
    can_draw_room: bool = False
    can_avoid_room: bool = False
    game_over: bool = False
    score: Optional[int] = Field(None, description="Set once the game is over")
    last_action_timestamp: float = 0.0
    last_action_sequence: int = 0
    state_checksum: str = ""
    api_version: str = "v1"


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    seed: Optional[int] = Field(None, description="Seed for a reproducible deck")
    max_health: Optional[int] = Field(None, ge=1, description="Starting and maximum health")


class ActionRequest(BaseModel):
    """
    Request to apply an action.

    card is required for fight_monster, use_weapon and equip_weapon;
    healing for use_health_potion.
    """
    action_type: ActionKind
    card: Optional[CardRef] = None
    healing: Optional[int] = None
    timestamp: Optional[float] = None
    sequence: Optional[int] = None


# =============================================================================
# Response Models
# =============================================================================

class SessionResponse(BaseModel):
    """Response describing a session."""
    session_id: str
    status: SessionStatus
    seed: Optional[int] = None
    created_at: float
    game_state: GameStateResponse
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Response after applying an action."""
    session_id: str
    changed: bool = Field(description="False when the action was rejected by a game rule")
    state_changes: list[str] = Field(default_factory=list)
    game_state: GameStateResponse
    api_version: str = "v1"


class LegalAction(BaseModel):
    """One action the player may take now."""
    action_type: ActionKind
    card: Optional[CardInfo] = None
    healing: Optional[int] = None
    recommended: bool = Field(
        False, description="The action picked when the card is chosen"
    )


class LegalActionsResponse(BaseModel):
    """Response listing legal actions."""
    session_id: str
    actions: list[LegalAction]


class UndoResponse(BaseModel):
    """Response after an undo request."""
    session_id: str
    undone: bool
    game_state: GameStateResponse


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class SessionListResponse(BaseModel):
    """Response listing sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
