"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages sessions
3. Formats game state for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os

from .schemas import (
    # Requests
    CreateSessionRequest,
    ActionRequest,
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
    # Enums
    ActionKind,
    CardKind,
    ErrorCode,
    SessionStatus,
)
from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.action_generator import action_for_card, can_avoid, legal_actions
from ..engine_core.cards import (
    Card, HealthPotion, Monster, Suit, Weapon, card_label, find_card, normalize_suit,
)
from ..engine_core.state import DEFAULT_MAX_HEALTH
from ..games.standard.deck import make_card
from ..session import Session, SessionManager

logger = logging.getLogger(__name__)


def session_max_health() -> int:
    """
    Health for sessions whose create request does not say.

    Read from SCOUNDREL_MAX_HEALTH on every call. Raises ValueError when
    the variable is not a whole number.
    """
    raw = os.getenv("SCOUNDREL_MAX_HEALTH", str(DEFAULT_MAX_HEALTH))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"SCOUNDREL_MAX_HEALTH must be a whole number, got {raw!r}")


def card_info(card: Card) -> CardInfo:
    """Convert an engine card to its API form."""
    suit = normalize_suit(card.suit)
    info = dict(
        card_type=CardKind(card.card_type.value),
        suit=suit.value if isinstance(suit, Suit) else suit,
        rank=card.rank,
        label=card_label(card),
    )
    if isinstance(card, HealthPotion):
        return CardInfo(healing=card.healing, **info)
    if isinstance(card, Weapon):
        return WeaponInfo(
            damage=card.damage,
            monsters_slain=[card_info(m) for m in card.monsters_slain],
            **info,
        )
    return CardInfo(damage=card.damage, **info)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(CreateSessionRequest(seed=7))

        # Play
        response = service.dispatch(session_id, ActionRequest(action_type="draw_room"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """Create a new game session."""
        try:
            session = self.session_manager.create_session(
                seed=request.seed,
                max_health=request.max_health or session_max_health(),
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session status."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get the current game state."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._state_to_response(session)

    def dispatch(
        self, session_id: str, request: ActionRequest
    ) -> ActionResponse | ErrorResponse:
        """
        Apply an action to a session.

        Rule rejections come back as changed=False; missing payloads as
        an INVALID_ACTION error.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        action = self._build_action(session, request)
        result = session.dispatch(action)
        if not result.success:
            return ErrorResponse(
                error=result.error,
                error_code=ErrorCode.INVALID_ACTION,
                details={"action_type": request.action_type.value},
            )
        if not result.changed:
            logger.debug("Session %s: %s had no effect", session_id, request.action_type.value)

        return ActionResponse(
            session_id=session_id,
            changed=result.changed,
            state_changes=result.state_changes,
            game_state=self._state_to_response(session),
        )

    def get_legal_actions(self, session_id: str) -> LegalActionsResponse | ErrorResponse:
        """List the actions available in the current state."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        state = session.game_state
        recommended = {
            (action.action_type, action.payload)
            for action in (action_for_card(state, card) for card in state.room)
        }

        actions = []
        for action in legal_actions(state):
            card = action.payload.monster or action.payload.weapon
            if card is None and action.action_type == ActionType.USE_HEALTH_POTION:
                card = next(
                    c for c in state.room
                    if isinstance(c, HealthPotion) and c.healing == action.payload.healing
                )
            actions.append(LegalAction(
                action_type=ActionKind(action.action_type.value),
                card=card_info(card) if card else None,
                healing=action.payload.healing,
                recommended=(action.action_type, action.payload) in recommended,
            ))
        return LegalActionsResponse(session_id=session_id, actions=actions)

    def undo(self, session_id: str) -> UndoResponse | ErrorResponse:
        """Step a session back by one action."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        undone = session.undo()
        return UndoResponse(
            session_id=session_id,
            undone=undone,
            game_state=self._state_to_response(session),
        )

    def end_session(self, session_id: str) -> bool:
        """End a session."""
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        """List all session IDs."""
        return self.session_manager.list_sessions()

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _build_action(self, session: Session, request: ActionRequest) -> Action:
        """
        Turn a request into an engine action.

        Card references are resolved against the room; a card not in the
        room is built from the deck definition so the engine can reject it.
        """
        card = None
        if request.card is not None:
            reference = make_card(Suit(request.card.suit), request.card.rank)
            card = find_card(session.game_state.room, reference) or reference

        healing = request.healing
        if healing is None and isinstance(card, HealthPotion):
            healing = card.healing

        payload = ActionPayload(
            monster=card if isinstance(card, Monster) else None,
            weapon=card if isinstance(card, Weapon) else None,
            healing=healing,
        )
        return Action(
            action_type=ActionType(request.action_type.value),
            payload=payload,
            timestamp=request.timestamp,
            sequence=request.sequence,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert session to API response."""
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            seed=session.seed,
            created_at=session.created_at,
            game_state=self._state_to_response(session),
        )

    def _state_to_response(self, session: Session) -> GameStateResponse:
        """Convert the current game state to API response."""
        state = session.game_state
        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            health=state.health,
            max_health=state.max_health,
            dungeon_count=len(state.dungeon),
            room=[card_info(c) for c in state.room],
            discard_count=len(state.discard_pile),
            discard_top=card_info(state.discard_pile[-1]) if state.discard_pile else None,
            equipped_weapon=card_info(state.equipped_weapon) if state.equipped_weapon else None,
            can_draw_room=state.can_draw_room,
            can_avoid_room=can_avoid(state),
            game_over=state.game_over,
            score=state.score if state.game_over else None,
            last_action_timestamp=state.last_action_timestamp,
            last_action_sequence=state.last_action_sequence,
            state_checksum=state.state_checksum,
        )
