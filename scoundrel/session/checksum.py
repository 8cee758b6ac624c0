"""
State Checksum - Content hash of a game state.

The checksum is for an external verifier. The engine carries it but
never checks it.
"""

from __future__ import annotations
import hashlib
import json
from typing import Any

from ..engine_core.cards import Card, Monster, Suit, Weapon, normalize_suit
from ..engine_core.state import GameState


def card_to_dict(card: Card) -> dict[str, Any]:
    """Plain dict for a card, with the suit normalized when possible."""
    suit = normalize_suit(card.suit)
    data: dict[str, Any] = {
        "type": card.card_type.value,
        "suit": suit.value if isinstance(suit, Suit) else suit,
        "rank": card.rank,
    }
    if isinstance(card, Weapon):
        data["damage"] = card.damage
        data["monsters_slain"] = [card_to_dict(m) for m in card.monsters_slain]
    elif isinstance(card, Monster):
        data["damage"] = card.damage
    else:
        data["healing"] = card.healing
    return data


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Plain dict for a state. Ordering metadata and the checksum are left out."""
    return {
        "health": state.health,
        "max_health": state.max_health,
        "dungeon": [card_to_dict(c) for c in state.dungeon],
        "room": [card_to_dict(c) for c in state.room],
        "discard_pile": [card_to_dict(c) for c in state.discard_pile],
        "equipped_weapon": (
            card_to_dict(state.equipped_weapon) if state.equipped_weapon else None
        ),
        "can_avoid_room": state.can_avoid_room,
        "original_room_size": state.original_room_size,
        "remaining_avoids": state.remaining_avoids,
        "last_action_was_avoid": state.last_action_was_avoid,
        "game_over": state.game_over,
        "score": state.score,
    }


def compute_checksum(state: GameState) -> str:
    """SHA-256 of the canonical JSON form of the state."""
    canonical = json.dumps(state_to_dict(state), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
