"""
Engine Core - Deterministic game state transitions.

The engine:
1. Identifies and ranks cards
2. Holds the immutable GameState
3. Applies actions via the reducer
4. Ends and scores the game
5. Lists legal actions for callers
"""

from .cards import (
    Suit,
    CardType,
    Card,
    Monster,
    Weapon,
    HealthPotion,
    RANKS,
    normalize_suit,
    cards_equal,
    rank_value,
)
from .state import GameState, initial_state, DEFAULT_MAX_HEALTH
from .action import Action, ActionType, ActionPayload, ActionResult, InvalidActionError
from .reducer import Reducer, apply_action, reduce
from .action_generator import legal_actions, action_for_card

__all__ = [
    "Suit",
    "CardType",
    "Card",
    "Monster",
    "Weapon",
    "HealthPotion",
    "RANKS",
    "normalize_suit",
    "cards_equal",
    "rank_value",
    "GameState",
    "initial_state",
    "DEFAULT_MAX_HEALTH",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "InvalidActionError",
    "Reducer",
    "apply_action",
    "reduce",
    "legal_actions",
    "action_for_card",
]
