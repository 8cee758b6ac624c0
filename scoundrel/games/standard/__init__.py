"""
Standard Scoundrel - The 44-card game by Zach Gage and Kurt Bieg.

A 52-card deck without the red face cards and red aces:
- Clubs and spades (2-A) are monsters
- Diamonds (2-10) are weapons
- Hearts (2-10) are health potions
"""

from .deck import build_deck, shuffle_deck, card_from_code, STANDARD_DECK_SIZE
from .setup import setup_game

__all__ = [
    "build_deck",
    "shuffle_deck",
    "card_from_code",
    "STANDARD_DECK_SIZE",
    "setup_game",
]
