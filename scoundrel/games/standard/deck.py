"""
Standard Deck - Card definitions for the standard Scoundrel deck.
"""

from __future__ import annotations
import random

from ...engine_core.cards import (
    Card, HealthPotion, Monster, Weapon, Suit, RANKS, normalize_suit, rank_value,
)

# Red suits stop at 10: no red face cards, no red aces
RED_RANKS = RANKS[:RANKS.index("10") + 1]

STANDARD_DECK_SIZE = 2 * len(RANKS) + 2 * len(RED_RANKS)


def make_card(suit: Suit, rank: str) -> Card:
    """Create the card a suit/rank pair stands for in Scoundrel."""
    value = rank_value(rank)
    if suit in (Suit.CLUBS, Suit.SPADES):
        return Monster(suit=suit, rank=rank, damage=value)
    if suit == Suit.DIAMONDS:
        return Weapon(suit=suit, rank=rank, damage=value)
    return HealthPotion(suit=suit, rank=rank, healing=value)


def card_from_code(code: str) -> Card:
    """
    Parse a card code such as "10S", "K♣" or "7d".

    The suit is the last character; the rest is the rank.
    """
    code = code.strip()
    if len(code) < 2:
        raise ValueError(f"Invalid card code: {code!r}")

    rank, suit = code[:-1].upper(), normalize_suit(code[-1])
    if not isinstance(suit, Suit):
        raise ValueError(f"Unknown suit in card code: {code!r}")
    if rank_value(rank) == 0:
        raise ValueError(f"Unknown rank in card code: {code!r}")
    if suit in (Suit.HEARTS, Suit.DIAMONDS) and rank not in RED_RANKS:
        raise ValueError(f"{code!r} is not part of the Scoundrel deck")
    return make_card(suit, rank)


def build_deck() -> list[Card]:
    """Build the unshuffled deck, suit by suit in rank order."""
    deck = []
    for suit in (Suit.CLUBS, Suit.SPADES):
        deck.extend(make_card(suit, rank) for rank in RANKS)
    for suit in (Suit.DIAMONDS, Suit.HEARTS):
        deck.extend(make_card(suit, rank) for rank in RED_RANKS)
    return deck


def shuffle_deck(deck: list[Card], seed: int | None = None) -> list[Card]:
    """Return a shuffled copy. The same seed always gives the same order."""
    rng = random.Random(seed)
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled
