"""
Cards - Card identity, suits, and rank strength.

A Scoundrel card is one of three variants:
- Monster: clubs and spades, deals damage
- Weapon: diamonds, reduces monster damage
- HealthPotion: hearts, restores health

Cards are immutable values. Two cards are "the same card" when their
normalized suit and rank match, regardless of which instance is held.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union


class Suit(str, Enum):
    """Canonical suits."""
    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"


class CardType(Enum):
    """Card variants."""
    MONSTER = "monster"
    WEAPON = "weapon"
    HEALTH_POTION = "health_potion"


RANKS: tuple[str, ...] = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")

_RANK_VALUES: dict[str, int] = {rank: value for value, rank in enumerate(RANKS, start=2)}

_SUIT_ALIASES: dict[str, Suit] = {
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}


def normalize_suit(suit: Suit | str) -> Suit | str:
    """
    Map a letter code (any case) or a suit glyph to a canonical Suit.

    Unrecognized input is returned unchanged. Such a card will never
    compare equal to a card with a canonical suit.
    """
    if isinstance(suit, Suit):
        return suit
    return _SUIT_ALIASES.get(suit.upper(), suit)


def rank_value(rank: str) -> int:
    """Numeric strength of a rank: 2..10, J=11, Q=12, K=13, A=14. Unknown ranks are 0."""
    return _RANK_VALUES.get(rank, 0)


@dataclass(frozen=True)
class Monster:
    """A monster card. Damage is usually the rank value."""
    suit: Suit | str
    rank: str
    damage: int

    @property
    def card_type(self) -> CardType:
        return CardType.MONSTER


@dataclass(frozen=True)
class Weapon:
    """
    A weapon card.

    damage is the current fighting strength. After each kill it becomes
    the damage of the monster just slain, so a weapon can only be used
    against progressively weaker monsters.
    """
    suit: Suit | str
    rank: str
    damage: int
    monsters_slain: tuple[Monster, ...] = field(default_factory=tuple)

    @property
    def card_type(self) -> CardType:
        return CardType.WEAPON

    def with_kill(self, monster: Monster) -> Weapon:
        """Return the weapon after slaying monster."""
        return replace(
            self,
            damage=monster.damage,
            monsters_slain=self.monsters_slain + (monster,),
        )


@dataclass(frozen=True)
class HealthPotion:
    """A potion card."""
    suit: Suit | str
    rank: str
    healing: int

    @property
    def card_type(self) -> CardType:
        return CardType.HEALTH_POTION


Card = Union[Monster, Weapon, HealthPotion]


def cards_equal(a: Card, b: Card) -> bool:
    """True when both cards have the same normalized suit and rank."""
    return normalize_suit(a.suit) == normalize_suit(b.suit) and a.rank == b.rank


def find_card(cards: tuple[Card, ...], card: Card) -> Card | None:
    """Find the card in cards that matches card by identity."""
    for c in cards:
        if cards_equal(c, card):
            return c
    return None


def without_card(cards: tuple[Card, ...], card: Card) -> tuple[Card, ...]:
    """Return cards with every match of card removed."""
    return tuple(c for c in cards if not cards_equal(c, card))


def card_label(card: Card) -> str:
    """Short display label, e.g. '10♠'."""
    suit = normalize_suit(card.suit)
    symbol = SUIT_SYMBOLS.get(suit, str(suit)) if isinstance(suit, Suit) else suit
    return f"{card.rank}{symbol}"
