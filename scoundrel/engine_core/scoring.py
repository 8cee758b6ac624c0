"""
Scoring - Final score when the game ends.

Sign convention:
- score >= 0: the player survived; the score is remaining health
- score < 0: the player died; magnitude is the strength of the monsters
  still waiting in the dungeon

Only the dungeon counts. Monsters left in the room or already in the
discard pile are not part of the penalty.
"""

from __future__ import annotations

from .cards import Card, CardType, rank_value


def dungeon_monster_penalty(dungeon: tuple[Card, ...]) -> int:
    """Sum of rank values of the monsters in the dungeon."""
    return sum(
        rank_value(card.rank)
        for card in dungeon
        if card.card_type == CardType.MONSTER
    )


def death_score(dungeon: tuple[Card, ...]) -> int:
    return -dungeon_monster_penalty(dungeon)


def exhaustion_score(health: int, dungeon: tuple[Card, ...]) -> int:
    """Score when the dungeon runs out on a draw."""
    if health > 0:
        return health
    return death_score(dungeon)
