"""
Game State - The single aggregate the reducer operates on.

Design principles:
- Immutable: the dataclass is frozen and every sequence is a tuple
- Replaced, never mutated: transitions build a new state via _copy_with()
- Pass-through fields (timestamp, sequence, checksum) belong to the
  ordering/integrity layer; the engine only copies them forward
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any

from .cards import Card, Weapon

DEFAULT_MAX_HEALTH = 20
ROOM_SIZE = 4


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    Card conservation: dungeon + room + discard_pile + the equipped weapon
    and its slain monsters always add up to the original deck size.
    """
    health: int = DEFAULT_MAX_HEALTH
    max_health: int = DEFAULT_MAX_HEALTH

    # Piles
    dungeon: tuple[Card, ...] = field(default_factory=tuple)  # front is drawn next
    room: tuple[Card, ...] = field(default_factory=tuple)
    discard_pile: tuple[Card, ...] = field(default_factory=tuple)
    equipped_weapon: Weapon | None = None

    # Room flow
    can_avoid_room: bool = True
    original_room_size: int = 0
    remaining_avoids: int = 1
    last_action_was_avoid: bool = False

    # Termination
    game_over: bool = False
    score: int = 0  # only meaningful once game_over

    # Ordering/integrity pass-through
    last_action_timestamp: float = 0.0
    last_action_sequence: int = 0
    state_checksum: str = ""

    @property
    def card_count(self) -> int:
        """Total cards accounted for across every pile."""
        count = len(self.dungeon) + len(self.room) + len(self.discard_pile)
        if self.equipped_weapon is not None:
            count += 1 + len(self.equipped_weapon.monsters_slain)
        return count

    @property
    def can_draw_room(self) -> bool:
        """A room may be drawn once it is empty or down to its last card."""
        return not self.game_over and len(self.room) in (0, 1)

    @property
    def survived(self) -> bool:
        return self.game_over and self.health > 0

    def _copy_with(self, **kwargs: Any) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


def initial_state(
    dungeon: tuple[Card, ...] | list[Card] = (),
    max_health: int = DEFAULT_MAX_HEALTH,
    timestamp: float = 0.0,
    sequence: int = 0,
    checksum: str = "",
) -> GameState:
    """
    State at game start: full health, nothing drawn, no weapon.

    The deck (already shuffled) goes into the dungeon as given.
    """
    return GameState(
        health=max_health,
        max_health=max_health,
        dungeon=tuple(dungeon),
        room=(),
        discard_pile=(),
        equipped_weapon=None,
        can_avoid_room=True,
        game_over=False,
        score=0,
        original_room_size=0,
        remaining_avoids=1,
        last_action_was_avoid=False,
        last_action_timestamp=timestamp,
        last_action_sequence=sequence,
        state_checksum=checksum,
    )
