"""
Standard Game Setup - Creates the initial game state.

This module handles:
- Building the 44-card deck
- Shuffling with a seed for determinism
- Putting the deck into the dungeon at full health
"""

from __future__ import annotations
import time

from ...engine_core.state import GameState, DEFAULT_MAX_HEALTH, initial_state
from .deck import build_deck, shuffle_deck


def setup_game(
    seed: int | None = None,
    max_health: int = DEFAULT_MAX_HEALTH,
    timestamp: float | None = None,
    sequence: int = 0,
    checksum: str = "",
) -> GameState:
    """
    Set up a new game of Scoundrel.

    Args:
        seed: Seed for deterministic shuffling (random order if None)
        max_health: Starting and maximum health
        timestamp: Initial action timestamp (defaults to now)
        sequence: Initial action sequence number
        checksum: Initial state checksum

    Returns:
        Initial GameState ready for the first draw
    """
    if max_health <= 0:
        raise ValueError("max_health must be positive")

    dungeon = shuffle_deck(build_deck(), seed)
    return initial_state(
        dungeon=dungeon,
        max_health=max_health,
        timestamp=time.time() if timestamp is None else timestamp,
        sequence=sequence,
        checksum=checksum,
    )
