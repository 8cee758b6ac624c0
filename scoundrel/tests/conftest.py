"""
Pytest fixtures for Scoundrel tests.
"""

import pytest

from ..engine_core.cards import HealthPotion, Monster, Suit, Weapon
from ..engine_core.state import GameState, initial_state
from ..engine_core.action import Action
from ..engine_core.reducer import reduce
from ..games.standard import setup_game


@pytest.fixture
def small_dungeon() -> tuple:
    """Six cards, in draw order."""
    return (
        Monster(Suit.CLUBS, "K", 13),
        HealthPotion(Suit.HEARTS, "5", 5),
        Weapon(Suit.DIAMONDS, "7", 7),
        Monster(Suit.SPADES, "3", 3),
        Monster(Suit.SPADES, "J", 11),
        HealthPotion(Suit.HEARTS, "2", 2),
    )


@pytest.fixture
def fresh_state(small_dungeon) -> GameState:
    """Game start with the small dungeon, nothing drawn."""
    return initial_state(dungeon=small_dungeon, timestamp=1000.0)


@pytest.fixture
def drawn_state(fresh_state) -> GameState:
    """The first room of the small dungeon has been drawn."""
    return reduce(fresh_state, Action.draw_room())


@pytest.fixture
def standard_state() -> GameState:
    """A full 44-card game with a fixed shuffle."""
    return setup_game(seed=42, timestamp=1000.0)
