"""
Tests for the standard deck and game setup.
"""

from collections import Counter

import pytest

from ..engine_core.cards import CardType, HealthPotion, Monster, Suit, Weapon
from ..games.standard import (
    STANDARD_DECK_SIZE, build_deck, card_from_code, setup_game, shuffle_deck,
)


class TestBuildDeck:

    def test_composition(self):
        deck = build_deck()
        counts = Counter(card.card_type for card in deck)

        assert len(deck) == STANDARD_DECK_SIZE == 44
        assert counts[CardType.MONSTER] == 26
        assert counts[CardType.WEAPON] == 9
        assert counts[CardType.HEALTH_POTION] == 9

    def test_no_red_faces_or_aces(self):
        for card in build_deck():
            if card.suit in (Suit.HEARTS, Suit.DIAMONDS):
                assert card.rank not in ("J", "Q", "K", "A")

    def test_unique_cards(self):
        deck = build_deck()
        assert len({(card.suit, card.rank) for card in deck}) == len(deck)

    def test_values_follow_rank(self):
        deck = build_deck()
        ace = next(c for c in deck if c.suit == Suit.SPADES and c.rank == "A")
        assert ace == Monster(Suit.SPADES, "A", 14)
        assert Weapon(Suit.DIAMONDS, "10", 10) in deck
        assert HealthPotion(Suit.HEARTS, "2", 2) in deck


class TestShuffleDeck:

    def test_same_seed_same_order(self):
        assert shuffle_deck(build_deck(), 7) == shuffle_deck(build_deck(), 7)

    def test_different_seeds_differ(self):
        assert shuffle_deck(build_deck(), 1) != shuffle_deck(build_deck(), 2)

    def test_input_not_mutated(self):
        deck = build_deck()
        original = list(deck)
        shuffle_deck(deck, 3)
        assert deck == original

    def test_same_cards(self):
        deck = build_deck()
        assert Counter(shuffle_deck(deck, 5)) == Counter(deck)


class TestCardFromCode:

    @pytest.mark.parametrize("code,expected", [
        ("10S", Monster(Suit.SPADES, "10", 10)),
        ("k♣", Monster(Suit.CLUBS, "K", 13)),
        ("7d", Weapon(Suit.DIAMONDS, "7", 7)),
        ("2♥", HealthPotion(Suit.HEARTS, "2", 2)),
    ])
    def test_valid_codes(self, code, expected):
        assert card_from_code(code) == expected

    @pytest.mark.parametrize("code", ["", "S", "10X", "1S", "QH", "AD"])
    def test_invalid_codes(self, code):
        with pytest.raises(ValueError):
            card_from_code(code)


class TestSetupGame:

    def test_initial_state(self, standard_state):
        assert standard_state.health == 20
        assert standard_state.max_health == 20
        assert len(standard_state.dungeon) == 44
        assert standard_state.room == ()
        assert standard_state.discard_pile == ()
        assert standard_state.equipped_weapon is None
        assert standard_state.can_avoid_room
        assert standard_state.remaining_avoids == 1
        assert not standard_state.game_over
        assert standard_state.last_action_timestamp == 1000.0

    def test_seeded_setup_is_deterministic(self):
        a = setup_game(seed=9, timestamp=0.0)
        b = setup_game(seed=9, timestamp=0.0)
        assert a == b

    def test_custom_max_health(self):
        state = setup_game(seed=1, max_health=30)
        assert state.health == state.max_health == 30

    def test_timestamp_defaults_to_now(self):
        assert setup_game(seed=1).last_action_timestamp > 0

    @pytest.mark.parametrize("max_health", [0, -5])
    def test_max_health_must_be_positive(self, max_health):
        with pytest.raises(ValueError):
            setup_game(max_health=max_health)
