"""
Tests for legal action generation.
"""

import pytest

from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import (
    action_for_card, can_avoid, can_draw_room, can_use_weapon_on, legal_actions,
)
from ..engine_core.cards import HealthPotion, Monster, Suit, Weapon
from ..engine_core.reducer import reduce
from ..engine_core.state import GameState


SIX = Monster(Suit.SPADES, "6", 6)
QUEEN = Monster(Suit.CLUBS, "Q", 12)
SWORD = Weapon(Suit.DIAMONDS, "7", 7)
POTION = HealthPotion(Suit.HEARTS, "4", 4)


def kinds(actions):
    return [a.action_type for a in actions]


class TestCanDrawRoom:

    @pytest.mark.parametrize("room,expected", [
        ((), True),
        ((SIX,), True),
        ((SIX, QUEEN), False),
        ((SIX, QUEEN, SWORD, POTION), False),
    ])
    def test_room_size(self, room, expected):
        assert can_draw_room(GameState(room=room)) is expected

    def test_not_after_game_over(self):
        assert not can_draw_room(GameState(game_over=True))


class TestCanAvoid:

    def test_fresh_room(self, drawn_state):
        assert can_avoid(drawn_state)

    def test_empty_room(self, fresh_state):
        """Nothing to avoid before the first draw."""
        assert not can_avoid(fresh_state)

    def test_not_twice_in_a_row(self, drawn_state):
        avoided = reduce(drawn_state, Action.avoid_room())
        assert not can_avoid(avoided)
        assert not can_avoid(reduce(avoided, Action.draw_room()))

    def test_not_after_resolving_a_card(self, drawn_state):
        state = reduce(drawn_state, Action.fight_monster(drawn_state.room[0]))
        assert not can_avoid(state)


class TestActionForCard:

    def test_monster_without_weapon(self):
        action = action_for_card(GameState(room=(SIX,)), SIX)
        assert action.action_type == ActionType.FIGHT_MONSTER
        assert action.payload.monster == SIX

    def test_monster_with_strong_weapon(self):
        state = GameState(room=(SIX,), equipped_weapon=SWORD)
        assert can_use_weapon_on(state, SIX)
        assert action_for_card(state, SIX).action_type == ActionType.USE_WEAPON

    def test_weapon_exactly_as_strong(self):
        state = GameState(equipped_weapon=Weapon(Suit.DIAMONDS, "6", 6))
        assert action_for_card(state, SIX).action_type == ActionType.USE_WEAPON

    def test_monster_with_weak_weapon(self):
        state = GameState(room=(QUEEN,), equipped_weapon=SWORD)
        assert not can_use_weapon_on(state, QUEEN)
        assert action_for_card(state, QUEEN).action_type == ActionType.FIGHT_MONSTER

    def test_weapon_card(self):
        action = action_for_card(GameState(), SWORD)
        assert action.action_type == ActionType.EQUIP_WEAPON
        assert action.payload.weapon == SWORD

    def test_potion_card(self):
        action = action_for_card(GameState(), POTION)
        assert action.action_type == ActionType.USE_HEALTH_POTION
        assert action.payload.healing == 4

    def test_unknown_card(self):
        with pytest.raises(TypeError):
            action_for_card(GameState(), object())


class TestLegalActions:

    def test_before_first_draw(self, fresh_state):
        assert kinds(legal_actions(fresh_state)) == [ActionType.DRAW_ROOM]

    def test_full_room(self, drawn_state):
        # K♣, 5♥, 7♦, 3♠
        assert kinds(legal_actions(drawn_state)) == [
            ActionType.AVOID_ROOM,
            ActionType.FIGHT_MONSTER,
            ActionType.USE_HEALTH_POTION,
            ActionType.EQUIP_WEAPON,
            ActionType.FIGHT_MONSTER,
        ]

    def test_weapon_option_offered_for_every_monster(self):
        # Two cards of a room of four already resolved
        state = GameState(
            room=(SIX, QUEEN),
            equipped_weapon=SWORD,
            can_avoid_room=False,
            original_room_size=4,
            remaining_avoids=0,
        )
        assert kinds(legal_actions(state)) == [
            ActionType.FIGHT_MONSTER,
            ActionType.USE_WEAPON,
            ActionType.FIGHT_MONSTER,
            ActionType.USE_WEAPON,
        ]

    def test_last_card_allows_draw(self):
        state = GameState(room=(POTION,), can_avoid_room=False)
        assert kinds(legal_actions(state)) == [
            ActionType.DRAW_ROOM,
            ActionType.USE_HEALTH_POTION,
        ]

    def test_game_over(self):
        assert legal_actions(GameState(game_over=True, room=(SIX,))) == []

    def test_every_legal_action_applies(self, drawn_state):
        for action in legal_actions(drawn_state):
            assert reduce(drawn_state, action) is not drawn_state
