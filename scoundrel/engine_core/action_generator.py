"""
Action Generator - Generates the legal actions from a game state.

The action generator is used by:
1. The CLI simulator to pick moves
2. Clients to show available actions
3. Sessions to gate actions the reducer does not check itself
"""

from __future__ import annotations

from .state import GameState
from .action import Action
from .cards import Card, HealthPotion, Monster, Weapon


def can_draw_room(state: GameState) -> bool:
    return state.can_draw_room


def can_avoid(state: GameState) -> bool:
    """Avoiding is offered only for a non-empty room, never twice in a row."""
    return (
        not state.game_over
        and len(state.room) > 0
        and state.can_avoid_room
        and not state.last_action_was_avoid
    )


def can_use_weapon_on(state: GameState, monster: Monster) -> bool:
    """The equipped weapon can take on monsters no stronger than itself."""
    weapon = state.equipped_weapon
    return weapon is not None and weapon.damage >= monster.damage


def action_for_card(state: GameState, card: Card) -> Action:
    """
    The action taken when a card in the room is chosen.

    Monsters are fought with the weapon when it is strong enough,
    otherwise bare-handed.
    """
    if isinstance(card, Monster):
        if can_use_weapon_on(state, card):
            return Action.use_weapon(card)
        return Action.fight_monster(card)
    if isinstance(card, Weapon):
        return Action.equip_weapon(card)
    if isinstance(card, HealthPotion):
        return Action.use_health_potion(card.healing)
    raise TypeError(f"Unknown card variant: {type(card).__name__}")


def legal_actions(state: GameState) -> list[Action]:
    """
    Generate all actions a player could take.

    Monsters get both a bare-handed and (when a weapon is equipped) a
    weapon option, even when the weapon is too weak to help.
    """
    if state.game_over:
        return []

    actions = []
    if can_draw_room(state):
        actions.append(Action.draw_room())
    if can_avoid(state):
        actions.append(Action.avoid_room())

    for card in state.room:
        if isinstance(card, Monster):
            actions.append(Action.fight_monster(card))
            if state.equipped_weapon is not None:
                actions.append(Action.use_weapon(card))
        elif isinstance(card, Weapon):
            actions.append(Action.equip_weapon(card))
        elif isinstance(card, HealthPotion):
            actions.append(Action.use_health_potion(card.healing))

    return actions
