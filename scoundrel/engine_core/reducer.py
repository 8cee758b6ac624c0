"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action() or reduce().

Design principles:
- Pure function: (state, action) -> new_state, the input is never touched
- Invalid payloads fail the call (ActionResult.failure / InvalidActionError)
- Rule violations are silent no-ops that return the same state
- Once the game is over every action is a no-op
"""

from __future__ import annotations

from .state import GameState, ROOM_SIZE
from .action import Action, ActionType, ActionResult, InvalidActionError
from .cards import (
    Card, CardType, HealthPotion, Monster, Weapon,
    card_label, find_card, without_card,
)
from .scoring import death_score, exhaustion_score

INVALID_ACTION = "INVALID_ACTION"

# Fewer cards than this left in the dungeon ends the game on the next draw
MIN_DUNGEON_TO_DRAW = 3


class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state, or a failure for an
        invalid action. Never raises for invalid actions.
        """
        if state.game_over:
            return ActionResult.unchanged(state)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.unchanged(state)

        try:
            return handler(state, action)
        except InvalidActionError as e:
            return ActionResult.failure(str(e), error_code=INVALID_ACTION)

    def _get_handler(self, action_type):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.DRAW_ROOM: self._handle_draw_room,
            ActionType.AVOID_ROOM: self._handle_avoid_room,
            ActionType.FIGHT_MONSTER: self._handle_fight_monster,
            ActionType.USE_WEAPON: self._handle_use_weapon,
            ActionType.USE_HEALTH_POTION: self._handle_use_health_potion,
            ActionType.EQUIP_WEAPON: self._handle_equip_weapon,
        }
        if not isinstance(action_type, ActionType):
            return None
        return handlers.get(action_type)

    # =========================================================================
    # Room flow
    # =========================================================================

    def _handle_draw_room(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle draw room.

        Callers gate this with GameState.can_draw_room; the handler
        itself draws whenever the dungeon can supply a room.
        """
        if len(state.dungeon) < MIN_DUNGEON_TO_DRAW:
            new_state = state._copy_with(
                game_over=True,
                score=exhaustion_score(state.health, state.dungeon),
            )
            return ActionResult.success_with_state(
                new_state,
                changes=[f"The dungeon is exhausted. Final score: {new_state.score}"],
            )

        if len(state.room) == 1:
            # The leftover card stays and three new ones join it
            drawn = state.dungeon[:ROOM_SIZE - 1]
            room = state.room + drawn
            dungeon = state.dungeon[ROOM_SIZE - 1:]
        else:
            drawn = state.dungeon[:ROOM_SIZE]
            room = drawn
            dungeon = state.dungeon[ROOM_SIZE:]

        new_state = state._copy_with(
            room=room,
            dungeon=dungeon,
            can_avoid_room=not state.last_action_was_avoid,
            original_room_size=ROOM_SIZE,
            remaining_avoids=1,
            last_action_was_avoid=False,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Drew {', '.join(card_label(c) for c in drawn)}"],
        )

    def _handle_avoid_room(self, state: GameState, action: Action) -> ActionResult:
        """Send the whole room to the bottom of the dungeon."""
        if not state.can_avoid_room or state.last_action_was_avoid:
            return ActionResult.unchanged(state)

        new_state = state._copy_with(
            room=(),
            dungeon=state.dungeon + state.room,
            original_room_size=0,
            remaining_avoids=0,
            last_action_was_avoid=True,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Avoided the room ({len(state.room)} cards to the bottom of the dungeon)"],
        )

    # =========================================================================
    # Combat
    # =========================================================================

    def _handle_fight_monster(self, state: GameState, action: Action) -> ActionResult:
        """Fight bare-handed: full damage, monster goes to the discard pile."""
        monster = self._require_monster(action)
        target = self._find_in_room(state, monster, CardType.MONSTER)
        if target is None:
            return ActionResult.unchanged(state)

        health = state.health - target.damage
        return self._finish_combat(
            state,
            health=health,
            room=without_card(state.room, target),
            changes=[f"Fought {card_label(target)} bare-handed for {target.damage} damage"],
            discard_pile=state.discard_pile + (target,),
        )

    def _handle_use_weapon(self, state: GameState, action: Action) -> ActionResult:
        """
        Fight with the equipped weapon.

        Damage taken is whatever the monster has over the weapon. The
        monster stays with the weapon (its slain stack) and the weapon's
        damage drops to the monster's damage.
        """
        monster = self._require_monster(action)
        weapon = state.equipped_weapon
        if weapon is None:
            return ActionResult.unchanged(state)

        target = self._find_in_room(state, monster, CardType.MONSTER)
        if target is None:
            return ActionResult.unchanged(state)

        damage = max(0, target.damage - weapon.damage)
        return self._finish_combat(
            state,
            health=state.health - damage,
            room=without_card(state.room, target),
            changes=[
                f"Slew {card_label(target)} with {card_label(weapon)} for {damage} damage",
                f"Weapon strength is now {target.damage}",
            ],
            equipped_weapon=weapon.with_kill(target),
        )

    def _finish_combat(
        self,
        state: GameState,
        health: int,
        room: tuple[Card, ...],
        changes: list[str],
        **fields,
    ) -> ActionResult:
        """Apply a combat outcome, ending the game if health ran out."""
        if health <= 0:
            new_state = state._copy_with(
                health=health,
                room=room,
                game_over=True,
                score=death_score(state.dungeon),
                can_avoid_room=False,
                remaining_avoids=0,
                last_action_was_avoid=False,
                **fields,
            )
            changes = changes + [f"Died. Final score: {new_state.score}"]
            return ActionResult.success_with_state(new_state, changes=changes)

        new_state = self._after_resolution(state, room, health=health, **fields)
        return ActionResult.success_with_state(new_state, changes=changes)

    # =========================================================================
    # Resources
    # =========================================================================

    def _handle_use_health_potion(self, state: GameState, action: Action) -> ActionResult:
        """Drink a potion from the room. Healing above max health is lost."""
        healing = action.payload.healing
        if isinstance(healing, bool) or not isinstance(healing, int):
            raise InvalidActionError(
                f"Healing amount is required for {ActionType.USE_HEALTH_POTION.value} action"
            )

        potion = next(
            (
                card for card in state.room
                if isinstance(card, HealthPotion) and card.healing == healing
            ),
            None,
        )
        if potion is None:
            return ActionResult.unchanged(state)

        health = min(state.max_health, state.health + healing)
        ordering = {}
        if action.timestamp is not None:
            ordering["last_action_timestamp"] = action.timestamp
        if action.sequence is not None:
            ordering["last_action_sequence"] = action.sequence

        new_state = self._after_resolution(
            state,
            without_card(state.room, potion),
            health=health,
            discard_pile=state.discard_pile + (potion,),
            **ordering,
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Drank {card_label(potion)}, health {state.health} -> {health}"],
        )

    def _handle_equip_weapon(self, state: GameState, action: Action) -> ActionResult:
        """Equip a weapon from the room, discarding the old one and its kills."""
        weapon = action.payload.weapon
        if not isinstance(weapon, Weapon):
            raise InvalidActionError(
                f"Weapon is required for {ActionType.EQUIP_WEAPON.value} action"
            )

        target = self._find_in_room(state, weapon, CardType.WEAPON)
        if target is None:
            return ActionResult.unchanged(state)

        discard_pile = state.discard_pile
        changes = [f"Equipped {card_label(target)}"]
        old_weapon = state.equipped_weapon
        if old_weapon is not None:
            discard_pile = discard_pile + (old_weapon,) + old_weapon.monsters_slain
            changes.append(
                f"Discarded {card_label(old_weapon)} and {len(old_weapon.monsters_slain)} slain monster(s)"
            )

        new_state = self._after_resolution(
            state,
            without_card(state.room, target),
            equipped_weapon=target,
            discard_pile=discard_pile,
        )
        return ActionResult.success_with_state(new_state, changes=changes)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _after_resolution(
        self, state: GameState, room: tuple[Card, ...], **fields
    ) -> GameState:
        """
        Common update after a card in the room has been dealt with.

        Avoiding is possible again only while the room still has the size
        it was drawn at.
        """
        return state._copy_with(
            room=room,
            can_avoid_room=len(room) == state.original_room_size,
            remaining_avoids=0,
            last_action_was_avoid=False,
            **fields,
        )

    def _require_monster(self, action: Action) -> Monster:
        monster = action.payload.monster
        if not isinstance(monster, Monster):
            raise InvalidActionError(
                f"Monster is required for {action.action_type.value} action"
            )
        return monster

    def _find_in_room(
        self, state: GameState, card: Card, card_type: CardType
    ) -> Card | None:
        """Find card in the room, only if it is of the expected variant."""
        found = find_card(state.room, card)
        if found is None or found.card_type != card_type:
            return None
        return found


_REDUCER = Reducer()


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Returns an ActionResult; invalid actions come back as failures.
    """
    return _REDUCER.apply(state, action)


def reduce(state: GameState, action: Action) -> GameState:
    """
    Apply an action and return the next state.

    Raises InvalidActionError when the action is missing its payload.
    """
    result = _REDUCER.apply(state, action)
    if not result.success:
        raise InvalidActionError(result.error)
    return result.new_state
