"""
Action System - Actions, payloads, and results.

Actions are the only way state changes. Each action kind has its own
payload requirements; a missing payload is an InvalidActionError
(a protocol error from whoever built the action), while a payload that
is well-formed but breaks a game rule is a quiet no-op.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .cards import Monster, Weapon


class InvalidActionError(ValueError):
    """An action is missing (or has a malformed) required payload."""


class ActionType(Enum):
    """Kinds of player actions."""
    DRAW_ROOM = "draw_room"
    AVOID_ROOM = "avoid_room"
    FIGHT_MONSTER = "fight_monster"
    USE_WEAPON = "use_weapon"
    USE_HEALTH_POTION = "use_health_potion"
    EQUIP_WEAPON = "equip_weapon"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action.

    Different action types read different fields.
    Validation happens in the reducer.
    """
    monster: Monster | None = None
    weapon: Weapon | None = None
    healing: int | None = None


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    action_type is typed as Any so an unrecognized kind can still be
    dispatched (and ignored) rather than rejected at construction.
    timestamp and sequence are supplied by the ordering layer.
    """
    action_type: Any
    payload: ActionPayload = field(default_factory=ActionPayload)
    timestamp: float | None = None
    sequence: int | None = None

    @classmethod
    def draw_room(cls) -> Action:
        """Factory for draw room action."""
        return cls(action_type=ActionType.DRAW_ROOM)

    @classmethod
    def avoid_room(cls) -> Action:
        """Factory for avoid room action."""
        return cls(action_type=ActionType.AVOID_ROOM)

    @classmethod
    def fight_monster(cls, monster: Monster) -> Action:
        """Factory for bare-handed fight."""
        return cls(
            action_type=ActionType.FIGHT_MONSTER,
            payload=ActionPayload(monster=monster),
        )

    @classmethod
    def use_weapon(cls, monster: Monster) -> Action:
        """Factory for fighting with the equipped weapon."""
        return cls(
            action_type=ActionType.USE_WEAPON,
            payload=ActionPayload(monster=monster),
        )

    @classmethod
    def use_health_potion(cls, healing: int) -> Action:
        """Factory for drinking a potion of the given strength."""
        return cls(
            action_type=ActionType.USE_HEALTH_POTION,
            payload=ActionPayload(healing=healing),
        )

    @classmethod
    def equip_weapon(cls, weapon: Weapon) -> Action:
        """Factory for equip action."""
        return cls(
            action_type=ActionType.EQUIP_WEAPON,
            payload=ActionPayload(weapon=weapon),
        )

    def stamped(self, timestamp: float, sequence: int) -> Action:
        """Return a copy carrying ordering metadata."""
        return Action(
            action_type=self.action_type,
            payload=self.payload,
            timestamp=timestamp,
            sequence=sequence,
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    success is False only for invalid actions. A rule rejection is a
    success with changed=False and the original state.
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None
    changed: bool = False

    # Human-readable summary of what happened
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            changed=True,
            state_changes=changes or [],
        )

    @classmethod
    def unchanged(cls, state: Any) -> ActionResult:
        """Create a result for a rejected (no-op) action."""
        return cls(success=True, new_state=state, changed=False)
