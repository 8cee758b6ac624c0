"""
Bot Policy - Interface for automatic play.

A BotPolicy takes a game state and returns a decision.
Used by the CLI simulator and for exercising the engine over whole games.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random

from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import action_for_card, legal_actions
from ..engine_core.cards import Card, HealthPotion, Monster, Weapon
from ..engine_core.reducer import reduce
from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains the action to take and an explanation for logs.
    """
    action: Action
    explanation: str = ""
    evaluated_actions: int = 0


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    """

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing invariants over many games
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            evaluated_actions=len(legal_actions),
        )


class CardClickPolicy(BotPolicy):
    """
    Plays the way a careful player clicks through the game.

    Draws whenever possible and never avoids. Otherwise picks one card
    from the room and takes the action clicking that card would take:
    1. A weapon stronger than the one in hand
    2. A potion that heals without waste
    3. The weakest monster
    4. Whatever is left, in room order
    """

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        for action in legal_actions:
            if action.action_type == ActionType.DRAW_ROOM:
                return BotDecision(action=action, explanation="Room cleared, drawing", evaluated_actions=1)

        card, reason = self._pick_card(state)
        return BotDecision(
            action=action_for_card(state, card),
            explanation=reason,
            evaluated_actions=len(state.room),
        )

    def _pick_card(self, state: GameState) -> tuple[Card, str]:
        weapon = state.equipped_weapon
        for card in state.room:
            if isinstance(card, Weapon) and (weapon is None or card.damage > weapon.damage):
                return card, "Upgrading weapon"

        missing = state.max_health - state.health
        for card in state.room:
            if isinstance(card, HealthPotion) and 0 < card.healing <= missing:
                return card, "Healing"

        monsters = [c for c in state.room if isinstance(c, Monster)]
        if monsters:
            return min(monsters, key=lambda m: m.damage), "Fighting the weakest monster"

        return state.room[0], "Clearing the room"


def play_out(
    state: GameState,
    policy: BotPolicy,
    max_actions: int = 1000,
) -> tuple[GameState, list[BotDecision]]:
    """
    Let a policy play until the game is over.

    Returns the final state and every decision taken. Stops early
    after max_actions decisions.
    """
    decisions = []
    while not state.game_over and len(decisions) < max_actions:
        decision = policy.select_action(state, legal_actions(state))
        decisions.append(decision)
        state = reduce(state, decision.action)
    return state, decisions
