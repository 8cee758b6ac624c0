"""
Bots - Automatic players.

Policies pick one of the legal actions for a state.
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, CardClickPolicy, play_out

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "CardClickPolicy",
    "play_out",
]
