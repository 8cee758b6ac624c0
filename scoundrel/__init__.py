"""
Scoundrel - Solitaire Dungeon Crawl Card Game Engine

A deterministic engine for the single-player card game Scoundrel.
The engine explores a shuffled deck room by room and provides:
- Immutable game state
- A pure reducer for every player action
- Legal action generation
- Scoring on death or dungeon exhaustion
"""

__version__ = "0.1.0"
