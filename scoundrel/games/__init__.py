"""
Games module - Deck definitions and game setup.

Each variant has its own subpackage with:
- Deck composition (which cards are monsters, weapons, potions)
- Setup of the initial GameState
"""
