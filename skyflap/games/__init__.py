"""
Skyflap game framework.

Provides:
- game_state: Standard GameState enum for game sessions
"""

from skyflap.games.game_state import GameState

__all__ = ['GameState']
