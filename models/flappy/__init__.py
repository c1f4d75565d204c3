"""
Flappy Bird models.

Provides the enums, read-only projections, stored records and the
difficulty configuration used by games.FlappyBird.
"""

from .enums import SoundEffect, Capability, Difficulty
from .models import PipeData, SessionSummary, GameStats, PlayerSettings
from .game_config import BirdSettings, PipeSettings, LoopSettings, FlappyConfig

__all__ = [
    # Enums
    'SoundEffect',
    'Capability',
    'Difficulty',
    # Models
    'PipeData',
    'SessionSummary',
    'GameStats',
    'PlayerSettings',
    # Configuration
    'BirdSettings',
    'PipeSettings',
    'LoopSettings',
    'FlappyConfig',
]
