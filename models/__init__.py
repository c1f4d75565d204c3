"""
Unified models library for the Skyflap project.

This package provides all Pydantic data models used across the system:
- Primitives: Basic geometric types (Point2D, Rectangle, Resolution)
- Flappy: Enums, projections, stored records and difficulty configuration

Usage:
    >>> from models import Rectangle, PipeData, FlappyConfig
    >>> from models.flappy import SoundEffect
    >>> from models.primitives import Point2D
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    Point2D,
    Resolution,
    Rectangle,
)

# ============================================================================
# Flappy Bird models
# ============================================================================
from .flappy import (
    SoundEffect,
    Capability,
    Difficulty,
    PipeData,
    SessionSummary,
    GameStats,
    PlayerSettings,
    BirdSettings,
    PipeSettings,
    LoopSettings,
    FlappyConfig,
)

__all__ = [
    # Primitives
    'Point2D',
    'Resolution',
    'Rectangle',
    # Flappy
    'SoundEffect',
    'Capability',
    'Difficulty',
    'PipeData',
    'SessionSummary',
    'GameStats',
    'PlayerSettings',
    'BirdSettings',
    'PipeSettings',
    'LoopSettings',
    'FlappyConfig',
]
