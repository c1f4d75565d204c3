"""
Flappy Bird enumerations.

These enums are the closed sets of tags that cross the boundary between
the game core and its host: sound effects, host capabilities and
difficulty presets.
"""

from enum import Enum


class SoundEffect(str, Enum):
    """Sound effects the core asks the host to play.

    Attributes:
        FLAP: Bird flapped
        POINT: A pipe was passed and the score went up
        HIT: The bird collided with a pipe, the ground or the ceiling
    """
    FLAP = "flap"
    POINT = "point"
    HIT = "hit"


class Capability(str, Enum):
    """Optional host features the core or host may query.

    Attributes:
        AUDIO: Sound output is available
        VIBRATION: Haptic feedback (gamepad rumble) is available
        STORAGE: The key-value store can persist data
        GAMEPAD: At least one gamepad is connected
    """
    AUDIO = "audio"
    VIBRATION = "vibration"
    STORAGE = "storage"
    GAMEPAD = "gamepad"


class Difficulty(str, Enum):
    """Named difficulty presets shipped as YAML files."""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
