"""
FlappyBird - Configuration.

Host-side settings (window, colors, fonts, feedback patterns, storage
keys). Values can be overridden from a .env file next to this module.
Physics constants live in models.flappy.FlappyConfig and the YAML
presets, not here.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _get_str(key: str, default: str) -> str:
    return os.getenv(key, default)


# Display
SCREEN_WIDTH = _get_int('FLAPPY_SCREEN_WIDTH', 400)
SCREEN_HEIGHT = _get_int('FLAPPY_SCREEN_HEIGHT', 600)
MIN_SCREEN_WIDTH = 200
MIN_SCREEN_HEIGHT = 300
FPS = _get_int('FLAPPY_FPS', 60)  # display refresh target; physics is fixed at 60 Hz

# Difficulty preset used when no stored setting or CLI flag picks one
DEFAULT_DIFFICULTY = _get_str('FLAPPY_DIFFICULTY', 'normal')
PRESETS_DIR = Path(__file__).parent / 'presets'

# Feedback
AUDIO_ENABLED = _get_bool('FLAPPY_AUDIO', True)
VIBRATION_ENABLED = _get_bool('FLAPPY_VIBRATION', True)
MASTER_VOLUME = _get_float('FLAPPY_MASTER_VOLUME', 0.7)
SFX_VOLUME = _get_float('FLAPPY_SFX_VOLUME', 0.8)

FLAP_VIBRATION = 50                       # ms
MILESTONE_VIBRATION = [100, 50, 100]      # on/off/on, ms
GAME_OVER_VIBRATION = [200, 100, 200]
MILESTONE_EVERY = 10                      # points between milestone buzzes

# Storage keys
HIGH_SCORE_KEY = 'highScore'
LEGACY_HIGH_SCORE_KEY = 'highscore'
GAME_STATS_KEY = 'gameStats'
SETTINGS_KEY = 'settings'
DATA_VERSION_KEY = 'dataVersion'
DATA_VERSION = '1.2'

# Colors (RGB)
SKY_TOP_COLOR = (135, 206, 235)
SKY_BOTTOM_COLOR = (30, 144, 255)
CLOUD_COLOR = (255, 255, 255, 230)

PIPE_COLOR = (39, 174, 96)
PIPE_HIGHLIGHT_COLOR = (46, 204, 113)
PIPE_CAP_COLOR = (33, 150, 83)
PIPE_STRIPE_COLOR = (0, 0, 0, 26)
PIPE_CAP_HEIGHT = 20
PIPE_CAP_OVERHANG = 4

BIRD_BODY_COLOR = (255, 215, 0)
BIRD_BODY_CENTER_COLOR = (255, 234, 0)
BIRD_EYE_COLOR = (255, 255, 255)
BIRD_PUPIL_COLOR = (0, 0, 0)
BIRD_BEAK_COLOR = (255, 140, 0)
BIRD_WING_COLOR = (255, 140, 0)
BIRD_WING_DETAIL_COLOR = (255, 107, 0)

GROUND_TOP_COLOR = (139, 69, 19)
GROUND_BOTTOM_COLOR = (101, 67, 33)
GRASS_COLOR = (46, 204, 113)
GRASS_TUFT_COLOR = (39, 174, 96)

OVERLAY_COLOR = (0, 0, 0, 178)
TEXT_COLOR = (255, 255, 255)
TEXT_SHADOW_COLOR = (0, 0, 0)

# Fonts
FONT_SIZE_SMALL = 24
FONT_SIZE_LARGE = 48
FONT_SIZE_SCORE = 56

# Text
PAUSE_TITLE = "PAUSED"
PAUSE_HINT = "Press ESC to continue"
IDLE_TITLE = "FLAPPY BIRD"
IDLE_HINT = "Press SPACE or click to start"
GAME_OVER_TITLE = "GAME OVER"
GAME_OVER_HINT = "Press SPACE or click to play again"
