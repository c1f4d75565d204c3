"""Pytest fixtures for FlappyBird tests."""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import random

import pytest

from models import Capability, FlappyConfig, LoopSettings
from skyflap.effects import EffectSink, StaticCapabilities
from skyflap.storage import MemoryStore
from games.FlappyBird.game.engine import FlappyEngine


class RecordingEffects(EffectSink):
    """Effect sink that remembers every trigger."""

    def __init__(self):
        self.sounds = []
        self.vibrations = []
        self.closed = False

    def play_effect(self, kind):
        self.sounds.append(kind)

    def vibrate(self, pattern):
        self.vibrations.append(pattern)

    def close(self):
        self.closed = True


@pytest.fixture
def effects():
    return RecordingEffects()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(store, effects):
    """Engine on a 400x600 canvas with the classic timestep."""
    return FlappyEngine(
        400, 600,
        store=store,
        effects=effects,
        capabilities=StaticCapabilities([Capability.VIBRATION]),
        rng=random.Random(42),
    )


@pytest.fixture
def fast_engine(store, effects):
    """Engine with a 10 ms timestep so tick arithmetic is exact."""
    config = FlappyConfig(loop=LoopSettings(timestep=10.0, reference_frame=10.0))
    return FlappyEngine(
        400, 600,
        store=store,
        effects=effects,
        capabilities=StaticCapabilities([Capability.VIBRATION]),
        config=config,
        rng=random.Random(42),
    )
