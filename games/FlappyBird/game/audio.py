"""
Pygame effect sink and capability provider for FlappyBird.

Sounds are synthesized with numpy at startup, so the game ships without
audio assets. Vibration goes to gamepad rumble when a pad is connected.
Every failure here degrades to silence with a logged warning.
"""

from typing import Dict, List, Optional

import numpy as np
import pygame

from models import Capability, SoundEffect
from skyflap.effects import CapabilityProvider, EffectSink, VibrationPattern, normalize_pattern
from skyflap.logging import get_logger
from skyflap.storage import KeyValueStore

from ..config import MASTER_VOLUME, SFX_VOLUME

log = get_logger('audio')

SAMPLE_RATE = 22050

# effect -> (waveform, frequency Hz, duration s)
TONES = {
    SoundEffect.FLAP: ('sine', 400.0, 0.2),
    SoundEffect.POINT: ('square', 800.0, 0.1),
    SoundEffect.HIT: ('sawtooth', 150.0, 0.5),
}


def synthesize_tone(
    waveform: str,
    frequency: float,
    duration: float,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = 0.3,
) -> np.ndarray:
    """Generate a decaying tone as float samples in [-1, 1].

    Args:
        waveform: 'sine', 'square' or 'sawtooth'
        frequency: Pitch in Hz
        duration: Length in seconds
        sample_rate: Samples per second
        amplitude: Peak level at the start of the tone

    Returns:
        1-D float array of length sample_rate * duration

    Raises:
        ValueError: If the waveform is unknown
    """
    num_samples = int(sample_rate * duration)
    t = np.linspace(0, duration, num_samples, False)
    phase = frequency * t

    if waveform == 'sine':
        wave = np.sin(2.0 * np.pi * phase)
    elif waveform == 'square':
        wave = np.sign(np.sin(2.0 * np.pi * phase))
    elif waveform == 'sawtooth':
        wave = 2.0 * (phase - np.floor(phase + 0.5))
    else:
        raise ValueError(f"Unknown waveform: {waveform}")

    # Exponential fade from amplitude down to 0.01
    envelope = amplitude * np.power(0.01 / amplitude, t / duration)
    return wave * envelope


class PygameEffects(EffectSink):
    """Plays synthesized sounds through pygame.mixer and rumbles gamepads.

    Examples:
        >>> effects = PygameEffects(sound=False)
        >>> effects.play_effect(SoundEffect.FLAP)  # muted, does nothing
    """

    def __init__(self, sound: bool = True, vibration: bool = True):
        """Initialize the mixer and build the sound table.

        Args:
            sound: Whether sounds should play
            vibration: Whether rumble should run
        """
        self.sound_enabled = sound
        self.vibration_enabled = vibration
        self.sounds: Dict[SoundEffect, Optional[pygame.mixer.Sound]] = {}
        self._joysticks: List[pygame.joystick.Joystick] = []

        if self.sound_enabled:
            self._init_audio()
        if self.vibration_enabled:
            self._init_rumble()

    @property
    def audio_available(self) -> bool:
        return any(sound is not None for sound in self.sounds.values())

    @property
    def rumble_available(self) -> bool:
        return bool(self._joysticks)

    def _init_audio(self) -> None:
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            for kind, (waveform, frequency, duration) in TONES.items():
                self.sounds[kind] = self._make_sound(waveform, frequency, duration)
                if self.sounds[kind] is not None:
                    self.sounds[kind].set_volume(SFX_VOLUME * MASTER_VOLUME)
        except Exception as e:
            log.warning("Audio initialization failed: %s", e)
            self.sound_enabled = False
            self.sounds = {}

    def _make_sound(self, waveform: str, frequency: float, duration: float) -> Optional[pygame.mixer.Sound]:
        try:
            sample_rate, _, channels = pygame.mixer.get_init()
            wave = synthesize_tone(waveform, frequency, duration, sample_rate)
            samples = (wave * 32767).astype(np.int16)
            if channels > 1:
                samples = np.column_stack([samples] * channels)
            return pygame.sndarray.make_sound(np.ascontiguousarray(samples))
        except Exception as e:
            log.warning("Could not generate %s sound: %s", waveform, e)
            return None

    def _init_rumble(self) -> None:
        try:
            if not pygame.joystick.get_init():
                pygame.joystick.init()
            self._joysticks = [
                pygame.joystick.Joystick(i) for i in range(pygame.joystick.get_count())
            ]
        except Exception as e:
            log.warning("Gamepad initialization failed: %s", e)
            self._joysticks = []

    def play_effect(self, kind: SoundEffect) -> None:
        if not self.sound_enabled:
            return
        sound = self.sounds.get(kind)
        if sound is None:
            return
        try:
            sound.play()
        except Exception as e:
            log.warning("Could not play %s sound: %s", kind.value, e)

    def vibrate(self, pattern: VibrationPattern) -> None:
        """Rumble every connected pad.

        Rumble takes a single duration, so the "on" periods of a pattern
        are summed into one pulse.
        """
        if not self.vibration_enabled or not self._joysticks:
            return
        durations = normalize_pattern(pattern)
        on_time = sum(durations[::2])
        if on_time <= 0:
            return
        for joystick in self._joysticks:
            try:
                joystick.rumble(0.5, 1.0, on_time)
            except Exception as e:
                log.warning("Rumble failed: %s", e)

    def set_sound(self, enabled: bool) -> None:
        if enabled and not self.sounds:
            self.sound_enabled = True
            self._init_audio()
        else:
            self.sound_enabled = enabled

    def set_vibration(self, enabled: bool) -> None:
        self.vibration_enabled = enabled
        if enabled and not self._joysticks:
            self._init_rumble()

    def close(self) -> None:
        for sound in self.sounds.values():
            if sound is not None:
                sound.stop()
        for joystick in self._joysticks:
            try:
                joystick.stop_rumble()
            except Exception as e:
                log.debug("stop_rumble failed: %s", e)
        self.sounds = {}
        self._joysticks = []


class PygameCapabilities(CapabilityProvider):
    """Reports what the pygame host can do right now."""

    def __init__(self, effects: PygameEffects, store: Optional[KeyValueStore] = None):
        self._effects = effects
        self._store = store

    def supports(self, capability: Capability) -> bool:
        if capability == Capability.AUDIO:
            return self._effects.sound_enabled and self._effects.audio_available
        if capability == Capability.VIBRATION:
            return self._effects.vibration_enabled and self._effects.rumble_available
        if capability == Capability.GAMEPAD:
            return self._effects.rumble_available
        if capability == Capability.STORAGE:
            return self._store is not None and self._store.supported
        return False
