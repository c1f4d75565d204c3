"""
Effect and capability interfaces between a game core and its host.

The core fires tagged effects (sound, vibration) and never learns how or
whether they were rendered. Hosts implement EffectSink for their audio and
haptics backends and CapabilityProvider to describe what the machine can
do.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence, Union

from models.flappy import Capability, SoundEffect

VibrationPattern = Union[int, Sequence[int]]


def normalize_pattern(pattern: VibrationPattern) -> List[int]:
    """Convert a vibration pattern into a list of millisecond durations.

    Patterns alternate on/off periods starting with "on", as in
    ``[200, 100, 200]``. A bare integer is a single pulse. Negative
    entries are clamped to zero.

    Examples:
        >>> normalize_pattern(50)
        [50]
        >>> normalize_pattern([100, 50, 100])
        [100, 50, 100]
    """
    if isinstance(pattern, int):
        return [max(0, pattern)]
    return [max(0, int(ms)) for ms in pattern]


class EffectSink(ABC):
    """Receives sound and haptic triggers from the game core.

    Implementations must not raise; unsupported effects are ignored.
    """

    @abstractmethod
    def play_effect(self, kind: SoundEffect) -> None:
        """Play the sound for an effect tag."""

    @abstractmethod
    def vibrate(self, pattern: VibrationPattern) -> None:
        """Run a haptic pattern (milliseconds, alternating on/off)."""

    def close(self) -> None:
        """Release audio/haptic resources. Default is a no-op."""


class NullEffects(EffectSink):
    """Effect sink that does nothing (headless runs, muted play)."""

    def play_effect(self, kind: SoundEffect) -> None:
        pass

    def vibrate(self, pattern: VibrationPattern) -> None:
        pass


class CapabilityProvider(ABC):
    """Answers feature queries about the host."""

    @abstractmethod
    def supports(self, capability: Capability) -> bool:
        """Return True if the host provides the capability."""


class StaticCapabilities(CapabilityProvider):
    """Fixed capability set, for tests and headless hosts."""

    def __init__(self, capabilities: Iterable[Capability] = ()):
        self._capabilities = frozenset(capabilities)

    def supports(self, capability: Capability) -> bool:
        return capability in self._capabilities
