"""Bird entity with gravity, flap impulse and smoothed rotation.

Velocity is measured in pixels per reference frame (1/60 s). Every update
scales gravity by the elapsed time in reference frames and then moves the
bird by its velocity once.
"""

import math
from typing import Optional

from models import BirdSettings, Point2D, Rectangle


class Bird:
    """The player-controlled bird.

    Created once per engine and reset between rounds. Position is the
    center of the sprite.
    """

    def __init__(
        self,
        spawn: Point2D,
        settings: Optional[BirdSettings] = None,
        reference_frame: float = 1000.0 / 60.0,
    ):
        """Initialize bird at its spawn point.

        Args:
            spawn: Center position the bird starts each round at
            settings: Physics and hitbox settings (default: classic tuning)
            reference_frame: Frame length in ms that gravity is tuned for
        """
        self._settings = settings or BirdSettings()
        self._reference_frame = reference_frame
        self._spawn = spawn
        self.x = spawn.x
        self.y = spawn.y
        self.velocity = 0.0
        self.rotation = 0.0
        self.flap_phase = 0.0
        self.reset()

    @property
    def settings(self) -> BirdSettings:
        return self._settings

    @property
    def spawn(self) -> Point2D:
        return self._spawn

    @property
    def width(self) -> float:
        return self._settings.width

    @property
    def height(self) -> float:
        return self._settings.height

    def set_spawn(self, spawn: Point2D) -> None:
        """Move the spawn point. Takes effect on the next reset()."""
        self._spawn = spawn

    def reset(self) -> None:
        """Return to the spawn point at rest."""
        self.x = self._spawn.x
        self.y = self._spawn.y
        self.velocity = 0.0
        self.rotation = 0.0
        self.flap_phase = 0.0

    def update(self, delta_ms: float) -> None:
        """Integrate one update of delta_ms milliseconds.

        Args:
            delta_ms: Elapsed time in milliseconds
        """
        frames = delta_ms / self._reference_frame
        s = self._settings

        self.velocity += s.gravity * frames
        self.y += self.velocity
        assert not math.isnan(self.y), "bird position became NaN"

        self.flap_phase += frames

        # Ease toward a velocity-derived tilt
        target = max(s.min_rotation, min(s.max_rotation, self.velocity * s.rotation_factor))
        self.rotation += (target - self.rotation) * s.rotation_smoothing

    def flap(self) -> None:
        """Set velocity to the upward impulse, whatever it was before."""
        self.velocity = self._settings.flap_impulse
        self.flap_phase = 0.0

    def get_bounds(self) -> Rectangle:
        """Hitbox centered on the bird, scaled down from the sprite."""
        scale = self._settings.bounds_scale
        width = self.width * scale
        height = self.height * scale
        return Rectangle(
            x=self.x - width / 2,
            y=self.y - height / 2,
            width=width,
            height=height,
        )

    def __repr__(self) -> str:
        return (f"Bird(x={self.x:.1f}, y={self.y:.1f}, "
                f"v={self.velocity:.2f}, rot={self.rotation:.2f})")
