"""
Pydantic v2 models for Flappy Bird difficulty configuration.

These models validate the YAML preset files and carry every physics
constant the bird, the pipe generator and the fixed-timestep loop use.
Defaults are the classic tuning, so ``FlappyConfig()`` is the normal
difficulty.
"""

from typing import Optional
from pydantic import BaseModel, Field, model_validator


class BirdSettings(BaseModel):
    """
    Bird physics and hitbox.

    Velocity is expressed in pixels per reference frame, so gravity is
    added once per reference frame of elapsed time.
    """
    model_config = {"frozen": True}

    width: float = Field(default=34.0, gt=0.0, description="Sprite width in pixels")
    height: float = Field(default=24.0, gt=0.0, description="Sprite height in pixels")
    gravity: float = Field(default=0.5, gt=0.0, description="Velocity gain per reference frame")
    flap_impulse: float = Field(
        default=-8.0, lt=0.0,
        description="Velocity set by a flap (negative is upward)"
    )
    bounds_scale: float = Field(
        default=0.8, gt=0.0, le=1.0,
        description="Hitbox size relative to the sprite"
    )
    min_rotation: float = Field(default=-0.44, description="Nose-up rotation limit (radians)")
    max_rotation: float = Field(default=1.57, description="Nose-down rotation limit (radians)")
    rotation_factor: float = Field(default=0.1, description="Target rotation per unit of velocity")
    rotation_smoothing: float = Field(
        default=0.1, gt=0.0, le=1.0,
        description="Fraction of the remaining rotation applied per update"
    )

    @model_validator(mode='after')
    def validate_rotation_range(self) -> 'BirdSettings':
        if self.min_rotation > self.max_rotation:
            raise ValueError('min_rotation must not exceed max_rotation')
        return self


class PipeSettings(BaseModel):
    """
    Pipe generator tuning: spawning, scrolling and the difficulty ramp.
    """
    model_config = {"frozen": True}

    width: float = Field(default=52.0, gt=0.0)
    initial_gap: float = Field(default=120.0, gt=0.0)
    min_gap: float = Field(default=80.0, ge=80.0, description="Gap never shrinks below this")
    initial_speed: float = Field(default=2.0, gt=0.0, description="Pixels per reference frame")
    spawn_interval: int = Field(default=120, ge=1, description="Frames between spawn triggers")
    first_spawn_interval: int = Field(
        default=60, ge=1,
        description="Trigger period while no pipe is on screen"
    )
    min_spacing_ratio: float = Field(
        default=0.4, ge=0.0,
        description="Minimum distance from the previous pipe, as a fraction of canvas width"
    )
    min_segment_height: float = Field(default=60.0, gt=0.0)
    removal_margin: float = Field(default=50.0, ge=0.0, description="Off-screen distance before removal")
    score_line_ratio: float = Field(
        default=0.25, gt=0.0, lt=1.0,
        description="Scoring threshold as a fraction of canvas width"
    )
    ramp_every: int = Field(default=5, ge=1, description="Points between difficulty steps")
    speed_step: float = Field(default=0.2, ge=0.0)
    gap_step: float = Field(default=2.0, ge=0.0)

    @model_validator(mode='after')
    def validate_gap_range(self) -> 'PipeSettings':
        if self.min_gap > self.initial_gap:
            raise ValueError(
                f'min_gap ({self.min_gap}) must not exceed initial_gap ({self.initial_gap})'
            )
        return self


class LoopSettings(BaseModel):
    """
    Fixed-timestep scheduler settings, in milliseconds.
    """
    model_config = {"frozen": True}

    timestep: float = Field(default=1000.0 / 60.0, gt=0.0, description="Physics step size")
    reference_frame: float = Field(
        default=1000.0 / 60.0, gt=0.0,
        description="Frame length that per-frame constants are tuned for"
    )
    max_frame_delta: float = Field(default=100.0, gt=0.0, description="Clamp for stalled frames")
    ground_height: float = Field(default=80.0, ge=0.0)

    @model_validator(mode='after')
    def validate_clamp(self) -> 'LoopSettings':
        if self.max_frame_delta < self.timestep:
            raise ValueError('max_frame_delta must be at least one timestep')
        return self


class FlappyConfig(BaseModel):
    """
    Complete difficulty configuration, as loaded from a preset file.

    Examples:
        >>> config = FlappyConfig()
        >>> config.pipes.initial_gap
        120.0
    """
    model_config = {"frozen": True}

    name: str = Field(default="Normal", min_length=1)
    description: Optional[str] = None
    bird: BirdSettings = Field(default_factory=BirdSettings)
    pipes: PipeSettings = Field(default_factory=PipeSettings)
    loop: LoopSettings = Field(default_factory=LoopSettings)
