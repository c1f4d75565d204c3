"""Pipe generator: spawning, scrolling, removal, scoring and difficulty.

Pipes spawn at the right edge of the canvas on a frame-count schedule and
scroll left at the current speed. A pipe scores once when its trailing
edge crosses a fixed line at a quarter of the canvas width; every few
points the scroll speed goes up and the gap for new pipes shrinks.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from models import PipeData, PipeSettings
from skyflap.logging import get_logger

log = get_logger('pipes')


@dataclass
class Pipe:
    """Mutable state of one pipe owned by the generator."""

    x: float
    height: float
    gap: float
    passed: bool = False


class Pipes:
    """Owns every pipe on screen and the running score.

    The generator counts physics updates as frames. Spawning, spacing and
    scoring thresholds are derived from the canvas geometry, which may be
    changed with resize().
    """

    def __init__(
        self,
        canvas_width: int,
        canvas_height: int,
        settings: Optional[PipeSettings] = None,
        ground_height: float = 80.0,
        reference_frame: float = 1000.0 / 60.0,
        rng: Optional[random.Random] = None,
    ):
        """Initialize an empty generator.

        Args:
            canvas_width: Canvas width in pixels
            canvas_height: Canvas height in pixels
            settings: Spawning and difficulty settings (default: classic tuning)
            ground_height: Height of the ground strip at the bottom
            reference_frame: Frame length in ms that speeds are tuned for
            rng: Random source for pipe heights (default: module random)
        """
        self._settings = settings or PipeSettings()
        self._canvas_width = canvas_width
        self._canvas_height = canvas_height
        self._ground_height = ground_height
        self._reference_frame = reference_frame
        self._rng = rng or random.Random()

        self._pipes: List[Pipe] = []
        self._frame_count = 0
        self._score = 0
        self._speed = self._settings.initial_speed
        self._gap = self._settings.initial_gap
        self._last_spawn_x: Optional[float] = None
        self._skipped_spawns = 0

        self.reset()

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> PipeSettings:
        return self._settings

    @property
    def width(self) -> float:
        """Horizontal size of every pipe."""
        return self._settings.width

    @property
    def speed(self) -> float:
        """Current scroll speed in pixels per reference frame."""
        return self._speed

    @property
    def gap(self) -> float:
        """Gap that the next spawned pipe will get."""
        return self._gap

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def skipped_spawns(self) -> int:
        """Spawn triggers dropped by the spacing or geometry guards this round."""
        return self._skipped_spawns

    @property
    def min_spacing(self) -> float:
        """Minimum horizontal distance between a new pipe and the previous one."""
        return self._canvas_width * self._settings.min_spacing_ratio

    @property
    def score_line(self) -> float:
        """X coordinate a trailing edge must cross to score."""
        return self._canvas_width * self._settings.score_line_ratio

    @property
    def ground_level(self) -> float:
        return self._canvas_height - self._ground_height

    def get_score(self) -> int:
        return self._score

    def get_pipes(self) -> Tuple[PipeData, ...]:
        """Snapshot of all pipes, oldest first."""
        return tuple(
            PipeData(
                x=pipe.x,
                width=self._settings.width,
                height=pipe.height,
                gap=pipe.gap,
                passed=pipe.passed,
            )
            for pipe in self._pipes
        )

    def __len__(self) -> int:
        return len(self._pipes)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Clear all pipes and restore the initial difficulty."""
        self._pipes.clear()
        self._frame_count = 0
        self._score = 0
        self._speed = self._settings.initial_speed
        self._gap = self._settings.initial_gap
        self._last_spawn_x = None
        self._skipped_spawns = 0

    def resize(self, canvas_width: int, canvas_height: int) -> None:
        """Adopt new canvas geometry for later spawns and thresholds."""
        self._canvas_width = canvas_width
        self._canvas_height = canvas_height

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def update(self, delta_ms: float) -> None:
        """Advance one physics update.

        Args:
            delta_ms: Elapsed time in milliseconds
        """
        s = self._settings
        self._frame_count += 1

        if (self._frame_count % s.spawn_interval == 0 or
                (not self._pipes and self._frame_count % s.first_spawn_interval == 0)):
            self.spawn_pipe()

        dx = self._speed * (delta_ms / self._reference_frame)
        if self._last_spawn_x is not None:
            self._last_spawn_x -= dx

        # Newest to oldest so removal does not disturb the indices still to visit
        for i in range(len(self._pipes) - 1, -1, -1):
            pipe = self._pipes[i]
            pipe.x -= dx
            trailing_edge = pipe.x + s.width

            if trailing_edge < -s.removal_margin:
                del self._pipes[i]
                continue

            if not pipe.passed and trailing_edge < self.score_line:
                pipe.passed = True
                self._score += 1
                if self._score % s.ramp_every == 0:
                    self._ramp_difficulty()

    def spawn_pipe(self) -> bool:
        """Try to add a pipe at the right edge of the canvas.

        The spawn is dropped, not deferred, when the previous pipe is still
        closer than min_spacing or when the canvas is too short to fit the
        gap between two minimum-height segments.

        Returns:
            True if a pipe was added
        """
        s = self._settings
        min_height = s.min_segment_height
        max_height = self._canvas_height - self._gap - min_height - self._ground_height

        if max_height < min_height:
            self._skipped_spawns += 1
            log.debug("Skipping spawn: canvas height %d cannot fit gap %.1f",
                      self._canvas_height, self._gap)
            return False

        if (self._last_spawn_x is not None and
                self._canvas_width - self._last_spawn_x < self.min_spacing):
            self._skipped_spawns += 1
            log.debug("Skipping spawn: previous pipe only %.1f px away",
                      self._canvas_width - self._last_spawn_x)
            return False

        height = min_height + self._rng.random() * (max_height - min_height)
        self._pipes.append(Pipe(x=float(self._canvas_width), height=height, gap=self._gap))
        self._last_spawn_x = float(self._canvas_width)
        log.trace("Spawned pipe height=%.1f gap=%.1f", height, self._gap)
        return True

    def _ramp_difficulty(self) -> None:
        s = self._settings
        self._speed += s.speed_step
        self._gap = max(s.min_gap, self._gap - s.gap_step)
        log.debug("Difficulty up at score %d: speed=%.2f gap=%.1f",
                  self._score, self._speed, self._gap)
