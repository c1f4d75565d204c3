"""
FlappyBird game engine.

Owns the bird, the pipe generator and the round state machine, and turns
host frame timestamps into fixed-size physics steps. The engine never
schedules anything itself: the host calls tick(now) once per displayed
frame and render(surface) right after, and stops calling tick() once it
returns False.

State machine:
    IDLE --start()--> RUNNING --collision--> GAME_OVER --start()--> RUNNING
    RUNNING <--pause()/resume()--> PAUSED
    RUNNING/PAUSED --stop()--> IDLE
"""

import random
import time
from typing import Any, Dict, Optional, TYPE_CHECKING

from models import (
    Capability, FlappyConfig, Point2D, Resolution, SessionSummary, SoundEffect,
)
from skyflap.effects import CapabilityProvider, EffectSink, NullEffects, StaticCapabilities, VibrationPattern
from skyflap.games import GameState
from skyflap.logging import emit_record, flush_all_sinks, get_logger
from skyflap.storage import KeyValueStore, MemoryStore

from ..config import (
    FLAP_VIBRATION, MILESTONE_VIBRATION, GAME_OVER_VIBRATION, MILESTONE_EVERY,
)
from .entities.bird import Bird
from .entities.pipes import Pipes
from .physics.collision import check_bird_pipes, check_bird_bounds
from .records import ScoreBook

if TYPE_CHECKING:
    import pygame
    from .renderer import FlappyRenderer

log = get_logger('engine')


def spawn_point(width: int, height: int) -> Point2D:
    """Bird spawn: a quarter of the way across, halfway down."""
    return Point2D(x=width / 4, y=height / 2)


class FlappyEngine:
    """Fixed-timestep Flappy Bird simulation.

    Collaborators are injected: a key-value store for the high score, an
    effect sink for sound and vibration, a capability provider, and a
    renderer. All of them default to headless implementations, so the
    engine can be driven from tests with synthetic timestamps.

    Attributes:
        bird: The bird entity (reset, never recreated, between rounds)
        pipes: The pipe generator (reset, never recreated, between rounds)

    Examples:
        >>> engine = FlappyEngine(400, 600)
        >>> engine.init()
        >>> engine.start()
        >>> engine.tick(0.0)
        True
        >>> engine.on_input()
        True
    """

    def __init__(
        self,
        width: int,
        height: int,
        store: Optional[KeyValueStore] = None,
        effects: Optional[EffectSink] = None,
        capabilities: Optional[CapabilityProvider] = None,
        config: Optional[FlappyConfig] = None,
        renderer: Optional['FlappyRenderer'] = None,
        rng: Optional[random.Random] = None,
    ):
        """Create an idle engine for a canvas of the given size.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            store: High score persistence (default: in-memory)
            effects: Sound/vibration sink (default: silent)
            capabilities: Host feature queries (default: nothing supported)
            config: Difficulty configuration (default: normal)
            renderer: Drawing backend (default: pygame renderer, created on first render)
            rng: Random source for pipe heights
        """
        self._canvas = Resolution(width=width, height=height)
        self._config = config or FlappyConfig()
        self._score_book = ScoreBook(store if store is not None else MemoryStore())
        self._effects = effects or NullEffects()
        self._capabilities = capabilities or StaticCapabilities()
        self._renderer = renderer

        loop = self._config.loop
        self.bird = Bird(spawn_point(width, height), self._config.bird, loop.reference_frame)
        self.pipes = Pipes(
            width, height,
            settings=self._config.pipes,
            ground_height=loop.ground_height,
            reference_frame=loop.reference_frame,
            rng=rng,
        )

        self._state = GameState.IDLE
        self._score = 0
        self._high_score = 0
        self._summary: Optional[SessionSummary] = None

        # Scheduler state
        self._last_time: Optional[float] = None
        self._accumulator = 0.0
        self._last_frame_delta = 0.0

        # Round bookkeeping
        self._steps = 0
        self._sim_time = 0.0
        self._started_at: Optional[float] = None
        self._initialized = False

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state.is_active

    @property
    def is_paused(self) -> bool:
        return self._state == GameState.PAUSED

    @property
    def score(self) -> int:
        return self._score

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def summary(self) -> Optional[SessionSummary]:
        """Outcome of the last finished round, if any."""
        return self._summary

    @property
    def config(self) -> FlappyConfig:
        return self._config

    @property
    def canvas(self) -> Resolution:
        return self._canvas

    @property
    def ground_height(self) -> float:
        return self._config.loop.ground_height

    @property
    def ground_level(self) -> float:
        return self._canvas.height - self._config.loop.ground_height

    @property
    def steps(self) -> int:
        """Physics steps run in the current (or last) round."""
        return self._steps

    @property
    def sim_time(self) -> float:
        """Simulated milliseconds in the current (or last) round."""
        return self._sim_time

    @property
    def accumulator(self) -> float:
        """Unsimulated milliseconds carried to the next tick."""
        return self._accumulator

    @property
    def score_book(self) -> ScoreBook:
        return self._score_book

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def init(self) -> None:
        """Load persisted state. Safe to call more than once."""
        self._high_score = self._score_book.get_high_score()
        self._initialized = True
        log.info("Engine ready on %s canvas, high score %d", self._canvas, self._high_score)

    def teardown(self) -> None:
        """End any round and release collaborators."""
        if self._state.is_active:
            self.stop()
        try:
            self._effects.close()
        except Exception as e:
            log.warning("Closing effects failed: %s", e)
        try:
            self._score_book.store.close()
        except Exception as e:
            log.warning("Closing store failed: %s", e)
        flush_all_sinks()
        self._initialized = False

    def resize(self, width: int, height: int) -> None:
        """Adopt a new canvas size.

        Pipe spawning and scoring use the new geometry immediately; the
        bird's spawn point moves and is applied on the next reset.
        """
        self._canvas = Resolution(width=width, height=height)
        self.pipes.resize(width, height)
        self.bird.set_spawn(spawn_point(width, height))
        if not self._state.is_active:
            self.bird.reset()
        log.debug("Canvas resized to %s", self._canvas)

    # =========================================================================
    # Round control
    # =========================================================================

    def start(self) -> None:
        """Begin a new round from IDLE or GAME_OVER. Ignored mid-round."""
        if self._state.is_active:
            return
        if not self._initialized:
            self.init()

        self.reset()
        self._state = GameState.RUNNING
        self._last_time = None
        self._accumulator = 0.0
        self._summary = None
        self._started_at = time.monotonic()
        log.info("Round started")

    def reset(self) -> None:
        """Put the bird, the pipes and the score back to their initial state."""
        self._score = 0
        self._steps = 0
        self._sim_time = 0.0
        self.bird.reset()
        self.pipes.reset()

    def stop(self) -> None:
        """Abandon the round without recording a result."""
        if not self._state.is_active:
            return
        self._state = GameState.IDLE
        self._last_time = None
        self._accumulator = 0.0
        log.info("Round stopped at score %d", self._score)

    def pause(self) -> None:
        if self._state != GameState.RUNNING:
            return
        self._state = GameState.PAUSED
        log.info("Paused")

    def resume(self, now: Optional[float] = None) -> None:
        """Continue a paused round.

        Args:
            now: Current host timestamp in ms. If omitted, the next tick
                re-establishes the time reference and integrates nothing.
        """
        if self._state != GameState.PAUSED:
            return
        self._state = GameState.RUNNING
        self._last_time = now
        log.info("Resumed")

    def toggle_pause(self) -> None:
        if self._state == GameState.PAUSED:
            self.resume()
        else:
            self.pause()

    # =========================================================================
    # Input
    # =========================================================================

    def on_input(self) -> bool:
        """Flap. Only has an effect while running and not paused.

        Returns:
            True if the bird flapped
        """
        if self._state != GameState.RUNNING:
            return False

        self.bird.flap()
        self._play(SoundEffect.FLAP)
        self._vibrate(FLAP_VIBRATION)
        return True

    def on_pause_toggle(self) -> None:
        self.toggle_pause()

    # =========================================================================
    # Scheduling
    # =========================================================================

    def tick(self, now: float) -> bool:
        """Advance the simulation to host time ``now`` (milliseconds).

        Elapsed time since the previous tick is clamped to
        [0, max_frame_delta], added to the accumulator and drained in
        whole timesteps. While paused the clock is tracked but nothing is
        simulated.

        Returns:
            True while the host should keep scheduling frames
        """
        if not self._state.is_active:
            return False

        loop = self._config.loop
        if self._last_time is None:
            self._last_time = now
        delta = min(max(now - self._last_time, 0.0), loop.max_frame_delta)
        self._last_time = now
        self._last_frame_delta = delta

        if self._state == GameState.PAUSED:
            return True

        self._accumulator += delta
        while self._accumulator >= loop.timestep:
            self._accumulator -= loop.timestep
            if not self.step():
                break

        return self._state.is_active

    def step(self) -> bool:
        """Run one fixed-size physics step.

        Returns:
            False if the step ended the round (or no round is running)
        """
        if self._state != GameState.RUNNING:
            return False

        dt = self._config.loop.timestep
        self.bird.update(dt)
        self.pipes.update(dt)
        self._steps += 1
        self._sim_time += dt

        if (check_bird_pipes(self.bird, self.pipes.get_pipes()) or
                check_bird_bounds(self.bird, self._canvas.height, self.ground_height)):
            self._game_over()
            return False

        new_score = self.pipes.get_score()
        if new_score > self._score:
            self._score = new_score
            self._play(SoundEffect.POINT)
            if self._score % MILESTONE_EVERY == 0:
                self._vibrate(MILESTONE_VIBRATION)

        return True

    def _game_over(self) -> None:
        self._state = GameState.GAME_OVER
        self._last_time = None
        self._accumulator = 0.0

        self._play(SoundEffect.HIT)
        self._vibrate(GAME_OVER_VIBRATION)

        new_high_score = self._score > self._high_score
        if new_high_score:
            self._high_score = self._score
            self._score_book.set_high_score(self._score)

        play_time = self._sim_time / 1000.0
        self._score_book.update_game_stats(self._score, play_time)

        self._summary = SessionSummary(
            score=self._score,
            high_score=self._high_score,
            new_high_score=new_high_score,
            play_time=play_time,
            steps=self._steps,
        )

        wall_time = time.monotonic() - self._started_at if self._started_at else 0.0
        log.info("Game over. Score: %d, time: %.1fs (wall %.1fs)",
                 self._score, play_time, wall_time)
        emit_record('session', {'type': 'game_over', **self._summary.model_dump()})

    # =========================================================================
    # Collaborator calls
    # =========================================================================

    def _play(self, kind: SoundEffect) -> None:
        try:
            self._effects.play_effect(kind)
        except Exception as e:
            log.warning("Effect %s failed: %s", kind.value, e)

    def _vibrate(self, pattern: VibrationPattern) -> None:
        if not self._capabilities.supports(Capability.VIBRATION):
            return
        try:
            self._effects.vibrate(pattern)
        except Exception as e:
            log.warning("Vibration failed: %s", e)

    # =========================================================================
    # Rendering and diagnostics
    # =========================================================================

    def render(self, surface: 'pygame.Surface') -> None:
        """Draw the latest simulated state onto surface."""
        if self._renderer is None:
            from .renderer import FlappyRenderer
            self._renderer = FlappyRenderer()
        self._renderer.render(surface, self)

    def get_performance_info(self) -> Dict[str, Any]:
        """Frame rate estimate and round status for debug overlays."""
        fps = 0
        if self._state.is_active and self._last_frame_delta > 0:
            fps = round(1000.0 / self._last_frame_delta)
        return {
            'fps': fps,
            'pipes': len(self.pipes),
            'score': self._score,
            'running': self._state.is_active,
            'paused': self.is_paused,
            'steps': self._steps,
        }
