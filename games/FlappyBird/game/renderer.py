"""
Pygame renderer for FlappyBird.

Draws the latest simulated state of a FlappyEngine: sky, clouds, pipes,
bird, ground, score and the pause overlay. The renderer reads the engine
but never changes it.
"""

import math
import time
from typing import Dict, Optional, Tuple, TYPE_CHECKING

import pygame

from skyflap.games import GameState

from ..config import (
    SKY_TOP_COLOR, SKY_BOTTOM_COLOR, CLOUD_COLOR,
    PIPE_COLOR, PIPE_HIGHLIGHT_COLOR, PIPE_CAP_COLOR, PIPE_STRIPE_COLOR,
    PIPE_CAP_HEIGHT, PIPE_CAP_OVERHANG,
    BIRD_BODY_COLOR, BIRD_BODY_CENTER_COLOR, BIRD_EYE_COLOR, BIRD_PUPIL_COLOR,
    BIRD_BEAK_COLOR, BIRD_WING_COLOR, BIRD_WING_DETAIL_COLOR,
    GROUND_TOP_COLOR, GROUND_BOTTOM_COLOR, GRASS_COLOR, GRASS_TUFT_COLOR,
    OVERLAY_COLOR, TEXT_COLOR, TEXT_SHADOW_COLOR,
    FONT_SIZE_SMALL, FONT_SIZE_LARGE, FONT_SIZE_SCORE,
    PAUSE_TITLE, PAUSE_HINT,
)

if TYPE_CHECKING:
    from models import PipeData
    from .engine import FlappyEngine
    from .entities.bird import Bird

Color = Tuple[int, ...]

# (base x, y, size, sway speed, sway amplitude)
CLOUDS = (
    (100, 80, 30, 0.10, 20),
    (250, 100, 25, 0.15, 15),
    (400, 60, 35, 0.20, 25),
)


def _lerp_color(a: Color, b: Color, t: float) -> Tuple[int, int, int]:
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


def _vertical_gradient(size: Tuple[int, int], top: Color, bottom: Color) -> pygame.Surface:
    """Surface filled with a top-to-bottom color gradient."""
    width, height = size
    surface = pygame.Surface((max(1, width), max(1, height)))
    span = max(1, height - 1)
    for y in range(height):
        pygame.draw.line(surface, _lerp_color(top, bottom, y / span), (0, y), (width, y))
    return surface


def _fill_alpha(surface: pygame.Surface, color: Color, rect: pygame.Rect) -> None:
    """Fill rect with a translucent RGBA color."""
    if rect.width <= 0 or rect.height <= 0:
        return
    patch = pygame.Surface(rect.size, pygame.SRCALPHA)
    patch.fill(color)
    surface.blit(patch, rect.topleft)


class FlappyRenderer:
    """Draws a FlappyEngine onto a pygame surface.

    Each gradient is cached for the current surface size only; fonts are
    created on first use.
    """

    def __init__(self):
        self._gradients: Dict[str, Tuple[Tuple[int, int], pygame.Surface]] = {}
        self._fonts: Dict[int, pygame.font.Font] = {}

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def render(
        self,
        surface: pygame.Surface,
        engine: 'FlappyEngine',
        now: Optional[float] = None,
    ) -> None:
        """Draw one frame.

        Args:
            surface: Target surface (sized like the engine canvas)
            engine: Engine whose state is drawn
            now: Animation clock in seconds (default: monotonic time)
        """
        if now is None:
            now = time.monotonic()

        ground_level = int(engine.ground_level)

        self.draw_background(surface, now)
        for pipe in engine.pipes.get_pipes():
            self.draw_pipe(surface, pipe, ground_level)
        self.draw_bird(surface, engine.bird)
        self.draw_ground(surface, ground_level, now)

        if engine.state != GameState.IDLE:
            self.draw_score(surface, engine.score)

        if engine.is_paused:
            self.draw_overlay(surface, PAUSE_TITLE, PAUSE_HINT)

    def draw_overlay(self, surface: pygame.Surface, title: str, *hints: str) -> None:
        """Dim the frame and print a centered title with hint lines below it."""
        width, height = surface.get_size()
        _fill_alpha(surface, OVERLAY_COLOR, pygame.Rect(0, 0, width, height))

        self._blit_text(surface, title, FONT_SIZE_LARGE, (width // 2, height // 2))
        for i, hint in enumerate(hints):
            self._blit_text(surface, hint, FONT_SIZE_SMALL, (width // 2, height // 2 + 50 + 30 * i))

    # -------------------------------------------------------------------------
    # Scene elements
    # -------------------------------------------------------------------------

    def draw_background(self, surface: pygame.Surface, now: float) -> None:
        size = surface.get_size()
        surface.blit(self._gradient('sky', size, SKY_TOP_COLOR, SKY_BOTTOM_COLOR), (0, 0))

        width = size[0]
        for base_x, y, cloud_size, sway_speed, sway in CLOUDS:
            offset = math.sin(now * sway_speed) * sway
            x = (base_x + offset) % (width + 100) - 50
            self._draw_cloud(surface, x, y, cloud_size)

    def _draw_cloud(self, surface: pygame.Surface, x: float, y: float, size: float) -> None:
        puffs = (
            (0.0, 0.0, 1.0),
            (0.8, -0.2, 0.8),
            (1.6, 0.0, 0.9),
            (1.2, 0.3, 0.7),
        )
        extent = int(size * 4)
        layer = pygame.Surface((extent, extent), pygame.SRCALPHA)
        origin = (size, extent / 2)
        for dx, dy, scale in puffs:
            center = (int(origin[0] + dx * size), int(origin[1] + dy * size))
            pygame.draw.circle(layer, CLOUD_COLOR, center, int(size * scale))
        surface.blit(layer, (int(x - origin[0]), int(y - origin[1])))

    def draw_pipe(self, surface: pygame.Surface, pipe: 'PipeData', ground_level: int) -> None:
        x = int(pipe.x)
        width = int(pipe.width)
        top_height = int(pipe.height)
        bottom_y = int(pipe.height + pipe.gap)
        bottom_height = ground_level - bottom_y

        # Top segment with cap
        pygame.draw.rect(surface, PIPE_COLOR, (x, 0, width, top_height))
        pygame.draw.rect(surface, PIPE_HIGHLIGHT_COLOR, (x + width // 2, 0, width // 2, top_height))
        cap_y = top_height - PIPE_CAP_HEIGHT
        pygame.draw.rect(surface, PIPE_CAP_COLOR,
                         (x - PIPE_CAP_OVERHANG, cap_y, width + 2 * PIPE_CAP_OVERHANG, PIPE_CAP_HEIGHT))
        pygame.draw.rect(surface, PIPE_HIGHLIGHT_COLOR,
                         (x - PIPE_CAP_OVERHANG + 1, cap_y, width + 2 * PIPE_CAP_OVERHANG - 2, 5))

        # Bottom segment with cap
        if bottom_height > 0:
            pygame.draw.rect(surface, PIPE_COLOR, (x, bottom_y, width, bottom_height))
            pygame.draw.rect(surface, PIPE_HIGHLIGHT_COLOR,
                             (x + width // 2, bottom_y, width // 2, bottom_height))
            pygame.draw.rect(surface, PIPE_CAP_COLOR,
                             (x - PIPE_CAP_OVERHANG, bottom_y, width + 2 * PIPE_CAP_OVERHANG, PIPE_CAP_HEIGHT))
            pygame.draw.rect(surface, PIPE_HIGHLIGHT_COLOR,
                             (x - PIPE_CAP_OVERHANG + 1, bottom_y, width + 2 * PIPE_CAP_OVERHANG - 2, 5))

        # Stripes
        for y in range(10, top_height - PIPE_CAP_HEIGHT, 25):
            _fill_alpha(surface, PIPE_STRIPE_COLOR, pygame.Rect(x, y, width, 10))
        for y in range(bottom_y + 25, ground_level - 10, 25):
            _fill_alpha(surface, PIPE_STRIPE_COLOR, pygame.Rect(x, y, width, 10))

    def draw_bird(self, surface: pygame.Surface, bird: 'Bird') -> None:
        radius = int(bird.width / 2)
        size = radius * 4
        sprite = pygame.Surface((size, size), pygame.SRCALPHA)
        cx = cy = size // 2

        # Body
        pygame.draw.circle(sprite, BIRD_BODY_COLOR, (cx, cy), radius)
        pygame.draw.circle(sprite, BIRD_BODY_CENTER_COLOR, (cx, cy), max(1, radius // 2))

        # Eye
        pygame.draw.circle(sprite, BIRD_EYE_COLOR, (cx + 8, cy - 5), 6)
        pygame.draw.circle(sprite, BIRD_PUPIL_COLOR, (cx + 10, cy - 5), 3)

        # Beak
        pygame.draw.polygon(sprite, BIRD_BEAK_COLOR,
                            [(cx + 15, cy), (cx + 25, cy - 5), (cx + 25, cy + 5)])

        # Wing, flapping with the animation phase
        wing_flap = math.sin(bird.flap_phase * 0.5) * 0.5 + 0.5
        wing_y = cy + 5 + int(wing_flap * 3)
        wing_width = int(16 * (0.8 + wing_flap * 0.2))
        pygame.draw.ellipse(sprite, BIRD_WING_COLOR,
                            pygame.Rect(cx - 5 - wing_width // 2, wing_y - 5, wing_width, 10))
        pygame.draw.polygon(sprite, BIRD_WING_DETAIL_COLOR,
                            [(cx - 10, wing_y), (cx - 2, wing_y + 2), (cx - 2, wing_y - 2)], 1)

        # Positive rotation tilts the nose down (clockwise on screen)
        rotated = pygame.transform.rotate(sprite, -math.degrees(bird.rotation))
        rect = rotated.get_rect(center=(int(bird.x), int(bird.y)))
        surface.blit(rotated, rect)

    def draw_ground(self, surface: pygame.Surface, ground_level: int, now: float) -> None:
        width, height = surface.get_size()
        ground_height = height - ground_level
        if ground_height <= 0:
            return

        gradient = self._gradient('ground', (width, ground_height), GROUND_TOP_COLOR, GROUND_BOTTOM_COLOR)
        surface.blit(gradient, (0, ground_level))
        pygame.draw.rect(surface, GRASS_COLOR, (0, ground_level, width, 10))

        for i in range(0, width, 20):
            wave = math.sin(now * 2 + i * 0.1) * 2
            pygame.draw.rect(surface, GRASS_TUFT_COLOR, (i, int(ground_level - 5 + wave), 5, 10))

    def draw_score(self, surface: pygame.Surface, score: int) -> None:
        width = surface.get_width()
        self._blit_text(surface, str(score), FONT_SIZE_SCORE, (width // 2, 50), shadow=True)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _gradient(self, name: str, size: Tuple[int, int], top: Color, bottom: Color) -> pygame.Surface:
        """One cached gradient per name, rebuilt when the size changes."""
        cached = self._gradients.get(name)
        if cached is None or cached[0] != size:
            cached = (size, _vertical_gradient(size, top, bottom))
            self._gradients[name] = cached
        return cached[1]

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            try:
                self._fonts[size] = pygame.font.Font(None, size)
            except (pygame.error, OSError):
                self._fonts[size] = pygame.font.SysFont('monospace', size)
        return self._fonts[size]

    def _blit_text(
        self,
        surface: pygame.Surface,
        text: str,
        size: int,
        center: Tuple[int, int],
        shadow: bool = False,
    ) -> None:
        font = self._font(size)
        if shadow:
            shadow_surface = font.render(text, True, TEXT_SHADOW_COLOR)
            surface.blit(shadow_surface, shadow_surface.get_rect(center=(center[0] + 2, center[1] + 2)))
        text_surface = font.render(text, True, TEXT_COLOR)
        surface.blit(text_surface, text_surface.get_rect(center=center))
