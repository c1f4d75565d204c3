"""Collision detection for FlappyBird.

Stateless checks between the bird's hitbox and the pipes, and between the
hitbox and the world bounds (ground and ceiling). Nothing here mutates its
arguments, so the checks are safe to run on every physics step.
"""

from typing import Iterable, TYPE_CHECKING

from models import PipeData, Rectangle

if TYPE_CHECKING:
    from ..entities.bird import Bird


def rect_intersect(a: Rectangle, b: Rectangle) -> bool:
    """Check whether two axis-aligned rectangles share any area.

    Edges that merely touch do not count as an overlap.

    Args:
        a: First rectangle
        b: Second rectangle

    Returns:
        True if the rectangles overlap
    """
    return a.intersects(b)


def check_bird_pipes(bird: 'Bird', pipes: Iterable[PipeData]) -> bool:
    """Check if the bird hits the top or bottom segment of any pipe.

    Args:
        bird: Bird to check
        pipes: Pipe snapshots from Pipes.get_pipes()

    Returns:
        True on the first pipe the bird overlaps
    """
    bounds = bird.get_bounds()

    for pipe in pipes:
        if (rect_intersect(bounds, pipe.top_rect()) or
                rect_intersect(bounds, pipe.bottom_rect())):
            return True

    return False


def check_bird_bounds(
    bird: 'Bird',
    canvas_height: float,
    ground_height: float = 80.0,
) -> bool:
    """Check if the bird touches the ground line or the ceiling.

    Args:
        bird: Bird to check
        canvas_height: Canvas height in pixels
        ground_height: Height of the ground strip

    Returns:
        True if the hitbox reaches the ground or the top of the canvas
    """
    bounds = bird.get_bounds()
    ground_level = canvas_height - ground_height

    return bounds.bottom >= ground_level or bounds.top <= 0
