"""FlappyBird collision detection."""

from .collision import (
    rect_intersect,
    check_bird_pipes,
    check_bird_bounds,
)

__all__ = [
    'rect_intersect',
    'check_bird_pipes',
    'check_bird_bounds',
]
