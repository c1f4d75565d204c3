"""FlappyBird game entities."""

from .bird import Bird
from .pipes import Pipe, Pipes

__all__ = ['Bird', 'Pipe', 'Pipes']
