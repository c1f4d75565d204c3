"""Common GameState enum for Skyflap games.

A game session is always in exactly one of these states. Hosts use the
state to decide which input is meaningful and whether to keep driving
the frame loop.
"""
from enum import Enum


class GameState(Enum):
    """Standard game session states.

    States:
        IDLE: No round in progress (before the first start, or after stop)
        RUNNING: Active gameplay; physics advances every tick
        PAUSED: Round frozen; frames still render with an overlay
        GAME_OVER: Round ended by a collision; final score is available

    Transitions:
        IDLE -> RUNNING        start()
        RUNNING <-> PAUSED     pause() / resume()
        RUNNING -> GAME_OVER   collision
        GAME_OVER -> RUNNING   start()
        RUNNING/PAUSED -> IDLE stop()
    """
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"

    @property
    def is_active(self) -> bool:
        """True while a round is in progress (running or paused)."""
        return self in (GameState.RUNNING, GameState.PAUSED)
