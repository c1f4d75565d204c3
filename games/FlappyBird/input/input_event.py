"""
Input event model for the FlappyBird game.

Raw pygame events are reduced to a handful of actions before the host
dispatches them, so game code never inspects key codes.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class InputAction(str, Enum):
    """What the player (or the window system) asked for.

    Attributes:
        FLAP: Space, Up, W, left click, touch or gamepad button
        PAUSE_TOGGLE: Escape
        START: Enter
        QUIT: Window closed
        FOCUS_LOST: Window lost focus or was minimized
        RESIZE: Window was resized (size carries the new dimensions)
    """
    FLAP = "flap"
    PAUSE_TOGGLE = "pause_toggle"
    START = "start"
    QUIT = "quit"
    FOCUS_LOST = "focus_lost"
    RESIZE = "resize"


class InputEvent(BaseModel):
    """Immutable input event.

    Attributes:
        action: The requested action
        timestamp: Host time in milliseconds (pygame.time.get_ticks())
        size: New (width, height) for RESIZE events

    Examples:
        >>> event = InputEvent(action=InputAction.FLAP, timestamp=1200.0)
        >>> print(event)
        InputEvent(flap, t=1200)
    """
    action: InputAction
    timestamp: float
    size: Optional[Tuple[int, int]] = None

    model_config = ConfigDict(frozen=True)

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f'Timestamp must be non-negative, got {v}')
        return v

    def __str__(self) -> str:
        extra = f", size={self.size[0]}x{self.size[1]}" if self.size else ""
        return f"InputEvent({self.action.value}, t={self.timestamp:.0f}{extra})"
