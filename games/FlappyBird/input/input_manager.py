"""
Input manager for the FlappyBird game.

Translates pygame events into InputEvents. Keyboard, mouse, touch and
gamepad all map onto the same small set of actions.
"""

from typing import Dict, Iterable, List, Optional

import pygame

from skyflap.logging import get_logger

from .input_event import InputAction, InputEvent

log = get_logger('input')

FLAP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)
PAUSE_KEYS = (pygame.K_ESCAPE,)
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


class InputManager:
    """Turns pygame events into game actions.

    pygame only reports button presses for opened joysticks, so the
    manager opens every pad present at startup and each one plugged in
    later.

    Examples:
        >>> manager = InputManager()
        >>> manager.open_joysticks()
        >>> events = manager.poll()  # drains pygame's queue
    """

    def __init__(self):
        self._joysticks: Dict[int, pygame.joystick.Joystick] = {}

    @property
    def joysticks(self) -> List[pygame.joystick.Joystick]:
        return list(self._joysticks.values())

    def open_joysticks(self) -> None:
        """Open every gamepad that is currently connected."""
        try:
            if not pygame.joystick.get_init():
                pygame.joystick.init()
            for index in range(pygame.joystick.get_count()):
                self._open_joystick(index)
        except pygame.error as e:
            log.warning("Gamepad initialization failed: %s", e)

    def _open_joystick(self, device_index: int) -> None:
        try:
            joystick = pygame.joystick.Joystick(device_index)
            self._joysticks[joystick.get_instance_id()] = joystick
            log.info("Gamepad connected: %s", joystick.get_name())
        except pygame.error as e:
            log.warning("Could not open gamepad %d: %s", device_index, e)

    def translate(
        self,
        events: Iterable[pygame.event.Event],
        now: Optional[float] = None,
    ) -> List[InputEvent]:
        """Map pygame events to InputEvents, dropping everything else.

        Gamepad hot-plug events are consumed here and never produce an
        InputEvent.

        Args:
            events: pygame events in arrival order
            now: Timestamp to stamp on the events (default: pygame ticks)

        Returns:
            Translated events in arrival order
        """
        if now is None:
            now = float(pygame.time.get_ticks())

        result: List[InputEvent] = []
        for event in events:
            if event.type == pygame.JOYDEVICEADDED:
                self._open_joystick(event.device_index)
                continue
            if event.type == pygame.JOYDEVICEREMOVED:
                self._joysticks.pop(event.instance_id, None)
                continue

            action = self._action_for(event)
            if action is None:
                continue
            size = (event.w, event.h) if action == InputAction.RESIZE else None
            result.append(InputEvent(action=action, timestamp=now, size=size))
        return result

    def poll(self) -> List[InputEvent]:
        """Drain pygame's event queue and translate it."""
        return self.translate(pygame.event.get())

    @staticmethod
    def _action_for(event: pygame.event.Event) -> Optional[InputAction]:
        if event.type == pygame.QUIT:
            return InputAction.QUIT

        if event.type == pygame.KEYDOWN:
            if event.key in FLAP_KEYS:
                return InputAction.FLAP
            if event.key in PAUSE_KEYS:
                return InputAction.PAUSE_TOGGLE
            if event.key in START_KEYS:
                return InputAction.START
            return None

        if event.type == pygame.MOUSEBUTTONDOWN:
            # Touches also arrive as FINGERDOWN; skip the emulated click
            if event.button == 1 and not getattr(event, 'touch', False):
                return InputAction.FLAP
            return None

        if event.type in (pygame.FINGERDOWN, pygame.JOYBUTTONDOWN):
            return InputAction.FLAP

        if event.type in (pygame.WINDOWFOCUSLOST, pygame.WINDOWMINIMIZED):
            return InputAction.FOCUS_LOST

        if event.type == pygame.VIDEORESIZE:
            return InputAction.RESIZE

        return None
