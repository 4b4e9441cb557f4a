"""
pygame window input source - keyboard and mouse on the game window
"""

from typing import List, Optional, TYPE_CHECKING

import pygame

from .events import ControlAction, ControlPressed, InputEvent, PadPressed, event_for_key
from .interfaces import IInputSource

if TYPE_CHECKING:
    from display_system.pygame_board import PygameBoard


# Keys whose KEYDOWN carries no useful unicode
_SPECIAL_KEYS = {
    pygame.K_RETURN: "\r",
    pygame.K_KP_ENTER: "\r",
    pygame.K_ESCAPE: "\x1b",
    pygame.K_SPACE: " ",
}


class PygameInputSource(IInputSource):
    """
    Translates pygame events into input events.

    Key presses use the same bindings as the terminal source; left clicks
    are hit-tested against the board's pads and on-screen controls.
    Closing the window is a QUIT control.
    """

    def __init__(self, board: 'PygameBoard', logger):
        self._board = board
        self._logger = logger

    def setup(self) -> None:
        # Display (and therefore the event queue) is owned by the board
        pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN])
        self._logger.info("pygame input ready (keyboard + mouse)")

    def poll_events(self) -> List[InputEvent]:
        events: List[InputEvent] = []
        for raw in pygame.event.get():
            event = self._translate(raw)
            if event is not None:
                events.append(event)
        return events

    def _translate(self, raw) -> Optional[InputEvent]:
        if raw.type == pygame.QUIT:
            return ControlPressed(ControlAction.QUIT)

        if raw.type == pygame.KEYDOWN:
            key = _SPECIAL_KEYS.get(raw.key, raw.unicode)
            return event_for_key(key)

        if raw.type == pygame.MOUSEBUTTONDOWN and raw.button == 1:
            pad_index = self._board.pad_at(raw.pos)
            if pad_index is not None:
                return PadPressed(pad_index)
            action = self._board.control_at(raw.pos)
            if action is not None:
                return ControlPressed(action)

        return None

    def cleanup(self) -> None:
        pygame.event.clear()
