"""
Keyboard/Mouse Input Source - pygame input for local play.
"""
from typing import Dict, List, Optional

import pygame

from arcadesim.input.input_event import InputEvent, InputKind
from arcadesim.input.sources.base import InputSource
from arcadesim.models import EngineConfig, Vector2


def default_keymap(config: Optional[EngineConfig] = None) -> Dict[int, InputKind]:
    """Key bindings for a variant.

    Arrows or A/D move. Space fires, or jumps when the player falls under
    gravity. Up/W always jump.
    """
    space = InputKind.FIRE
    if config is not None and config.player.motion == "gravity":
        space = InputKind.JUMP
    return {
        pygame.K_LEFT: InputKind.MOVE_LEFT,
        pygame.K_a: InputKind.MOVE_LEFT,
        pygame.K_RIGHT: InputKind.MOVE_RIGHT,
        pygame.K_d: InputKind.MOVE_RIGHT,
        pygame.K_SPACE: space,
        pygame.K_UP: InputKind.JUMP,
        pygame.K_w: InputKind.JUMP,
    }


class KeyboardMouseInputSource(InputSource):
    """Converts pygame key presses and left clicks into InputEvents.

    Events it does not handle (quit, other keys, resize) are re-posted to
    the pygame queue for the main loop.
    """

    def __init__(self, keymap: Optional[Dict[int, InputKind]] = None, scale: float = 1.0):
        """Initialize the source.

        Args:
            keymap: pygame key code -> action (default: default_keymap())
            scale: Window pixels per field pixel, for click coordinates
        """
        self.keymap = keymap if keymap is not None else default_keymap()
        self.scale = scale
        self._event_queue: List[InputEvent] = []

    def poll_events(self) -> List[InputEvent]:
        """Get new input events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect actions."""
        now = float(pygame.time.get_ticks())
        unhandled = []
        for event in pygame.event.get():
            if event.type == pygame.KEYDOWN and event.key in self.keymap:
                self._event_queue.append(InputEvent(kind=self.keymap[event.key], timestamp=now))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                pos_x, pos_y = event.pos
                position = Vector2(x=pos_x / self.scale, y=pos_y / self.scale)
                self._event_queue.append(
                    InputEvent(kind=InputKind.CLICK, position=position, timestamp=now)
                )
            elif event.type not in (pygame.MOUSEMOTION, pygame.KEYUP, pygame.MOUSEBUTTONUP):
                unhandled.append(event)

        # Re-post after the loop so get() above does not see them again
        for event in unhandled:
            pygame.event.post(event)

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
