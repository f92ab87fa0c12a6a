"""pygame glue: a frame host pumped from the pygame clock and a scaled window."""

from typing import Optional

import pygame

from arcadesim.models import FieldSize
from arcadesim.scheduler import ManualFrameHost


class PygameFrameHost(ManualFrameHost):
    """Frame host driven by the pygame main loop.

    Call pump() once per loop iteration; it waits for the frame budget and
    delivers pending callbacks with pygame's millisecond clock.
    """

    def __init__(self, fps: int = 60):
        super().__init__()
        self.fps = fps
        self._clock = pygame.time.Clock()

    def pump(self) -> int:
        """Wait for the next frame and deliver it.

        Returns:
            Number of callbacks invoked
        """
        self._clock.tick(self.fps)
        return self.advance(float(pygame.time.get_ticks()))


class GameWindow:
    """Window showing the field-sized canvas, scaled."""

    def __init__(self, field: FieldSize, scale: float = 1.0, caption: Optional[str] = None):
        self.field = field
        self.scale = scale
        size = (int(field.width * scale), int(field.height * scale))
        self.screen = pygame.display.set_mode(size)
        self.canvas = pygame.Surface((field.width, field.height))
        if caption:
            pygame.display.set_caption(caption)

    def present(self) -> None:
        """Copy the canvas to the window and flip."""
        if self.scale == 1.0:
            self.screen.blit(self.canvas, (0, 0))
        else:
            pygame.transform.scale(self.canvas, self.screen.get_size(), self.screen)
        pygame.display.flip()
