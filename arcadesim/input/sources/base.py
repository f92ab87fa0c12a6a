"""
Base Input Source - Abstract interface for input backends.
"""
from abc import ABC, abstractmethod
from typing import List

from arcadesim.input.input_event import InputEvent


class InputSource(ABC):
    """Abstract base class for input sources.

    Every backend (keyboard, mouse, scripted replay) converts its raw events
    into InputEvent objects.
    """

    @abstractmethod
    def poll_events(self) -> List[InputEvent]:
        """Poll for new input events.

        Returns:
            List of InputEvent objects since last poll.
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update the input source, collecting events.

        Args:
            dt: Milliseconds since last update.
        """
        pass
