"""
Scripted Input Source - replays a fixed list of events.

Used for headless runs and tests: events become available once the source's
clock reaches their timestamp.
"""
from typing import Iterable, List

from arcadesim.input.input_event import InputEvent
from arcadesim.input.sources.base import InputSource


class ScriptedInputSource(InputSource):
    """Releases queued events in timestamp order as time advances."""

    def __init__(self, events: Iterable[InputEvent] = ()):
        self._pending: List[InputEvent] = sorted(events, key=lambda e: e.timestamp)
        self._ready: List[InputEvent] = []
        self._clock = 0.0

    def update(self, dt: float) -> None:
        self._clock += dt
        while self._pending and self._pending[0].timestamp <= self._clock:
            self._ready.append(self._pending.pop(0))

    def poll_events(self) -> List[InputEvent]:
        events = self._ready
        self._ready = []
        return events
