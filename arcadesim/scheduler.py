"""
Frame scheduling.

A FrameHost delivers one callback per display refresh, like a browser's
animation-frame queue. FrameScheduler drives the engine from those callbacks:
while the session is active each callback runs one tick, draws, then requests
the next frame; once the session is over it draws the terminal frame and
stops requesting.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from arcadesim.engine import ArcadeEngine
from arcadesim.logging import get_logger
from arcadesim.snapshot import RenderSnapshot

log = get_logger('scheduler')

FrameCallback = Callable[[float], None]
DrawCallback = Callable[[RenderSnapshot], None]


class FrameHost(ABC):
    """Source of animation-frame callbacks."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback(timestamp_ms) for the next frame.

        Returns:
            Handle usable with cancel_frame()
        """
        pass

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending request. Unknown handles are ignored."""
        pass


class ManualFrameHost(FrameHost):
    """Frame host stepped explicitly with advance().

    Callbacks requested while a frame is running are delivered on the next
    advance(), never the current one.
    """

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self.now = 0.0

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def advance(self, now: float) -> int:
        """Deliver one frame at the given timestamp.

        Returns:
            Number of callbacks invoked
        """
        self.now = now
        due = list(self._pending.items())
        self._pending.clear()
        for _, callback in due:
            callback(now)
        return len(due)


class FrameScheduler:
    """
    Cooperative single-threaded game loop.

    Args:
        engine: Engine to tick
        host: Where frame callbacks come from
        draw: Called with every snapshot produced by a frame

    Example:
        scheduler = FrameScheduler(engine, host, renderer_callback)
        scheduler.start()
        ...
        scheduler.cancel()  # before tearing down the surface
    """

    def __init__(self, engine: ArcadeEngine, host: FrameHost, draw: Optional[DrawCallback] = None):
        self.engine = engine
        self.host = host
        self.draw = draw
        self._handle: Optional[int] = None
        self._generation = 0
        self._running = False
        self._in_frame = False
        self._frames = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frames(self) -> int:
        """Frame callbacks handled since creation."""
        return self._frames

    def start(self) -> None:
        """Begin requesting frames. No-op if already running."""
        if self._running:
            return
        self._running = True
        self._request()
        log.debug("Scheduler started")

    def cancel(self) -> None:
        """Stop the loop and cancel any pending frame. Safe to call twice."""
        if self._handle is not None:
            self.host.cancel_frame(self._handle)
            self._handle = None
        self._generation += 1
        if self._running:
            log.debug("Scheduler cancelled after %d frames", self._frames)
        self._running = False

    def restart(self) -> None:
        """Cancel, reset the engine and start a fresh loop."""
        self.cancel()
        self.engine.reset()
        self.start()

    def _request(self) -> None:
        generation = self._generation
        self._handle = self.host.request_frame(lambda now: self._on_frame(now, generation))

    def _on_frame(self, now: float, generation: int) -> None:
        if self._in_frame:
            raise RuntimeError("Frame callback re-entered while a frame is running")
        if not self._running or generation != self._generation:
            return

        self._in_frame = True
        try:
            self._handle = None
            snapshot = self.engine.tick(now)
            self._frames += 1
            if self.draw is not None:
                self.draw(snapshot)
            if snapshot.is_over:
                self._running = False
                log.debug("Session over, loop stopped at frame %d", snapshot.frame)
            else:
                self._request()
        finally:
            self._in_frame = False
