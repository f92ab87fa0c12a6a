"""
Tick history - bounded ring of start-of-tick records.

Each record holds everything a tick reads: the world, the score, the frame
counter and the spawner's timers and random state. Restoring a record and
running the same tick again reproduces the same result.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from arcadesim.spawner import SpawnerState
from arcadesim.store import World


@dataclass(frozen=True)
class FrameRecord:
    """State at the start of one tick."""
    frame: int
    timestamp: float
    world: World
    score: int
    spawner: SpawnerState

    def __repr__(self) -> str:
        return (
            f"FrameRecord(frame={self.frame}, "
            f"time={self.timestamp:.1f}, "
            f"targets={len(self.world.targets)}, "
            f"score={self.score})"
        )


class TickHistory:
    """
    Keeps the most recent start-of-tick records.

    Args:
        max_frames: Records kept; older ones are dropped. 0 disables capture.

    Example:
        history = TickHistory(max_frames=120)
        history.capture(record)
        earlier = history.find(frame=42)
    """

    def __init__(self, max_frames: int = 120):
        self._records: Deque[FrameRecord] = deque(maxlen=max_frames)

    @property
    def enabled(self) -> bool:
        return (self._records.maxlen or 0) > 0

    def capture(self, record: FrameRecord) -> None:
        if self.enabled:
            self._records.append(record)

    def find(self, frame: int) -> Optional[FrameRecord]:
        """Record captured at the start of a frame, or None if not kept."""
        for record in reversed(self._records):
            if record.frame == frame:
                return record
        return None

    def discard_from(self, frame: int) -> None:
        """Drop the record of a frame and everything newer."""
        while self._records and self._records[-1].frame >= frame:
            self._records.pop()

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
