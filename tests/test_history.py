"""Tests for the bounded tick history."""

import random

import pytest

from arcadesim.history import FrameRecord, TickHistory
from arcadesim.spawner import SpawnerState
from arcadesim.store import World


@pytest.fixture
def make_record(make_entity):
    world = World(player=make_entity('player'))
    state = SpawnerState(timers=(), rng_state=random.Random(0).getstate())

    def _make(frame, score=0):
        return FrameRecord(frame=frame, timestamp=frame * 16.0, world=world,
                           score=score, spawner=state)
    return _make


class TestTickHistory:
    """Test capture, lookup and trimming."""

    def test_empty(self):
        history = TickHistory(10)
        assert len(history) == 0
        assert history.find(0) is None

    def test_capture_and_find(self, make_record):
        history = TickHistory(10)
        for frame in range(5):
            history.capture(make_record(frame, score=frame))

        assert len(history) == 5
        assert history.find(4).frame == 4
        assert history.find(2).score == 2

    def test_bounded(self, make_record):
        """Older records are dropped once full."""
        history = TickHistory(3)
        for frame in range(10):
            history.capture(make_record(frame))

        assert len(history) == 3
        assert history.find(7).frame == 7
        assert history.find(6) is None

    def test_disabled(self, make_record):
        history = TickHistory(0)
        history.capture(make_record(0))
        assert not history.enabled
        assert len(history) == 0

    def test_discard_from(self, make_record):
        history = TickHistory(10)
        for frame in range(6):
            history.capture(make_record(frame))

        history.discard_from(3)
        assert len(history) == 3
        assert history.find(2) is not None
        assert history.find(3) is None

    def test_clear(self, make_record):
        history = TickHistory(10)
        history.capture(make_record(0))
        history.clear()
        assert len(history) == 0
