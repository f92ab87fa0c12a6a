"""Pytest fixtures shared by the arcadesim tests."""
import os

# pygame tests run headless
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import random

import pytest

from arcadesim.entities import Category, Entity
from arcadesim.logging import close_all_sinks
from arcadesim.models import EngineConfig
from arcadesim.scheduler import ManualFrameHost


BLOCK_RULE = {
    'kind': 'block',
    'category': 'obstacle',
    'width': 40,
    'height': 20,
    'velocity': {'x': 0, 'y': 2},
    'interval_ms': 1500,
    'edge': 'top',
    'goal': True,
}

ENEMY_RULE = {
    'kind': 'enemy',
    'category': 'enemy',
    'width': 40,
    'height': 20,
    'velocity': {'x': 2, 'y': 0.5},
    'interval_ms': 1000,
    'edge': 'top',
    'motion': 'wrap',
}

PIPE_RULE = {
    'kind': 'pipe',
    'category': 'obstacle',
    'width': 52,
    'height': 600,
    'velocity': {'x': 2, 'y': 0},
    'interval_ms': 1600,
    'edge': 'right',
    'gap': 150,
    'gap_margin': 60,
    'shootable': False,
    'pass_points': 1,
}


def build_config(**overrides) -> EngineConfig:
    """A 400x600 shooter-sized configuration with optional overrides."""
    data = {
        'name': 'Test',
        'field': {'width': 400, 'height': 600},
        'player': {'width': 40, 'height': 20, 'speed': 5},
        'projectile': {'width': 4, 'height': 10, 'speed': 7},
        'spawns': [],
    }
    data.update(overrides)
    return EngineConfig(**data)


@pytest.fixture
def make_config():
    """Factory for EngineConfig objects."""
    return build_config


@pytest.fixture
def make_entity():
    """Factory for entities with sensible defaults."""
    def _make(kind='block', x=0.0, y=0.0, width=40.0, height=20.0,
              vx=0.0, vy=0.0, category=None, **kwargs):
        if category is None:
            category = {
                'player': Category.PLAYER,
                'projectile': Category.PROJECTILE,
                'enemy': Category.ENEMY,
            }.get(kind, Category.OBSTACLE)
        return Entity(category=category, kind=kind, x=x, y=y, width=width,
                      height=height, vx=vx, vy=vy, **kwargs)
    return _make


@pytest.fixture
def shooter_config():
    """Shooter-style config: falling goal blocks and wrapping enemies."""
    return build_config(spawns=[BLOCK_RULE, ENEMY_RULE])


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def manual_host():
    """Frame host stepped by the test."""
    return ManualFrameHost()


@pytest.fixture(autouse=True)
def clean_sinks():
    """Drop any sinks a test registered."""
    yield
    close_all_sinks()
