"""
arcadesim - a small real-time 2D arcade simulation engine.

One parameterized engine runs every variant (vertical shooter, dodger,
flappy, clicker): axis-aligned rectangles spawned on timers, moved at
constant velocity, matched by AABB collision, scored, and ended by a
terminal game-over state. Hosts forward input, drive ticks through a
frame scheduler and draw the render snapshot.

Usage:
    from arcadesim import ArcadeEngine, load_variant

    engine = ArcadeEngine(load_variant('shooter'))
    snapshot = engine.tick(now_ms)
"""

from arcadesim.engine import ArcadeEngine
from arcadesim.entities import Category, Entity
from arcadesim.history import FrameRecord, TickHistory
from arcadesim.input import InputEvent, InputKind
from arcadesim.models import EngineConfig
from arcadesim.scheduler import FrameHost, FrameScheduler, ManualFrameHost
from arcadesim.session import Session, SessionState
from arcadesim.snapshot import RenderSnapshot, Sprite
from arcadesim.store import EntityStore, World
from arcadesim.variants import list_variants, load_config_file, load_variant

__version__ = "0.1.0"

__all__ = [
    'ArcadeEngine',
    'Category',
    'Entity',
    'EntityStore',
    'World',
    'EngineConfig',
    'InputEvent',
    'InputKind',
    'Session',
    'SessionState',
    'RenderSnapshot',
    'Sprite',
    'FrameHost',
    'FrameScheduler',
    'ManualFrameHost',
    'FrameRecord',
    'TickHistory',
    'load_variant',
    'list_variants',
    'load_config_file',
]
