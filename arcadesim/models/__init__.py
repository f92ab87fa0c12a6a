"""
Pydantic data models for arcadesim.

- Primitives: Vector2, FieldSize, Color, Rect
- Config: EngineConfig and its parts, validated at construction

Usage:
    >>> from arcadesim.models import EngineConfig, FieldSize, Rect
"""

from .primitives import (
    Vector2,
    FieldSize,
    Color,
    Rect,
)

from .config import (
    Edge,
    PlayerConfig,
    ProjectileConfig,
    SpawnRuleConfig,
    RulesConfig,
    EngineConfig,
)

__all__ = [
    # Primitives
    "Vector2",
    "FieldSize",
    "Color",
    "Rect",
    # Config
    "Edge",
    "PlayerConfig",
    "ProjectileConfig",
    "SpawnRuleConfig",
    "RulesConfig",
    "EngineConfig",
]
