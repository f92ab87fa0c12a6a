"""Simulated entities.

Entities are immutable: every change (movement, scoring flag, jump) returns
a new Entity, so a start-of-tick world can always be replayed.
"""

from dataclasses import dataclass, replace
from enum import Enum

from arcadesim.models import Rect


class Category(Enum):
    """Entity categories."""

    PLAYER = "player"
    PROJECTILE = "projectile"
    OBSTACLE = "obstacle"
    ENEMY = "enemy"


@dataclass(frozen=True)
class Entity:
    """An axis-aligned rectangle with a velocity.

    Attributes:
        category: Entity category
        kind: Name of the rule that produced it ('player', 'bullet', 'block', ...)
        x: Left edge (field space)
        y: Top edge (field space, increasing downward)
        width: Fixed width
        height: Fixed height
        vx: Horizontal velocity in pixels per tick
        vy: Vertical velocity in pixels per tick
        scored: Already counted for pass-through scoring
        direction: Horizontal sign assigned at spawn (+1 right, -1 left)
    """

    category: Category
    kind: str
    x: float
    y: float
    width: float
    height: float
    vx: float = 0.0
    vy: float = 0.0
    scored: bool = False
    direction: int = 1

    @property
    def right(self) -> float:
        """Right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge."""
        return self.y + self.height

    @property
    def rect(self) -> Rect:
        """Bounds as a Rect model."""
        return Rect(x=self.x, y=self.y, width=self.width, height=self.height)

    def moved_to(self, x: float, y: float) -> 'Entity':
        """Return a copy at a new position."""
        return replace(self, x=x, y=y)

    def with_velocity(self, vx: float, vy: float) -> 'Entity':
        """Return a copy with a new velocity."""
        return replace(self, vx=vx, vy=vy)

    def mark_scored(self) -> 'Entity':
        """Return a copy flagged as already scored."""
        return replace(self, scored=True)

    def __str__(self) -> str:
        return (f"{self.kind}({self.x:.1f}, {self.y:.1f}, "
                f"{self.width:g}x{self.height:g}, v=({self.vx:g}, {self.vy:g}))")
