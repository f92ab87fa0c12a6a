"""
Render snapshot dataclasses.

Everything a renderer needs for one frame, as immutable values. Renderers
pick colours from the sprite category and kind; they never see entities.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from arcadesim.entities import Category, Entity
from arcadesim.models import FieldSize, Rect
from arcadesim.session import Session
from arcadesim.store import World


@dataclass(frozen=True)
class Sprite:
    """One drawable rectangle."""
    rect: Rect
    category: Category
    kind: str

    @classmethod
    def from_entity(cls, entity: Entity) -> 'Sprite':
        return cls(rect=entity.rect, category=entity.category, kind=entity.kind)


@dataclass(frozen=True)
class RenderSnapshot:
    """
    Drawable state after a tick.

    Attributes:
        frame: Ticks run since the last reset
        field: Field size
        player: Player sprite
        projectiles: Projectile sprites in draw order
        targets: Obstacle/enemy sprites in draw order
        score: Current score
        is_over: Session has ended
        final_score: Score at the end, None while active
        best_score: Best final score seen by this engine
        reason: Why the session ended, None while active
    """
    frame: int
    field: FieldSize
    player: Sprite
    projectiles: Tuple[Sprite, ...] = ()
    targets: Tuple[Sprite, ...] = ()
    score: int = 0
    is_over: bool = False
    final_score: Optional[int] = None
    best_score: int = 0
    reason: Optional[str] = None

    @classmethod
    def capture(cls, frame: int, field: FieldSize, world: World, session: Session) -> 'RenderSnapshot':
        """Build a snapshot from the live world and session."""
        return cls(
            frame=frame,
            field=field,
            player=Sprite.from_entity(world.player),
            projectiles=tuple(Sprite.from_entity(e) for e in world.projectiles),
            targets=tuple(Sprite.from_entity(e) for e in world.targets),
            score=session.score,
            is_over=session.is_over,
            final_score=session.final_score,
            best_score=session.best_score,
            reason=session.reason,
        )

    def __repr__(self) -> str:
        return (
            f"RenderSnapshot(frame={self.frame}, "
            f"projectiles={len(self.projectiles)}, "
            f"targets={len(self.targets)}, "
            f"score={self.score}, over={self.is_over})"
        )
