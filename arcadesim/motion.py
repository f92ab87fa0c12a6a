"""Motion system.

Applies per-rule velocity (and gravity for the player) once per tick, and
culls entities that have left the field. Every step reads only the entity it
moves, so the result is independent of iteration order.
"""

from typing import Dict

from arcadesim.entities import Entity
from arcadesim.geometry import clamp
from arcadesim.models import EngineConfig, FieldSize, SpawnRuleConfig
from arcadesim.store import World


def step_linear(entity: Entity) -> Entity:
    """position += velocity."""
    if entity.vx == 0 and entity.vy == 0:
        return entity
    return entity.moved_to(entity.x + entity.vx, entity.y + entity.vy)


def step_wrap(entity: Entity, field: FieldSize) -> Entity:
    """Linear step, re-entering at the opposite side horizontally.

    Moving right past the right edge reappears just off the left edge
    (x = -width); moving left fully past the left edge reappears at the
    right edge.
    """
    x = entity.x + entity.vx
    y = entity.y + entity.vy
    if entity.vx > 0 and x > field.width:
        x = -entity.width
    elif entity.vx < 0 and x + entity.width < 0:
        x = float(field.width)
    return entity.moved_to(x, y)


def step_gravity(entity: Entity, gravity: float) -> Entity:
    """Accumulate gravity into vy, then move."""
    vy = entity.vy + gravity
    return entity.with_velocity(entity.vx, vy).moved_to(entity.x + entity.vx, entity.y + vy)


def has_left_field(entity: Entity, field: FieldSize, wraps: bool = False) -> bool:
    """Check if an entity has fully left the field in its direction of travel.

    Stationary entities never leave. Wrapping entities only leave vertically.
    """
    if entity.vy > 0 and entity.y >= field.height:
        return True
    if entity.vy < 0 and entity.bottom <= 0:
        return True
    if wraps:
        return False
    if entity.vx > 0 and entity.x >= field.width:
        return True
    if entity.vx < 0 and entity.right <= 0:
        return True
    return False


class MotionSystem:
    """Advances and culls every live entity of a world."""

    def __init__(self, config: EngineConfig):
        self.config = config
        self.field = config.field
        self._rules: Dict[str, SpawnRuleConfig] = {rule.kind: rule for rule in config.spawns}

    def _wraps(self, entity: Entity) -> bool:
        rule = self._rules.get(entity.kind)
        return rule is not None and rule.motion == "wrap"

    def step_target(self, entity: Entity) -> Entity:
        """Move one obstacle/enemy by its rule's motion."""
        if self._wraps(entity):
            return step_wrap(entity, self.field)
        return step_linear(entity)

    def step_player(self, player: Entity) -> Entity:
        """Move the player.

        Fixed players only move on input. Gravity players fall; unless the
        player is bounded (leaving ends the session) they are kept inside
        the field and lose their vertical speed at the floor or ceiling.
        """
        settings = self.config.player
        if settings.motion != "gravity":
            return player

        moved = step_gravity(player, settings.gravity)
        if settings.bounded:
            return moved

        top = clamp(moved.y, 0.0, self.field.height - moved.height)
        if top != moved.y:
            moved = moved.with_velocity(moved.vx, 0.0).moved_to(moved.x, top)
        return moved

    def advance(self, world: World) -> World:
        """Return the world one tick later (no spawning, no collisions)."""
        return World(
            player=self.step_player(world.player),
            projectiles=world.projectiles.map(step_linear),
            targets=world.targets.map(self.step_target),
        )

    def cull(self, world: World) -> World:
        """Drop projectiles and targets that have left the field."""
        field = self.field
        projectiles = world.projectiles.filter(lambda e: not has_left_field(e, field))
        targets = world.targets.filter(
            lambda e: not has_left_field(e, field, wraps=self._wraps(e))
        )
        if len(projectiles) == len(world.projectiles) and len(targets) == len(world.targets):
            return world
        return World(player=world.player, projectiles=projectiles, targets=targets)
