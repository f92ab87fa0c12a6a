"""Collision resolution.

One pass over the post-motion world produces a single immutable outcome:
surviving projectiles, surviving targets, the score delta and whether the
session has to end. Nothing is mutated; removal is a filter by position.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from arcadesim.entities import Entity
from arcadesim.geometry import contains_point, intersects
from arcadesim.models import EngineConfig, SpawnRuleConfig, Vector2
from arcadesim.store import EntityStore, World


REASON_COLLISION = "collision"
REASON_GOAL = "goal"
REASON_BOUNDS = "bounds"


@dataclass(frozen=True)
class CollisionOutcome:
    """Result of one resolver pass.

    Attributes:
        projectiles: Projectiles that survived
        targets: Obstacles/enemies that survived (pass flags applied)
        score_delta: Points earned this pass
        game_over: Session must end
        reason: Why it ends (collision, goal, bounds), None otherwise
        matches: (source_index, target_index) pairs removed together
    """
    projectiles: EntityStore
    targets: EntityStore
    score_delta: int = 0
    game_over: bool = False
    reason: Optional[str] = None
    matches: Tuple[Tuple[int, int], ...] = ()


def has_passed(target: Entity, player: Entity) -> bool:
    """Check if a target has fully passed the player along its travel.

    Horizontal travel decides when the target moves horizontally, otherwise
    vertical travel does. Stationary targets never pass. Touching edges
    count as passed, so a target culled on the field edge the player rests
    on still scores.
    """
    if target.vx < 0:
        return target.right <= player.x
    if target.vx > 0:
        return target.x >= player.right
    if target.vy > 0:
        return target.y >= player.bottom
    if target.vy < 0:
        return target.bottom <= player.y
    return False


class CollisionResolver:
    """Resolves projectile hits, player contact, goals and pass scoring."""

    def __init__(self, config: EngineConfig):
        self.config = config
        self.field = config.field

    def rule_for(self, target: Entity) -> SpawnRuleConfig:
        return self.config.spawn_rule(target.kind)

    def match_projectiles(self, world: World) -> List[Tuple[int, int]]:
        """Pair each projectile with the first unmatched shootable target it overlaps."""
        matches = []
        taken: Set[int] = set()
        for p_index, projectile in enumerate(world.projectiles):
            for t_index, target in enumerate(world.targets):
                if t_index in taken or not self.rule_for(target).shootable:
                    continue
                if intersects(projectile, target):
                    matches.append((p_index, t_index))
                    taken.add(t_index)
                    break
        return matches

    def terminal_reason(self, world: World) -> Optional[str]:
        """Check the session-ending rules against the whole world."""
        player = world.player
        if self.config.rules.player_collision_ends:
            if any(intersects(player, target) for target in world.targets):
                return REASON_COLLISION

        for target in world.targets:
            if self.rule_for(target).goal and target.bottom >= self.field.height:
                return REASON_GOAL

        if self.config.player.bounded:
            if player.y < 0 or player.bottom > self.field.height:
                return REASON_BOUNDS
        return None

    def resolve(self, world: World) -> CollisionOutcome:
        """Resolve one post-motion world.

        Args:
            world: World after motion and spawning

        Returns:
            CollisionOutcome with survivors and side effects
        """
        matches = self.match_projectiles(world)
        hit_projectiles = {p for p, _ in matches}
        hit_targets = {t for _, t in matches}

        score = sum(self.rule_for(world.targets[t]).points for t in hit_targets)
        reason = self.terminal_reason(world)

        removed = set(hit_targets)
        survivors = []
        for index, target in enumerate(world.targets):
            rule = self.rule_for(target)
            if rule.goal and target.bottom >= self.field.height:
                removed.add(index)
            if index in removed:
                continue
            if rule.pass_points and not target.scored and has_passed(target, world.player):
                score += rule.pass_points
                target = target.mark_scored()
            survivors.append(target)

        return CollisionOutcome(
            projectiles=world.projectiles.exclude(hit_projectiles),
            targets=EntityStore(survivors),
            score_delta=score,
            game_over=reason is not None,
            reason=reason,
            matches=tuple(matches),
        )

    def resolve_clicks(self, world: World, positions: Iterable[Vector2]) -> CollisionOutcome:
        """Remove the first shootable target under each click.

        Edges count as inside. A target is removed by at most one click.
        """
        matches = []
        taken: Set[int] = set()
        score = 0
        for c_index, position in enumerate(positions):
            for t_index, target in enumerate(world.targets):
                if t_index in taken or not self.rule_for(target).shootable:
                    continue
                if contains_point(target, position.x, position.y):
                    matches.append((c_index, t_index))
                    taken.add(t_index)
                    score += self.rule_for(target).points
                    break

        return CollisionOutcome(
            projectiles=world.projectiles,
            targets=world.targets.exclude(taken),
            score_delta=score,
            matches=tuple(matches),
        )
