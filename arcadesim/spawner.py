"""
Spawner - time-gated target generation.

Each spawn rule stamps a timer when it fires; a rule is due once
`now - last >= interval`. Rules may share a timer by name. Placement is
randomized along the edge the rule enters from, using an injectable
random source so sessions can be replayed.
"""
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from arcadesim.entities import Category, Entity
from arcadesim.logging import get_logger
from arcadesim.models import EngineConfig, SpawnRuleConfig
from arcadesim.store import EntityStore

log = get_logger('spawner')


@dataclass(frozen=True)
class SpawnerState:
    """Captured spawner state for restore."""
    timers: Tuple[Tuple[str, float], ...]
    rng_state: tuple


class Spawner:
    """Spawns obstacles and enemies from the configured rules."""

    def __init__(self, config: EngineConfig, rng: Optional[random.Random] = None):
        """Initialize the spawner.

        Args:
            config: Engine configuration (field size and spawn rules)
            rng: Random source for placement (default: unseeded Random)
        """
        self.config = config
        self.field = config.field
        self.rng = rng if rng is not None else random.Random()
        self._last_spawn: Dict[str, float] = {}

    def reset(self) -> None:
        """Forget every timer; the next observation primes them again."""
        self._last_spawn.clear()

    def last_spawn(self, timer: str) -> Optional[float]:
        """Timestamp a timer was last stamped, or None if never."""
        return self._last_spawn.get(timer)

    def state(self) -> SpawnerState:
        """Capture timers and random state."""
        return SpawnerState(
            timers=tuple(sorted(self._last_spawn.items())),
            rng_state=self.rng.getstate(),
        )

    def restore(self, state: SpawnerState) -> None:
        """Restore timers and random state captured by state()."""
        self._last_spawn = dict(state.timers)
        self.rng.setstate(state.rng_state)

    def is_due(self, now: float, interval: float, timer: str) -> bool:
        """Check a timer, priming it on first observation."""
        last = self.last_spawn(timer)
        if last is None:
            self._last_spawn[timer] = now
            return False
        return now - last >= interval

    def maybe_spawn(
        self,
        now: float,
        interval: float,
        kind: str,
        active: int = 0,
    ) -> List[Entity]:
        """Spawn one entity (or pair) of a kind if its timer is due.

        Args:
            now: Current timestamp in milliseconds
            interval: Minimum milliseconds between spawns
            kind: Spawn rule kind
            active: Live entities of this kind, checked against max_active

        Returns:
            Newly created entities (empty if not due)
        """
        rule = self.config.spawn_rule(kind)
        if not self.is_due(now, interval, rule.timer_key):
            return []
        if rule.max_active is not None and active >= rule.max_active:
            return []

        self._last_spawn[rule.timer_key] = now
        created = self._create(rule)
        log.debug("Spawned %d %s at t=%.0f: %s", len(created), kind, now, created[0])
        return created

    def spawn(self, now: float, targets: EntityStore) -> EntityStore:
        """Run every rule in configuration order.

        Returns:
            targets extended with whatever was spawned
        """
        for rule in self.config.spawns:
            created = self.maybe_spawn(now, rule.interval_ms, rule.kind, targets.count(rule.kind))
            targets = targets.extend(created)
        return targets

    def _create(self, rule: SpawnRuleConfig) -> List[Entity]:
        if rule.gap is not None:
            return self._create_pair(rule)

        width, height = self.field.width, self.field.height
        vx, vy = rule.velocity.x, rule.velocity.y
        edge = rule.edge
        if edge == "sides":
            edge = self.rng.choice(("left", "right"))

        if edge == "top":
            x, y = self.rng.uniform(0, width - rule.width), -rule.height
            vy = abs(vy)
        elif edge == "bottom":
            x, y = self.rng.uniform(0, width - rule.width), float(height)
            vy = -abs(vy)
        elif edge == "left":
            x, y = -rule.width, self.rng.uniform(0, height - rule.height)
            vx = abs(vx)
        elif edge == "right":
            x, y = float(width), self.rng.uniform(0, height - rule.height)
            vx = -abs(vx)
        else:
            x = self.rng.uniform(0, width - rule.width)
            y = self.rng.uniform(0, height - rule.height)

        return [self._entity(rule, x, y, rule.height, vx, vy)]

    def _create_pair(self, rule: SpawnRuleConfig) -> List[Entity]:
        """Two pieces spanning the field height around a random gap."""
        height = self.field.height
        if rule.edge == "left":
            x, vx = -rule.width, abs(rule.velocity.x)
        else:
            x, vx = float(self.field.width), -abs(rule.velocity.x)

        gap_top = self.rng.uniform(rule.gap_margin, height - rule.gap_margin - rule.gap)
        gap_bottom = gap_top + rule.gap

        upper = self._entity(rule, x, 0.0, gap_top, vx, 0.0)
        lower = self._entity(rule, x, gap_bottom, height - gap_bottom, vx, 0.0).mark_scored()
        return [upper, lower]

    @staticmethod
    def _entity(rule: SpawnRuleConfig, x: float, y: float, height: float,
                vx: float, vy: float) -> Entity:
        return Entity(
            category=Category(rule.category),
            kind=rule.kind,
            x=x,
            y=y,
            width=rule.width,
            height=height,
            vx=vx,
            vy=vy,
            direction=-1 if vx < 0 else 1,
        )
