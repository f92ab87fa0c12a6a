"""
Arcade engine - one parameterized simulation for every variant.

The engine owns the world, the session, the spawner and the tick history.
A host forwards input with handle_input(), advances time with tick(), and
draws whatever snapshot() returns. Each tick runs, in order:

    motion -> spawner -> collision resolver -> score/terminal -> cull

Usage:
    engine = ArcadeEngine(load_variant('shooter'), rng=random.Random(7))
    engine.handle_input([InputEvent(kind=InputKind.FIRE)])
    snapshot = engine.tick(now_ms)
"""

import random
from typing import Iterable, Optional

from arcadesim.collision import CollisionResolver
from arcadesim.entities import Category, Entity
from arcadesim.geometry import clamp
from arcadesim.history import FrameRecord, TickHistory
from arcadesim.input import InputEvent, InputKind
from arcadesim.logging import (
    create_sink_for_environment,
    emit_record,
    get_logger,
    get_sink,
    register_sink,
)
from arcadesim.models import EngineConfig
from arcadesim.motion import MotionSystem
from arcadesim.session import Session
from arcadesim.snapshot import RenderSnapshot
from arcadesim.spawner import Spawner
from arcadesim.store import World

log = get_logger('engine')

SESSION_MODULE = 'session'
PROJECTILE_KIND = 'projectile'


class ArcadeEngine:
    """Simulation facade driven by a frame scheduler."""

    def __init__(self, config: EngineConfig, rng: Optional[random.Random] = None):
        """Initialize the engine.

        Args:
            config: Validated engine configuration
            rng: Random source for spawn placement (default: unseeded Random)
        """
        self.config = config
        self.field = config.field
        self.motion = MotionSystem(config)
        self.spawner = Spawner(config, rng)
        self.resolver = CollisionResolver(config)
        self.session = Session()
        self.history = TickHistory(config.history_frames)
        self._world = self._initial_world()
        self._frame = 0
        log.info("Session started: %s (%dx%d)", config.name, self.field.width, self.field.height)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def world(self) -> World:
        return self._world

    @property
    def frame(self) -> int:
        """Ticks run since the last reset."""
        return self._frame

    @property
    def is_over(self) -> bool:
        return self.session.is_over

    def _initial_player(self) -> Entity:
        settings = self.config.player
        x = settings.x if settings.x is not None else (self.field.width - settings.width) / 2
        y = settings.y if settings.y is not None else self.field.height - settings.height
        return Entity(
            category=Category.PLAYER,
            kind='player',
            x=float(x),
            y=float(y),
            width=settings.width,
            height=settings.height,
        )

    def _initial_world(self) -> World:
        return World(player=self._initial_player())

    # =========================================================================
    # Input
    # =========================================================================

    def handle_input(self, events: Iterable[InputEvent]) -> None:
        """Apply player input.

        Movement, fire and jump change the player and projectiles directly;
        clicks remove targets under the cursor right away. Everything is
        ignored once the session is over.
        """
        events = list(events)
        if not events:
            return
        if self.session.is_over:
            log.debug("Ignoring %d input event(s): session over", len(events))
            return

        clicks = []
        for event in events:
            if event.kind == InputKind.MOVE_LEFT:
                self._move_player(-self.config.player.speed)
            elif event.kind == InputKind.MOVE_RIGHT:
                self._move_player(self.config.player.speed)
            elif event.kind == InputKind.FIRE:
                self._fire()
            elif event.kind == InputKind.JUMP:
                self._jump()
            elif event.kind == InputKind.CLICK:
                clicks.append(event.position)

        if clicks:
            outcome = self.resolver.resolve_clicks(self._world, clicks)
            self._world = self._world.with_targets(outcome.targets)
            self.session.add_score(outcome.score_delta)

    def _move_player(self, dx: float) -> None:
        player = self._world.player
        x = clamp(player.x + dx, 0.0, self.field.width - player.width)
        self._world = self._world.with_player(player.moved_to(x, player.y))

    def _fire(self) -> None:
        settings = self.config.projectile
        if settings is None:
            return
        player = self._world.player
        projectile = Entity(
            category=Category.PROJECTILE,
            kind=PROJECTILE_KIND,
            x=player.x + player.width / 2 - settings.width / 2,
            y=player.y - settings.height,
            width=settings.width,
            height=settings.height,
            vy=-settings.speed,
        )
        self._world = self._world.with_projectiles(self._world.projectiles.add(projectile))

    def _jump(self) -> None:
        if self.config.player.motion != "gravity":
            return
        player = self._world.player
        self._world = self._world.with_player(
            player.with_velocity(player.vx, self.config.player.jump_velocity)
        )

    # =========================================================================
    # Tick
    # =========================================================================

    def tick(self, now: float) -> RenderSnapshot:
        """Advance the simulation one step.

        Args:
            now: Host timestamp in milliseconds

        Returns:
            Snapshot of the state after the tick (unchanged while over)
        """
        if self.session.is_over:
            return self.snapshot()

        self.history.capture(FrameRecord(
            frame=self._frame,
            timestamp=now,
            world=self._world,
            score=self.session.score,
            spawner=self.spawner.state(),
        ))

        world = self.motion.advance(self._world)
        world = world.with_targets(self.spawner.spawn(now, world.targets))

        outcome = self.resolver.resolve(world)
        self.session.add_score(outcome.score_delta)
        world = World(player=world.player, projectiles=outcome.projectiles, targets=outcome.targets)
        self._world = self.motion.cull(world)
        self._frame += 1

        if outcome.game_over:
            self._end_session(outcome.reason, now)

        return self.snapshot()

    def _end_session(self, reason: str, now: float) -> None:
        self.session.end(reason)
        log.info("Session over (%s) at frame %d, final score %d",
                 reason, self._frame, self.session.score)

        if get_sink(SESSION_MODULE) is None:
            register_sink(SESSION_MODULE, create_sink_for_environment(SESSION_MODULE))
        emit_record(SESSION_MODULE, {
            "type": "session_end",
            "variant": self.config.name,
            "frame": self._frame,
            "timestamp": now,
            "reason": reason,
            "final_score": self.session.final_score,
            "best_score": self.session.best_score,
        })

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reset(self) -> RenderSnapshot:
        """Start a fresh session: score 0, no projectiles or targets, player recentered."""
        self.session.reset()
        self.spawner.reset()
        self.history.clear()
        self._world = self._initial_world()
        self._frame = 0
        log.info("Session reset: %s", self.config.name)
        return self.snapshot()

    def restore(self, record: FrameRecord) -> None:
        """Return to the start of a recorded tick.

        Running tick() with the record's timestamp afterwards reproduces
        the recorded tick exactly.
        """
        self._world = record.world
        self._frame = record.frame
        self.session.restore(record.score)
        self.spawner.restore(record.spawner)
        self.history.discard_from(record.frame)
        log.debug("Restored frame %d", record.frame)

    def snapshot(self) -> RenderSnapshot:
        """Current drawable state."""
        return RenderSnapshot.capture(self._frame, self.field, self._world, self.session)
