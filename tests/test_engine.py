"""
Tests for the engine facade.

Covers the documented scenarios (fire and hit, the goal boundary, reset),
input gating while over, deterministic restore-and-replay and the session
summary record.
"""

import random
from typing import Any, Dict, List

import pytest

from arcadesim.engine import ArcadeEngine
from arcadesim.entities import Category
from arcadesim.history import FrameRecord
from arcadesim.input import InputEvent, InputKind
from arcadesim.logging import LogSink, register_sink
from arcadesim.store import EntityStore, World

from conftest import BLOCK_RULE, ENEMY_RULE, PIPE_RULE

FIRE = InputEvent(kind=InputKind.FIRE)
LEFT = InputEvent(kind=InputKind.MOVE_LEFT)
RIGHT = InputEvent(kind=InputKind.MOVE_RIGHT)
JUMP = InputEvent(kind=InputKind.JUMP)


class RecordingSink(LogSink):
    """Sink that keeps records in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self.records.append(record)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


def place(engine: ArcadeEngine, world: World, now: float = 0.0) -> None:
    """Put a hand-built world into the engine as the start of the next tick."""
    engine.restore(FrameRecord(
        frame=engine.frame,
        timestamp=now,
        world=world,
        score=engine.session.score,
        spawner=engine.spawner.state(),
    ))


@pytest.fixture
def engine(shooter_config):
    return ArcadeEngine(shooter_config, rng=random.Random(7))


class TestStart:
    """Test initial state."""

    def test_player_centered_on_bottom(self, engine):
        player = engine.world.player
        assert (player.x, player.y) == (180, 580)
        assert player.category == Category.PLAYER

    def test_empty_collections(self, engine):
        assert len(engine.world.projectiles) == 0
        assert len(engine.world.targets) == 0
        assert engine.session.score == 0
        assert engine.frame == 0

    def test_explicit_start_position(self, make_config):
        engine = ArcadeEngine(make_config(player={'width': 30, 'height': 24, 'x': 80, 'y': 280}))
        assert (engine.world.player.x, engine.world.player.y) == (80, 280)


class TestInput:
    """Test player input handling."""

    def test_fire_creates_one_centered_projectile(self, engine):
        """Projectile x = playerX + width/2 - bulletWidth/2."""
        engine.handle_input([FIRE])

        projectiles = list(engine.world.projectiles)
        assert len(projectiles) == 1
        assert projectiles[0].x == 198
        assert projectiles[0].y == 570
        assert projectiles[0].vy == -7

    def test_move_left_right(self, engine):
        engine.handle_input([LEFT, LEFT])
        assert engine.world.player.x == 170
        engine.handle_input([RIGHT])
        assert engine.world.player.x == 175

    def test_move_clamped_to_field(self, engine):
        engine.handle_input([LEFT] * 100)
        assert engine.world.player.x == 0
        engine.handle_input([RIGHT] * 100)
        assert engine.world.player.x == 360

    def test_fire_without_projectiles_is_noop(self, make_config):
        engine = ArcadeEngine(make_config(projectile=None))
        engine.handle_input([FIRE])
        assert len(engine.world.projectiles) == 0

    def test_jump_sets_velocity(self, make_config):
        engine = ArcadeEngine(make_config(player={
            'width': 30, 'height': 24, 'x': 80, 'y': 280, 'motion': 'gravity',
            'gravity': 0.4, 'jump_velocity': -7,
        }))
        engine.handle_input([JUMP])
        assert engine.world.player.vy == -7

        engine.tick(16)
        assert engine.world.player.vy == pytest.approx(-6.6)
        assert engine.world.player.y == pytest.approx(273.4)

    def test_jump_ignored_for_fixed_player(self, engine):
        engine.handle_input([JUMP])
        assert engine.world.player.vy == 0

    def test_click_scores_immediately(self, engine, make_entity):
        place(engine, World(player=engine.world.player,
                            targets=EntityStore([make_entity(x=100, y=100)])))
        engine.handle_input([InputEvent.click(110, 110)])
        assert len(engine.world.targets) == 0
        assert engine.session.score == 1


class TestTick:
    """Test the per-tick pipeline."""

    def test_projectile_hits_block(self, engine, make_entity):
        """A tick where a block overlaps the projectile removes both and adds 1."""
        engine.handle_input([FIRE])
        place(engine, World(
            player=engine.world.player,
            projectiles=engine.world.projectiles,
            targets=EntityStore([make_entity(x=180, y=553, vy=2)]),
        ))

        snapshot = engine.tick(0)
        assert snapshot.score == 1
        assert snapshot.projectiles == ()
        assert snapshot.targets == ()
        assert not snapshot.is_over

    def test_goal_ends_on_that_tick(self, engine, make_entity):
        """Reaching the bottom ends the session even if the block is also shot."""
        place(engine, World(
            player=engine.world.player,
            projectiles=EntityStore([make_entity('projectile', x=318, y=592, width=4, height=10, vy=-7)]),
            targets=EntityStore([make_entity(x=300, y=578, vy=2)]),
        ))

        snapshot = engine.tick(0)
        assert snapshot.is_over
        assert snapshot.reason == 'goal'
        assert snapshot.final_score == 1
        assert engine.frame == 1

    def test_spawns_after_interval(self, engine):
        engine.tick(0)
        engine.tick(1000)
        assert [t.kind for t in engine.world.targets] == ['enemy']
        engine.tick(1500)
        assert sorted(t.kind for t in engine.world.targets) == ['block', 'enemy']

    def test_departed_projectiles_culled(self, engine):
        engine.handle_input([FIRE])
        for i in range(100):
            engine.tick(i)
        assert len(engine.world.projectiles) == 0

    def test_frame_counter(self, engine):
        for i in range(3):
            assert engine.tick(i * 16).frame == i + 1


class TestGameOver:
    """Test behaviour once the session is over."""

    @pytest.fixture
    def over_engine(self, engine, make_entity):
        place(engine, World(player=engine.world.player,
                            targets=EntityStore([make_entity(x=300, y=580, vy=2)])))
        engine.tick(0)
        assert engine.is_over
        return engine

    def test_input_ignored(self, over_engine):
        before = over_engine.world
        over_engine.handle_input([FIRE, LEFT, JUMP, InputEvent.click(1, 1)])
        assert over_engine.world == before

    def test_tick_is_frozen(self, over_engine):
        before = over_engine.snapshot()
        after = over_engine.tick(10000)
        assert after == before

    def test_score_monotonic_then_frozen(self, shooter_config):
        engine = ArcadeEngine(shooter_config, rng=random.Random(3))
        scores = []
        now = 0.0
        for i in range(5000):
            if i % 5 == 0:
                engine.handle_input([FIRE])
            scores.append(engine.tick(now).score)
            now += 16
            if engine.is_over:
                break

        assert engine.is_over
        assert scores == sorted(scores)
        final = engine.session.score
        for _ in range(10):
            now += 16
            engine.handle_input([FIRE])
            assert engine.tick(now).score == final


class TestReset:
    """Test reset."""

    def test_reset_restores_start(self, engine, make_entity):
        engine.handle_input([FIRE, LEFT])
        place(engine, World(player=engine.world.player,
                            projectiles=engine.world.projectiles,
                            targets=EntityStore([make_entity(x=300, y=580, vy=2)])))
        engine.tick(0)
        assert engine.is_over

        snapshot = engine.reset()
        assert snapshot.score == 0
        assert not snapshot.is_over
        assert snapshot.projectiles == ()
        assert snapshot.targets == ()
        assert snapshot.player.rect.x == 180
        assert snapshot.frame == 0
        assert len(engine.history) == 0

    def test_reset_idempotent(self, engine):
        engine.tick(0)
        first = engine.reset()
        second = engine.reset()
        assert first == second

    def test_best_score_kept(self, engine, make_entity):
        place(engine, World(player=engine.world.player,
                            targets=EntityStore([make_entity(x=100, y=100)])))
        engine.handle_input([InputEvent.click(110, 110)])
        place(engine, World(player=engine.world.player,
                            targets=EntityStore([make_entity(x=300, y=580, vy=2)])))
        engine.tick(0)
        engine.reset()
        assert engine.snapshot().best_score == 1


class TestRestore:
    """Test restore-and-replay from tick history."""

    def test_replay_reproduces_tick(self, shooter_config):
        engine = ArcadeEngine(shooter_config, rng=random.Random(11))
        now = 0.0
        results = {}
        for i in range(400):
            if i % 7 == 0:
                engine.handle_input([FIRE])
            engine.tick(now)
            results[engine.frame - 1] = (engine.world, engine.session.score, now)
            now += 16
            if engine.is_over:
                break

        target_frame = engine.frame - 30
        record = engine.history.find(target_frame)
        assert record is not None

        engine.restore(record)
        assert engine.frame == target_frame
        engine.tick(record.timestamp)

        world, score, _ = results[target_frame]
        assert engine.world == world
        assert engine.session.score == score


class TestVariants:
    """Test variant-specific rules through the engine."""

    def test_dodger_collision_ends(self, make_config, make_entity):
        config = make_config(projectile=None, spawns=[{**ENEMY_RULE, 'motion': 'linear'}],
                             rules={'player_collision_ends': True})
        engine = ArcadeEngine(config)
        place(engine, World(player=engine.world.player,
                            targets=EntityStore([make_entity('enemy', x=140, y=580, vx=2)])))
        snapshot = engine.tick(0)
        assert snapshot.is_over
        assert snapshot.reason == 'collision'

    def test_dodged_rock_scores_when_culled_on_floor(self, make_config, make_entity):
        rock_rule = {**BLOCK_RULE, 'kind': 'rock', 'goal': False,
                     'shootable': False, 'pass_points': 1}
        config = make_config(projectile=None, spawns=[rock_rule],
                             rules={'player_collision_ends': True})
        engine = ArcadeEngine(config)
        place(engine, World(player=engine.world.player,
                            targets=EntityStore([make_entity('rock', x=300, y=596, vy=2)])))

        engine.tick(0)
        snapshot = engine.tick(16)
        assert len(engine.world.targets) == 0
        assert (snapshot.score, snapshot.is_over) == (1, False)

    def test_flappy_falls_out(self, make_config):
        config = make_config(
            projectile=None,
            player={'width': 30, 'height': 24, 'x': 80, 'y': 280, 'motion': 'gravity',
                    'gravity': 0.4, 'jump_velocity': -7, 'bounded': True},
            spawns=[PIPE_RULE],
            rules={'player_collision_ends': True},
        )
        engine = ArcadeEngine(config, rng=random.Random(5))
        now = 0.0
        while not engine.is_over and now < 100000:
            engine.tick(now)
            now += 16
        assert engine.session.reason == 'bounds'


class TestSessionRecord:
    """Test the structured session summary."""

    def test_record_emitted_on_end(self, engine, make_entity):
        sink = RecordingSink()
        register_sink('session', sink)

        place(engine, World(player=engine.world.player,
                            targets=EntityStore([make_entity(x=300, y=580, vy=2)])))
        engine.tick(42)

        assert len(sink.records) == 1
        record = sink.records[0]
        assert record['type'] == 'session_end'
        assert record['reason'] == 'goal'
        assert record['final_score'] == 0
        assert record['timestamp'] == 42
