"""
Tests for input events and sources.

Tests cover:
- InputEvent validation and immutability
- ScriptedInputSource timing
- KeyboardMouseInputSource with pygame events
"""

import pygame
import pytest
from pydantic import ValidationError

from arcadesim.input import InputEvent, InputKind
from arcadesim.input.sources import InputSource, ScriptedInputSource
from arcadesim.input.sources.keyboard import KeyboardMouseInputSource, default_keymap
from arcadesim.models import Vector2

from conftest import build_config


class TestInputEvent:
    """Test InputEvent validation."""

    def test_fire_needs_no_position(self):
        event = InputEvent(kind=InputKind.FIRE, timestamp=5)
        assert event.position is None

    def test_click_requires_position(self):
        with pytest.raises(ValueError):
            InputEvent(kind=InputKind.CLICK)

    def test_click_helper(self):
        event = InputEvent.click(10, 20, timestamp=3)
        assert event.kind == InputKind.CLICK
        assert event.position == Vector2(x=10, y=20)

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValueError):
            InputEvent(kind=InputKind.FIRE, timestamp=-1)

    def test_frozen(self):
        event = InputEvent(kind=InputKind.FIRE)
        with pytest.raises(ValidationError):
            event.kind = InputKind.JUMP

    def test_str(self):
        assert 'fire' in str(InputEvent(kind=InputKind.FIRE))
        assert 'click' in str(InputEvent.click(1, 2))


class TestScriptedInputSource:
    """Test timed replay."""

    def test_is_input_source(self):
        assert isinstance(ScriptedInputSource(), InputSource)

    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            InputSource()  # type: ignore

    def test_releases_by_time(self):
        source = ScriptedInputSource([
            InputEvent(kind=InputKind.JUMP, timestamp=50),
            InputEvent(kind=InputKind.FIRE, timestamp=10),
        ])
        source.update(16)
        assert [e.kind for e in source.poll_events()] == [InputKind.FIRE]
        assert source.poll_events() == []

        source.update(16)
        assert source.poll_events() == []
        source.update(20)
        assert [e.kind for e in source.poll_events()] == [InputKind.JUMP]

    def test_same_timestamp_released_together(self):
        source = ScriptedInputSource([
            InputEvent(kind=InputKind.MOVE_LEFT, timestamp=0),
            InputEvent(kind=InputKind.FIRE, timestamp=0),
        ])
        source.update(0)
        assert [e.kind for e in source.poll_events()] == [InputKind.MOVE_LEFT, InputKind.FIRE]


class TestDefaultKeymap:
    """Test key bindings per variant."""

    def test_space_fires(self):
        assert default_keymap(build_config())[pygame.K_SPACE] == InputKind.FIRE

    def test_space_jumps_under_gravity(self):
        config = build_config(player={'width': 30, 'height': 24, 'motion': 'gravity',
                                      'gravity': 0.4, 'jump_velocity': -7})
        assert default_keymap(config)[pygame.K_SPACE] == InputKind.JUMP


class TestKeyboardMouseInputSource:
    """Test pygame event processing."""

    @pytest.fixture
    def pygame_init(self):
        """Initialize pygame for testing."""
        pygame.init()
        pygame.display.set_mode((100, 100))
        pygame.event.clear()
        yield
        pygame.quit()

    def test_key_press_creates_event(self, pygame_init):
        source = KeyboardMouseInputSource()
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, {'key': pygame.K_LEFT}))
        source.update(16)

        events = source.poll_events()
        assert [e.kind for e in events] == [InputKind.MOVE_LEFT]
        assert source.poll_events() == []

    def test_click_scaled_to_field(self, pygame_init):
        source = KeyboardMouseInputSource(scale=2.0)
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, {'button': 1, 'pos': (100, 50)}))
        source.update(16)

        event, = source.poll_events()
        assert event.kind == InputKind.CLICK
        assert event.position == Vector2(x=50, y=25)

    def test_right_click_ignored(self, pygame_init):
        source = KeyboardMouseInputSource()
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, {'button': 3, 'pos': (1, 1)}))
        source.update(16)
        assert source.poll_events() == []

    def test_unhandled_events_reposted(self, pygame_init):
        source = KeyboardMouseInputSource()
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, {'key': pygame.K_ESCAPE}))
        source.update(16)

        assert source.poll_events() == []
        remaining = [e for e in pygame.event.get() if e.type == pygame.KEYDOWN]
        assert [e.key for e in remaining] == [pygame.K_ESCAPE]
