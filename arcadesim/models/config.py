"""
Pydantic v2 models for engine configuration.

One EngineConfig describes a whole variant: field size, player, projectiles,
spawn rules and the session-ending rules. Every constant is fixed at engine
construction; impossible placements are rejected here rather than discovered
mid-session.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .primitives import Color, FieldSize, Vector2


Edge = Literal["top", "bottom", "left", "right", "sides", "anywhere"]


def _validate_hex(value: Optional[str]) -> Optional[str]:
    if value is not None:
        Color.from_hex(value)
    return value


class PlayerConfig(BaseModel):
    """
    The player-controlled actor.

    With no explicit start position the player is centered horizontally and
    rests on the bottom edge of the field.
    """
    model_config = {"frozen": True}

    width: float = Field(gt=0.0)
    height: float = Field(gt=0.0)
    speed: float = Field(
        default=5.0,
        ge=0.0,
        description="Pixels moved per move-left/move-right input",
    )
    x: Optional[float] = Field(default=None, description="Start x (None = centered)")
    y: Optional[float] = Field(default=None, description="Start y (None = bottom edge)")
    motion: Literal["fixed", "gravity"] = "fixed"
    gravity: float = Field(default=0.0, ge=0.0, description="Added to vy every tick")
    jump_velocity: float = Field(default=0.0, le=0.0, description="vy after a jump")
    bounded: bool = Field(
        default=False,
        description="Leaving the field vertically ends the session",
    )
    color: str = "#ff0"

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        """Color must be #rgb or #rrggbb."""
        return _validate_hex(v)


class ProjectileConfig(BaseModel):
    """Projectiles fired straight up from the player's center."""
    model_config = {"frozen": True}

    width: float = Field(gt=0.0)
    height: float = Field(gt=0.0)
    speed: float = Field(gt=0.0, description="Pixels per tick, upward")
    color: str = "#fff"

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        """Color must be #rgb or #rrggbb."""
        return _validate_hex(v)


class SpawnRuleConfig(BaseModel):
    """
    One timed spawn rule.

    The rule's kind names the entities it produces; kinds are unique within
    a configuration. Rules sharing a timer name share one spawn timestamp.
    """
    model_config = {"frozen": True}

    kind: str = Field(min_length=1)
    category: Literal["obstacle", "enemy"]
    width: float = Field(gt=0.0)
    height: float = Field(gt=0.0)
    velocity: Vector2 = Field(
        default=Vector2(x=0.0, y=0.0),
        description="Pixels per tick; the edge decides the inward sign",
    )
    interval_ms: float = Field(gt=0.0)
    edge: Edge = "top"
    timer: Optional[str] = Field(default=None, description="Shared timer name (default: kind)")
    motion: Literal["linear", "wrap"] = "linear"
    gap: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Vertical gap of an obstacle pair spanning the field height",
    )
    gap_margin: float = Field(default=40.0, gt=0.0)
    max_active: Optional[int] = Field(default=None, ge=1)
    shootable: bool = True
    points: int = Field(default=1, ge=0, description="Score for a projectile hit or click")
    pass_points: int = Field(default=0, ge=0, description="Score when it passes the player")
    goal: bool = Field(
        default=False,
        description="Bottom edge reaching the field bottom ends the session",
    )
    color: Optional[str] = None

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        """Color must be #rgb or #rrggbb."""
        return _validate_hex(v)

    @property
    def timer_key(self) -> str:
        """Timer this rule stamps."""
        return self.timer or self.kind

    @model_validator(mode='after')
    def validate_gap_edge(self) -> 'SpawnRuleConfig':
        """Obstacle pairs enter from the left or right edge."""
        if self.gap is not None and self.edge not in ("left", "right"):
            raise ValueError(f"Spawn rule '{self.kind}': gap requires edge 'left' or 'right'")
        return self


class RulesConfig(BaseModel):
    """Session-ending rules that are not tied to a single spawn kind."""
    model_config = {"frozen": True}

    player_collision_ends: bool = Field(
        default=False,
        description="Any obstacle/enemy touching the player ends the session",
    )


class EngineConfig(BaseModel):
    """
    Complete configuration for one arcade variant.

    Example YAML:
        name: Vertical Shooter
        field: {width: 400, height: 600}
        player: {width: 40, height: 20, speed: 5}
        projectile: {width: 4, height: 10, speed: 7}
        spawns:
          - kind: block
            category: obstacle
            width: 40
            height: 20
            velocity: {x: 0, y: 2}
            interval_ms: 1500
            goal: true
    """
    model_config = {"frozen": True}

    name: str
    description: str = ""
    field: FieldSize
    background: str = "#bfdbfe"
    player: PlayerConfig
    projectile: Optional[ProjectileConfig] = None
    spawns: List[SpawnRuleConfig] = Field(default_factory=list)
    rules: RulesConfig = Field(default_factory=RulesConfig)
    history_frames: int = Field(
        default=120,
        ge=0,
        description="Start-of-tick records kept for restore (0 = disabled)",
    )

    @field_validator("background")
    @classmethod
    def validate_background(cls, v: str) -> str:
        """Background must be #rgb or #rrggbb."""
        return _validate_hex(v)

    @model_validator(mode='after')
    def validate_layout(self) -> 'EngineConfig':
        """Reject configurations with no valid placement range."""
        width, height = self.field.width, self.field.height

        player = self.player
        if player.width > width or player.height > height:
            raise ValueError("Player does not fit inside the field")
        if player.x is not None and not 0 <= player.x <= width - player.width:
            raise ValueError(f"Player start x={player.x} is outside the field")
        if player.y is not None and not 0 <= player.y <= height - player.height:
            raise ValueError(f"Player start y={player.y} is outside the field")
        if player.motion == "gravity" and (player.gravity <= 0 or player.jump_velocity >= 0):
            raise ValueError("Gravity motion needs gravity > 0 and jump_velocity < 0")

        kinds = set()
        for rule in self.spawns:
            if rule.kind in kinds:
                raise ValueError(f"Duplicate spawn kind '{rule.kind}'")
            kinds.add(rule.kind)

            if rule.width > width:
                raise ValueError(f"Spawn rule '{rule.kind}' is wider than the field")
            if rule.gap is not None:
                if rule.gap + 2 * rule.gap_margin > height:
                    raise ValueError(
                        f"Spawn rule '{rule.kind}': gap {rule.gap} with margin "
                        f"{rule.gap_margin} does not fit field height {height}"
                    )
            elif rule.height > height:
                raise ValueError(f"Spawn rule '{rule.kind}' is taller than the field")

        return self

    def spawn_rule(self, kind: str) -> SpawnRuleConfig:
        """Look up a spawn rule by kind."""
        for rule in self.spawns:
            if rule.kind == kind:
                return rule
        raise KeyError(kind)
