"""
Input Event - Represents a single player action.

Uses Pydantic for validation and immutability; malformed events are rejected
here, never inside a tick.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from arcadesim.models import Vector2


class InputKind(Enum):
    """Actions the engine understands."""
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    FIRE = "fire"
    JUMP = "jump"
    CLICK = "click"


class InputEvent(BaseModel):
    """Immutable input event from any source.

    Attributes:
        kind: The action
        position: Field-space position (required for clicks, ignored otherwise)
        timestamp: Host time in milliseconds
    """
    kind: InputKind
    position: Optional[Vector2] = None
    timestamp: float = 0.0

    model_config = ConfigDict(frozen=True)

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: float) -> float:
        """Validate timestamp is non-negative."""
        if v < 0:
            raise ValueError(f'Timestamp must be non-negative, got {v}')
        return v

    @model_validator(mode='after')
    def validate_position(self) -> 'InputEvent':
        """Clicks need a position."""
        if self.kind == InputKind.CLICK and self.position is None:
            raise ValueError('Click events require a position')
        return self

    @classmethod
    def click(cls, x: float, y: float, timestamp: float = 0.0) -> 'InputEvent':
        return cls(kind=InputKind.CLICK, position=Vector2(x=x, y=y), timestamp=timestamp)

    def __str__(self) -> str:
        """String representation for debugging."""
        if self.position is None:
            return f"InputEvent({self.kind.value}, t={self.timestamp:.0f})"
        return (f"InputEvent({self.kind.value}, pos=({self.position.x:.1f}, "
                f"{self.position.y:.1f}), t={self.timestamp:.0f})")
