"""
Shared primitive data types for the simulation.

Basic geometric and color types used by the engine configuration, the
render snapshot and input events. All coordinates are in field space:
origin at the top-left corner, y increasing downward.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Vector2(BaseModel):
    """Immutable 2D point/vector for positions, velocities and click points.

    Examples:
        >>> pos = Vector2(x=180.0, y=580.0)
        >>> vel = Vector2(x=0.0, y=-7.0)  # Moving up
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)


class FieldSize(BaseModel):
    """Play field dimensions in pixels."""
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)


class Color(BaseModel):
    """Immutable RGB color with validation.

    All components must be in the range [0, 255] inclusive.
    """
    r: int
    g: int
    b: int

    @field_validator('r', 'g', 'b')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @property
    def as_tuple(self) -> Tuple[int, int, int]:
        """RGB tuple for pygame."""
        return (self.r, self.g, self.b)

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse '#rgb' or '#rrggbb' notation."""
        digits = value.lstrip('#')
        if len(digits) == 3:
            digits = ''.join(c * 2 for c in digits)
        if len(digits) != 6:
            raise ValueError(f'Invalid hex color: {value!r}')
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    model_config = ConfigDict(frozen=True)


class Rect(BaseModel):
    """Immutable axis-aligned rectangle handed to the renderer.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width (must be positive)
        height: Height (must be positive)
    """
    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def validate_positive_dimensions(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f'Rect dimensions must be positive, got {v}')
        return v

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """(x, y, width, height), as pygame.draw.rect accepts."""
        return (self.x, self.y, self.width, self.height)

    model_config = ConfigDict(frozen=True)
