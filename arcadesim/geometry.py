"""Axis-aligned bounding box helpers.

Pure functions over anything exposing x, y, width and height (entities,
Rect models, plain tuples wrapped by Box).
"""

from typing import NamedTuple, Protocol


class HasBounds(Protocol):
    x: float
    y: float
    width: float
    height: float


class Box(NamedTuple):
    """Lightweight rectangle for ad-hoc checks."""
    x: float
    y: float
    width: float
    height: float


def intersects(a: HasBounds, b: HasBounds) -> bool:
    """Check if two rectangles overlap.

    Uses strict inequalities, so rectangles sharing only an edge do not
    intersect. Symmetric in its arguments.

    Args:
        a: First rectangle
        b: Second rectangle

    Returns:
        True if the interiors overlap
    """
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def contains_point(box: HasBounds, px: float, py: float) -> bool:
    """Check if a point lies inside a rectangle (edges inclusive)."""
    return (box.x <= px <= box.x + box.width and
            box.y <= py <= box.y + box.height)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds."""
    return lo if value < lo else hi if value > hi else value
