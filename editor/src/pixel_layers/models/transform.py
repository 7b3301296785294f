"""Geometry data structures for display-space positions and rectangles."""
from dataclasses import dataclass


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y pair across spaces:
    - Display positions (Y-down, host units)
    - Viewport sizes (width, height)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


@dataclass
class Rect:
    """Axis-aligned rectangle in display space (origin at top-left, Y-down)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    def contains(self, pos: Vec2) -> bool:
        """Origin edges inclusive, far edges exclusive.

        A rectangle with non-positive width or height contains nothing.
        """
        return self.x <= pos.x < self.x_max and self.y <= pos.y < self.y_max
