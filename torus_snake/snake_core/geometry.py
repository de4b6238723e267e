"""
Grid Geometry
=============

Points, the four headings, and toroidal wrapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Point:
    """A cell on the grid. Value type: equal coordinates mean equal points."""
    x: int
    y: int

    def translate(self, direction: "Direction") -> "Point":
        """Neighbouring point one step along a direction (unwrapped)."""
        dx, dy = direction.value
        return Point(self.x + dx, self.y + dy)

    def wrap(self, size: int) -> "Point":
        """Fold the point back onto a size x size torus."""
        return Point(self.x % size, self.y % size)

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @classmethod
    def of(cls, value: Any) -> "Point":
        """Build a point from a Point or an (x, y) pair."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(int(x), int(y))

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"


class Direction(Enum):
    """
    Unit heading vectors. Screen coordinates: y grows downwards.
    """
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))

    def is_opposite(self, other: "Direction") -> bool:
        return self.opposite is other

    @property
    def index(self) -> int:
        """Stable integer id (UP=0, DOWN=1, LEFT=2, RIGHT=3)."""
        return _ORDER.index(self)

    @classmethod
    def from_index(cls, index: int) -> "Direction":
        if not 0 <= index < len(_ORDER):
            raise ValueError(f"Invalid direction index: {index}")
        return _ORDER[index]

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """
        Look up a direction by name, case-insensitively.

        Raises:
            ValueError: If the name is not one of up/down/left/right.
        """
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction name: {name!r}") from None

    @classmethod
    def coerce(cls, value: Any) -> Optional["Direction"]:
        """
        Convert a Direction, a name, or a (dx, dy) pair to a Direction.

        Returns None for anything that is not one of the four unit vectors.
        """
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return cls.from_name(value)
            except ValueError:
                return None
        try:
            dx, dy = value
            return cls((dx, dy))
        except (TypeError, ValueError):
            return None


_ORDER: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


def next_head(head: Point, direction: Direction, size: int) -> Point:
    """Cell the head enters when moving one step on a size x size torus."""
    return head.translate(direction).wrap(size)


def initial_snake(size: int, length: int) -> Tuple[Point, ...]:
    """Horizontal snake centered on the board, head on the right."""
    center = size // 2
    return tuple(Point(center - i, center) for i in range(length))
