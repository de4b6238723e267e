"""
State Snapshot
==============

Immutable view of a game, plus packing into numpy arrays for agents and
into plain dicts for replays.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from torus_snake.snake_core.geometry import Direction, Point
from torus_snake.snake_core.rules import Status

# Cell codes used by to_grid()
CELL_EMPTY = 0
CELL_BODY = 1
CELL_HEAD = 2
CELL_FOOD = 3


@dataclass(frozen=True)
class GameSnapshot:
    """
    Value copy of the engine state at one moment.

    Nothing in a snapshot aliases engine internals; the snake is a tuple of
    frozen points.
    """
    size: int
    snake: Tuple[Point, ...]          # head first
    direction: Direction
    pending_direction: Direction
    food: Optional[Point]
    score: int
    status: Status
    ticks: int = 0

    @property
    def head(self) -> Point:
        return self.snake[0]

    @property
    def tail(self) -> Point:
        return self.snake[-1]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    def occupies(self, point: Point) -> bool:
        return point in self.snake

    def to_grid(self) -> np.ndarray:
        """Board as a (size, size) int8 array indexed [y, x]."""
        grid = np.full((self.size, self.size), CELL_EMPTY, dtype=np.int8)
        for segment in self.snake[1:]:
            grid[segment.y, segment.x] = CELL_BODY
        grid[self.head.y, self.head.x] = CELL_HEAD
        if self.food is not None:
            grid[self.food.y, self.food.x] = CELL_FOOD
        return grid

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        food = self.food.as_tuple() if self.food is not None else (-1, -1)
        return {
            "grid": self.to_grid(),
            "head": np.array(self.head.as_tuple(), dtype=np.int32),
            "food": np.array(food, dtype=np.int32),
            "direction": np.array(self.direction.index, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "length": np.array(self.length, dtype=np.int32),
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "size": self.size,
            "snake": [list(p.as_tuple()) for p in self.snake],
            "direction": self.direction.name,
            "pending_direction": self.pending_direction.name,
            "food": list(self.food.as_tuple()) if self.food is not None else None,
            "score": self.score,
            "status": self.status.value,
            "ticks": self.ticks,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSnapshot":
        """
        Rebuild a snapshot from to_dict() output.

        Raises:
            ValueError: If a direction or status name is unknown.
        """
        food = data.get("food")
        return cls(
            size=int(data["size"]),
            snake=tuple(Point.of(p) for p in data["snake"]),
            direction=Direction.from_name(data["direction"]),
            pending_direction=Direction.from_name(
                data.get("pending_direction", data["direction"])
            ),
            food=Point.of(food) if food is not None else None,
            score=int(data.get("score", 0)),
            status=Status(data.get("status", Status.IDLE.value)),
            ticks=int(data.get("ticks", 0)),
        )

    def render_text(self) -> str:
        """
        Plain-text board: '.' empty, 'o' body, 'H' head, '*' food.

        Row 0 is printed first, matching screen coordinates.
        """
        symbols = {CELL_EMPTY: ".", CELL_BODY: "o", CELL_HEAD: "H", CELL_FOOD: "*"}
        grid = self.to_grid()
        return "\n".join(
            " ".join(symbols[int(cell)] for cell in row) for row in grid
        )

    def __repr__(self) -> str:
        return (
            f"<GameSnapshot status={self.status.value}, score={self.score}, "
            f"length={self.length}, head={self.head}, food={self.food}>"
        )


def build_snapshot(
    size: int,
    snake,
    direction: Direction,
    pending_direction: Direction,
    food: Optional[Point],
    score: int,
    status: Status,
    ticks: int = 0
) -> GameSnapshot:
    """Build a snapshot, copying the snake into a tuple."""
    return GameSnapshot(
        size=size,
        snake=tuple(snake),
        direction=direction,
        pending_direction=pending_direction,
        food=food,
        score=score,
        status=status,
        ticks=ticks
    )
