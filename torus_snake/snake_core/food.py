"""
Food Placement
==============

Chooses a uniformly random free cell for the next piece of food.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from torus_snake.snake_core.geometry import Point
from torus_snake.snake_core.rng import RandomSource


def free_cells(size: int, snake: Iterable[Point]) -> List[Point]:
    """All cells not covered by the snake, in row-major order."""
    occupied = set(snake)
    return [
        Point(x, y)
        for y in range(size)
        for x in range(size)
        if Point(x, y) not in occupied
    ]


def place_food(
    size: int,
    snake: Iterable[Point],
    random_source: RandomSource
) -> Optional[Point]:
    """
    Pick a free cell for food.

    Candidates are enumerated row-major and filtered up front, so a single
    draw from the random source is enough; no retries.

    Args:
        size: Cells per side of the board.
        snake: Occupied cells.
        random_source: Callable returning a float in [0, 1).

    Returns:
        The chosen cell, or None if the snake covers the whole board.
    """
    candidates = free_cells(size, snake)
    if not candidates:
        return None

    index = int(random_source() * len(candidates))
    # A source returning exactly 1.0 breaks its contract; keep the pick in range.
    index = min(max(index, 0), len(candidates) - 1)
    return candidates[index]
