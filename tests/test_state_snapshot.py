"""
Tests for GameSnapshot packing and conversion.
"""

import numpy as np
import pytest

from torus_snake.snake_core.geometry import Direction, Point
from torus_snake.snake_core.rules import Status
from torus_snake.snake_core.state_snapshot import (
    CELL_BODY,
    CELL_EMPTY,
    CELL_FOOD,
    CELL_HEAD,
    GameSnapshot,
    build_snapshot,
)


@pytest.fixture
def snapshot():
    return GameSnapshot(
        size=4,
        snake=(Point(2, 1), Point(1, 1), Point(0, 1)),
        direction=Direction.RIGHT,
        pending_direction=Direction.UP,
        food=Point(3, 3),
        score=2,
        status=Status.PLAYING,
        ticks=11,
    )


class TestProperties:
    """Test derived attributes."""

    def test_head_tail_length(self, snapshot):
        assert snapshot.head == Point(2, 1)
        assert snapshot.tail == Point(0, 1)
        assert snapshot.length == 3

    def test_occupies(self, snapshot):
        assert snapshot.occupies(Point(1, 1))
        assert not snapshot.occupies(Point(3, 3))

    def test_is_over(self, snapshot):
        assert not snapshot.is_over
        won = build_snapshot(4, snapshot.snake, Direction.RIGHT, Direction.RIGHT,
                             None, 13, Status.WON)
        assert won.is_over

    def test_build_snapshot_copies_sequence(self):
        body = [Point(1, 1), Point(0, 1)]
        snap = build_snapshot(4, body, Direction.RIGHT, Direction.RIGHT,
                              Point(3, 3), 0, Status.IDLE)
        body.append(Point(0, 0))
        assert snap.snake == (Point(1, 1), Point(0, 1))


class TestGrid:
    """Test the numpy board encoding."""

    def test_cell_codes(self, snapshot):
        grid = snapshot.to_grid()
        assert grid.shape == (4, 4)
        assert grid.dtype == np.int8
        # Indexed [y, x]
        assert grid[1, 2] == CELL_HEAD
        assert grid[1, 1] == CELL_BODY
        assert grid[1, 0] == CELL_BODY
        assert grid[3, 3] == CELL_FOOD
        assert grid[0, 0] == CELL_EMPTY
        assert int((grid == CELL_EMPTY).sum()) == 12

    def test_no_food(self, snapshot):
        snap = build_snapshot(4, snapshot.snake, Direction.RIGHT, Direction.RIGHT,
                              None, 0, Status.WON)
        assert not (snap.to_grid() == CELL_FOOD).any()

    def test_obs_dict(self, snapshot):
        obs = snapshot.to_obs_dict()
        assert set(obs) == {"grid", "head", "food", "direction", "score", "length"}
        assert obs["head"].dtype == np.int32
        assert obs["head"].tolist() == [2, 1]
        assert obs["food"].tolist() == [3, 3]
        assert int(obs["direction"]) == Direction.RIGHT.index
        assert obs["score"].dtype == np.int64
        assert int(obs["score"]) == 2
        assert int(obs["length"]) == 3

    def test_obs_dict_without_food(self, snapshot):
        snap = build_snapshot(4, snapshot.snake, Direction.RIGHT, Direction.RIGHT,
                              None, 0, Status.WON)
        assert snap.to_obs_dict()["food"].tolist() == [-1, -1]


class TestSerialization:
    """Test dict conversion and text rendering."""

    def test_to_dict(self, snapshot):
        data = snapshot.to_dict()
        assert data["snake"] == [[2, 1], [1, 1], [0, 1]]
        assert data["direction"] == "RIGHT"
        assert data["pending_direction"] == "UP"
        assert data["food"] == [3, 3]
        assert data["status"] == "playing"
        assert data["ticks"] == 11

    def test_from_dict_restores(self, snapshot):
        assert GameSnapshot.from_dict(snapshot.to_dict()) == snapshot

    def test_from_dict_defaults(self):
        snap = GameSnapshot.from_dict({
            "size": 5,
            "snake": [[1, 1]],
            "direction": "left",
            "food": None,
        })
        assert snap.pending_direction is Direction.LEFT
        assert snap.status is Status.IDLE
        assert snap.score == 0
        assert snap.food is None

    def test_from_dict_bad_direction(self, snapshot):
        data = snapshot.to_dict()
        data["direction"] = "north"
        with pytest.raises(ValueError):
            GameSnapshot.from_dict(data)

    def test_render_text(self, snapshot):
        assert snapshot.render_text().splitlines() == [
            ". . . .",
            "o o H .",
            ". . . .",
            ". . . *",
        ]
