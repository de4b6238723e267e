"""
Tests for points, directions and wrapping.
"""

import pytest

from torus_snake.snake_core.geometry import Direction, Point, initial_snake, next_head


class TestDirection:
    """Test heading vectors."""

    def test_unit_vectors(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.DOWN.value == (0, 1)
        assert Direction.LEFT.value == (-1, 0)
        assert Direction.RIGHT.value == (1, 0)

    @pytest.mark.parametrize("direction,opposite", [
        (Direction.UP, Direction.DOWN),
        (Direction.DOWN, Direction.UP),
        (Direction.LEFT, Direction.RIGHT),
        (Direction.RIGHT, Direction.LEFT),
    ])
    def test_opposite(self, direction, opposite):
        assert direction.opposite is opposite
        assert direction.is_opposite(opposite)
        assert not direction.is_opposite(direction)

    def test_index_round_trip(self):
        for direction in Direction:
            assert Direction.from_index(direction.index) is direction

    def test_from_index_out_of_range(self):
        with pytest.raises(ValueError):
            Direction.from_index(4)

    def test_from_name(self):
        assert Direction.from_name("up") is Direction.UP
        assert Direction.from_name(" Right ") is Direction.RIGHT
        with pytest.raises(ValueError):
            Direction.from_name("north")

    @pytest.mark.parametrize("value,expected", [
        (Direction.LEFT, Direction.LEFT),
        ("down", Direction.DOWN),
        ((1, 0), Direction.RIGHT),
        ([0, -1], Direction.UP),
    ])
    def test_coerce_accepts(self, value, expected):
        assert Direction.coerce(value) is expected

    @pytest.mark.parametrize("value", [
        (1, 1), (2, 0), (0, 0), (0.5, 0), "north", None, 3, (1, 0, 0),
    ])
    def test_coerce_rejects(self, value):
        assert Direction.coerce(value) is None


class TestPoint:
    """Test grid points."""

    def test_value_semantics(self):
        assert Point(1, 2) == Point(1, 2)
        assert len({Point(1, 2), Point(1, 2)}) == 1

    def test_translate(self):
        assert Point(2, 2).translate(Direction.UP) == Point(2, 1)
        assert Point(2, 2).translate(Direction.RIGHT) == Point(3, 2)

    def test_wrap(self):
        assert Point(5, 2).wrap(5) == Point(0, 2)
        assert Point(-1, 2).wrap(5) == Point(4, 2)
        assert Point(2, -1).wrap(5) == Point(2, 4)
        assert Point(2, 5).wrap(5) == Point(2, 0)

    def test_of(self):
        assert Point.of((3, 4)) == Point(3, 4)
        p = Point(1, 1)
        assert Point.of(p) is p


class TestMovement:
    """Test head movement and the starting layout."""

    @pytest.mark.parametrize("head,direction,expected", [
        (Point(4, 2), Direction.RIGHT, Point(0, 2)),
        (Point(0, 2), Direction.LEFT, Point(4, 2)),
        (Point(2, 0), Direction.UP, Point(2, 4)),
        (Point(2, 4), Direction.DOWN, Point(2, 0)),
        (Point(1, 1), Direction.DOWN, Point(1, 2)),
    ])
    def test_next_head_wraps(self, head, direction, expected):
        assert next_head(head, direction, 5) == expected

    def test_initial_snake_centered(self):
        snake = initial_snake(20, 3)
        assert snake == (Point(10, 10), Point(9, 10), Point(8, 10))

    def test_initial_snake_minimum_board(self):
        assert initial_snake(4, 3) == (Point(2, 2), Point(1, 2), Point(0, 2))
