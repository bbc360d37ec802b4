"""Tests for the Snake module."""

import pytest

from neon_snake.snake import Direction, Snake


class TestDirection:
    def test_deltas(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.DOWN.value == (0, 1)
        assert Direction.LEFT.value == (-1, 0)
        assert Direction.RIGHT.value == (1, 0)

    def test_opposites(self):
        assert Direction.UP.opposite == Direction.DOWN
        assert Direction.DOWN.opposite == Direction.UP
        assert Direction.LEFT.opposite == Direction.RIGHT
        assert Direction.RIGHT.opposite == Direction.LEFT


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake(5, 5)
        assert snake.head == (5, 5)
        assert len(snake) == 1
        assert snake.tail == (5, 5)

    def test_body_extends_opposite_to_direction(self):
        snake = Snake(5, 5, Direction.RIGHT, length=3)
        assert list(snake.body) == [(5, 5), (4, 5), (3, 5)]

    def test_body_extends_up(self):
        snake = Snake(5, 5, Direction.UP, length=3)
        assert list(snake.body) == [(5, 5), (5, 6), (5, 7)]

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake(0, 0, length=0)


class TestSnakeFromBody:
    def test_keeps_order(self):
        snake = Snake.from_body([(5, 5), (6, 5), (6, 6)])
        assert snake.head == (5, 5)
        assert snake.tail == (6, 6)
        assert list(snake) == [(5, 5), (6, 5), (6, 6)]

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake.from_body([])

    def test_overlap_rejected(self):
        with pytest.raises(ValueError, match="distinct"):
            Snake.from_body([(1, 1), (1, 2), (1, 1)])


class TestSnakeMovement:
    def test_next_head(self):
        snake = Snake(5, 5)
        assert snake.next_head(Direction.RIGHT) == (6, 5)
        assert snake.next_head(Direction.UP) == (5, 4)
        assert snake.next_head(Direction.DOWN) == (5, 6)
        assert snake.next_head(Direction.LEFT) == (4, 5)

    def test_next_head_does_not_move(self):
        snake = Snake(5, 5)
        snake.next_head(Direction.UP)
        assert snake.head == (5, 5)

    def test_advance_without_growth(self):
        snake = Snake(5, 5, Direction.RIGHT, length=3)
        vacated = snake.advance(Direction.RIGHT)
        assert snake.head == (6, 5)
        assert len(snake) == 3
        assert vacated == (3, 5)

    def test_advance_with_growth(self):
        snake = Snake(5, 5, Direction.RIGHT, length=3)
        vacated = snake.advance(Direction.DOWN, grow=True)
        assert snake.head == (5, 6)
        assert len(snake) == 4
        assert vacated is None


class TestSnakeCollision:
    def test_occupies(self):
        snake = Snake(5, 5, Direction.RIGHT, length=3)
        assert snake.occupies(5, 5)
        assert snake.occupies(4, 5)
        assert snake.occupies(3, 5)
        assert not snake.occupies(0, 0)


class TestSnakeSerialization:
    def test_to_list(self):
        snake = Snake(5, 5, Direction.RIGHT, length=2)
        assert snake.to_list() == [[5, 5], [4, 5]]
