"""Square playfield geometry for the snake game."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from neon_snake.snake import Position


class Grid:
    """Square playing field of ``size`` x ``size`` cells.

    Coordinates are ``(x, y)`` with the origin in the top-left corner.
    Occupancy is not stored here; callers pass the occupied cells in and
    a NumPy mask is built on demand.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    @property
    def center(self) -> Position:
        """Return the starting cell for a fresh snake."""
        return self.size // 2, self.size // 2

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def empty_cells(self, occupied: Iterable[Position]) -> list[Position]:
        """Return every cell not listed in *occupied*, in row-major order."""
        free = np.ones((self.size, self.size), dtype=bool)
        for x, y in occupied:
            if self.in_bounds(x, y):
                free[y, x] = False
        ys, xs = np.nonzero(free)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))
