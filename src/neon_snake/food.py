"""Food spawning logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from neon_snake.grid import Grid
    from neon_snake.snake import Position

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food on a free cell by rejection sampling.

    Uses a NumPy RNG for reproducible placement. Any object exposing a
    compatible ``integers(low, high, size=None)`` method can stand in for
    the generator.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = 1000,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def spawn(self, occupied: Iterable[Position]) -> Position | None:
        """Return a random cell not in *occupied*.

        Returns ``None`` only when every cell on the grid is occupied.
        """
        taken = set(occupied)
        if len(taken) >= self.grid.cell_count:
            logger.info("No free cells left for food.")
            return None

        size = self.grid.size
        for _ in range(self.max_attempts):
            x = int(self.rng.integers(0, size))
            y = int(self.rng.integers(0, size))
            if (x, y) not in taken:
                return x, y

        # Sampling keeps missing on a crowded board; pick among the free cells.
        empty = self.grid.empty_cells(taken)
        logger.debug(
            "Rejection sampling gave up after %d attempts; %d free cells.",
            self.max_attempts, len(empty),
        )
        return empty[int(self.rng.integers(0, len(empty)))]
