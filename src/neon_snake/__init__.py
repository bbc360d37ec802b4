"""Neon Snake: single-player snake game engine."""

from neon_snake.config import GameConfig
from neon_snake.engine import GameEngine, GameEvent, GameState, Phase
from neon_snake.grid import Grid
from neon_snake.snake import Direction, Snake

__all__ = [
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameEvent",
    "GameState",
    "Grid",
    "Phase",
    "Snake",
]
