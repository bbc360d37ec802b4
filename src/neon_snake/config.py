"""Tunable game constants."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board size, pacing and scoring for a game.

    Supports JSON serialization so a tuned setup can be reused.
    """

    # Board
    grid_size: int = 20

    # Pacing (tick interval in milliseconds)
    initial_speed_ms: int = 150
    speed_increment_ms: int = 5
    min_speed_ms: int = 50

    # Scoring
    food_reward: int = 10

    # Food placement
    max_food_attempts: int = 1000

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if self.min_speed_ms < 1:
            raise ValueError("min_speed_ms must be at least 1.")
        if self.initial_speed_ms < self.min_speed_ms:
            raise ValueError("initial_speed_ms must be >= min_speed_ms.")
        if self.speed_increment_ms < 0:
            raise ValueError("speed_increment_ms must be >= 0.")
        if self.food_reward < 1:
            raise ValueError("food_reward must be at least 1.")
        if self.max_food_attempts < 1:
            raise ValueError("max_food_attempts must be at least 1.")

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**raw)
