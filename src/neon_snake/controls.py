"""Translate raw keys, swipes and buttons into engine intents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from neon_snake.engine import Phase
from neon_snake.snake import Direction

if TYPE_CHECKING:
    from neon_snake.engine import GameEngine

logger = logging.getLogger(__name__)

SWIPE_THRESHOLD_PX = 30.0

PAUSE_KEY = " "
RESTART_KEY = "Enter"

KEY_BINDINGS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
}

_BUTTON_DIRECTIONS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def parse_direction(name: str) -> Direction | None:
    """Map a case-insensitive direction name to a :class:`Direction`."""
    return _BUTTON_DIRECTIONS.get(name.lower())


def swipe_direction(
    dx: float, dy: float, threshold: float = SWIPE_THRESHOLD_PX,
) -> Direction | None:
    """Classify a touch displacement by its dominant axis.

    Screen ``y`` grows downwards. Movements no longer than *threshold*
    along the dominant axis are ignored.
    """
    if abs(dx) > abs(dy):
        if abs(dx) <= threshold:
            return None
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    if abs(dy) <= threshold:
        return None
    return Direction.DOWN if dy > 0 else Direction.UP


class InputAdapter:
    """Routes every input source through the same engine calls.

    All methods return whether the engine state changed.
    """

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine

    def handle_key(self, key: str) -> bool:
        phase = self.engine.phase
        if key == RESTART_KEY:
            if phase != Phase.GAME_OVER:
                return False
            self.engine.reset()
            return True
        if key == PAUSE_KEY:
            return self._pause_or_start()

        direction = KEY_BINDINGS.get(key)
        if direction is None:
            return False
        return self.engine.set_direction(direction)

    def handle_swipe(self, dx: float, dy: float) -> bool:
        direction = swipe_direction(dx, dy)
        if direction is None:
            return False
        return self.engine.set_direction(direction)

    def handle_button(self, name: str) -> bool:
        """Handle an on-screen control: a direction, start, pause or restart."""
        name = name.lower()
        if name in ("restart", "reset"):
            self.engine.reset()
            return True
        if name == "start":
            return self.engine.start()
        if name == "pause":
            return self._pause_or_start()

        direction = parse_direction(name)
        if direction is None:
            logger.debug("Ignoring unknown button %r.", name)
            return False
        return self.engine.set_direction(direction)

    def _pause_or_start(self) -> bool:
        # The pause control doubles as "start" before the first move.
        if self.engine.phase == Phase.IDLE:
            return self.engine.start()
        return self.engine.toggle_pause()
