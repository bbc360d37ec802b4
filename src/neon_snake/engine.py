"""Tick-driven game engine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from neon_snake.config import GameConfig
from neon_snake.food import FoodSpawner
from neon_snake.grid import Grid
from neon_snake.persistence import BestScoreStore
from neon_snake.snake import Direction, Position, Snake

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    """Lifecycle phases of a game."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameEvent(str, enum.Enum):
    """Notifications emitted to listeners (audio, network clients)."""

    START = "start"
    MOVE = "move"
    EAT = "eat"
    DIE = "die"
    WIN = "win"


Listener = Callable[[GameEvent], None]


@dataclass
class GameState:
    """Everything the engine mutates between ticks."""

    snake: Snake
    food: Position | None
    direction: Direction = Direction.RIGHT
    pending_direction: Direction = Direction.RIGHT
    score: int = 0
    best_score: int = 0
    speed_interval_ms: int = 150
    phase: Phase = Phase.IDLE
    won: bool = False
    tick: int = 0


class GameEngine:
    """Single-player, tick-based snake engine.

    The engine never owns a timer. A scheduler calls :meth:`tick` every
    :attr:`speed_interval_ms` milliseconds and re-reads that value after
    each tick, since eating food shortens it.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        store: BestScoreStore | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(self.config.grid_size)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(
            self.grid, rng=self.rng, max_attempts=self.config.max_food_attempts,
        )
        self.store = store
        self._listeners: list[Listener] = []

        best_score = store.load() if store is not None else 0
        self.state = self._fresh_state(Phase.IDLE, best_score=max(0, best_score))

    # --- read-only views ---

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def best_score(self) -> int:
        return self.state.best_score

    @property
    def speed_interval_ms(self) -> int:
        """Delay the scheduler should wait before the next tick."""
        return self.state.speed_interval_ms

    @property
    def snake(self) -> Snake:
        return self.state.snake

    # --- listeners ---

    def subscribe(self, listener: Listener) -> None:
        """Register a callable that receives every :class:`GameEvent`."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- player intents ---

    def set_direction(self, requested: Direction) -> bool:
        """Queue *requested* for the next tick.

        Reversals are judged against the direction the last tick applied,
        not the pending one, so two quick turns cannot fold the snake back
        onto its neck. Returns whether the request was accepted.
        """
        state = self.state
        if state.phase != Phase.RUNNING:
            return False
        if requested == state.direction.opposite:
            logger.debug("Rejected reversal %s -> %s.", state.direction.name, requested.name)
            return False
        state.pending_direction = requested
        return True

    def toggle_pause(self) -> bool:
        """Flip between RUNNING and PAUSED. Returns whether anything changed."""
        if self.state.phase == Phase.RUNNING:
            self.state.phase = Phase.PAUSED
        elif self.state.phase == Phase.PAUSED:
            self.state.phase = Phase.RUNNING
        else:
            return False
        return True

    def start(self) -> bool:
        """Leave IDLE (or resume from PAUSED). Returns whether anything changed."""
        if self.state.phase == Phase.IDLE:
            self.state.phase = Phase.RUNNING
            self._emit(GameEvent.START)
            return True
        if self.state.phase == Phase.PAUSED:
            self.state.phase = Phase.RUNNING
            return True
        return False

    def reset(self) -> None:
        """Start a new round immediately, keeping the best score."""
        self.state = self._fresh_state(Phase.RUNNING, best_score=self.state.best_score)
        self._emit(GameEvent.START)

    # --- simulation ---

    def tick(self) -> GameEvent | None:
        """Advance the game by one cell.

        Returns the event describing what happened, or ``None`` when the
        game is not running.
        """
        state = self.state
        if state.phase != Phase.RUNNING:
            return None

        state.direction = state.pending_direction
        state.tick += 1
        new_head = state.snake.next_head(state.direction)

        # The tail is still in place at this point, so stepping onto it dies.
        if not self.grid.in_bounds(*new_head) or state.snake.occupies(*new_head):
            return self._game_over(new_head)

        ate = new_head == state.food
        state.snake.advance(state.direction, grow=ate)
        if not ate:
            self._emit(GameEvent.MOVE)
            return GameEvent.MOVE

        state.score += self.config.food_reward
        if state.score > state.best_score:
            state.best_score = state.score
            if self.store is not None:
                self.store.save(state.best_score)
        state.speed_interval_ms = max(
            self.config.min_speed_ms,
            state.speed_interval_ms - self.config.speed_increment_ms,
        )
        state.food = self.generate_food(state.snake)
        self._emit(GameEvent.EAT)

        if state.food is None:
            state.won = True
            state.phase = Phase.GAME_OVER
            logger.info("Board filled at tick %d with score %d.", state.tick, state.score)
            self._emit(GameEvent.WIN)
            return GameEvent.WIN
        return GameEvent.EAT

    def generate_food(self, snake: Snake) -> Position | None:
        """Pick a random cell not covered by *snake*."""
        return self.food_spawner.spawn(snake)

    def snapshot(self) -> dict:
        """Return a JSON-serializable view of the state for renderers."""
        state = self.state
        return {
            "tick": state.tick,
            "phase": state.phase.value,
            "score": state.score,
            "best_score": state.best_score,
            "speed_interval_ms": state.speed_interval_ms,
            "direction": state.direction.name,
            "pending_direction": state.pending_direction.name,
            "snake": state.snake.to_list(),
            "food": list(state.food) if state.food is not None else None,
            "won": state.won,
            "grid_size": self.grid.size,
        }

    def _fresh_state(self, phase: Phase, best_score: int) -> GameState:
        x, y = self.grid.center
        snake = Snake(x, y, Direction.RIGHT, length=1)
        return GameState(
            snake=snake,
            food=self.generate_food(snake),
            best_score=best_score,
            speed_interval_ms=self.config.initial_speed_ms,
            phase=phase,
        )

    def _game_over(self, blocked: Position) -> GameEvent:
        self.state.phase = Phase.GAME_OVER
        logger.info(
            "Snake died at tick %d moving %s into %s with score %d.",
            self.state.tick, self.state.direction.name, blocked, self.state.score,
        )
        self._emit(GameEvent.DIE)
        return GameEvent.DIE

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
