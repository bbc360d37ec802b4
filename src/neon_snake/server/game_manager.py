"""In-memory session registry, input dispatch, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from neon_snake.config import GameConfig
from neon_snake.controls import InputAdapter
from neon_snake.engine import GameEngine, GameEvent, Phase
from neon_snake.persistence import BestScoreStore, MemoryBestScoreStore
from neon_snake.server.models import GameSummary

logger = logging.getLogger(__name__)

# Simple rate limit: max games created per IP within the window.
_RATE_LIMIT_WINDOW = 60.0  # seconds
_RATE_LIMIT_MAX = 10
_RATE_COMPACT_INTERVAL = 60.0  # seconds between stale-key sweeps
_MAX_SESSIONS = 100

Command = Callable[[InputAdapter], bool]


class RateLimitError(ValueError):
    """Raised when a client creates games too quickly."""


@dataclass
class GameSession:
    """One player's engine plus the sockets watching it."""

    game_id: str
    engine: GameEngine
    controls: InputAdapter
    connections: list[WebSocket] = field(default_factory=list)
    events: list[GameEvent] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    last_active: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def ticking(self) -> bool:
        return self._task is not None and not self._task.done()

    def summary(self) -> GameSummary:
        return GameSummary(
            game_id=self.game_id,
            phase=self.engine.phase,
            score=self.engine.score,
            best_score=self.engine.best_score,
            speed_interval_ms=self.engine.speed_interval_ms,
            viewers=len(self.connections),
        )

    def drain(self) -> dict:
        """Snapshot the engine and hand over the events queued since last time."""
        payload = self.engine.snapshot()
        payload["events"] = [e.value for e in self.events]
        self.events.clear()
        return payload


class GameManager:
    """Central registry managing all game sessions.

    Every session shares one best-score store, so the best score is
    global to the server process (or to the file backing the store).
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: BestScoreStore | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1.")
        self.config = config if config is not None else GameConfig()
        self.store = store if store is not None else MemoryBestScoreStore()
        self._games: dict[str, GameSession] = {}
        self._rate_limits: dict[str, list[float]] = {}
        self._last_rate_compact: float = 0.0
        self._max_sessions = max_sessions

    def _check_rate_limit(self, client_ip: str) -> bool:
        """Return True if the client is within rate limits."""
        now = time.monotonic()
        timestamps = self._rate_limits.get(client_ip, [])
        timestamps = [t for t in timestamps if now - t < _RATE_LIMIT_WINDOW]
        if timestamps:
            self._rate_limits[client_ip] = timestamps
        else:
            self._rate_limits.pop(client_ip, None)
        self._compact_rate_limits(now)
        return len(timestamps) < _RATE_LIMIT_MAX

    def _compact_rate_limits(self, now: float) -> None:
        """Remove rate-limit entries whose timestamps have all expired."""
        if now - self._last_rate_compact < _RATE_COMPACT_INTERVAL:
            return
        self._last_rate_compact = now
        stale_ips = [
            ip for ip, ts in self._rate_limits.items()
            if all(now - t >= _RATE_LIMIT_WINDOW for t in ts)
        ]
        for ip in stale_ips:
            del self._rate_limits[ip]
        if stale_ips:
            logger.info(
                "Compacted %d stale rate-limit entries.", len(stale_ips),
            )

    def _record_creation(self, client_ip: str) -> None:
        self._rate_limits.setdefault(client_ip, []).append(time.monotonic())

    async def create_game(
        self, seed: int | None = None, client_ip: str = "unknown",
    ) -> GameSession:
        """Create a new idle session and return it."""
        if not self._check_rate_limit(client_ip):
            raise RateLimitError("Rate limit exceeded. Try again later.")

        await self._evict_idle_sessions()
        engine = GameEngine(self.config, seed=seed, store=self.store)
        game_id = uuid.uuid4().hex[:12]
        session = GameSession(
            game_id=game_id, engine=engine, controls=InputAdapter(engine),
        )
        engine.subscribe(session.events.append)
        self._games[game_id] = session
        self._record_creation(client_ip)
        logger.info("Game %s created.", game_id)
        return session

    def get_game(self, game_id: str) -> GameSession | None:
        return self._games.get(game_id)

    def list_games(self) -> list[GameSummary]:
        return [g.summary() for g in self._games.values()]

    async def apply(self, game_id: str, command: Command) -> dict:
        """Run an input *command* against a session and broadcast the result.

        Raises ``KeyError`` for unknown sessions. Returns the state that was
        broadcast.
        """
        session = self._games.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")

        async with session.lock:
            command(session.controls)
            session.last_active = time.monotonic()
            payload = session.drain()
            self._ensure_ticking(session)
        await self._broadcast(session, payload)
        return payload

    def _ensure_ticking(self, session: GameSession) -> None:
        """(Re)arm the tick loop whenever the engine is running."""
        if session.engine.phase == Phase.RUNNING and not session.ticking:
            session._task = asyncio.create_task(self._tick_loop(session))

    async def _tick_loop(self, session: GameSession) -> None:
        """Tick while the game runs, re-reading the interval every time."""
        engine = session.engine
        try:
            while engine.phase == Phase.RUNNING:
                await asyncio.sleep(engine.speed_interval_ms / 1000.0)
                async with session.lock:
                    if engine.tick() is None:
                        # Paused or finished while we slept.
                        break
                    session.last_active = time.monotonic()
                    payload = session.drain()
                await self._broadcast(session, payload)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for game %s.", session.game_id)
        except Exception:
            logger.exception("Tick loop error in game %s.", session.game_id)

    async def _broadcast(self, session: GameSession, state: dict) -> None:
        """Send game state to every connected viewer."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.connections):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.connections:
                session.connections.remove(ws)

    async def close_game(self, game_id: str) -> None:
        """Stop a session's tick loop, close its sockets, and forget it."""
        session = self._games.pop(game_id, None)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        await self._shutdown(session)
        logger.info("Game %s closed.", game_id)

    async def _shutdown(self, session: GameSession) -> None:
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        for ws in list(session.connections):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game closed.")
            except Exception:
                logger.warning("Failed closing socket in game %s.", session.game_id)
        session.connections.clear()

    async def _evict_idle_sessions(self) -> None:
        """Close the least recently used sessions to make room for a new one.

        Running games are only evicted once no stopped game is left.
        """
        overflow = len(self._games) - self._max_sessions + 1
        if overflow <= 0:
            return

        candidates = sorted(
            self._games.values(),
            key=lambda g: (g.engine.phase == Phase.RUNNING, g.last_active),
        )
        for stale in candidates[:overflow]:
            self._games.pop(stale.game_id, None)
            await self._shutdown(stale)
        logger.info(
            "Evicted %d idle sessions (retaining up to %d).",
            overflow,
            self._max_sessions,
        )

    async def cleanup(self) -> None:
        """Cancel all running tick loops and release rate-limit state."""
        sessions = list(self._games.values())
        for session in sessions:
            await self._shutdown(session)
        self._games.clear()
        self._rate_limits.clear()
        logger.info("GameManager cleanup complete.")
