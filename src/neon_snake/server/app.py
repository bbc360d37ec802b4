"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from neon_snake.config import GameConfig
from neon_snake.persistence import JsonFileBestScoreStore, MemoryBestScoreStore
from neon_snake.server.game_manager import GameManager
from neon_snake.server.routes import router
from neon_snake.server.websocket import ws_router


def create_app(
    config_path: str | Path | None = None,
    best_score_path: str | Path | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    *config_path* points at a JSON :class:`GameConfig`; *best_score_path*
    enables on-disk best-score persistence.
    """
    config = GameConfig.load(config_path) if config_path else GameConfig()
    store = (
        JsonFileBestScoreStore(best_score_path)
        if best_score_path else MemoryBestScoreStore()
    )

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.game_manager = GameManager(config=config, store=store)
        yield
        await app.state.game_manager.cleanup()

    app = FastAPI(
        title="Neon Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
