"""REST API route handlers for game lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from neon_snake.server.game_manager import GameManager, RateLimitError
from neon_snake.server.models import ActionRequest, CreateGameRequest, GameSummary

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request) -> GameManager:
    return request.app.state.game_manager


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a new idle game."""
    manager = _get_manager(request)
    client_ip = request.client.host if request.client else "unknown"
    try:
        session = await manager.create_game(seed=body.seed, client_ip=client_ip)
    except RateLimitError as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List all live games."""
    return _get_manager(request).list_games()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get game metadata and the current state snapshot."""
    session = _get_manager(request).get_game(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    result = session.summary().model_dump(mode="json")
    result["state"] = session.engine.snapshot()
    return result


@router.post("/{game_id}/actions", status_code=200)
async def send_action(
    game_id: str, body: ActionRequest, request: Request,
) -> dict:
    """Apply a button press (direction, start, pause or reset)."""
    manager = _get_manager(request)
    try:
        return await manager.apply(
            game_id, lambda controls: controls.handle_button(body.action),
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/{game_id}", status_code=204)
async def close_game(game_id: str, request: Request) -> Response:
    """Stop a game and disconnect its viewers."""
    try:
        await _get_manager(request).close_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
