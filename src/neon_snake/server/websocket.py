"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging
from numbers import Real

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from neon_snake.server.game_manager import Command, GameManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


def _parse_command(msg: object) -> Command | None:
    """Turn a client message into an input command, or ``None`` if malformed.

    Accepted shapes::

        {"direction": "up"}
        {"action": "pause"}
        {"key": "ArrowLeft"}
        {"swipe": {"dx": -42, "dy": 3}}
    """
    if not isinstance(msg, dict):
        return None

    for field in ("direction", "action"):
        value = msg.get(field)
        if isinstance(value, str):
            return lambda controls: controls.handle_button(value)

    key = msg.get("key")
    if isinstance(key, str):
        return lambda controls: controls.handle_key(key)

    swipe = msg.get("swipe")
    if isinstance(swipe, dict):
        dx, dy = swipe.get("dx"), swipe.get("dy")
        if (
            isinstance(dx, Real) and isinstance(dy, Real)
            and not isinstance(dx, bool) and not isinstance(dy, bool)
        ):
            return lambda controls: controls.handle_swipe(float(dx), float(dy))
    return None


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Player WebSocket: send inputs, receive game state every tick."""
    manager = _get_manager(websocket)
    session = manager.get_game(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    session.connections.append(websocket)
    logger.info("Viewer connected to game %s.", game_id)

    # Send initial state snapshot so the client can draw immediately.
    await websocket.send_text(
        json.dumps(session.engine.snapshot(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue

            command = _parse_command(msg)
            if command is None:
                continue
            try:
                await manager.apply(game_id, command)
            except KeyError:
                # Closed from elsewhere while this socket was open.
                break
    except WebSocketDisconnect:
        logger.info("Viewer disconnected from game %s.", game_id)
    finally:
        if websocket in session.connections:
            session.connections.remove(websocket)
