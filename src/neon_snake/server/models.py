"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from neon_snake.engine import Phase

Action = Literal["up", "down", "left", "right", "start", "pause", "reset"]


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    seed: int | None = Field(default=None, ge=0)


class ActionRequest(BaseModel):
    """Request body for POST /games/{game_id}/actions."""

    action: Action


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    phase: Phase
    score: int
    best_score: int
    speed_interval_ms: int
    viewers: int
