"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from neon_snake.persistence import MemoryBestScoreStore
from neon_snake.server.app import create_app
from neon_snake.server.game_manager import GameManager

BASE = "http://test"


@pytest.fixture()
def manager():
    return GameManager(store=MemoryBestScoreStore(50))


@pytest.fixture()
def app(manager):
    application = create_app()
    application.state.game_manager = manager
    return application


@pytest.fixture()
async def client(app, manager):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    await manager.cleanup()


async def _create(client, **body) -> str:
    resp = await client.post("/games", json=body)
    assert resp.status_code == 201
    return resp.json()["game_id"]


class TestCreateGame:
    @pytest.mark.asyncio
    async def test_create_default(self, client):
        resp = await client.post("/games", json={})
        assert resp.status_code == 201
        data = resp.json()
        assert data["phase"] == "idle"
        assert data["score"] == 0
        assert data["speed_interval_ms"] == 150
        assert data["viewers"] == 0
        assert "game_id" in data

    @pytest.mark.asyncio
    async def test_best_score_comes_from_store(self, client):
        resp = await client.post("/games", json={})
        assert resp.json()["best_score"] == 50

    @pytest.mark.asyncio
    async def test_create_with_seed(self, client, manager):
        game_id = await _create(client, seed=9)
        engine = manager.get_game(game_id).engine
        reference = (await manager.create_game(seed=9)).engine
        assert engine.state.food == reference.state.food

    @pytest.mark.asyncio
    async def test_negative_seed_rejected(self, client):
        resp = await client.post("/games", json={"seed": -1})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_rate_limited(self, client):
        for _ in range(10):
            await _create(client)
        resp = await client.post("/games", json={})
        assert resp.status_code == 429


class TestListGames:
    @pytest.mark.asyncio
    async def test_list_empty(self, client):
        resp = await client.get("/games")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_list_after_create(self, client):
        await _create(client)
        await _create(client)
        resp = await client.get("/games")
        assert len(resp.json()) == 2


class TestGetGame:
    @pytest.mark.asyncio
    async def test_get_existing(self, client):
        game_id = await _create(client)
        resp = await client.get(f"/games/{game_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["game_id"] == game_id
        assert data["phase"] == "idle"
        assert data["state"]["snake"] == [[10, 10]]
        assert data["state"]["best_score"] == 50

    @pytest.mark.asyncio
    async def test_get_not_found(self, client):
        resp = await client.get("/games/nonexistent")
        assert resp.status_code == 404


class TestActions:
    @pytest.mark.asyncio
    async def test_start(self, client):
        game_id = await _create(client)
        resp = await client.post(
            f"/games/{game_id}/actions", json={"action": "start"},
        )
        assert resp.status_code == 200
        state = resp.json()
        assert state["phase"] == "running"
        assert state["events"] == ["start"]

    @pytest.mark.asyncio
    async def test_direction_then_pause(self, client):
        game_id = await _create(client)
        await client.post(f"/games/{game_id}/actions", json={"action": "start"})
        resp = await client.post(
            f"/games/{game_id}/actions", json={"action": "up"},
        )
        assert resp.json()["pending_direction"] == "UP"

        resp = await client.post(
            f"/games/{game_id}/actions", json={"action": "pause"},
        )
        assert resp.json()["phase"] == "paused"

    @pytest.mark.asyncio
    async def test_reversal_ignored(self, client):
        game_id = await _create(client)
        await client.post(f"/games/{game_id}/actions", json={"action": "start"})
        resp = await client.post(
            f"/games/{game_id}/actions", json={"action": "left"},
        )
        assert resp.status_code == 200
        assert resp.json()["pending_direction"] == "RIGHT"

    @pytest.mark.asyncio
    async def test_unknown_action(self, client):
        game_id = await _create(client)
        resp = await client.post(
            f"/games/{game_id}/actions", json={"action": "jump"},
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_action_not_found(self, client):
        resp = await client.post(
            "/games/nonexistent/actions", json={"action": "start"},
        )
        assert resp.status_code == 404


class TestCloseGame:
    @pytest.mark.asyncio
    async def test_delete(self, client):
        game_id = await _create(client)
        resp = await client.delete(f"/games/{game_id}")
        assert resp.status_code == 204
        assert (await client.get(f"/games/{game_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_not_found(self, client):
        resp = await client.delete("/games/nonexistent")
        assert resp.status_code == 404
