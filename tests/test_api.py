"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from arcade_snake.persistence import MemoryHighScoreStore
from arcade_snake.server.app import create_app
from arcade_snake.server.session_manager import SessionManager

BASE = "http://test"


@pytest.fixture()
def manager():
    return SessionManager(store=MemoryHighScoreStore(initial=70))


@pytest.fixture()
def app(manager):
    application = create_app()
    application.state.session_manager = manager
    return application


@pytest.fixture()
async def client(app, manager):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    await manager.cleanup()


async def _create(client, **body) -> str:
    resp = await client.post("/sessions", json={"tick_ms": 2000, **body})
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_create_default(self, client):
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 201
        data = resp.json()
        assert data["phase"] == "idle"
        assert data["score"] == 0
        assert data["high_score"] == 70
        assert data["grid_size"] == 20
        assert data["tick_ms"] == 150
        assert "session_id" in data

    @pytest.mark.asyncio
    async def test_create_custom(self, client):
        resp = await client.post(
            "/sessions", json={"grid_size": 30, "tick_ms": 100, "seed": 4},
        )
        assert resp.status_code == 201
        assert resp.json()["grid_size"] == 30
        assert resp.json()["tick_ms"] == 100

    @pytest.mark.asyncio
    async def test_grid_too_small(self, client):
        resp = await client.post("/sessions", json={"grid_size": 3})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_grid_too_small_for_snake(self, client):
        resp = await client.post("/sessions", json={"grid_size": 4})
        assert resp.status_code == 422
        assert "does not fit" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_rate_limit(self, client):
        for _ in range(10):
            resp = await client.post("/sessions", json={})
            assert resp.status_code == 201
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 429


class TestReadSessions:
    @pytest.mark.asyncio
    async def test_list_empty(self, client):
        resp = await client.get("/sessions")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_list_after_create(self, client):
        sid = await _create(client)
        resp = await client.get("/sessions")
        assert [s["session_id"] for s in resp.json()] == [sid]

    @pytest.mark.asyncio
    async def test_get_state(self, client):
        sid = await _create(client, seed=1)
        resp = await client.get(f"/sessions/{sid}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["session_id"] == sid
        assert data["state"]["phase"] == "idle"
        assert data["state"]["snake"]["body"] == [[10, 10], [10, 11], [10, 12]]

    @pytest.mark.asyncio
    async def test_get_unknown(self, client):
        resp = await client.get("/sessions/nope")
        assert resp.status_code == 404


class TestSessionInput:
    @pytest.mark.asyncio
    async def test_direction_starts_game(self, client):
        sid = await _create(client)
        resp = await client.post(
            f"/sessions/{sid}/input", json={"direction": "left"},
        )
        assert resp.status_code == 200
        state = resp.json()
        assert state["phase"] == "active"
        assert state["snake"]["pending"] == "left"

    @pytest.mark.asyncio
    async def test_pause_resume_command(self, client):
        sid = await _create(client)
        await client.post(f"/sessions/{sid}/input", json={"command": "activate"})
        resp = await client.post(
            f"/sessions/{sid}/input", json={"command": "pause-resume"},
        )
        assert resp.json()["phase"] == "paused"
        resp = await client.post(
            f"/sessions/{sid}/input", json={"command": "pause-resume"},
        )
        assert resp.json()["phase"] == "active"

    @pytest.mark.asyncio
    async def test_key_input(self, client):
        sid = await _create(client)
        resp = await client.post(f"/sessions/{sid}/input", json={"key": " "})
        assert resp.json()["phase"] == "active"
        resp = await client.post(
            f"/sessions/{sid}/input", json={"key": "ArrowDown"},
        )
        assert resp.json()["snake"]["pending"] == "up"

    @pytest.mark.asyncio
    async def test_unknown_key_is_ignored(self, client):
        sid = await _create(client)
        resp = await client.post(
            f"/sessions/{sid}/input", json={"key": "Escape"},
        )
        assert resp.status_code == 200
        assert resp.json()["phase"] == "idle"

    @pytest.mark.asyncio
    async def test_button_starts_with_direction(self, client):
        sid = await _create(client)
        resp = await client.post(
            f"/sessions/{sid}/input", json={"button": "right"},
        )
        state = resp.json()
        assert state["phase"] == "active"
        assert state["snake"]["pending"] == "right"

    @pytest.mark.asyncio
    async def test_unknown_button_is_ignored(self, client):
        sid = await _create(client)
        resp = await client.post(
            f"/sessions/{sid}/input", json={"button": "jump"},
        )
        assert resp.status_code == 200
        assert resp.json()["phase"] == "idle"

    @pytest.mark.asyncio
    async def test_swipe_tap_and_direction(self, client):
        sid = await _create(client)
        resp = await client.post(
            f"/sessions/{sid}/input", json={"swipe": [3, 4]},
        )
        assert resp.json()["phase"] == "active"
        resp = await client.post(
            f"/sessions/{sid}/input", json={"swipe": [-120, 40]},
        )
        assert resp.json()["snake"]["pending"] == "left"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"direction": "up", "command": "reset"},
            {"button": "up", "key": " "},
            {"direction": "sideways"},
            {"command": "jump"},
            {"swipe": [1]},
        ],
    )
    async def test_malformed_input(self, client, body):
        sid = await _create(client)
        resp = await client.post(f"/sessions/{sid}/input", json=body)
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_input_unknown_session(self, client):
        resp = await client.post(
            "/sessions/nope/input", json={"command": "activate"},
        )
        assert resp.status_code == 404


class TestDeleteSession:
    @pytest.mark.asyncio
    async def test_delete(self, client, manager):
        sid = await _create(client)
        await client.post(f"/sessions/{sid}/input", json={"command": "activate"})
        session = manager.get_session(sid).session
        resp = await client.delete(f"/sessions/{sid}")
        assert resp.status_code == 204
        assert not session.scheduler.running
        assert (await client.get(f"/sessions/{sid}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown(self, client):
        resp = await client.delete("/sessions/nope")
        assert resp.status_code == 404


class TestHighScore:
    @pytest.mark.asyncio
    async def test_reports_store_value(self, client):
        resp = await client.get("/highscore")
        assert resp.status_code == 200
        assert resp.json() == {"high_score": 70}
