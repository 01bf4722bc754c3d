"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from arcade_snake.config import GameConfig
from arcade_snake.persistence import JsonFileHighScoreStore
from arcade_snake.server.routes import router
from arcade_snake.server.session_manager import SessionManager
from arcade_snake.server.websocket import ws_router


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    The lifespan wires a :class:`SessionManager` whose high score lives in
    the JSON file named by ``config.high_score_path``.
    """
    config = config if config is not None else GameConfig()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        store = JsonFileHighScoreStore(
            config.high_score_path, key=config.high_score_key,
        )
        app.state.session_manager = SessionManager(config=config, store=store)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Arcade Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
