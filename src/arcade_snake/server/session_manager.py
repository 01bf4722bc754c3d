"""In-memory session registry and frame fan-out to connected sockets."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from arcade_snake.config import GameConfig
from arcade_snake.controls import InputEvent
from arcade_snake.persistence import HighScoreStore, MemoryHighScoreStore
from arcade_snake.server.models import SessionSummary
from arcade_snake.session import GameSession

logger = logging.getLogger(__name__)

# Simple rate limit: max sessions created per IP within the window.
_RATE_LIMIT_WINDOW = 60.0  # seconds
_RATE_LIMIT_MAX = 10


class RateLimitError(ValueError):
    """Raised when a client creates sessions too quickly."""


@dataclass
class SessionEntry:
    """A registered session plus the sockets watching it."""

    session_id: str
    session: GameSession
    sockets: list[WebSocket] = field(default_factory=list)

    def summary(self) -> SessionSummary:
        state = self.session.engine.state
        config = self.session.config
        return SessionSummary(
            session_id=self.session_id,
            phase=state.phase,
            score=state.score,
            high_score=state.high_score,
            grid_size=config.grid_size,
            tick_ms=config.tick_ms,
        )


class SessionManager:
    """Central registry managing all game sessions.

    All sessions share one high score store, so a record set in any
    session is visible to sessions created afterwards.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.store = (
            store if store is not None
            else MemoryHighScoreStore(key=self.config.high_score_key)
        )
        self._sessions: dict[str, SessionEntry] = {}
        self._rate_limits: dict[str, list[float]] = {}

    def _check_rate_limit(self, client_ip: str) -> bool:
        """Return True if the client is within rate limits."""
        now = time.monotonic()
        timestamps = [
            t for t in self._rate_limits.get(client_ip, [])
            if now - t < _RATE_LIMIT_WINDOW
        ]
        if timestamps:
            self._rate_limits[client_ip] = timestamps
        else:
            self._rate_limits.pop(client_ip, None)
        return len(timestamps) < _RATE_LIMIT_MAX

    def create_session(
        self,
        grid_size: int | None = None,
        tick_ms: int | None = None,
        seed: int | None = None,
        client_ip: str = "unknown",
    ) -> SessionEntry:
        """Create a new idle session and return its entry."""
        if not self._check_rate_limit(client_ip):
            raise RateLimitError("Rate limit exceeded. Try again later.")

        config = self.config.with_overrides(grid_size=grid_size, tick_ms=tick_ms)
        session_id = uuid.uuid4().hex[:12]
        entry = SessionEntry(
            session_id=session_id,
            session=GameSession(config=config, store=self.store, seed=seed),
        )

        async def _forward(state: dict) -> None:
            await self._broadcast(entry, state)

        entry.session.add_listener(_forward)
        self._sessions[session_id] = entry
        self._rate_limits.setdefault(client_ip, []).append(time.monotonic())
        logger.info("Session %s created (grid=%d).", session_id, config.grid_size)
        return entry

    def get_session(self, session_id: str) -> SessionEntry | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> SessionEntry:
        entry = self._sessions.get(session_id)
        if entry is None:
            raise KeyError(f"Session {session_id} not found.")
        return entry

    def list_sessions(self) -> list[SessionSummary]:
        return [entry.summary() for entry in self._sessions.values()]

    def high_score(self) -> int:
        return self.store.read()

    async def handle_input(self, session_id: str, event: InputEvent) -> dict:
        """Apply *event* to a session and return its current state."""
        entry = self.require_session(session_id)
        await entry.session.handle(event)
        return entry.session.get_state()

    async def close_session(self, session_id: str) -> None:
        entry = self._sessions.pop(session_id, None)
        if entry is None:
            raise KeyError(f"Session {session_id} not found.")
        await entry.session.close()
        await self._close_sockets(entry)
        logger.info("Session %s closed.", session_id)

    async def _broadcast(self, entry: SessionEntry, state: dict) -> None:
        """Send a frame to every socket watching the session."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the
        # live socket list without affecting this send loop.
        for ws in list(entry.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in entry.sockets:
                entry.sockets.remove(ws)

    async def _close_sockets(self, entry: SessionEntry) -> None:
        for ws in list(entry.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", entry.session_id,
                )
        entry.sockets.clear()

    async def cleanup(self) -> None:
        """Stop every session's scheduler and release rate-limit state."""
        for entry in list(self._sessions.values()):
            await entry.session.close()
        self._rate_limits.clear()
        logger.info("SessionManager cleanup complete.")
