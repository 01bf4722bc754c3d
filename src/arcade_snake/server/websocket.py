"""WebSocket handlers for real-time play and spectating."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from arcade_snake.server.models import InputRequest
from arcade_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send input events, receive a frame per tick."""
    manager = _get_manager(websocket)
    entry = manager.get_session(session_id)
    if entry is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    entry.sockets.append(websocket)
    logger.info("Player connected to session %s.", session_id)

    # Send initial state snapshot so the client can draw immediately.
    await websocket.send_text(
        json.dumps(entry.session.get_state(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                body = InputRequest.model_validate_json(raw)
            except ValidationError:
                continue

            event = body.to_event(entry.session.config.swipe_threshold)
            if event is None:
                continue
            await entry.session.handle(event)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        if websocket in entry.sockets:
            entry.sockets.remove(websocket)


@ws_router.websocket("/sessions/{session_id}/spectate")
async def spectate(websocket: WebSocket, session_id: str) -> None:
    """Spectator WebSocket: receive-only frame stream."""
    manager = _get_manager(websocket)
    entry = manager.get_session(session_id)
    if entry is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    entry.sockets.append(websocket)
    logger.info("Spectator connected to session %s.", session_id)

    await websocket.send_text(
        json.dumps(entry.session.get_state(), separators=(",", ":")),
    )

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from session %s.", session_id)
    finally:
        if websocket in entry.sockets:
            entry.sockets.remove(websocket)
