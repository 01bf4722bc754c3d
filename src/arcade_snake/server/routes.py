"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from arcade_snake.server.models import (
    CreateSessionRequest,
    HighScoreResponse,
    InputRequest,
    SessionSummary,
)
from arcade_snake.server.session_manager import RateLimitError, SessionManager

router = APIRouter(tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new idle game session."""
    manager = _get_manager(request)
    client_ip = request.client.host if request.client else "unknown"
    try:
        entry = manager.create_session(
            grid_size=body.grid_size,
            tick_ms=body.tick_ms,
            seed=body.seed,
            client_ip=client_ip,
        )
    except RateLimitError as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return entry.summary()


@router.get("/sessions")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all live sessions."""
    return _get_manager(request).list_sessions()


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get a session summary together with its render state."""
    entry = _get_manager(request).get_session(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = entry.summary().model_dump(mode="json")
    result["state"] = entry.session.get_state()
    return result


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """Stop a session and disconnect its sockets."""
    try:
        await _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)


@router.post("/sessions/{session_id}/input")
async def send_input(
    session_id: str, body: InputRequest, request: Request,
) -> dict:
    """Apply one input event and return the resulting state."""
    manager = _get_manager(request)
    entry = manager.get_session(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    event = body.to_event(entry.session.config.swipe_threshold)
    if event is None:
        return entry.session.get_state()
    return await manager.handle_input(session_id, event)


@router.get("/highscore")
async def get_high_score(request: Request) -> HighScoreResponse:
    """Return the persisted high score."""
    return HighScoreResponse(high_score=_get_manager(request).high_score())
