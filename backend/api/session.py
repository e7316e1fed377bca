"""
Editing session API endpoints
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from maskedit.models import ToolMode
from maskedit.session import EditorSession
from maskedit.surface import SceneSurface
from backend.config import (
    STAGE_WIDTH, STAGE_HEIGHT, STROKE_COLOR, FILL_COLOR, CLOSE_KEY,
    CLEAR_ON_IMAGE_CHANGE,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _new_session() -> EditorSession:
    return EditorSession(
        stroke=STROKE_COLOR,
        fill=FILL_COLOR,
        close_key=CLOSE_KEY,
        clear_on_image_change=CLEAR_ON_IMAGE_CHANGE,
    )


# The single editing session; its stage is created by POST /api/session
_current_session: EditorSession = _new_session()
_current_surface: Optional[SceneSurface] = None


def get_session() -> EditorSession:
    """Get the current editing session."""
    return _current_session


def reset_session() -> EditorSession:
    """Replace the session with a fresh, uninitialized one."""
    global _current_session, _current_surface
    _current_session = _new_session()
    _current_surface = None
    return _current_session


class StageRequest(BaseModel):
    width: int = STAGE_WIDTH
    height: int = STAGE_HEIGHT


class PointRequest(BaseModel):
    x: float
    y: float


class ModeRequest(BaseModel):
    mode: Optional[ToolMode] = None  # Toggle when not provided


class ImageStateResponse(BaseModel):
    width: int
    height: int
    scale: float
    x: float
    y: float


class SessionResponse(BaseModel):
    initialized: bool
    width: Optional[int] = None
    height: Optional[int] = None
    mode: ToolMode
    polygon_count: int
    current_points: Optional[int] = None
    image: Optional[ImageStateResponse] = None


class ShapeResponse(BaseModel):
    points: list[float]
    stroke: str
    fill: str
    closed: bool


class ClickResponse(SessionResponse):
    removed: int = 0


def session_to_response(session: EditorSession) -> SessionResponse:
    """Convert EditorSession state to SessionResponse."""
    return SessionResponse(**session.state())


@router.post("", response_model=SessionResponse)
async def create_session(request: StageRequest):
    """Start a new editing session on a fresh stage."""
    global _current_surface

    session = reset_session()
    _current_surface = SceneSurface()
    try:
        session.initialize(request.width, request.height, surface=_current_surface)
    except ValueError as e:
        reset_session()
        raise HTTPException(status_code=400, detail=str(e))
    return session_to_response(session)


@router.get("", response_model=SessionResponse)
async def get_session_state():
    """Get the current session state."""
    return session_to_response(get_session())


@router.put("/stage", response_model=SessionResponse)
async def resize_stage(request: StageRequest):
    """Resize the stage, e.g. after a window resize."""
    session = get_session()
    try:
        session.resize(request.width, request.height)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session_to_response(session)


@router.post("/click", response_model=ClickResponse)
async def click(request: PointRequest):
    """Primary click at a stage point: draws or erases depending on mode."""
    session = get_session()
    try:
        removed = session.click((request.x, request.y))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ClickResponse(**session.state(), removed=len(removed))


@router.post("/close", response_model=SessionResponse)
async def close_polygon():
    """Finish the polygon being drawn."""
    session = get_session()
    session.finish_polygon()
    return session_to_response(session)


@router.post("/mode", response_model=SessionResponse)
async def change_mode(request: Optional[ModeRequest] = None):
    """Toggle the tool mode, or set it explicitly."""
    session = get_session()
    if request is None or request.mode is None:
        session.toggle_mode()
    else:
        session.set_mode(request.mode)
    return session_to_response(session)


@router.post("/clear", response_model=SessionResponse)
async def clear_mask():
    """Remove all polygons."""
    session = get_session()
    session.clear()
    return session_to_response(session)


@router.post("/events", response_model=SessionResponse)
async def handle_event(event: dict):
    """Handle a raw pointer or keyboard event from the canvas."""
    session = get_session()
    try:
        handled = session.handle_event(event)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not handled:
        logger.debug(f"Ignored event: {event}")
    return session_to_response(session)


@router.get("/scene", response_model=list[ShapeResponse])
async def get_scene():
    """Shapes to draw, finalized polygons first."""
    if _current_surface is None:
        raise HTTPException(status_code=400, detail="No session initialized")
    return [ShapeResponse(**shape) for shape in _current_surface.snapshot()]
