"""
REST endpoints for controlling the live session.
"""
import logging

from fastapi import APIRouter, HTTPException

from facecam.camera import CameraUnavailableError
from facecam.config import Settings
from facecam.session import LiveSession

router = APIRouter()
settings = Settings()
session = LiveSession(settings)
logger = logging.getLogger(__name__)


@router.get("/session/status")
async def session_status():
    """
    Current session flags and derived values.

    Returns:
        dict: camera/detection/expression flags, face_count,
        dominant_expression and background_color.
    """
    return session.status()


@router.post("/camera/start")
async def camera_start():
    if session.state.camera_active:
        return {"status": "already_running"}
    try:
        session.start_camera()
    except CameraUnavailableError as e:
        logger.warning(f"[api] camera start failed: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    return {"status": "started"}


@router.post("/camera/stop")
async def camera_stop():
    if not session.stop_camera():
        return {"status": "not_running"}
    return {"status": "stopped"}


@router.post("/detection/start")
async def detection_start():
    if session.state.detection_active:
        return {"status": "already_running"}
    try:
        session.start_detection()
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"status": "started"}


@router.post("/detection/stop")
async def detection_stop():
    if not session.stop_detection():
        return {"status": "not_running"}
    return {"status": "stopped"}


@router.post("/expressions/toggle")
async def expressions_toggle():
    return {"expression_mode_active": session.toggle_expression_mode()}
