"""
OpenCV live window: camera frame + overlay canvas + status bar.

Keys:
  c  camera on/off
  d  detection on/off
  e  expression mode on/off
  q  quit
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import cv2
import numpy as np

from facecam.camera import CameraUnavailableError
from facecam.config import Settings
from facecam.expressions import hex_to_bgr
from facecam.session import LiveSession

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Face Detection & Expression Recognition (q to quit)"
PLACEHOLDER_SIZE = (720, 560)   # w, h while the camera is off
STATUS_BAR_HEIGHT = 48
DISPLAY_FPS = 30


def render_view(session: LiveSession, message: Optional[str] = None) -> np.ndarray:
    """Compose the full window image for the current session state."""
    st = session.state
    frame = session.current_frame()
    if frame is not None and frame.ready:
        body = session.canvas.composite(frame.image)
    else:
        w, h = PLACEHOLDER_SIZE
        body = np.zeros((h, w, 3), dtype=np.uint8)
        hint = "Camera off - press 'c'" if not st.camera_active else "Waiting for camera..."
        cv2.putText(body, hint, (20, h // 2), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (200, 200, 200), 2, cv2.LINE_AA)

    bar = np.zeros((STATUS_BAR_HEIGHT, body.shape[1], 3), dtype=np.uint8)
    bar[:] = hex_to_bgr(st.background_color)
    status = f"Faces: {st.face_count}  Top Expression: {st.dominant_expression or 'None'}"
    cv2.putText(bar, message or status, (10, 20), cv2.FONT_HERSHEY_SIMPLEX, 0.55,
                (0, 0, 200) if message else (0, 0, 0), 1, cv2.LINE_AA)
    keys = (f"[c] camera {'on' if st.camera_active else 'off'}  "
            f"[d] detection {'on' if st.detection_active else 'off'}  "
            f"[e] expressions {'on' if st.expression_mode_active else 'off'}  [q] quit")
    cv2.putText(bar, keys, (10, 40), cv2.FONT_HERSHEY_SIMPLEX, 0.45, (60, 60, 60), 1, cv2.LINE_AA)
    return np.vstack([body, bar])


def handle_key(session: LiveSession, key: int) -> Optional[str]:
    """Apply a key press; returns an error message for the status bar, if any."""
    try:
        if key == ord("c"):
            session.toggle_camera()
        elif key == ord("d"):
            session.toggle_detection()
        elif key == ord("e"):
            session.toggle_expression_mode()
    except CameraUnavailableError as e:
        logger.warning(f"[window] {e}")
        return str(e)
    except RuntimeError as e:
        return str(e)
    return None


async def _window_loop(session: LiveSession) -> None:
    message: Optional[str] = None
    try:
        session.start_camera()
    except CameraUnavailableError as e:
        logger.warning(f"[window] {e}")
        message = str(e)

    while True:
        cv2.imshow(WINDOW_TITLE, render_view(session, message))
        key = cv2.waitKey(1) & 0xFF
        if key == ord("q"):
            break
        if key != 0xFF:
            message = handle_key(session, key)
        await asyncio.sleep(1.0 / DISPLAY_FPS)


async def _run(session: LiveSession) -> None:
    try:
        await _window_loop(session)
    finally:
        session.close()
        await session.scheduler.wait_idle()


def run_live_window(settings: Settings, session: Optional[LiveSession] = None) -> None:
    """Open the camera and run the interactive overlay window until 'q'."""
    session = session if session is not None else LiveSession(settings)
    try:
        asyncio.run(_run(session))
    finally:
        cv2.destroyAllWindows()
