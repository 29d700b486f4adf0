"""
Live session: owns SessionState and funnels every toggle through named transitions.
"""
from __future__ import annotations

import logging
from typing import Optional

from facecam.camera import CameraSource, CameraStream, Frame
from facecam.canvas import FrameCanvas
from facecam.config import Settings
from facecam.detector import DeepFaceDetector
from facecam.live import DetectionCycle, DetectionScheduler
from facecam.models import SessionState

logger = logging.getLogger(__name__)


class LiveSession:
    """Camera + detection + expression-mode state machine.

    Detection transitions need a running asyncio loop (the scheduler's timer
    lives on it); camera and expression-mode transitions do not.
    """

    def __init__(self, settings: Settings,
                 camera: Optional[CameraSource] = None,
                 detector=None,
                 canvas=None):
        self.s = settings
        self.camera = camera if camera is not None else CameraSource(settings)
        self.detector = detector if detector is not None else DeepFaceDetector(settings)
        self.canvas = canvas if canvas is not None else FrameCanvas()
        self.state = SessionState(expression_mode_active=settings.EXPRESSION_MODE)
        self._stream: Optional[CameraStream] = None
        self.cycle = DetectionCycle(self.current_frame, self.detector, self.canvas, self.state)
        self.scheduler = DetectionScheduler(self.cycle, settings.DETECTION_INTERVAL)

    def current_frame(self) -> Optional[Frame]:
        if self._stream is None:
            return None
        return self._stream.current_frame()

    # ---- camera ----
    def start_camera(self) -> bool:
        if self.state.camera_active:
            return False
        # CameraUnavailableError propagates; camera_active stays False
        self._stream = self.camera.acquire()
        self.state.camera_active = True
        logger.info("[session] camera on")
        return True

    def stop_camera(self) -> bool:
        if not self.state.camera_active:
            return False
        try:
            if self.state.detection_active:
                self.stop_detection()
        finally:
            stream, self._stream = self._stream, None
            self.state.camera_active = False
            self.camera.release(stream)
            logger.info("[session] camera off")
        return True

    def toggle_camera(self) -> bool:
        if self.state.camera_active:
            self.stop_camera()
        else:
            self.start_camera()
        return self.state.camera_active

    # ---- detection ----
    def start_detection(self) -> bool:
        if self.state.detection_active:
            return False
        if not self.state.camera_active:
            raise RuntimeError("Camera is not active; start the camera before detection")
        self.scheduler.start()
        self.state.detection_active = True
        logger.info("[session] detection on")
        return True

    def stop_detection(self) -> bool:
        if not self.state.detection_active:
            return False
        self.scheduler.stop()
        self.state.detection_active = False
        logger.info("[session] detection off")
        return True

    def toggle_detection(self) -> bool:
        if self.state.detection_active:
            self.stop_detection()
        else:
            self.start_detection()
        return self.state.detection_active

    # ---- expression mode ----
    def set_expression_mode(self, enabled: bool) -> bool:
        self.state.expression_mode_active = bool(enabled)
        if not enabled:
            self.state.dominant_expression = None
        logger.info(f"[session] expression mode {'on' if enabled else 'off'}")
        return self.state.expression_mode_active

    def toggle_expression_mode(self) -> bool:
        return self.set_expression_mode(not self.state.expression_mode_active)

    # ---- teardown / status ----
    def close(self) -> None:
        try:
            self.stop_detection()
        finally:
            self.stop_camera()

    def status(self) -> dict:
        return self.state.model_dump()
