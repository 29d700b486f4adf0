# facecam/camera.py
"""
Webcam source: an OpenCV capture plus a reader thread that keeps the latest frame.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np

from facecam.config import Settings

logger = logging.getLogger(__name__)


class CameraUnavailableError(RuntimeError):
    """Raised when the camera cannot be opened."""


@dataclass(frozen=True)
class Frame:
    image: Optional[np.ndarray]
    width: int = 0
    height: int = 0

    @property
    def ready(self) -> bool:
        return self.image is not None and self.width > 0 and self.height > 0

    @classmethod
    def from_image(cls, image: np.ndarray) -> "Frame":
        h, w = image.shape[:2]
        return cls(image=image, width=int(w), height=int(h))


NOT_READY = Frame(image=None)


class CameraStream:
    """Open capture handle; `current_frame()` is safe to call from any thread."""

    def __init__(self, cap, read_interval: float = 0.005):
        self._cap = cap
        self._read_interval = read_interval
        self._lock = threading.Lock()
        self._frame: Frame = NOT_READY
        self._run = False
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._run

    def start(self) -> None:
        if self._run:
            return
        self._run = True
        self._thread = threading.Thread(target=self._read_loop, name="camera-reader", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._run = False
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0)
        self._thread = None
        self._cap.release()
        with self._lock:
            self._frame = NOT_READY

    def current_frame(self) -> Frame:
        with self._lock:
            return self._frame

    def _read_loop(self) -> None:
        while self._run:
            ok, image = self._cap.read()
            if not ok or image is None:
                # warm-up or a dropped frame; keep the last good one
                time.sleep(0.05)
                continue
            with self._lock:
                self._frame = Frame.from_image(image)
            time.sleep(self._read_interval)


class CameraSource:
    """Acquires and releases the webcam configured in Settings."""

    def __init__(self, settings: Settings):
        self.s = settings

    def acquire(self) -> CameraStream:
        idx = self.s.CAMERA_INDEX
        logger.debug(f"[camera] opening camera index {idx}")
        cap = cv2.VideoCapture(idx)
        if not cap.isOpened():
            cap.release()
            raise CameraUnavailableError(f"Could not open camera index {idx}")
        if self.s.CAMERA_WIDTH:
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.s.CAMERA_WIDTH)
        if self.s.CAMERA_HEIGHT:
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.s.CAMERA_HEIGHT)
        stream = CameraStream(cap)
        stream.start()
        logger.info(f"[camera] camera {idx} acquired")
        return stream

    def release(self, stream: Optional[CameraStream]) -> None:
        if stream is None:
            return
        stream.stop()
        logger.info("[camera] camera released")
