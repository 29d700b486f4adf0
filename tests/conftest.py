import asyncio

import numpy as np
import pytest

from facecam.camera import Frame
from facecam.config import Settings
from facecam.models import BoundingBox, Detection


def make_detection(x=10, y=30, w=40, h=40, **scores):
    return Detection(box=BoundingBox(x=x, y=y, width=w, height=h),
                     expressions=scores or {"neutral": 1.0})


def make_frame(w=64, h=48):
    return Frame.from_image(np.zeros((h, w, 3), dtype=np.uint8))


class RecordingCanvas:
    """Canvas stand-in that records every call."""
    def __init__(self):
        self.calls = []
        self.size = (0, 0)
    def set_size(self, w, h):
        self.size = (w, h)
        self.calls.append(("set_size", w, h))
    def clear(self):
        self.calls.append(("clear",))
    def stroke_rect(self, x, y, w, h, color, line_width):
        self.calls.append(("stroke_rect", x, y, w, h, color, line_width))
    def fill_rect(self, x, y, w, h, color):
        self.calls.append(("fill_rect", x, y, w, h, color))
    def fill_text(self, text, x, y, font, color):
        self.calls.append(("fill_text", text, x, y, color))
    def measure_text_width(self, text, font):
        return 7 * len(text)
    def names(self):
        return [c[0] for c in self.calls]


class FakeDetector:
    """Async detector returning canned detections after an optional delay."""
    def __init__(self, detections=None, delay=0.0, error=None):
        self.detections = detections or []
        self.delay = delay
        self.error = error
        self.calls = 0
        self.outstanding = 0
        self.max_outstanding = 0
    async def analyze(self, frame):
        self.calls += 1
        self.outstanding += 1
        self.max_outstanding = max(self.max_outstanding, self.outstanding)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return list(self.detections)
        finally:
            self.outstanding -= 1


class FakeStream:
    def __init__(self, frame=None):
        self.frame = frame if frame is not None else make_frame()
        self.stopped = False
    def current_frame(self):
        return self.frame
    def stop(self):
        self.stopped = True


class FakeCamera:
    def __init__(self, frame=None, fail=False):
        self.frame = frame
        self.fail = fail
        self.acquired = 0
        self.released = []
    def acquire(self):
        if self.fail:
            from facecam.camera import CameraUnavailableError
            raise CameraUnavailableError("Could not open camera index 0")
        self.acquired += 1
        return FakeStream(self.frame)
    def release(self, stream):
        if stream is not None:
            stream.stop()
        self.released.append(stream)


@pytest.fixture
def settings():
    return Settings(DETECTION_INTERVAL=0.05)


@pytest.fixture
def canvas():
    return RecordingCanvas()
