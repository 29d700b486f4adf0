
import numpy as np

from conftest import FakeCamera, FakeDetector, make_detection
import facecam.window as window
from facecam.canvas import FrameCanvas
from facecam.config import Settings
from facecam.session import LiveSession


def _session(camera=None):
    s = Settings(DETECTION_INTERVAL=0.05, EXPRESSION_MODE=True)
    return LiveSession(s, camera=camera or FakeCamera(),
                       detector=FakeDetector([make_detection(happy=0.9)]), canvas=FrameCanvas())


def test_render_view_camera_off_uses_placeholder():
    out = window.render_view(_session())
    w, h = window.PLACEHOLDER_SIZE
    assert out.shape == (h + window.STATUS_BAR_HEIGHT, w, 3)
    # status bar background is white when no expression is dominant
    assert tuple(out[-1, -1]) == (255, 255, 255)


def test_handle_key_reports_camera_errors():
    s = _session(camera=FakeCamera(fail=True))
    msg = window.handle_key(s, ord("c"))
    assert "Could not open camera" in msg
    assert not s.state.camera_active
    assert "Camera is not active" in window.handle_key(s, ord("d"))
    assert window.handle_key(s, ord("e")) is None
    assert s.state.expression_mode_active is False


def test_run_live_window_monkeypatch(monkeypatch):
    shown = []
    keys = iter([-1, ord("d"), -1, -1, -1, -1, -1, -1])
    monkeypatch.setattr(window.cv2, "imshow", lambda title, img: shown.append(img))
    monkeypatch.setattr(window.cv2, "waitKey", lambda d: next(keys, ord("q")))
    monkeypatch.setattr(window.cv2, "destroyAllWindows", lambda: None)
    monkeypatch.setattr(window, "DISPLAY_FPS", 50)

    cam = FakeCamera()
    s = _session(camera=cam)
    window.run_live_window(s.s, session=s)

    assert shown and all(isinstance(img, np.ndarray) for img in shown)
    assert shown[0].shape[0] == 48 + window.STATUS_BAR_HEIGHT
    # session torn down on quit
    assert not s.state.camera_active and not s.state.detection_active
    assert len(cam.released) == 1
