
import numpy as np

from conftest import RecordingCanvas, make_detection
from facecam.canvas import FrameCanvas
from facecam.models import BoundingBox
from facecam.visual import (
    BOX_COLOR, BOX_LINE_WIDTH, LABEL_HEIGHT, TEXT_COLOR, draw_overlays, label_origin, label_text,
)


def test_label_text_format():
    assert label_text("happy", 0.9) == "happy (90.0%)"
    assert label_text("sad", 0.12345) == "sad (12.3%)"


def test_draw_overlays_clears_first_and_draws_each_face():
    canvas = RecordingCanvas()
    dets = [make_detection(x=10, y=50, happy=0.9, sad=0.1), make_detection(x=80, y=60, angry=0.8)]
    draw_overlays(canvas, dets)

    names = canvas.names()
    assert names[0] == "clear"
    assert names.count("stroke_rect") == 2
    assert names.count("fill_rect") == 2
    texts = [c for c in canvas.calls if c[0] == "fill_text"]
    assert [t[1] for t in texts] == ["happy (90.0%)", "angry (80.0%)"]
    assert all(t[4] == TEXT_COLOR for t in texts)

    stroke = canvas.calls[1]
    assert stroke == ("stroke_rect", 10, 50, 40, 40, BOX_COLOR, BOX_LINE_WIDTH)
    tag = canvas.calls[2]
    # tag sits directly above the box, sized to text width + padding
    assert tag == ("fill_rect", 10, 50 - LABEL_HEIGHT, 7 * len("happy (90.0%)") + 10, LABEL_HEIGHT, BOX_COLOR)
    assert texts[0][2:4] == (15, 45)


def test_draw_overlays_no_detections_only_clears():
    canvas = RecordingCanvas()
    draw_overlays(canvas, [])
    assert canvas.names() == ["clear"]


def test_label_clamped_inside_top_edge():
    assert label_origin(BoundingBox(x=5, y=8, width=10, height=10)) == (5, 0)
    assert label_origin(BoundingBox(x=-4, y=100, width=10, height=10)) == (0, 100 - LABEL_HEIGHT)

    canvas = RecordingCanvas()
    draw_overlays(canvas, [make_detection(x=5, y=3, happy=1.0)])
    tag = [c for c in canvas.calls if c[0] == "fill_rect"][0]
    assert tag[2] == 0


def test_draw_overlays_replaces_previous_overlay():
    canvas = FrameCanvas(200, 150)
    draw_overlays(canvas, [make_detection(x=10, y=40, happy=0.9)])
    assert canvas.pixels[40, 30, 3] == 255   # box top edge
    draw_overlays(canvas, [make_detection(x=120, y=90, sad=0.9)])
    assert canvas.pixels[40, 30, 3] == 0     # old box gone
    assert canvas.pixels[90, 140, 3] == 255
    draw_overlays(canvas, [])
    assert not np.any(canvas.pixels)
