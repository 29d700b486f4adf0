
"""Overlay rendering for detections.

- draw_overlays: clear the canvas, then draw a box + label tag per detection
- label_text / label_origin: label formatting and placement

Label tags sit directly above the box. When that would put the tag above the
canvas (box touching the top edge) the tag is clamped to y=0 and overlaps the
top of the box instead; likewise a negative box x is clamped to 0.
"""
from __future__ import annotations

from typing import Iterable, Tuple

from facecam.canvas import DEFAULT_FONT, Font
from facecam.models import BoundingBox, Detection

BOX_COLOR: Tuple[int, int, int] = (0, 255, 0)    # lime (BGR)
TEXT_COLOR: Tuple[int, int, int] = (0, 0, 0)
BOX_LINE_WIDTH = 3
LABEL_HEIGHT = 20
LABEL_PADDING = 10        # total horizontal padding around the text
LABEL_TEXT_INSET = 5      # text offset from the tag's left and bottom edges


def label_text(expression: str, confidence: float) -> str:
    return f"{expression} ({confidence * 100:.1f}%)"


def label_origin(box: BoundingBox) -> Tuple[int, int]:
    """Top-left corner of the label tag for `box`."""
    return max(0, box.x), max(0, box.y - LABEL_HEIGHT)


def draw_overlays(canvas, detections: Iterable[Detection], font: Font = DEFAULT_FONT) -> None:
    """Draw bounding boxes and expression tags onto `canvas`.

    The canvas must already match the frame's pixel size. It is cleared first,
    so each call fully replaces the previous overlay.
    """
    canvas.clear()
    for det in detections:
        box = det.box
        canvas.stroke_rect(box.x, box.y, box.width, box.height, BOX_COLOR, BOX_LINE_WIDTH)

        expression, confidence = det.top_expression()
        text = label_text(expression, confidence)
        tag_x, tag_y = label_origin(box)
        text_w = canvas.measure_text_width(text, font)
        canvas.fill_rect(tag_x, tag_y, text_w + LABEL_PADDING, LABEL_HEIGHT, BOX_COLOR)
        canvas.fill_text(text, tag_x + LABEL_TEXT_INSET, tag_y + LABEL_HEIGHT - LABEL_TEXT_INSET,
                         font, TEXT_COLOR)
