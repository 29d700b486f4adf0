"""
Overlay canvas backed by a BGRA numpy buffer and drawn with OpenCV.

Pixels with alpha 0 are transparent; composite() copies every drawn pixel
over a camera frame for display.
"""
from __future__ import annotations

from collections import namedtuple
from typing import Tuple

import cv2
import numpy as np

Font = namedtuple("Font", ["face", "scale", "thickness"])

DEFAULT_FONT = Font(cv2.FONT_HERSHEY_SIMPLEX, 0.5, 1)

Color = Tuple[int, int, int]


def _bgra(color: Color) -> tuple[int, int, int, int]:
    b, g, r = color
    return int(b), int(g), int(r), 255


class FrameCanvas:
    """Drawable 2D surface sized in frame pixels."""

    def __init__(self, width: int = 0, height: int = 0):
        self.pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def set_size(self, width: int, height: int) -> None:
        # Like an HTML canvas: assigning a size always yields a blank surface
        self.pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)

    def clear(self) -> None:
        self.pixels[:] = 0

    def stroke_rect(self, x, y, w, h, color: Color, line_width: int) -> None:
        if self.pixels.size == 0:
            return
        cv2.rectangle(self.pixels, (int(x), int(y)), (int(x + w), int(y + h)),
                      _bgra(color), max(1, int(line_width)))

    def fill_rect(self, x, y, w, h, color: Color) -> None:
        if self.pixels.size == 0:
            return
        cv2.rectangle(self.pixels, (int(x), int(y)), (int(x + w), int(y + h)),
                      _bgra(color), cv2.FILLED)

    def fill_text(self, text: str, x, y, font: Font, color: Color) -> None:
        """Draw text with its baseline-left corner at (x, y)."""
        if self.pixels.size == 0:
            return
        cv2.putText(self.pixels, text, (int(x), int(y)), font.face, font.scale,
                    _bgra(color), font.thickness, cv2.LINE_AA)

    def measure_text_width(self, text: str, font: Font) -> int:
        (w, _h), _baseline = cv2.getTextSize(text, font.face, font.scale, font.thickness)
        return int(w)

    def composite(self, frame: np.ndarray) -> np.ndarray:
        """Return a copy of `frame` with the overlay drawn on top."""
        out = frame.copy()
        if self.pixels.size == 0 or out.size == 0:
            return out
        h, w = out.shape[:2]
        overlay = self.pixels
        if overlay.shape[:2] != (h, w):
            overlay = cv2.resize(overlay, (w, h), interpolation=cv2.INTER_NEAREST)
        mask = overlay[:, :, 3] > 0
        out[mask] = overlay[:, :, :3][mask]
        return out
