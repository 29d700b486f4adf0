"""
Expression ranking and the expression -> background color table.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

# Canonical order doubles as the tie-break order
EXPRESSION_LABELS: Tuple[str, ...] = (
    "happy",
    "sad",
    "angry",
    "surprised",
    "neutral",
    "fearful",
    "disgusted",
)

DEFAULT_BACKGROUND = "#ffffff"

BACKGROUND_COLORS: Dict[str, str] = {
    "happy": "#d1f7c4",      # light green
    "angry": "#f9c0c0",      # light red
    "sad": "#c0d6f9",        # light blue
    "surprised": "#fff3b0",  # light yellow
}


def _rank_key(label: str) -> tuple[int, str]:
    try:
        return EXPRESSION_LABELS.index(label), ""
    except ValueError:
        return len(EXPRESSION_LABELS), label


def rank_expressions(scores: Dict[str, float]) -> Optional[Tuple[str, float]]:
    """Return the (label, score) pair with the highest score.

    Ties resolve to the label that comes first in EXPRESSION_LABELS, so the
    result never depends on the mapping's insertion order. Unknown labels rank
    after every canonical label (alphabetically among themselves).
    Returns None for an empty mapping.
    """
    if not scores:
        return None
    best_label: Optional[str] = None
    best_score = 0.0
    for label in sorted(scores, key=_rank_key):
        score = float(scores[label])
        if best_label is None or score > best_score:
            best_label, best_score = label, score
    return best_label, best_score


def background_color(expression: Optional[str]) -> str:
    """Hex background color for the dominant expression (white when absent)."""
    if expression is None:
        return DEFAULT_BACKGROUND
    return BACKGROUND_COLORS.get(expression, DEFAULT_BACKGROUND)


def hex_to_bgr(color: str) -> tuple[int, int, int]:
    """'#rrggbb' -> OpenCV BGR tuple."""
    value = color.lstrip("#")
    r, g, b = int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    return b, g, r
