"""
Face + expression detection with DeepFace.
"""
# facecam/detector.py
from __future__ import annotations

import asyncio
import logging
from typing import Dict, List

from facecam.camera import Frame
from facecam.config import Settings
from facecam.models import BoundingBox, Detection

logger = logging.getLogger(__name__)

# DeepFace emotion names -> our label set
DEEPFACE_LABELS: Dict[str, str] = {
    "angry": "angry",
    "disgust": "disgusted",
    "fear": "fearful",
    "happy": "happy",
    "sad": "sad",
    "surprise": "surprised",
    "neutral": "neutral",
}


def _normalize_scores(raw: Dict) -> Dict[str, float]:
    # DeepFace reports percentages
    scores: Dict[str, float] = {}
    for name, value in (raw or {}).items():
        label = DEEPFACE_LABELS.get(str(name).lower(), str(name).lower())
        try:
            v = float(value) / 100.0
        except (TypeError, ValueError):
            continue
        scores[label] = min(1.0, max(0.0, v))
    return scores


def to_detections(results, min_confidence: float = 0.0) -> List[Detection]:
    """Convert DeepFace.analyze output (dict or list of dicts) into Detections.

    Drops entries below `min_confidence` (DeepFace reports the whole frame with
    confidence 0 when enforce_detection=False finds no face), zero-size boxes
    and entries without emotion scores. Output order follows DeepFace's.
    """
    if isinstance(results, dict):
        results = [results]
    detections: List[Detection] = []
    for r in results or []:
        r = r or {}
        conf = r.get("face_confidence")
        try:
            conf = float(conf) if conf is not None else 1.0
        except (TypeError, ValueError):
            conf = 1.0
        if conf < min_confidence:
            continue
        reg = r.get("region") or {}
        w, h = int(reg.get("w", 0)), int(reg.get("h", 0))
        if w <= 0 or h <= 0:
            continue
        scores = _normalize_scores(r.get("emotion") if isinstance(r.get("emotion"), dict) else {})
        if not scores:
            continue
        box = BoundingBox(x=int(reg.get("x", 0)), y=int(reg.get("y", 0)), width=w, height=h)
        detections.append(Detection(box=box, expressions=scores))
    return detections


class DeepFaceDetector:
    """Async detector; DeepFace runs in a worker thread so the event loop stays free."""

    def __init__(self, settings: Settings):
        self.s = settings

    def _analyze_sync(self, image) -> List[Detection]:
        # Lazy import: heavy TF stack, and tests swap sys.modules['deepface']
        from deepface import DeepFace

        results = DeepFace.analyze(
            image,
            actions=["emotion"],
            enforce_detection=False,
            detector_backend=self.s.DETECTOR_BACKEND,
        )
        return to_detections(results, self.s.DETECTOR_MIN_CONFIDENCE)

    async def analyze(self, frame: Frame) -> List[Detection]:
        detections = await asyncio.to_thread(self._analyze_sync, frame.image)
        logger.debug(f"[detector] {frame.width}x{frame.height} faces={len(detections)}")
        return detections
