"""
Configuration for the live face/expression overlay.
"""
import logging
import os
from typing import Optional

from pydantic import BaseModel


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw else None


class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    CAMERA_WIDTH: Optional[int] = _optional_int("CAMERA_WIDTH")
    CAMERA_HEIGHT: Optional[int] = _optional_int("CAMERA_HEIGHT")

    DETECTION_INTERVAL: float = float(os.getenv("DETECTION_INTERVAL", "0.2"))
    DETECTOR_BACKEND: str = os.getenv("DETECTOR_BACKEND", "opencv")
    DETECTOR_MIN_CONFIDENCE: float = float(os.getenv("DETECTOR_MIN_CONFIDENCE", "0.5"))
    EXPRESSION_MODE: bool = os.getenv("EXPRESSION_MODE", "false").strip().lower() in ("1", "true", "yes", "on")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __init__(self, **data):
        super().__init__(**data)
        # Timer periods below ~50ms only pile up skipped ticks
        object.__setattr__(self, "DETECTION_INTERVAL", max(0.05, float(self.DETECTION_INTERVAL)))
        backend = (self.DETECTOR_BACKEND or "opencv").strip().lower()
        object.__setattr__(self, "DETECTOR_BACKEND", backend or "opencv")
        level = (self.LOG_LEVEL or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            level = "INFO"
        object.__setattr__(self, "LOG_LEVEL", level)
