"""
Pydantic data models for detections and session state.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from facecam.expressions import background_color, rank_expressions


class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int = Field(ge=0)
    height: int = Field(ge=0)


class Detection(BaseModel):
    box: BoundingBox
    expressions: Dict[str, float]

    @field_validator("expressions")
    @classmethod
    def _check_scores(cls, v: Dict[str, float]) -> Dict[str, float]:
        if not v:
            raise ValueError("a detection needs at least one expression score")
        for label, score in v.items():
            if not 0.0 <= float(score) <= 1.0:
                raise ValueError(f"score for {label!r} out of [0, 1]: {score}")
        return v

    def top_expression(self) -> tuple[str, float]:
        ranked = rank_expressions(self.expressions)
        if ranked is None:
            raise ValueError("detection has no expression scores")
        return ranked


class SessionState(BaseModel):
    """Flags and derived values for one live session.

    Detection results only enter through record_detections/clear_detections,
    which keep dominant_expression empty whenever there are no faces or
    expression mode is off.
    """
    camera_active: bool = False
    detection_active: bool = False
    expression_mode_active: bool = False
    face_count: int = Field(default=0, ge=0)
    dominant_expression: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def background_color(self) -> str:
        return background_color(self.dominant_expression)

    def record_detections(self, detections: List[Detection]) -> None:
        self.face_count = len(detections)
        if self.expression_mode_active and detections:
            self.dominant_expression = detections[0].top_expression()[0]
        else:
            self.dominant_expression = None

    def clear_detections(self) -> None:
        self.face_count = 0
        self.dominant_expression = None
