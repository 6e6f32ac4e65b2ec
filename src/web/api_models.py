from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class RectModel(BaseModel):
    x: float
    y: float
    width: float
    height: float


class NormalizedRectModel(BaseModel):
    min_x: float
    min_y: float
    width: float
    height: float


class DetectionModel(BaseModel):
    label: str
    confidence: float
    caption: str = Field(..., description='"<label> <percent>%" overlay text')
    rect: NormalizedRectModel = Field(..., description="Normalized, bottom-left origin")
    display_rect: Optional[RectModel] = Field(None, description="Display pixels, top-left origin")


class SizeModel(BaseModel):
    width: float
    height: float


class FrameResponse(BaseModel):
    has_image: bool
    image_size: Optional[SizeModel] = None
    display_size: SizeModel
    fit_rect: RectModel
    fit_is_placeholder: bool
    is_detecting: bool
    request_id: int
    detections: List[DetectionModel] = Field(default_factory=list)
    error: Optional[str] = None


class DisplayRequest(BaseModel):
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)


class DebugLogResponse(BaseModel):
    lines: List[str]


class HealthResponse(BaseModel):
    capture_running: bool
    capture_source: str
    detector: str
    has_image: bool
    is_detecting: bool
    infer_latency_ms: Optional[float] = None
    uptime_seconds: float
