from __future__ import annotations

import logging
import time

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from overlay.annotate import encode_jpeg
from runtime.commands import CapturePhoto, ClearImage, ImportImage, ResizeDisplay, RunInference
from runtime.frame_state import CurrentFrame
from runtime.presenter import Presenter
from ..api_models import (
    DebugLogResponse,
    DetectionModel,
    DisplayRequest,
    FrameResponse,
    HealthResponse,
    NormalizedRectModel,
    RectModel,
    SizeModel,
)

router = APIRouter()


def _presenter(request: Request) -> Presenter:
    return request.app.state.presenter


def _frame_response(frame: CurrentFrame) -> FrameResponse:
    """Serialize the current frame; display rects are paired with detections by position."""
    display_rects = [d.rect for d in frame.display_detections]
    detections = []
    for i, det in enumerate(frame.detections):
        display_rect = None
        if i < len(display_rects):
            r = display_rects[i]
            display_rect = RectModel(x=r.x, y=r.y, width=r.width, height=r.height)
        detections.append(
            DetectionModel(
                label=det.label,
                confidence=det.confidence,
                caption=det.caption,
                rect=NormalizedRectModel(
                    min_x=det.rect.min_x,
                    min_y=det.rect.min_y,
                    width=det.rect.width,
                    height=det.rect.height,
                ),
                display_rect=display_rect,
            )
        )

    fit = frame.fit_rect
    image_size = None
    if frame.image is not None:
        image_size = SizeModel(width=frame.image.width, height=frame.image.height)

    return FrameResponse(
        has_image=frame.has_image,
        image_size=image_size,
        display_size=SizeModel(width=frame.display_size[0], height=frame.display_size[1]),
        fit_rect=RectModel(x=fit.x, y=fit.y, width=fit.width, height=fit.height),
        fit_is_placeholder=fit.placeholder,
        is_detecting=frame.is_detecting,
        request_id=frame.request_id,
        detections=detections,
        error=frame.last_error,
    )


@router.get("/frame", response_model=FrameResponse)
def get_frame(request: Request):
    return _frame_response(_presenter(request).frame)


@router.post("/display", response_model=FrameResponse)
def resize_display(body: DisplayRequest, request: Request):
    frame = _presenter(request).dispatch(ResizeDisplay(width=body.width, height=body.height))
    return _frame_response(frame)


@router.post("/capture", response_model=FrameResponse)
def capture(request: Request):
    presenter = _presenter(request)
    if not presenter.capture.is_running:
        raise HTTPException(status_code=409, detail="Capture session is not running")
    return _frame_response(presenter.dispatch(CapturePhoto()))


@router.post("/image", response_model=FrameResponse)
async def import_image(request: Request):
    data = await request.body()
    if not data:
        raise HTTPException(status_code=400, detail="Empty request body")
    try:
        frame = _presenter(request).dispatch(ImportImage(data=data))
    except ValueError as e:
        logging.warning(f"Image import rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return _frame_response(frame)


@router.get("/image")
def get_image(request: Request):
    frame = _presenter(request).frame
    if frame.image is None:
        raise HTTPException(status_code=404, detail="No image")
    return Response(content=encode_jpeg(frame.image.frame), media_type="image/jpeg")


@router.post("/clear", response_model=FrameResponse)
def clear(request: Request):
    return _frame_response(_presenter(request).dispatch(ClearImage()))


@router.post("/inference", response_model=FrameResponse)
def inference(request: Request):
    presenter = _presenter(request)
    if presenter.frame.image is None:
        raise HTTPException(status_code=409, detail="No image to run inference on")
    return _frame_response(presenter.dispatch(RunInference()))


@router.get("/debug/image")
def debug_image(request: Request):
    store = _presenter(request).debug_store
    data = store.load() if store is not None else None
    if data is None:
        raise HTTPException(status_code=404, detail="Debug image not found")
    return Response(content=data, media_type="image/png")


@router.get("/debug/log", response_model=DebugLogResponse)
def debug_log(request: Request):
    return DebugLogResponse(lines=_presenter(request).debug_lines())


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    presenter = _presenter(request)
    frame = presenter.frame
    return HealthResponse(
        capture_running=presenter.capture.is_running,
        capture_source=presenter.capture.source.source_id,
        detector=presenter.inference.backend_name,
        has_image=frame.has_image,
        is_detecting=frame.is_detecting,
        infer_latency_ms=presenter.inference.last_latency_ms,
        uptime_seconds=time.time() - request.app.state.start_time,
    )
