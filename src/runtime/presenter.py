"""
Presentation layer.

Holds the single CurrentFrame value and replaces it on each command. Geometry
is recomputed synchronously here whenever the image, the detections or the
display area change.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Optional, Tuple

from models.frame import FrameData
from overlay.annotate import OverlayStyle, decode_image, render_debug_image
from overlay.debug_store import DebugImageStore
from .commands import (
    CapturePhoto,
    ClearImage,
    DetectionsReady,
    ImportImage,
    ResizeDisplay,
    RunInference,
)
from .frame_state import CurrentFrame
from .services import CaptureService, InferenceService


class Presenter:
    def __init__(
        self,
        capture: CaptureService,
        inference: InferenceService,
        debug_store: Optional[DebugImageStore] = None,
        style: OverlayStyle = OverlayStyle(),
        display_size: Tuple[float, float] = (390.0, 760.0),
        preview_aspect: float = 4.0 / 3.0,
    ):
        self.capture = capture
        self.inference = inference
        self.debug_store = debug_store
        self.style = style
        self._lock = threading.RLock()
        self._frame = CurrentFrame.empty(display_size, preview_aspect)
        self._pending: Optional[Future] = None

    @property
    def frame(self) -> CurrentFrame:
        return self._frame

    def dispatch(self, command) -> CurrentFrame:
        with self._lock:
            handler = getattr(self, f"_on_{type(command).__name__}", None)
            if handler is None:
                raise TypeError(f"Unsupported command: {type(command).__name__}")
            self._frame = handler(command)
            return self._frame

    def wait_idle(self, timeout: Optional[float] = None) -> CurrentFrame:
        """Block until the in-flight inference request (if any) has been applied."""
        pending = self._pending
        if pending is not None:
            pending.result(timeout=timeout)
        return self._frame

    def _on_CapturePhoto(self, command: CapturePhoto) -> CurrentFrame:
        current = self._frame
        if current.is_detecting:
            logging.warning("Capture ignored: detection in progress")
            return current
        photo = self.capture.capture_photo()
        if photo is None:
            return current
        return self._with_new_image(photo)

    def _on_ImportImage(self, command: ImportImage) -> CurrentFrame:
        current = self._frame
        if current.is_detecting:
            logging.warning("Import ignored: detection in progress")
            return current
        frame = decode_image(command.data)
        return self._with_new_image(FrameData.from_numpy(frame, source=command.source))

    def _with_new_image(self, photo: FrameData) -> CurrentFrame:
        logging.info(f"New image {photo.width}x{photo.height} from {photo.source}")
        return self._frame.with_display(image=photo, detections=(), last_error=None)

    def _on_ClearImage(self, command: ClearImage) -> CurrentFrame:
        current = self._frame
        if current.is_detecting:
            logging.warning("Clear ignored: detection in progress")
            return current
        return current.with_display(image=None, detections=(), last_error=None)

    def _on_RunInference(self, command: RunInference) -> CurrentFrame:
        current = self._frame
        if current.image is None:
            logging.warning("Inference requested without an image")
            return current
        if current.is_detecting:
            logging.warning("Inference already running")
            return current

        request_id = current.request_id + 1
        updated = current.with_display(
            detections=(), is_detecting=True, request_id=request_id, last_error=None
        )
        self._pending = self.inference.submit(current.image.frame, request_id, self.dispatch)
        return updated

    def _on_DetectionsReady(self, command: DetectionsReady) -> CurrentFrame:
        current = self._frame
        if command.request_id != current.request_id or not current.is_detecting:
            logging.info(f"Dropping stale detections for request {command.request_id}")
            return current

        updated = current.with_display(
            detections=tuple(command.detections),
            is_detecting=False,
            last_error=command.error,
        )
        if command.error is not None:
            self._clear_debug_image()
        elif updated.image is not None:
            self._save_debug_image(updated)
        return updated

    def _on_ResizeDisplay(self, command: ResizeDisplay) -> CurrentFrame:
        return self._frame.with_display(display_size=(float(command.width), float(command.height)))

    def _save_debug_image(self, frame: CurrentFrame) -> None:
        if self.debug_store is None:
            return
        try:
            png = render_debug_image(frame.image.frame, frame.detections, self.style)
            self.debug_store.save(png)
        except Exception:
            # The new detections are committed regardless.
            logging.exception("Failed to write debug image")

    def _clear_debug_image(self) -> None:
        """Drop the previous run's debug image so it never outlives a failed run."""
        if self.debug_store is None:
            return
        try:
            self.debug_store.clear()
        except OSError as e:
            logging.error(f"Failed to remove debug image: {e}")

    def debug_lines(self):
        return self._frame.debug_lines()
