"""
Capture and inference services.

CaptureService owns the photo source session. InferenceService runs the
detector off the caller's thread and reports back through a callback with a
DetectionsReady command.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

import numpy as np

from inference.backend import InferenceBackend
from models.frame import FrameData
from observation.base import ObservationSource
from .commands import DetectionsReady


class CaptureService:
    """Starts/stops the capture session and takes single photos."""

    def __init__(self, source: ObservationSource):
        self.source = source
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self.source.is_open

    def start(self) -> None:
        with self._lock:
            if self.source.is_open:
                return
            self.source.open()
            logging.info(f"Capture session started: {self.source.source_id}")

    def stop(self) -> None:
        with self._lock:
            if not self.source.is_open:
                return
            self.source.close()
            logging.info(f"Capture session stopped: {self.source.source_id}")

    def capture_photo(self) -> Optional[FrameData]:
        """Take a photo; None when the session is not running or the read failed."""
        with self._lock:
            if not self.source.is_open:
                logging.warning("capture_photo called while capture session is not running")
                return None
            return self.source.read()


class InferenceService:
    """Asynchronous wrapper around an InferenceBackend."""

    def __init__(self, backend: InferenceBackend, max_workers: int = 1):
        self.backend = backend
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="inference")
        self.last_latency_ms: Optional[float] = None

    @property
    def backend_name(self) -> str:
        return type(self.backend).__name__

    def run(self, frame: np.ndarray, request_id: int) -> DetectionsReady:
        """Run detection synchronously; backend failures become an empty result with an error."""
        t0 = time.perf_counter()
        try:
            detections = tuple(self.backend.detect(frame))
        except Exception as e:
            logging.error(f"Inference request {request_id} failed: {e}")
            return DetectionsReady(request_id=request_id, detections=(), error=str(e))
        finally:
            self.last_latency_ms = (time.perf_counter() - t0) * 1000.0

        logging.info(
            f"Inference request {request_id}: {len(detections)} detections "
            f"in {self.last_latency_ms:.1f} ms"
        )
        return DetectionsReady(request_id=request_id, detections=detections)

    def submit(
        self,
        frame: np.ndarray,
        request_id: int,
        callback: Callable[[DetectionsReady], object],
    ) -> Future:
        """Schedule detection; callback receives the DetectionsReady command on the worker thread."""
        def _work() -> DetectionsReady:
            result = self.run(frame, request_id)
            callback(result)
            return result

        return self._executor.submit(_work)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
