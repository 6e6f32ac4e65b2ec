"""
Photo source interface.

The capture service only ever asks for "the current picture". There are two
variants, chosen once when the source is built:
- OpenCVSource: camera hardware (USB index, RTSP URL, video file)
- FixtureSource: a fixed still image, for previews and tests
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from models.frame import FrameData


@dataclass
class ObservationConfig:
    """
    Attributes:
        source_id: Name reported in FrameData.source and in log lines.
        resolution: Requested (width, height); None keeps the device default.
        fps: Requested frame rate; None keeps the device default.
        metadata: Free-form extras for a specific source.
    """
    source_id: str = "default"
    resolution: Optional[tuple[int, int]] = None
    fps: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class ObservationSource(ABC):
    """
    A session that can take photos.

    open() starts the session (raising RuntimeError when the device cannot
    be opened), read() takes one photo and close() releases the device. Also
    usable as a context manager and iterable (photos until read() returns
    None).
    """

    def __init__(self, config: ObservationConfig):
        self._config = config
        self._is_open = False
        self._frame_index = 0

    @property
    def source_id(self) -> str:
        return self._config.source_id

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def frame_index(self) -> int:
        """Photos taken since the session was opened."""
        return self._frame_index

    @abstractmethod
    def open(self) -> None: ...

    @abstractmethod
    def read(self) -> Optional[FrameData]:
        """Take a photo; None when the session is closed or the device returned nothing."""

    @abstractmethod
    def close(self) -> None:
        """Release the device. Safe to call more than once."""

    def __enter__(self) -> "ObservationSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[FrameData]:
        """Yield photos until read() returns None."""
        if not self._is_open:
            raise RuntimeError("Source must be open before iterating")
        while True:
            photo = self.read()
            if photo is None:
                return
            yield photo
