"""
Debug image artifact.

One annotated PNG at a well-known path, overwritten on every detection run.
No versioning and no locking beyond an atomic replace.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union


class DebugImageStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, data: bytes) -> Path:
        """Write data atomically, replacing any previous debug image."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, self.path)
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logging.debug(f"Debug image written: {self.path} ({len(data)} bytes)")
        return self.path

    def load(self) -> Optional[bytes]:
        if not self.exists():
            return None
        return self.path.read_bytes()

    def clear(self) -> None:
        if self.exists():
            self.path.unlink()
