"""
Latest-frame slot shared by the image subscription and the mouse callback.

The lock only guards the reference swap; compositing, display and disk
writes all happen outside it.
"""

import threading
from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class Frame:
    """A display-ready frame and the encoding of the message it came from."""

    image: np.ndarray
    encoding: str = ""


class FrameStore:
    """Holds the most recently received frame under a single lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._frame = None

    def update(self, frame: Frame) -> None:
        """Replace the stored frame reference."""
        with self._lock:
            self._frame = frame

    def snapshot(self) -> Optional[Frame]:
        """Return the current frame, or None if nothing has arrived yet."""
        with self._lock:
            return self._frame

