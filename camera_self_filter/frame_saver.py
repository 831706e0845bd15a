"""
Save-on-click: write the latest frame to a sequentially numbered file.
"""

import logging
import re
from typing import Callable, Optional

import cv2

from camera_self_filter.frame_store import FrameStore


DEFAULT_FILENAME_FORMAT = "frame%04i.jpg"

# printf conversion: optional mapping key, flags, width, precision, length, type
_CONVERSION = re.compile(r"%(?:\([^)]*\))?[-#0 +]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[hlL]?(.)")
_INTEGER_TYPES = "diu"


def validate_filename_format(filename_format: str) -> str:
    """Check the template takes exactly one integer, e.g. 'frame%04i.jpg'."""
    slots = [m.group(1) for m in _CONVERSION.finditer(filename_format) if m.group(1) != "%"]
    if len(slots) != 1 or slots[0] not in _INTEGER_TYPES:
        raise ValueError(
            f"filename_format must contain exactly one integer slot (%d, %i or %u): {filename_format!r}"
        )
    try:
        filename_format % 0
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"filename_format must contain exactly one integer slot: {filename_format!r} ({e})"
        ) from e
    return filename_format


class FrameSaver:
    """
    Writes the stored frame to disk when the window is left-clicked.

    The counter starts at 0 and only advances after a write succeeds, so
    failed attempts never leave gaps in the numbering.
    """

    def __init__(
        self,
        store: FrameStore,
        filename_format: str = DEFAULT_FILENAME_FORMAT,
        writer: Callable = cv2.imwrite,
        logger=None,
    ):
        self._store = store
        self._filename_format = validate_filename_format(filename_format)
        self._writer = writer
        self._logger = logger if logger is not None else logging.getLogger("frame_saver")
        self._count = 0

    @property
    def count(self) -> int:
        """Counter value the next successful save will use."""
        return self._count

    @property
    def filename_format(self) -> str:
        return self._filename_format

    def next_filename(self) -> str:
        return self._filename_format % self._count

    def save_snapshot(self) -> Optional[str]:
        """
        Save the current frame.

        Returns:
            The written filename, or None if there was nothing to save or the
            write failed.
        """
        frame = self._store.snapshot()
        if frame is None:
            self._logger.warning("Couldn't save image, no data!")
            return None

        filename = self.next_filename()
        try:
            ok = self._writer(filename, frame.image)
        except (cv2.error, OSError) as e:
            self._logger.error(f"Failed to save image {filename}: {e}")
            return None
        if not ok:
            self._logger.error(f"Failed to save image {filename}")
            return None

        self._logger.info(f"Saved image {filename}")
        self._count += 1
        return filename

    def on_mouse(self, event, x, y, flags, param=None) -> None:
        """OpenCV mouse callback; any left click saves the whole frame."""
        if event != cv2.EVENT_LBUTTONDOWN:
            return
        self.save_snapshot()
