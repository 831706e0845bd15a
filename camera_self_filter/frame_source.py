"""
Incoming image adapter: Bayer tag patch-up and conversion to BGRA.

Conversion itself is delegated (cv_bridge in the node); this module only
decides what encoding the converter sees and what happens when it fails.
"""

import logging
from typing import Any, Callable, Optional

import numpy as np

from camera_self_filter.compositor import Compositor
from camera_self_filter.frame_store import Frame, FrameStore

TARGET_ENCODING = "bgra8"
BAYER_MARKER = "bayer"
MONO_ENCODING = "mono8"

Converter = Callable[[Any, str], np.ndarray]


def normalize_encoding(encoding: str) -> str:
    """Raw bayer data is viewed as mono8; any other tag passes through."""
    if encoding and BAYER_MARKER in encoding:
        return MONO_ENCODING
    return encoding


def message_encoding(msg) -> str:
    """Encoding of an Image, or the format string of a CompressedImage."""
    encoding = getattr(msg, "encoding", None)
    if encoding is None:
        encoding = getattr(msg, "format", "")
    return encoding or ""


class FrameSourceAdapter:
    """Turns image messages into BGRA arrays for the compositor."""

    def __init__(self, converter: Converter, logger=None):
        """
        Args:
            converter: callable(msg, desired_encoding) -> ndarray, e.g.
                CvBridge().imgmsg_to_cv2
            logger: anything with info/warning/error; defaults to the module logger
        """
        self._converter = converter
        self._logger = logger if logger is not None else logging.getLogger("frame_source")

    def convert(self, msg) -> Optional[np.ndarray]:
        """
        Convert a message to an H x W x 4 uint8 array.

        Returns:
            The converted array, or None if conversion failed (already logged).
        """
        # Only the subscription callback touches the message before this point.
        if hasattr(msg, "encoding"):
            msg.encoding = normalize_encoding(msg.encoding)

        try:
            return self._converter(msg, TARGET_ENCODING)
        except Exception as e:
            self._logger.error(
                f"Unable to convert {message_encoding(msg)} image to {TARGET_ENCODING}: {e}"
            )
            return None


def process_message(
    msg,
    source: FrameSourceAdapter,
    compositor: Compositor,
    store: FrameStore,
    show: Optional[Callable[[np.ndarray], None]] = None,
    logger=None,
) -> Optional[Frame]:
    """
    Convert, blend, store and display one incoming message.

    The store is only updated once compositing has succeeded, so a bad
    frame never replaces the last good one.

    Returns:
        The stored Frame, or None if the message was dropped (already logged).
    """
    logger = logger if logger is not None else logging.getLogger("frame_source")

    bgra = source.convert(msg)
    if bgra is None:
        return None

    channels = 1 if bgra.ndim == 2 else bgra.shape[2]
    logger.info(f"received image with {channels} channels")

    try:
        composited = compositor.composite(bgra)
    except ValueError as e:
        logger.error(f"Unable to composite {message_encoding(msg)} image: {e}")
        return None

    frame = Frame(image=composited, encoding=message_encoding(msg))
    store.update(frame)
    if show is not None:
        show(frame.image)
    return frame
