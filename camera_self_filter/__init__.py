"""
Self-mask overlay viewer for camera streams.
"""

from .compositor import DEFAULT_BLEND_ALPHA, Compositor, composite
from .frame_saver import DEFAULT_FILENAME_FORMAT, FrameSaver
from .frame_source import FrameSourceAdapter, normalize_encoding, process_message
from .frame_store import Frame, FrameStore

__all__ = [
    "DEFAULT_BLEND_ALPHA",
    "DEFAULT_FILENAME_FORMAT",
    "Compositor",
    "Frame",
    "FrameSaver",
    "FrameSourceAdapter",
    "FrameStore",
    "composite",
    "normalize_encoding",
    "process_message",
]
