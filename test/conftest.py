"""
Test Configuration
==================

Shared fixtures for the camera_self_filter tests.
"""

import numpy as np
import pytest

from camera_self_filter.frame_store import Frame, FrameStore


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def bgra_frame(rng):
    """Random 48x64 BGRA frame; the alpha plane stands in for the self mask."""
    return rng.integers(0, 256, size=(48, 64, 4), dtype=np.uint8)


@pytest.fixture
def store():
    return FrameStore()


@pytest.fixture
def filled_store():
    """A store already holding a small 3-channel frame."""
    store = FrameStore()
    image = np.full((8, 12, 3), 127, dtype=np.uint8)
    store.update(Frame(image=image, encoding="bgra8"))
    return store
