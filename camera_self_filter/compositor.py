"""
Self-mask compositing: blend the fourth (mask) channel of a BGRA frame
into each of its three color channels.

    out = alpha * channel + (1 - alpha) * mask

cv2.addWeighted does the arithmetic in floating point and saturates back to
uint8 with round-to-nearest, so values near 0/255 never wrap.
"""

import cv2
import numpy as np

DEFAULT_BLEND_ALPHA = 0.7


class Compositor:
    """Fixed-factor blend of a 4-channel frame down to a 3-channel frame."""

    def __init__(self, alpha: float = DEFAULT_BLEND_ALPHA):
        try:
            alpha = float(alpha)
        except (TypeError, ValueError) as e:
            raise ValueError(f"blend alpha must be a number, got {alpha!r}") from e
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"blend alpha must be within [0, 1], got {alpha}")
        self._alpha = alpha

    @property
    def alpha(self) -> float:
        return self._alpha

    def composite(self, bgra: np.ndarray) -> np.ndarray:
        """
        Blend the mask channel into the color channels.

        Args:
            bgra: H x W x 4 uint8 array, channels {c0, c1, c2, mask}

        Returns:
            H x W x 3 uint8 array of the same width and height.
        """
        if bgra.ndim != 3 or bgra.shape[2] != 4:
            raise ValueError(f"expected an H x W x 4 frame, got shape {bgra.shape}")
        if bgra.dtype != np.uint8:
            raise ValueError(f"expected uint8 pixels, got {bgra.dtype}")

        h, w = bgra.shape[:2]
        if h == 0 or w == 0:
            return np.zeros((h, w, 3), dtype=np.uint8)

        c0, c1, c2, mask = cv2.split(bgra)
        beta = 1.0 - self._alpha
        blended = [
            cv2.addWeighted(channel, self._alpha, mask, beta, 0.0)
            for channel in (c0, c1, c2)
        ]
        return cv2.merge(blended)


def composite(bgra: np.ndarray, alpha: float = DEFAULT_BLEND_ALPHA) -> np.ndarray:
    """One-shot helper around Compositor."""
    return Compositor(alpha).composite(bgra)
