"""
Compositor Tests
================

Blend formula, numeric edge cases and input validation.
"""

import numpy as np
import pytest

from camera_self_filter.compositor import DEFAULT_BLEND_ALPHA, Compositor, composite


def _reference(bgra, alpha):
    color = bgra[:, :, :3].astype(np.float64)
    mask = bgra[:, :, 3:4].astype(np.float64)
    out = np.rint(alpha * color + (1.0 - alpha) * mask)
    return np.clip(out, 0, 255).astype(np.uint8)


class TestCompositor:
    """Per-pixel, per-channel blend toward the mask channel."""

    def test_default_alpha(self):
        assert Compositor().alpha == DEFAULT_BLEND_ALPHA == 0.7

    def test_output_shape_and_dtype(self, bgra_frame):
        out = composite(bgra_frame)
        assert out.shape == (48, 64, 3)
        assert out.dtype == np.uint8

    def test_matches_formula(self, bgra_frame):
        out = composite(bgra_frame)
        expected = _reference(bgra_frame, 0.7)
        # float32 intermediate in OpenCV may land on the other side of a .5
        assert np.max(np.abs(out.astype(int) - expected.astype(int))) <= 1

    def test_known_pixel(self):
        frame = np.array([[[100, 200, 0, 50]]], dtype=np.uint8)
        out = composite(frame)
        # 0.7*100 + 0.3*50 = 85, 0.7*200 + 0.3*50 = 155, 0.7*0 + 0.3*50 = 15
        assert out[0, 0].tolist() == [85, 155, 15]

    def test_channel_independence(self, bgra_frame):
        perm = [2, 0, 1]
        permuted = bgra_frame.copy()
        permuted[:, :, :3] = bgra_frame[:, :, perm]

        out = composite(bgra_frame)
        out_permuted = composite(permuted)

        inverse = np.argsort(perm)
        np.testing.assert_array_equal(out_permuted[:, :, inverse], out)

    @pytest.mark.parametrize("channel,mask", [(255, 0), (0, 255), (255, 255), (0, 0)])
    def test_saturation_safety(self, channel, mask):
        frame = np.zeros((4, 4, 4), dtype=np.uint8)
        frame[:, :, :3] = channel
        frame[:, :, 3] = mask
        out = composite(frame).astype(int)
        expected = 0.7 * channel + 0.3 * mask
        assert np.all(np.abs(out - expected) <= 0.5 + 1e-6)
        assert out.min() >= 0 and out.max() <= 255

    def test_mask_equal_to_channel_is_identity(self, bgra_frame):
        frame = bgra_frame.copy()
        frame[:, :, 1] = frame[:, :, 3]
        out = composite(frame)
        np.testing.assert_array_equal(out[:, :, 1], frame[:, :, 1])

    def test_alpha_one_returns_color(self, bgra_frame):
        out = Compositor(alpha=1.0).composite(bgra_frame)
        np.testing.assert_array_equal(out, bgra_frame[:, :, :3])

    def test_alpha_zero_returns_mask(self, bgra_frame):
        out = Compositor(alpha=0.0).composite(bgra_frame)
        for c in range(3):
            np.testing.assert_array_equal(out[:, :, c], bgra_frame[:, :, 3])

    def test_input_not_modified(self, bgra_frame):
        before = bgra_frame.copy()
        composite(bgra_frame)
        np.testing.assert_array_equal(bgra_frame, before)

    @pytest.mark.parametrize("shape", [(0, 0, 4), (0, 5, 4), (5, 0, 4)])
    def test_zero_sized_frame(self, shape):
        out = composite(np.zeros(shape, dtype=np.uint8))
        assert out.shape == shape[:2] + (3,)

    @pytest.mark.parametrize("shape", [(4, 4), (4, 4, 3), (4, 4, 1)])
    def test_rejects_wrong_channel_count(self, shape):
        with pytest.raises(ValueError):
            composite(np.zeros(shape, dtype=np.uint8))

    def test_rejects_non_uint8(self):
        with pytest.raises(ValueError):
            composite(np.zeros((4, 4, 4), dtype=np.float32))

    def test_int_and_string_alpha_are_coerced(self):
        # launch arguments such as blend_alpha:=1 arrive as int
        assert Compositor(alpha=1).alpha == 1.0
        assert Compositor(alpha=0).alpha == 0.0
        assert Compositor(alpha="0.5").alpha == 0.5

    @pytest.mark.parametrize("alpha", ["abc", None, [0.5]])
    def test_rejects_non_numeric_alpha(self, alpha):
        with pytest.raises(ValueError):
            Compositor(alpha=alpha)

    @pytest.mark.parametrize("alpha", [-0.1, 1.5, 2])
    def test_rejects_out_of_range_alpha(self, alpha):
        with pytest.raises(ValueError):
            Compositor(alpha=alpha)
