"""
Unit tests for pixel sampling and color band classification.
"""

import numpy as np
import pytest

from leaflens.analysis.color_classifier import (
    ColorCounts,
    ColorThresholds,
    PixelCategory,
    classify_pixel,
    count_colors,
    sample_pixels,
)
from leaflens.core.image_buffer import ImageBuffer


class TestClassifyPixel:
    """Tests for the per-pixel band rules."""

    @pytest.mark.parametrize(
        ("rgb", "expected"),
        [
            ((0, 200, 0), {PixelCategory.GREEN}),
            ((200, 180, 50), {PixelCategory.YELLOW}),
            ((150, 100, 50), {PixelCategory.BROWN}),
            ((170, 160, 50), {PixelCategory.YELLOW, PixelCategory.BROWN}),
            ((0, 50, 0), set()),
            ((255, 255, 255), set()),
        ],
    )
    def test_bands(self, rgb: tuple[int, int, int], expected: set) -> None:
        """Each reference color lands in exactly the expected bands."""
        assert classify_pixel(*rgb) == frozenset(expected)

    def test_green_requires_strict_dominance(self) -> None:
        """A tie between green and another channel is not foliage."""
        assert PixelCategory.GREEN not in classify_pixel(120, 120, 0)

    def test_brown_red_bounds_are_exclusive(self) -> None:
        """r=100 and r=200 both fall outside the brown band."""
        assert PixelCategory.BROWN not in classify_pixel(100, 50, 0)
        assert PixelCategory.BROWN not in classify_pixel(200, 50, 0)

    def test_custom_thresholds(self) -> None:
        """Raising green_min drops dim foliage out of the green band."""
        strict = ColorThresholds(green_min=210)
        assert classify_pixel(0, 200, 0, strict) == frozenset()


class TestSamplePixels:
    """Tests for the fixed stride sampler."""

    def test_every_fourth_pixel_is_sampled(self) -> None:
        """Flat indices 0, 4, 8 ... are visited."""
        flat = np.zeros((12, 4), dtype=np.uint8)
        flat[:, 0] = np.arange(12)
        buffer = ImageBuffer(width=12, height=1, pixels=flat.tobytes())
        np.testing.assert_array_equal(sample_pixels(buffer)[:, 0], [0, 4, 8])

    def test_stride_runs_across_rows(self) -> None:
        """The stride follows the flat buffer, not each row separately."""
        frame = np.zeros((2, 3, 4), dtype=np.uint8)
        frame[1, 1] = [0, 200, 0, 255]  # flat index 4
        buffer = ImageBuffer.from_array(frame)
        sampled = sample_pixels(buffer)
        assert sampled.shape == (2, 4)
        np.testing.assert_array_equal(sampled[1], [0, 200, 0, 255])

    def test_partial_final_stride_is_sampled(self) -> None:
        """Five pixels give two samples (indices 0 and 4)."""
        buffer = ImageBuffer(width=5, height=1, pixels=bytes(20))
        assert sample_pixels(buffer).shape[0] == 2


class TestCountColors:
    """Tests for the vectorized tally."""

    def test_black_image_counts_nothing(self, black_buffer: ImageBuffer) -> None:
        """No band fires on black; 256 pixels give 64 samples."""
        counts = count_colors(black_buffer)
        assert counts == ColorCounts(sampled_pixels=64)

    def test_pure_green_counts(self, pure_green_buffer: ImageBuffer) -> None:
        """All 16 samples are green with intensity 200."""
        counts = count_colors(pure_green_buffer)
        assert counts.green_pixels == 16
        assert counts.green_intensity_sum == 3200
        assert counts.yellow_pixels == 0
        assert counts.brown_pixels == 0
        assert counts.sampled_pixels == 16

    def test_unsampled_pixels_are_ignored(self) -> None:
        """A green pixel between samples never reaches the tally."""
        flat = np.zeros((8, 4), dtype=np.uint8)
        flat[1] = [0, 200, 0, 255]
        buffer = ImageBuffer(width=8, height=1, pixels=flat.tobytes())
        assert count_colors(buffer).green_pixels == 0

    def test_mottled_leaf(self, mottled_leaf_frame: np.ndarray) -> None:
        """Hand-placed samples are tallied band by band."""
        counts = count_colors(ImageBuffer.from_array(mottled_leaf_frame))
        assert counts == ColorCounts(
            green_pixels=3,
            green_intensity_sum=180 + 120 + 220,
            yellow_pixels=2,
            brown_pixels=1,
            sampled_pixels=8,
        )

    def test_matches_scalar_rules(self) -> None:
        """Vectorized counts equal classify_pixel() applied one by one."""
        random_generator = np.random.default_rng(seed=7)
        frame = random_generator.integers(0, 256, size=(13, 11, 4), dtype=np.uint8)
        buffer = ImageBuffer.from_array(frame)

        expected = ColorCounts()
        for red, green, blue, _alpha in sample_pixels(buffer).tolist():
            expected.add(classify_pixel(red, green, blue), green)

        assert count_colors(buffer) == expected
