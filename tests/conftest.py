"""
Pytest fixtures for LeafLens test suite.

These fixtures generate synthetic plant photos to avoid external image
files and keep every expected number derivable by hand.
"""

import numpy as np
import pytest

from leaflens.core.image_buffer import ImageBuffer


def make_uniform_rgba(height: int, width: int, rgb: tuple[int, int, int]) -> np.ndarray:
    """Build an (H, W, 4) uint8 array filled with one opaque color."""
    frame_buffer = np.empty((height, width, 4), dtype=np.uint8)
    frame_buffer[:, :, :3] = rgb
    frame_buffer[:, :, 3] = 255
    return frame_buffer


@pytest.fixture
def black_frame() -> np.ndarray:
    """16x16 opaque black image: no band should fire anywhere."""
    return make_uniform_rgba(16, 16, (0, 0, 0))


@pytest.fixture
def pure_green_frame() -> np.ndarray:
    """
    8x8 image of pure (0, 200, 0) foliage.

    64 pixels, a multiple of the sampling stride, so 16 pixels are
    sampled and every one of them is green.
    """
    return make_uniform_rgba(8, 8, (0, 200, 0))


@pytest.fixture
def black_buffer(black_frame: np.ndarray) -> ImageBuffer:
    return ImageBuffer.from_array(black_frame)


@pytest.fixture
def pure_green_buffer(pure_green_frame: np.ndarray) -> ImageBuffer:
    return ImageBuffer.from_array(pure_green_frame)


@pytest.fixture
def mottled_leaf_frame() -> np.ndarray:
    """
    4x8 image whose sampled pixels are, in order: green, yellow, brown, black,
    green, green, yellow, black.

    Only every 4th pixel is sampled, so the colors are placed at flat
    indices 0, 4, 8, ... and the pixels in between are painted white,
    which no band accepts.
    """
    sampled_colors = [
        (20, 180, 30),   # green
        (220, 200, 60),  # yellow
        (150, 90, 40),   # brown
        (0, 0, 0),
        (30, 120, 40),   # green
        (10, 220, 90),   # green
        (240, 230, 20),  # yellow
        (0, 0, 0),
    ]
    flat_pixels = np.full((32, 4), 255, dtype=np.uint8)
    for sample_index, rgb in enumerate(sampled_colors):
        flat_pixels[sample_index * 4, :3] = rgb
    return flat_pixels.reshape(4, 8, 4)
