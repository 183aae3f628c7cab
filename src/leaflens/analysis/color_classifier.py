"""
Pixel sampling and color band classification.

The sampler walks the flat RGBA buffer with a fixed stride and sorts each
visited pixel into green (foliage), yellow and brown (discoloration)
bands using plain RGB thresholds. Bands are independent: one pixel may
land in several of them, or in none.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from leaflens.core.image_buffer import BYTES_PER_PIXEL, ImageBuffer


# Visit every 4th pixel (16 bytes) of the flat buffer
SAMPLE_STRIDE_PIXELS = 4


class PixelCategory(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    BROWN = "brown"


@dataclass(frozen=True, slots=True)
class ColorThresholds:
    """
    RGB cut-offs for the three color bands.

    green:  g > r and g > b and g > green_min
    yellow: r > yellow_min and g > yellow_min and b < yellow_blue_max
    brown:  brown_red_min < r < brown_red_max and g < r and b < brown_blue_max
    """

    green_min: int = 50
    yellow_min: int = 150
    yellow_blue_max: int = 100
    brown_red_min: int = 100
    brown_red_max: int = 200
    brown_blue_max: int = 100


DEFAULT_THRESHOLDS = ColorThresholds()


@dataclass(slots=True)
class ColorCounts:
    """
    Mutable tally of band hits over the sampled pixels of one image.

    Only lives for the duration of a single analysis call.
    """

    green_pixels: int = 0
    green_intensity_sum: int = 0
    yellow_pixels: int = 0
    brown_pixels: int = 0
    sampled_pixels: int = 0

    def add(self, categories: frozenset[PixelCategory], green_value: int) -> None:
        """Record one sampled pixel."""
        self.sampled_pixels += 1
        if PixelCategory.GREEN in categories:
            self.green_pixels += 1
            self.green_intensity_sum += green_value
        if PixelCategory.YELLOW in categories:
            self.yellow_pixels += 1
        if PixelCategory.BROWN in categories:
            self.brown_pixels += 1


def classify_pixel(
    red: int,
    green: int,
    blue: int,
    thresholds: ColorThresholds = DEFAULT_THRESHOLDS,
) -> frozenset[PixelCategory]:
    """Return every band the (r, g, b) triple falls into."""
    categories = set()
    if green > red and green > blue and green > thresholds.green_min:
        categories.add(PixelCategory.GREEN)
    if red > thresholds.yellow_min and green > thresholds.yellow_min and blue < thresholds.yellow_blue_max:
        categories.add(PixelCategory.YELLOW)
    if (
        thresholds.brown_red_min < red < thresholds.brown_red_max
        and green < red
        and blue < thresholds.brown_blue_max
    ):
        categories.add(PixelCategory.BROWN)
    return frozenset(categories)


def sample_pixels(image_buffer: ImageBuffer) -> np.ndarray:
    """
    Return the (N, 4) uint8 array of pixels visited by the sampler.

    The stride runs over the flat buffer, not per row, so the sampled
    columns shift from one row to the next when the width is not a
    multiple of the stride.
    """
    flat_pixels = np.frombuffer(image_buffer.pixels, dtype=np.uint8).reshape(-1, BYTES_PER_PIXEL)
    return flat_pixels[::SAMPLE_STRIDE_PIXELS]


def count_colors(
    image_buffer: ImageBuffer,
    thresholds: ColorThresholds = DEFAULT_THRESHOLDS,
) -> ColorCounts:
    """
    Sample the buffer and tally green, yellow and brown pixels.

    Vectorized equivalent of calling classify_pixel() on every sampled
    pixel and feeding the result to ColorCounts.add().
    """
    sampled = sample_pixels(image_buffer)

    red = sampled[:, 0].astype(np.int16)
    green = sampled[:, 1].astype(np.int16)
    blue = sampled[:, 2].astype(np.int16)

    green_mask = (green > red) & (green > blue) & (green > thresholds.green_min)
    yellow_mask = (
        (red > thresholds.yellow_min)
        & (green > thresholds.yellow_min)
        & (blue < thresholds.yellow_blue_max)
    )
    brown_mask = (
        (red > thresholds.brown_red_min)
        & (red < thresholds.brown_red_max)
        & (green < red)
        & (blue < thresholds.brown_blue_max)
    )

    return ColorCounts(
        green_pixels=int(np.count_nonzero(green_mask)),
        green_intensity_sum=int(green[green_mask].sum(dtype=np.int64)),
        yellow_pixels=int(np.count_nonzero(yellow_mask)),
        brown_pixels=int(np.count_nonzero(brown_mask)),
        sampled_pixels=int(sampled.shape[0]),
    )
