"""
ImageSampleSize: picks how much a tiled image should be downsampled for the current zoom.

A sample size of N means every N x N block of source pixels is decoded as
one pixel. Decoders only accept powers of two, so the selected value is the
largest power of two that still keeps the image at or above screen
resolution.
"""

from __future__ import annotations

import functools
import logging

from geometry import Size

logger = logging.getLogger(__name__)

MAX_SAMPLE_SIZE = 512


@functools.total_ordering
class ImageSampleSize:
    """Power-of-two downsampling factor, between 1 and MAX_SAMPLE_SIZE."""

    __slots__ = ("size",)

    def __init__(self, size: int) -> None:
        if size < 1 or size & (size - 1) != 0:
            raise ValueError(f"Sample size must be a positive power of two, got {size}")
        if size > MAX_SAMPLE_SIZE:
            raise ValueError(f"Sample size can't exceed {MAX_SAMPLE_SIZE}, got {size}")
        self.size = size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageSampleSize):
            return NotImplemented
        return self.size == other.size

    def __lt__(self, other: ImageSampleSize) -> bool:
        if not isinstance(other, ImageSampleSize):
            return NotImplemented
        return self.size < other.size

    def __hash__(self) -> int:
        return hash(self.size)

    def __repr__(self) -> str:
        return f"ImageSampleSize({self.size})"

    def coerce_at_most(self, other: ImageSampleSize) -> ImageSampleSize:
        return other if self > other else self

    @classmethod
    def calculate_for_zoom(cls, zoom: float) -> ImageSampleSize:
        """Sample size for an image displayed at `zoom` times its full resolution.

        A zoom of 0 or less happens before the first measurement and falls
        back to full resolution.
        """
        if zoom <= 0:
            return cls(1)

        sample_size = 1
        while sample_size * 2 <= 1 / zoom and sample_size < MAX_SAMPLE_SIZE:
            sample_size *= 2
        return cls(sample_size)

    @classmethod
    def calculate_for_size(cls, viewport_size: Size, scaled_image_size: Size) -> ImageSampleSize:
        """Sample size for an image of `scaled_image_size` pixels shown in a viewport.

        Raises:
            ValueError: If the viewport hasn't been measured yet
        """
        if viewport_size.min_dimension <= 0:
            raise ValueError(f"Can't calculate a sample size for an unmeasured viewport: {viewport_size}")

        if scaled_image_size.min_dimension <= 0:
            logger.debug("Image size unavailable, using full resolution")
            return cls(1)

        zoom = min(
            viewport_size.width / scaled_image_size.width,
            viewport_size.height / scaled_image_size.height,
        )
        return cls.calculate_for_zoom(zoom)
