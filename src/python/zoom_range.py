"""
ZoomRange: the interval users are allowed to zoom within.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from geometry import ScaleFactor


@dataclass(frozen=True)
class ZoomRange:
    """Allowed zoom interval.

    `min` is relative to the content's base (fit) scale, so a `min` of 1
    means "never smaller than fitted". `max` is an absolute scale factor.
    Both can be 1, which disables user zoom entirely.
    """

    min: float = 1.0
    max: float = 1.0

    DEFAULT: ClassVar[ZoomRange]

    def min_zoom(self, base_zoom_multiplier: ScaleFactor) -> float:
        return self.min * base_zoom_multiplier.max_scale

    def max_zoom(self, base_zoom_multiplier: ScaleFactor) -> float:
        # Max zoom could end up being less than min zoom if the content is
        # scaled up by default, e.g. with ContentScale.CROP.
        return max(self.max, self.min_zoom(base_zoom_multiplier))


ZoomRange.DEFAULT = ZoomRange(min=1.0, max=1.0)
