"""
ContentZoom: composes the base fit scale with the user's viewport zoom.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from geometry import ScaleFactor
from zoom_range import ZoomRange


@dataclass(frozen=True)
class ContentZoom:
    """Zoom applied to content.

    `base_zoom_multiplier` is the scale needed to fit content into its layout
    per the content-fit policy. `viewport_zoom` is the multiplier added by
    pinch gestures on top of that. Keeping them apart lets the fit scale
    change (layout resize, new content) without losing the user's zoom.
    """

    base_zoom_multiplier: ScaleFactor
    viewport_zoom: float

    def final_zoom(self) -> ScaleFactor:
        return self.base_zoom_multiplier * self.viewport_zoom

    def coerced_in(self, limits: ZoomRange) -> ContentZoom:
        """Copy of this zoom with `viewport_zoom` clamped into `limits`."""
        base_max = self.base_zoom_multiplier.max_scale
        minimum = limits.min_zoom(self.base_zoom_multiplier) / base_max
        maximum = limits.max_zoom(self.base_zoom_multiplier) / base_max
        return replace(self, viewport_zoom=min(max(self.viewport_zoom, minimum), maximum))
