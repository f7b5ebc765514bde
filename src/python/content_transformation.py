"""
ContentTransformation: the public, derived transformation a renderer applies to content.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from geometry import Offset, ScaleFactor, Size


@dataclass(frozen=True)
class ScaleMetadata:
    """Breakdown of `ContentTransformation.scale`.

    Attributes:
        initial_scale: Scale applied by the content-fit policy
        user_zoom: Multiplier applied by gestures on top of `initial_scale`
    """
    initial_scale: ScaleFactor
    user_zoom: float


@dataclass(frozen=True)
class ContentTransformation:
    """Transformation to apply to content, with its origin at the layout's top-left.

    Attributes:
        is_specified: False until the first gesture state exists. Content
            should stay hidden until then, which the zero scale does
        scale: Final scale factor
        offset: Translation in viewport pixels
        rotation_z: Rotation in degrees
        centroid: Centroid of the last gesture, if any
        content_size: Size of the content's layout bounds
        scale_metadata: How `scale` was composed
    """
    is_specified: bool
    scale: ScaleFactor
    offset: Offset
    rotation_z: float = 0.0
    centroid: Optional[Offset] = None
    content_size: Size = Size.ZERO
    scale_metadata: ScaleMetadata = field(
        default_factory=lambda: ScaleMetadata(initial_scale=ScaleFactor.ZERO, user_zoom=0.0)
    )

    @classmethod
    def unspecified(cls) -> ContentTransformation:
        """Hide content until an initial zoom value is calculated."""
        return cls(is_specified=False, scale=ScaleFactor.ZERO, offset=Offset.ZERO)
