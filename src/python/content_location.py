"""
Describes where content sits inside its layout bounds before any zoom is applied.

The gesture engine uses this to work out how far content can be zoomed and
panned. An image displayed with a fit policy, for example, usually occupies
only part of its layout bounds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from enums import ContentLocationKind, ContentScale, LayoutDirection
from geometry import Alignment, Offset, Rect, Size
from scale_math import align, compute_scale_factor


@dataclass(frozen=True)
class ContentLocation:
    """Location of the content inside its layout, in unscaled pixels.

    Use the named constructors instead of instantiating directly.
    """

    kind: ContentLocationKind
    size: Optional[Size] = None

    UNSPECIFIED: ClassVar[ContentLocation]
    SAME_AS_LAYOUT_BOUNDS: ClassVar[ContentLocation]

    @classmethod
    def scaled_inside_and_center_aligned(cls, size: Optional[Size]) -> ContentLocation:
        """Content scaled down to fit its layout (never up) and centered.

        Suitable for images whose intrinsic size is known. Returns UNSPECIFIED
        while the size is unknown or empty.
        """
        if size is None or size.is_empty:
            return cls.UNSPECIFIED
        return cls(ContentLocationKind.SCALED_INSIDE_CENTER, size)

    @classmethod
    def unscaled_and_top_start_aligned(cls, size: Optional[Size]) -> ContentLocation:
        """Content drawn at its own size at the layout's start corner."""
        if size is None or size.is_empty:
            return cls.UNSPECIFIED
        return cls(ContentLocationKind.UNSCALED_TOP_START, size)

    @property
    def is_specified(self) -> bool:
        return self.kind != ContentLocationKind.UNSPECIFIED

    def bounds_in(self, parent: Rect, direction: LayoutDirection) -> Rect:
        """Bounds of the content relative to the top-left of `parent`.

        Raises:
            RuntimeError: If the location is unspecified
        """
        if self.kind == ContentLocationKind.SAME_AS_LAYOUT_BOUNDS:
            return Rect.from_offset_size(Offset.ZERO, parent.size)

        if self.kind == ContentLocationKind.SCALED_INSIDE_CENTER:
            scale = compute_scale_factor(ContentScale.INSIDE, self.size, parent.size)
            scaled_size = self.size * scale
            aligned = align(scaled_size, parent.size, Alignment.CENTER, direction)
            return Rect.from_offset_size(aligned, scaled_size)

        if self.kind == ContentLocationKind.UNSCALED_TOP_START:
            aligned = align(self.size, parent.size, Alignment.TOP_START, direction)
            return Rect.from_offset_size(aligned, self.size)

        raise RuntimeError("Can't compute bounds of an unspecified content location")


ContentLocation.UNSPECIFIED = ContentLocation(ContentLocationKind.UNSPECIFIED)
ContentLocation.SAME_AS_LAYOUT_BOUNDS = ContentLocation(ContentLocationKind.SAME_AS_LAYOUT_BOUNDS)
