"""
Enumerations for the zoomable viewport using Python 3.11+ StrEnum.

This module defines string-based enumerations for the layout policies the
gesture engine reads from its host, so they can be stored in config.json
and compared against plain strings.
"""

from enum import StrEnum


class ContentScale(StrEnum):
    """Policies for fitting content into its layout bounds.

    Attributes:
        FIT: Scale uniformly so the content fits entirely inside the bounds
        CROP: Scale uniformly so the content covers the bounds completely
        FILL_BOUNDS: Scale each axis independently to match the bounds exactly
        FILL_WIDTH: Scale uniformly so the widths match
        FILL_HEIGHT: Scale uniformly so the heights match
        INSIDE: Like FIT, but never scale content up
        NONE: Leave the content unscaled
    """
    FIT = "fit"
    CROP = "crop"
    FILL_BOUNDS = "fill-bounds"
    FILL_WIDTH = "fill-width"
    FILL_HEIGHT = "fill-height"
    INSIDE = "inside"
    NONE = "none"


class LayoutDirection(StrEnum):
    """Reading direction of the host layout.

    Attributes:
        LTR: Left to right, start edge is on the left
        RTL: Right to left, start edge is on the right
    """
    LTR = "ltr"
    RTL = "rtl"


class ContentLocationKind(StrEnum):
    """How content is placed inside its layout bounds.

    Attributes:
        UNSPECIFIED: Placement not known yet, content can't be interacted with
        SAME_AS_LAYOUT_BOUNDS: Content fills its layout bounds exactly
        SCALED_INSIDE_CENTER: Content scaled down to fit and centered
        UNSCALED_TOP_START: Content drawn at its own size at the start corner
    """
    UNSPECIFIED = "unspecified"
    SAME_AS_LAYOUT_BOUNDS = "same-as-layout-bounds"
    SCALED_INSIDE_CENTER = "scaled-inside-center"
    UNSCALED_TOP_START = "unscaled-top-start"
