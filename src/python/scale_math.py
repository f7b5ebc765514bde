"""
Pure scale and placement helpers - no state, no side effects.
"""

from typing import Callable

from enums import ContentScale, LayoutDirection
from geometry import Alignment, Offset, Rect, ScaleFactor, Size


def align(size: Size, space: Size, alignment: Alignment, direction: LayoutDirection) -> Offset:
    """Compute the top-left position of a box of `size` placed inside `space`.

    Args:
        size: Size of the box being placed
        space: Size of the space the box is placed in
        alignment: Bias alignment to honor
        direction: Layout direction, mirrors the horizontal bias for RTL

    Returns:
        Offset: Top-left of the box relative to the top-left of `space`
    """
    center_x = (space.width - size.width) / 2.0
    center_y = (space.height - size.height) / 2.0
    horizontal_bias = alignment.horizontal_bias
    if direction == LayoutDirection.RTL:
        horizontal_bias = -horizontal_bias
    return Offset(
        x=center_x * (1 + horizontal_bias),
        y=center_y * (1 + alignment.vertical_bias),
    )


def top_left_coerced_inside(
    rect: Rect,
    bounds: Rect,
    alignment: Alignment,
    direction: LayoutDirection,
) -> Offset:
    """Clamp the top-left of `rect` so that it stays within `bounds`.

    On an axis where `rect` is at least as large as `bounds`, the leading edge
    is clamped so no empty space shows. On an axis where it is smaller, the
    aligned position is used instead of pinning it to an edge.
    """
    aligned = bounds.top_left + align(rect.size, bounds.size, alignment, direction)

    if rect.width >= bounds.width:
        x = min(max(rect.left, bounds.right - rect.width), bounds.left)
    else:
        x = aligned.x

    if rect.height >= bounds.height:
        y = min(max(rect.top, bounds.bottom - rect.height), bounds.top)
    else:
        y = aligned.y

    return Offset(x, y)


def compute_scale_factor(content_scale: ContentScale, src: Size, dst: Size) -> ScaleFactor:
    """Scale factor that fits `src` into `dst` per the content-fit policy.

    Content with no area can't be scaled to anything, ScaleFactor.ZERO is
    returned for it.
    """
    if src.is_empty:
        return ScaleFactor.ZERO

    width_ratio = dst.width / src.width
    height_ratio = dst.height / src.height

    if content_scale == ContentScale.FIT:
        scale = min(width_ratio, height_ratio)
    elif content_scale == ContentScale.CROP:
        scale = max(width_ratio, height_ratio)
    elif content_scale == ContentScale.FILL_WIDTH:
        scale = width_ratio
    elif content_scale == ContentScale.FILL_HEIGHT:
        scale = height_ratio
    elif content_scale == ContentScale.FILL_BOUNDS:
        return ScaleFactor(width_ratio, height_ratio)
    elif content_scale == ContentScale.INSIDE:
        if src.width <= dst.width and src.height <= dst.height:
            scale = 1.0
        else:
            scale = min(width_ratio, height_ratio)
    elif content_scale == ContentScale.NONE:
        scale = 1.0
    else:
        raise ValueError(f"Unknown content scale: {content_scale}")

    return ScaleFactor(scale, scale)


def with_zoom_and_translate(
    offset: Offset,
    zoom: ScaleFactor,
    translate: Offset,
    action: Callable[[Offset], Offset],
) -> Offset:
    """Run `action` on `offset` mapped through a zoom and translation, then map back.

    Named along the lines of a canvas's `with_translate()`.
    """
    return (action((offset * zoom) + translate) - translate) / zoom
