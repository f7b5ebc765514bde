"""
Geometry value types for the zoomable viewport.

All types are immutable. Arithmetic follows the conventions of a 2D graphics
toolkit: offsets can be scaled by a scalar or component-wise by a ScaleFactor.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Union


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


@dataclass(frozen=True)
class ScaleFactor:
    """Horizontal and vertical scale applied to content."""

    scale_x: float
    scale_y: float

    ZERO: ClassVar[ScaleFactor]
    IDENTITY: ClassVar[ScaleFactor]

    @property
    def max_scale(self) -> float:
        """Larger of the two axes, used wherever zoom is reduced to a scalar."""
        return max(self.scale_x, self.scale_y)

    def __mul__(self, other: Union[float, ScaleFactor]) -> ScaleFactor:
        if isinstance(other, ScaleFactor):
            return ScaleFactor(self.scale_x * other.scale_x, self.scale_y * other.scale_y)
        return ScaleFactor(self.scale_x * other, self.scale_y * other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[float, ScaleFactor]) -> ScaleFactor:
        if isinstance(other, ScaleFactor):
            return ScaleFactor(self.scale_x / other.scale_x, self.scale_y / other.scale_y)
        return ScaleFactor(self.scale_x / other, self.scale_y / other)

    def __neg__(self) -> ScaleFactor:
        return ScaleFactor(-self.scale_x, -self.scale_y)


ScaleFactor.ZERO = ScaleFactor(0.0, 0.0)
ScaleFactor.IDENTITY = ScaleFactor(1.0, 1.0)


@dataclass(frozen=True)
class Offset:
    """A 2D vector. Which coordinate space it lives in is up to the caller."""

    x: float
    y: float

    ZERO: ClassVar[Offset]

    def __add__(self, other: Offset) -> Offset:
        return Offset(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Offset) -> Offset:
        return Offset(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Offset:
        return Offset(-self.x, -self.y)

    def __mul__(self, other: Union[float, ScaleFactor]) -> Offset:
        if isinstance(other, ScaleFactor):
            return Offset(self.x * other.scale_x, self.y * other.scale_y)
        return Offset(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[float, ScaleFactor]) -> Offset:
        if isinstance(other, ScaleFactor):
            return Offset(self.x / other.scale_x, self.y / other.scale_y)
        return Offset(self.x / other, self.y / other)

    def rounded(self) -> Offset:
        """Snap to whole pixels, rounding halves up."""
        return Offset(_round_half_up(self.x), _round_half_up(self.y))


Offset.ZERO = Offset(0.0, 0.0)


@dataclass(frozen=True)
class Size:
    """Width and height in pixels."""

    width: float
    height: float

    ZERO: ClassVar[Size]

    @property
    def min_dimension(self) -> float:
        return min(self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def rounded(self) -> Size:
        return Size(_round_half_up(self.width), _round_half_up(self.height))

    def __mul__(self, other: Union[float, ScaleFactor]) -> Size:
        if isinstance(other, ScaleFactor):
            return Size(self.width * other.scale_x, self.height * other.scale_y)
        return Size(self.width * other, self.height * other)

    __rmul__ = __mul__


Size.ZERO = Size(0.0, 0.0)


@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle given by its edges."""

    left: float
    top: float
    right: float
    bottom: float

    ZERO: ClassVar[Rect]

    @classmethod
    def from_offset_size(cls, offset: Offset, size: Size) -> Rect:
        return cls(offset.x, offset.y, offset.x + size.width, offset.y + size.height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def top_left(self) -> Offset:
        return Offset(self.left, self.top)

    @property
    def center(self) -> Offset:
        return Offset((self.left + self.right) / 2.0, (self.top + self.bottom) / 2.0)

    @property
    def is_empty(self) -> bool:
        return self.left >= self.right or self.top >= self.bottom


Rect.ZERO = Rect(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Alignment:
    """Bias based alignment of a box inside a larger space.

    A bias of -1 places the box at the start edge, 0 centers it and 1 places
    it at the end edge. The horizontal bias is mirrored for right-to-left
    layouts.
    """

    horizontal_bias: float
    vertical_bias: float

    TOP_START: ClassVar[Alignment]
    TOP_CENTER: ClassVar[Alignment]
    TOP_END: ClassVar[Alignment]
    CENTER_START: ClassVar[Alignment]
    CENTER: ClassVar[Alignment]
    CENTER_END: ClassVar[Alignment]
    BOTTOM_START: ClassVar[Alignment]
    BOTTOM_CENTER: ClassVar[Alignment]
    BOTTOM_END: ClassVar[Alignment]


Alignment.TOP_START = Alignment(-1.0, -1.0)
Alignment.TOP_CENTER = Alignment(0.0, -1.0)
Alignment.TOP_END = Alignment(1.0, -1.0)
Alignment.CENTER_START = Alignment(-1.0, 0.0)
Alignment.CENTER = Alignment(0.0, 0.0)
Alignment.CENTER_END = Alignment(1.0, 0.0)
Alignment.BOTTOM_START = Alignment(-1.0, 1.0)
Alignment.BOTTOM_CENTER = Alignment(0.0, 1.0)
Alignment.BOTTOM_END = Alignment(1.0, 1.0)
