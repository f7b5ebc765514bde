"""
Type definitions for the zoomable viewport.

This module defines common types, aliases, and TypedDict structures
used throughout the viewport codebase.
"""

from typing import Callable, Protocol, TypedDict

import numpy as np
import numpy.typing as npt

# NumPy array type aliases
SpringStateArray = npt.NDArray[np.float64]  # [displacement, velocity] of a spring


# Configuration TypedDict definitions
class ZoomConfig(TypedDict, total=False):
    """Zoom limits configuration."""
    minZoomFactor: float
    maxZoomFactor: float


class GestureConfig(TypedDict, total=False):
    """Elastic gesture configuration."""
    overzoomResistance: float
    underzoomResistance: float


class SettleConfig(TypedDict, total=False):
    """Settle animation configuration."""
    stiffness: float
    dampingRatio: float
    visibilityThreshold: float
    frameIntervalMs: int


# Callback type aliases
FrameCallback = Callable[[float], None]  # Receives seconds elapsed since the clock started


# Protocol definitions
class FrameClockProtocol(Protocol):
    """Protocol for sources of animation frames."""

    def start(self, on_frame: FrameCallback) -> None:
        """Start delivering frames to `on_frame` until stopped."""
        ...

    def stop(self) -> None:
        """Stop delivering frames. Must be safe to call more than once."""
        ...


FrameClockFactory = Callable[[], FrameClockProtocol]
