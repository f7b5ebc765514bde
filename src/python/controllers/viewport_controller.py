"""Viewport controller: keeps a ZoomableViewportState in sync with its host layout."""

from typing import Any, Optional
from PyQt6.QtCore import QObject, pyqtSignal
from content_location import ContentLocation
from content_transformation import ContentTransformation
from enums import ContentScale, LayoutDirection
from geometry import Alignment, Offset, Rect
from settle_animator import GestureAnimationJob, SettleJob
from viewport_state import ZoomableViewportState
from zoom_range import ZoomRange
import logging

logger = logging.getLogger(__name__)


class ViewportController(QObject):
    """Feeds layout changes and gestures into a ZoomableViewportState.

    The state never watches its inputs. This controller refreshes the content
    position whenever a geometry input changes and resets it when the
    content location changes, so the transformation stays valid without user
    input.
    """

    transformation_changed = pyqtSignal()
    settle_finished = pyqtSignal(bool)

    def __init__(self, state: Optional[ZoomableViewportState] = None) -> None:
        """Initialize ViewportController.

        Args:
            state: State to drive. A state configured from config.json is created if None
        """
        super().__init__()
        self.state = state if state is not None else ZoomableViewportState()
        self.state.transformation_changed.connect(self.transformation_changed)
        self._was_ready = self.state.is_ready_to_interact

    @property
    def content_transformation(self) -> ContentTransformation:
        return self.state.content_transformation

    @property
    def zoom_fraction(self) -> Optional[float]:
        return self.state.zoom_fraction

    def set_viewport_bounds(self, bounds: Rect) -> None:
        self._update("viewport_bounds", bounds)

    def set_content_layout_bounds(self, bounds: Rect) -> None:
        self._update("content_layout_bounds", bounds)

    def set_content_alignment(self, alignment: Alignment) -> None:
        self._update("content_alignment", alignment)

    def set_content_scale(self, content_scale: ContentScale) -> None:
        self._update("content_scale", content_scale)

    def set_layout_direction(self, direction: LayoutDirection) -> None:
        self._update("layout_direction", direction)

    def set_max_zoom_factor(self, max_zoom_factor: float) -> None:
        """Change the maximum zoom, keeping the configured minimum."""
        self._update("zoom_range", ZoomRange(min=self.state.zoom_range.min, max=max_zoom_factor))

    def set_content_location(self, location: ContentLocation) -> None:
        """Update the content location. A new location resets the content to its default position."""
        if location == self.state.unscaled_content_location:
            return
        self.state.set_content_location(location)

        if self._check_became_ready():
            return
        if self.state.is_ready_to_interact:
            # Content was changed. Reset everything so
            # that it is moved to its default position.
            logger.debug("Content location changed to %s, resetting position", location)
            self.state.reset_content_position()

    def on_gesture(
        self,
        centroid: Offset,
        pan_delta: Offset,
        zoom_delta: float,
        rotation_delta: float = 0.0,
    ) -> None:
        """Forward a gesture event from the host's gesture detector."""
        self.state.on_gesture(
            centroid=centroid,
            pan_delta=pan_delta,
            zoom_delta=zoom_delta,
            rotation_delta=rotation_delta,
        )

    def zoom_by(
        self,
        zoom_factor: float,
        centroid: Optional[Offset] = None,
        animate: bool = False,
    ) -> Optional[GestureAnimationJob]:
        """Zoom from code, e.g. for zoom buttons or double-tap handling."""
        return self.state.zoom_by(zoom_factor, centroid=centroid, animate=animate)

    def pan_by(self, offset: Offset, animate: bool = False) -> Optional[GestureAnimationJob]:
        return self.state.pan_by(offset, animate=animate)

    def on_gesture_end(self) -> SettleJob:
        """Settle the zoom back into range once the user lifts their fingers."""
        job = self.state.settle()
        if job.is_active:
            job.finished.connect(self.settle_finished)
        else:
            # Nothing was out of range
            self.settle_finished.emit(job.is_cancelled)
        return job

    def _update(self, attribute: str, value: Any) -> None:
        if getattr(self.state, attribute) == value:
            return
        setattr(self.state, attribute, value)

        if self._check_became_ready():
            return
        if self.state.is_ready_to_interact:
            self.state.refresh_content_position()

    def _check_became_ready(self) -> bool:
        """Place content at its default position the first time the state becomes ready.

        Returns:
            bool: True if the state just became ready and was reset
        """
        is_ready = self.state.is_ready_to_interact
        became_ready = is_ready and not self._was_ready
        self._was_ready = is_ready
        if became_ready:
            logger.debug("Viewport is ready to interact")
            self.state.reset_content_position()
        return became_ready
