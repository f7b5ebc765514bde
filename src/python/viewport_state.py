"""
ZoomableViewportState: turns gesture deltas and layout geometry into a content transformation.

The state keeps the last committed gesture state (offset, zoom, centroid) and
derives the public ContentTransformation from it on every read. Geometry is
owned by the host and must be kept current through the setters. The host is
also responsible for calling refresh_content_position() when geometry changes
and reset_content_position() when the content itself changes (see
controllers.viewport_controller).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from config_manager import config
from content_location import ContentLocation
from content_transformation import ContentTransformation, ScaleMetadata
from content_zoom import ContentZoom
from custom_types import FrameClockFactory
from enums import ContentScale, LayoutDirection
from geometry import Alignment, Offset, Rect, ScaleFactor
from scale_math import align, compute_scale_factor, top_left_coerced_inside, with_zoom_and_translate
from settle_animator import GestureAnimationJob, SettleAnimator, SettleJob, SpringSpec
from zoom_range import ZoomRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GestureState:
    """Result of the last applied gesture.

    Attributes:
        offset: Content space offset, displayed as (-offset * zoom)
        zoom: Zoom applied to content
        last_centroid: Centroid of the gesture that produced this state
    """
    offset: Offset
    zoom: ContentZoom
    last_centroid: Offset


def _div(offset: Offset, zoom: ContentZoom) -> Offset:
    return offset / zoom.final_zoom().max_scale


class ZoomableViewportState(QObject):
    """Gesture transformation engine for one piece of zoomable content."""

    transformation_changed = pyqtSignal()

    def __init__(
        self,
        zoom_range: Optional[ZoomRange] = None,
        layout_direction: LayoutDirection = LayoutDirection.LTR,
        content_scale: ContentScale = ContentScale.FIT,
        clock_factory: Optional[FrameClockFactory] = None,
        spring_spec: Optional[SpringSpec] = None,
    ) -> None:
        """Initialize the viewport state.

        Args:
            zoom_range: Allowed zoom range (defaults to the "zoom" config section)
            layout_direction: Reading direction of the host layout
            content_scale: Policy used to fit content into its layout bounds
            clock_factory: Creates frame clocks for settle animations
            spring_spec: Spring used by settle animations (defaults to the "settle" config section)
        """
        super().__init__()
        if zoom_range is None:
            zoom_config = config.get_zoom_config()
            zoom_range = ZoomRange(
                min=float(zoom_config["minZoomFactor"]),
                max=float(zoom_config["maxZoomFactor"]),
            )
        gesture_config = config.get_gesture_config()

        self.zoom_range = zoom_range
        self.layout_direction = layout_direction
        self.content_scale = content_scale
        self.overzoom_resistance = float(gesture_config["overzoomResistance"])
        self.underzoom_resistance = float(gesture_config["underzoomResistance"])

        # Alignment has no sensible default: content can't be placed until the host sets it
        self.content_alignment: Optional[Alignment] = None
        self.unscaled_content_location = ContentLocation.UNSPECIFIED
        # Bounds of the content's layout, without any zoom applied
        self.content_layout_bounds = Rect.ZERO
        self.viewport_bounds = Rect.ZERO

        self._gesture_state: Optional[GestureState] = None
        self._settle_animator = SettleAnimator(self, clock_factory=clock_factory, spring_spec=spring_spec)

    @property
    def gesture_state(self) -> Optional[GestureState]:
        """Last committed gesture state, None until the first gesture is applied."""
        return self._gesture_state

    @property
    def is_ready_to_interact(self) -> bool:
        return (
            self.unscaled_content_location.is_specified
            and not self.content_layout_bounds.is_empty
            and not self.viewport_bounds.is_empty
            and self.content_alignment is not None
        )

    @property
    def is_settling(self) -> bool:
        return self._settle_animator.is_settling

    @property
    def is_animating(self) -> bool:
        """True while a settle or an animated zoom_by()/pan_by() is running."""
        return self._settle_animator.is_animating

    @property
    def content_transformation(self) -> ContentTransformation:
        """Transformation the renderer should apply to the content."""
        state = self._gesture_state
        if state is None:
            return ContentTransformation.unspecified()

        final_zoom = state.zoom.final_zoom()
        return ContentTransformation(
            is_specified=True,
            scale=final_zoom,
            offset=-state.offset * final_zoom.max_scale,
            rotation_z=0.0,
            centroid=state.last_centroid,
            content_size=self.content_layout_bounds.size,
            scale_metadata=ScaleMetadata(
                initial_scale=state.zoom.base_zoom_multiplier,
                user_zoom=state.zoom.viewport_zoom,
            ),
        )

    @property
    def zoom_fraction(self) -> Optional[float]:
        """How far the content is zoomed between its min (0.0) and max (1.0) zoom.

        None until the first gesture state exists.
        """
        state = self._gesture_state
        if state is None:
            return None

        base = state.zoom.base_zoom_multiplier
        min_zoom = self.zoom_range.min_zoom(base)
        max_zoom = self.zoom_range.max_zoom(base)
        if max_zoom == min_zoom:
            return 0.0
        current = state.zoom.final_zoom().max_scale
        return min(max((current - min_zoom) / (max_zoom - min_zoom), 0.0), 1.0)

    def set_content_location(self, location: ContentLocation) -> None:
        """Update where the content sits inside its layout bounds.

        This does not reset the content position by itself. Whoever owns this
        state should call reset_content_position() once it sees the change.
        """
        self.unscaled_content_location = location

    def on_gesture(
        self,
        centroid: Offset,
        pan_delta: Offset,
        zoom_delta: float,
        rotation_delta: float = 0.0,
        cancel_ongoing_settle: bool = True,
    ) -> None:
        """Apply one gesture delta and commit the resulting gesture state.

        Args:
            centroid: Pivot of the gesture in viewport coordinates
            pan_delta: Distance panned since the previous event, in viewport pixels
            zoom_delta: Zoom multiplier since the previous event
            rotation_delta: Rotation since the previous event. Not applied to content
            cancel_ongoing_settle: Whether a running settle animation should be stopped
        """
        if cancel_ongoing_settle:
            self._settle_animator.cancel()

        if not self.is_ready_to_interact:
            # Gestures are detected before layout completes, but can't have an effect yet
            logger.debug("Ignoring gesture, viewport isn't ready to interact")
            return

        if rotation_delta:
            logger.debug("Ignoring rotation delta %.3f", rotation_delta)

        unscaled_content_bounds = self.unscaled_content_location.bounds_in(
            parent=self.content_layout_bounds,
            direction=self.layout_direction,
        )

        # Minimum scale needed to position the content within
        # its viewport with respect to its content scale.
        base_zoom_multiplier = compute_scale_factor(
            self.content_scale,
            src=unscaled_content_bounds.size,
            dst=self.content_layout_bounds.size,
        )

        old_state = self._gesture_state
        if old_state is not None:
            old_zoom = old_state.zoom
        else:
            old_zoom = ContentZoom(base_zoom_multiplier=base_zoom_multiplier, viewport_zoom=1.0)

        zoom_delta = self._apply_elasticity(zoom_delta, old_zoom, base_zoom_multiplier)
        new_zoom = ContentZoom(
            base_zoom_multiplier=base_zoom_multiplier,
            viewport_zoom=old_zoom.viewport_zoom * zoom_delta,
        )

        if old_state is not None:
            old_offset = old_state.offset
        else:
            # Initial placement snaps to whole pixels
            aligned = align(
                size=(unscaled_content_bounds.size * base_zoom_multiplier).rounded(),
                space=self.viewport_bounds.size.rounded(),
                alignment=self.content_alignment,
                direction=self.layout_direction,
            ).rounded()
            old_offset = _div(-aligned, old_zoom)

        # The centroid is the fixed point of the zoom: find where it sits in
        # content space before and after this delta, then offset the content
        # so it stays under the user's fingers. The pan is applied on top.
        new_offset = (old_offset + _div(centroid, old_zoom)) - (_div(centroid, new_zoom) + _div(pan_delta, old_zoom))

        self._gesture_state = GestureState(
            offset=self._coerce_offset(new_offset, new_zoom, unscaled_content_bounds),
            zoom=new_zoom,
            last_centroid=centroid,
        )
        self.transformation_changed.emit()

    def _apply_elasticity(self, zoom_delta: float, old_zoom: ContentZoom, base_zoom_multiplier: ScaleFactor) -> float:
        """Dampen zoom deltas that push further past a zoom limit."""
        current = old_zoom.final_zoom().max_scale
        is_at_min_zoom = current <= self.zoom_range.min_zoom(base_zoom_multiplier)
        is_at_max_zoom = current >= self.zoom_range.max_zoom(base_zoom_multiplier)

        if is_at_max_zoom and zoom_delta > 1.0:
            return 1.0 + (zoom_delta - 1.0) / self.overzoom_resistance
        if is_at_min_zoom and zoom_delta < 1.0:
            return 1.0 - (1.0 - zoom_delta) / self.underzoom_resistance
        return zoom_delta

    def _coerce_offset(self, offset: Offset, zoom: ContentZoom, unscaled_content_bounds: Rect) -> Offset:
        """Keep the content's draw region within the viewport."""
        final_zoom = zoom.final_zoom()
        # The draw region can be smaller than the layout bounds: a 16:9 image
        # fitted into a 1:2 layout leaves empty space above and below it.
        draw_region_offset = self.content_layout_bounds.top_left + (unscaled_content_bounds.top_left * final_zoom)
        draw_region_size = unscaled_content_bounds.size * final_zoom

        def coerce(top_left: Offset) -> Offset:
            expected_draw_region = Rect.from_offset_size(top_left, draw_region_size)
            return top_left_coerced_inside(
                expected_draw_region,
                self.viewport_bounds,
                self.content_alignment,
                self.layout_direction,
            )

        # (-offset * zoom) is the translation used for displaying the content
        return with_zoom_and_translate(offset, zoom=-final_zoom, translate=draw_region_offset, action=coerce)

    def refresh_content_position(self) -> None:
        """Re-apply the current state against the latest geometry.

        Call whenever the viewport, layout bounds or content placement change.

        Raises:
            RuntimeError: If the state isn't ready to interact yet
        """
        if not self.is_ready_to_interact:
            raise RuntimeError("Content position can't be refreshed before the viewport is ready to interact")
        self.on_gesture(
            centroid=Offset.ZERO,
            pan_delta=Offset.ZERO,
            zoom_delta=1.0,
        )

    def reset_content_position(self) -> None:
        """Discard all gestures so the content returns to its default position."""
        logger.debug("Resetting content position")
        self._settle_animator.cancel()
        self._gesture_state = None
        if self.is_ready_to_interact:
            self.refresh_content_position()
        else:
            self.transformation_changed.emit()

    def zoom_by(
        self,
        zoom_factor: float,
        centroid: Optional[Offset] = None,
        animate: bool = False,
    ) -> Optional[GestureAnimationJob]:
        """Zoom from code, as if the user pinched around `centroid`.

        Args:
            zoom_factor: Multiplier applied to the current zoom
            centroid: Pivot in viewport coordinates, defaults to the viewport's center
            animate: Spread the zoom over several frames using the settle spring

        Returns:
            GestureAnimationJob: The running animation if `animate`, otherwise None
        """
        if centroid is None:
            centroid = self.viewport_bounds.center
        return self._gesture_from_code(centroid, Offset.ZERO, zoom_factor, animate)

    def pan_by(self, offset: Offset, animate: bool = False) -> Optional[GestureAnimationJob]:
        """Pan from code. The content moves by `offset` viewport pixels, within the usual limits."""
        return self._gesture_from_code(self.viewport_bounds.center, offset, 1.0, animate)

    def _gesture_from_code(
        self,
        centroid: Offset,
        pan_delta: Offset,
        zoom_delta: float,
        animate: bool,
    ) -> Optional[GestureAnimationJob]:
        if not self.is_ready_to_interact:
            logger.debug("Ignoring zoom/pan from code, viewport isn't ready to interact")
            return None
        if animate:
            return self._settle_animator.animate_gesture(centroid, pan_delta, zoom_delta)
        self.on_gesture(centroid=centroid, pan_delta=pan_delta, zoom_delta=zoom_delta)
        return None

    def settle(self) -> SettleJob:
        """Animate an out-of-range zoom back into range. Call when a gesture ends."""
        return self._settle_animator.settle()

    def cancel_settle(self) -> None:
        self._settle_animator.cancel()
