"""Controllers package for the zoomable viewport.

Controllers own a ZoomableViewportState and translate host events (layout
changes, gesture events, gesture release) into explicit calls on it.

Usage:
    from controllers import ViewportController

    controller = ViewportController()
    controller.set_viewport_bounds(Rect(0, 0, 1080, 1920))
    controller.set_content_layout_bounds(Rect(0, 0, 1080, 1920))
    controller.set_content_alignment(Alignment.CENTER)
    controller.set_content_location(ContentLocation.scaled_inside_and_center_aligned(image_size))

    controller.on_gesture(centroid, pan_delta, zoom_delta)
    controller.on_gesture_end()
    controller.zoom_by(2.0, animate=True)
"""

from controllers.viewport_controller import ViewportController

__all__ = ['ViewportController']
