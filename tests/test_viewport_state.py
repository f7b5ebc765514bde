"""
Unit tests for ZoomableViewportState, the gesture transformation engine.

The `ready_state` fixture shows a 2000x1000 image in a 1000x1000 viewport,
so the fitted content is 1000x500 and centered vertically.
"""
import pytest

from conftest import VIEWPORT, make_ready_state
from content_location import ContentLocation
from enums import ContentScale, LayoutDirection
from geometry import Alignment, Offset, Rect, ScaleFactor, Size
from viewport_state import ZoomableViewportState
from zoom_range import ZoomRange


def screen_position(state, content_point):
    """Where a point in the content's layout ends up on screen."""
    t = state.content_transformation
    return Offset(
        content_point.x * t.scale.scale_x + t.offset.x,
        content_point.y * t.scale.scale_y + t.offset.y,
    )


def content_point_under(state, screen_point):
    t = state.content_transformation
    return Offset(
        (screen_point.x - t.offset.x) / t.scale.scale_x,
        (screen_point.y - t.offset.y) / t.scale.scale_y,
    )


def test_initial_transformation_is_unspecified(clock_factory):
    state = ZoomableViewportState(zoom_range=ZoomRange(max=4.0), clock_factory=clock_factory)
    t = state.content_transformation
    assert not t.is_specified
    assert t.scale == ScaleFactor.ZERO
    assert t.offset == Offset.ZERO
    assert t.centroid is None
    assert state.zoom_fraction is None
    assert not state.is_ready_to_interact


@pytest.mark.parametrize("missing", ["location", "layout", "viewport", "alignment"])
def test_not_ready_until_all_geometry_is_known(clock_factory, missing):
    state = ZoomableViewportState(clock_factory=clock_factory)
    if missing != "location":
        state.set_content_location(ContentLocation.SAME_AS_LAYOUT_BOUNDS)
    if missing != "layout":
        state.content_layout_bounds = VIEWPORT
    if missing != "viewport":
        state.viewport_bounds = VIEWPORT
    if missing != "alignment":
        state.content_alignment = Alignment.CENTER
    assert not state.is_ready_to_interact


def test_gestures_before_ready_are_ignored(clock_factory):
    state = ZoomableViewportState(clock_factory=clock_factory)
    state.on_gesture(centroid=Offset(10, 10), pan_delta=Offset(5, 5), zoom_delta=2.0)
    assert state.gesture_state is None
    assert state.content_transformation.scale == ScaleFactor.ZERO


def test_refresh_before_ready_raises(clock_factory):
    state = ZoomableViewportState(clock_factory=clock_factory)
    with pytest.raises(RuntimeError):
        state.refresh_content_position()


def test_reset_without_geometry_clears_state(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=2.0)
    ready_state.viewport_bounds = Rect.ZERO
    ready_state.reset_content_position()
    assert ready_state.gesture_state is None
    assert not ready_state.content_transformation.is_specified


def test_content_starts_fitted_and_aligned(ready_state):
    t = ready_state.content_transformation
    assert t.is_specified
    assert t.scale == ScaleFactor(1.0, 1.0)
    assert t.offset.x == pytest.approx(0.0)
    assert t.offset.y == pytest.approx(0.0)
    assert t.content_size == Size(1000, 1000)
    assert t.scale_metadata.initial_scale == ScaleFactor(1.0, 1.0)
    assert t.scale_metadata.user_zoom == pytest.approx(1.0)
    assert t.rotation_z == 0.0
    assert ready_state.zoom_fraction == pytest.approx(0.0)


@pytest.mark.parametrize("centroid", [Offset(500, 500), Offset(300, 500), Offset(700, 500)])
def test_pinch_keeps_point_under_centroid_stationary(ready_state, centroid):
    before = content_point_under(ready_state, centroid)
    ready_state.on_gesture(centroid=centroid, pan_delta=Offset.ZERO, zoom_delta=2.0)

    after = screen_position(ready_state, before)
    assert after.x == pytest.approx(centroid.x)
    assert after.y == pytest.approx(centroid.y)
    assert ready_state.content_transformation.scale == ScaleFactor(2.0, 2.0)


def test_pan_moves_content_by_pan_delta(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=2.0)
    old_offset = ready_state.gesture_state.offset
    old_translation = ready_state.content_transformation.offset

    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset(-100, 0), zoom_delta=1.0)

    new_offset = ready_state.gesture_state.offset
    assert new_offset.x - old_offset.x == pytest.approx(100 / 2.0)
    assert new_offset.y == pytest.approx(old_offset.y)
    new_translation = ready_state.content_transformation.offset
    assert new_translation.x - old_translation.x == pytest.approx(-100)


def test_pan_is_clamped_at_content_edges(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=2.0)
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset(1000, 1000), zoom_delta=1.0)

    # Left edge of the 2000px wide content stays pinned to the viewport's left edge
    left_edge = screen_position(ready_state, Offset(0, 250))
    assert left_edge.x == pytest.approx(0.0)
    assert left_edge.y == pytest.approx(0.0)


def test_content_smaller_than_viewport_stays_aligned(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset(0, 200), zoom_delta=1.0)
    top_edge = screen_position(ready_state, Offset(0, 250))
    assert top_edge.y == pytest.approx(250.0)


def test_bottom_alignment_places_small_content_at_the_bottom(clock_factory):
    state = make_ready_state(clock_factory)
    state.content_alignment = Alignment.BOTTOM_CENTER
    state.refresh_content_position()
    bottom_edge = screen_position(state, Offset(0, 750))
    assert bottom_edge.y == pytest.approx(1000.0)


def test_zoom_past_max_is_resisted(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=4.0)
    assert ready_state.gesture_state.zoom.viewport_zoom == pytest.approx(4.0)
    assert ready_state.zoom_fraction == pytest.approx(1.0)

    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=2.0)
    assert ready_state.gesture_state.zoom.viewport_zoom == pytest.approx(4.0 * (1 + 1 / 250))


def test_zoom_below_min_is_resisted(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=0.5)
    assert ready_state.gesture_state.zoom.viewport_zoom == pytest.approx(1 - 0.5 / 500)
    assert ready_state.zoom_fraction == pytest.approx(0.0)


def test_zoom_back_towards_range_is_not_resisted(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=4.0)
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=0.5)
    assert ready_state.gesture_state.zoom.viewport_zoom == pytest.approx(2.0)


def test_repeated_overzoom_stays_below_a_ceiling(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=4.0)
    previous = ready_state.gesture_state.zoom.viewport_zoom
    steps = []
    for _ in range(20):
        ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=1.5)
        current = ready_state.gesture_state.zoom.viewport_zoom
        steps.append(current / previous)
        previous = current

    assert all(step == pytest.approx(1 + 0.5 / 250) for step in steps)
    assert previous < 4.0 * 1.1


def test_default_range_disables_user_zoom(clock_factory):
    state = make_ready_state(clock_factory, zoom_range=ZoomRange.DEFAULT)
    state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=2.0)
    assert state.gesture_state.zoom.viewport_zoom == pytest.approx(1.004)
    assert state.zoom_fraction == 0.0


def test_rotation_is_not_applied(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=1.0, rotation_delta=45.0)
    assert ready_state.content_transformation.rotation_z == 0.0


def test_last_centroid_is_exposed(ready_state):
    ready_state.on_gesture(centroid=Offset(120, 340), pan_delta=Offset.ZERO, zoom_delta=1.5)
    assert ready_state.content_transformation.centroid == Offset(120, 340)


def test_reset_returns_to_fitted_position(ready_state):
    ready_state.on_gesture(centroid=Offset(200, 300), pan_delta=Offset.ZERO, zoom_delta=3.0)
    ready_state.on_gesture(centroid=Offset(200, 300), pan_delta=Offset(-150, 40), zoom_delta=1.0)

    ready_state.reset_content_position()

    t = ready_state.content_transformation
    assert t.scale == ScaleFactor(1.0, 1.0)
    assert t.offset.x == pytest.approx(0.0)
    assert t.offset.y == pytest.approx(0.0)
    assert ready_state.zoom_fraction == pytest.approx(0.0)


def test_refresh_keeps_user_zoom_across_resize(ready_state):
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=2.0)
    ready_state.viewport_bounds = Rect(0, 0, 800, 1000)
    ready_state.refresh_content_position()
    assert ready_state.gesture_state.zoom.viewport_zoom == pytest.approx(2.0)

    # Content is 2000px wide, its right edge can't be left of the narrower viewport's edge
    right_edge = screen_position(ready_state, Offset(1000, 250))
    assert right_edge.x >= 800 - 1e-6


def test_transformation_changed_is_emitted(ready_state):
    emitted = []
    ready_state.transformation_changed.connect(lambda: emitted.append(True))
    ready_state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=1.5)
    assert emitted == [True]


def test_crop_content_is_scaled_up_by_default(clock_factory):
    state = make_ready_state(clock_factory, zoom_range=ZoomRange(max=1.5), content_scale=ContentScale.CROP)
    t = state.content_transformation
    # 1000x500 content cropped into a 1000x1000 layout
    assert t.scale == ScaleFactor(2.0, 2.0)

    # Max zoom resolves to the crop scale instead of clamping below it
    assert state.zoom_range.max_zoom(t.scale_metadata.initial_scale) == pytest.approx(2.0)
    assert state.zoom_fraction == 0.0
    state.on_gesture(centroid=Offset(500, 500), pan_delta=Offset.ZERO, zoom_delta=2.0)
    assert state.gesture_state.zoom.viewport_zoom == pytest.approx(1.004)


def test_rtl_start_alignment_mirrors_small_content(clock_factory):
    state = ZoomableViewportState(
        zoom_range=ZoomRange(max=4.0),
        layout_direction=LayoutDirection.RTL,
        content_scale=ContentScale.NONE,
        clock_factory=clock_factory,
    )
    state.viewport_bounds = VIEWPORT
    state.content_layout_bounds = VIEWPORT
    state.content_alignment = Alignment.TOP_START
    state.set_content_location(ContentLocation.unscaled_and_top_start_aligned(Size(400, 300)))
    state.reset_content_position()

    # Content sits at the right edge of its layout, and small content is aligned to the start (right)
    top_right = screen_position(state, Offset(1000, 0))
    assert top_right.x == pytest.approx(1000.0)
    assert top_right.y == pytest.approx(0.0)


@pytest.mark.parametrize("layout", [Rect(0, 0, 1000, 0), Rect(0, 0, 0, 1000), Rect(0, 500, 1000, 500)])
def test_collapsed_layout_bounds_are_not_ready(clock_factory, layout):
    state = ZoomableViewportState(clock_factory=clock_factory)
    state.viewport_bounds = VIEWPORT
    state.content_layout_bounds = layout
    state.content_alignment = Alignment.CENTER
    state.set_content_location(ContentLocation.SAME_AS_LAYOUT_BOUNDS)
    assert not state.is_ready_to_interact

    state.on_gesture(centroid=Offset.ZERO, pan_delta=Offset(1, 1), zoom_delta=1.0)
    assert state.gesture_state is None


def test_collapsed_viewport_is_not_ready(ready_state):
    ready_state.viewport_bounds = Rect(0, 0, 1000, 0)
    assert not ready_state.is_ready_to_interact
    with pytest.raises(RuntimeError):
        ready_state.refresh_content_position()


def test_initial_placement_snaps_to_whole_pixels(clock_factory):
    # 1002px wide content centered in a 1001px viewport would sit at x=-0.5
    state = ZoomableViewportState(content_scale=ContentScale.NONE, clock_factory=clock_factory)
    state.viewport_bounds = Rect(0, 0, 1001, 1000)
    state.content_layout_bounds = Rect(0, 0, 1002, 1000)
    state.content_alignment = Alignment.CENTER
    state.set_content_location(ContentLocation.SAME_AS_LAYOUT_BOUNDS)
    state.reset_content_position()

    assert state.content_transformation.offset == Offset(0.0, 0.0)


# Zoom and pan from code
# ----------------------

def make_full_screen_state(clock_factory):
    state = ZoomableViewportState(zoom_range=ZoomRange(max=2.0), clock_factory=clock_factory)
    state.viewport_bounds = Rect(0, 0, 1080, 2400)
    state.content_layout_bounds = Rect(0, 0, 1080, 2400)
    state.content_alignment = Alignment.CENTER
    state.set_content_location(ContentLocation.SAME_AS_LAYOUT_BOUNDS)
    state.reset_content_position()
    return state


def assert_transformation(state, scale, offset):
    t = state.content_transformation
    assert t.scale.scale_x == pytest.approx(scale)
    assert t.scale.scale_y == pytest.approx(scale)
    assert t.offset.x == pytest.approx(offset.x, abs=1e-3)
    assert t.offset.y == pytest.approx(offset.y, abs=1e-3)


def test_zoom_and_pan_from_code(clock_factory):
    state = make_full_screen_state(clock_factory)

    assert state.zoom_by(1.3) is None
    # Zoomed around the viewport's center
    assert_transformation(state, 1.3, Offset(-162.0, -360.0))

    assert state.pan_by(Offset(100, 150)) is None
    assert_transformation(state, 1.3, Offset(-62.0, -210.0))


def test_animated_zoom_and_pan_from_code(clock_factory, frame_clocks):
    state = make_full_screen_state(clock_factory)

    job = state.zoom_by(1.3, animate=True)
    assert job.is_active
    assert state.is_animating
    assert not state.is_settling
    frame_clocks[-1].run_to_completion()
    assert not job.is_active
    assert_transformation(state, 1.3, Offset(-162.0, -360.0))

    job = state.pan_by(Offset(100, 150), animate=True)
    frame_clocks[-1].advance()
    # Partway through
    assert -162.0 < state.content_transformation.offset.x < -62.0
    frame_clocks[-1].run_to_completion()
    assert_transformation(state, 1.3, Offset(-62.0, -210.0))


def test_zoom_from_code_around_a_centroid(ready_state):
    before = content_point_under(ready_state, Offset(200, 500))
    ready_state.zoom_by(2.0, centroid=Offset(200, 500))
    after = screen_position(ready_state, before)
    assert after.x == pytest.approx(200)
    assert after.y == pytest.approx(500)


def test_pan_from_code_is_clamped(ready_state):
    ready_state.pan_by(Offset(300, 0))
    assert ready_state.content_transformation.offset.x == pytest.approx(0.0)


def test_gesture_cancels_animated_zoom(clock_factory, frame_clocks):
    state = make_full_screen_state(clock_factory)
    job = state.zoom_by(1.5, animate=True)
    frame_clocks[-1].advance(0.02)

    state.on_gesture(centroid=Offset(540, 1200), pan_delta=Offset.ZERO, zoom_delta=1.0)

    assert job.is_cancelled
    assert not state.is_animating
    assert 1.0 < state.gesture_state.zoom.viewport_zoom < 1.5


def test_zoom_from_code_before_ready_is_ignored(clock_factory):
    state = ZoomableViewportState(clock_factory=clock_factory)
    assert state.zoom_by(2.0, animate=True) is None
    assert state.pan_by(Offset(10, 10)) is None
    assert state.gesture_state is None
