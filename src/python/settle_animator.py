"""
Spring animations of a viewport state: settling an overshot zoom, and zooms or pans requested from code.

After a gesture ends, the viewport zoom may sit outside its allowed range
because of rubber-banding. SettleAnimator drives a spring from 0 to 1 and, on
every frame, re-applies the gesture engine with a synthetic zoom delta so the
zoom ends up at the nearest in-range value. Zooms and pans requested from
code are spread over frames the same way. Frames come from a frame clock,
which by default is a QTimer on the Qt event loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np
from PyQt6.QtCore import QElapsedTimer, QObject, QTimer, pyqtSignal

from config_manager import config
from custom_types import FrameCallback, FrameClockFactory, FrameClockProtocol, SettleConfig, SpringStateArray
from error_handler import ErrorHandler
from geometry import Offset

if TYPE_CHECKING:
    from viewport_state import GestureState, ZoomableViewportState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpringSpec:
    """Physical parameters of a spring with unit mass."""
    damping_ratio: float = 1.0
    stiffness: float = 1500.0
    visibility_threshold: float = 0.01

    @classmethod
    def from_config(cls, settle_config: SettleConfig) -> SpringSpec:
        return cls(
            damping_ratio=float(settle_config.get("dampingRatio", cls.damping_ratio)),
            stiffness=float(settle_config.get("stiffness", cls.stiffness)),
            visibility_threshold=float(settle_config.get("visibilityThreshold", cls.visibility_threshold)),
        )


class SpringAnimation:
    """Closed-form damped spring moving a value from `start` to `target`.

    There is no fixed duration: the animation is finished once both the
    distance to the target and the velocity drop below the visibility
    threshold.
    """

    def __init__(self, start: float, target: float, spec: SpringSpec, initial_velocity: float = 0.0) -> None:
        if spec.stiffness <= 0 or spec.damping_ratio <= 0:
            raise ValueError(f"Spring stiffness and damping ratio must be positive: {spec}")
        self.start = float(start)
        self.target = float(target)
        self.spec = spec
        self.initial_velocity = float(initial_velocity)
        self._natural_freq = np.sqrt(spec.stiffness)

    def state_at(self, elapsed: float) -> SpringStateArray:
        """Value and velocity of the spring `elapsed` seconds after it started.

        Returns:
            np.ndarray: [value, velocity]
        """
        t = max(0.0, float(elapsed))
        x0 = self.start - self.target
        v0 = self.initial_velocity
        omega = self._natural_freq
        zeta = self.spec.damping_ratio

        if zeta == 1.0:
            # Critically damped
            c2 = v0 + omega * x0
            decay = np.exp(-omega * t)
            displacement = (x0 + c2 * t) * decay
            velocity = (v0 - omega * c2 * t) * decay
        elif zeta < 1.0:
            # Under damped
            damped_freq = omega * np.sqrt(1.0 - zeta * zeta)
            a = x0
            b = (v0 + zeta * omega * x0) / damped_freq
            decay = np.exp(-zeta * omega * t)
            cos_t = np.cos(damped_freq * t)
            sin_t = np.sin(damped_freq * t)
            displacement = decay * (a * cos_t + b * sin_t)
            velocity = decay * (
                -zeta * omega * (a * cos_t + b * sin_t)
                + damped_freq * (b * cos_t - a * sin_t)
            )
        else:
            # Over damped
            root = omega * np.sqrt(zeta * zeta - 1.0)
            r1 = -zeta * omega + root
            r2 = -zeta * omega - root
            c2 = (r1 * x0 - v0) / (r1 - r2)
            c1 = x0 - c2
            displacement = c1 * np.exp(r1 * t) + c2 * np.exp(r2 * t)
            velocity = c1 * r1 * np.exp(r1 * t) + c2 * r2 * np.exp(r2 * t)

        return np.array([self.target + displacement, velocity], dtype=np.float64)

    def is_finished_at(self, elapsed: float) -> bool:
        value, velocity = self.state_at(elapsed)
        threshold = self.spec.visibility_threshold
        return bool(abs(value - self.target) < threshold and abs(velocity) < threshold)


class QtFrameClock:
    """Delivers animation frames from a QTimer running on the Qt event loop."""

    def __init__(self, interval_ms: Optional[int] = None) -> None:
        if interval_ms is None:
            interval_ms = int(config.get_settle_config()["frameIntervalMs"])
        self._timer = QTimer()
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)
        self._elapsed = QElapsedTimer()
        self._on_frame: Optional[FrameCallback] = None

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self, on_frame: FrameCallback) -> None:
        self._on_frame = on_frame
        self._elapsed.start()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        self._on_frame = None

    def _on_timeout(self) -> None:
        if self._on_frame is None:
            return
        # Exceptions must not escape a Qt slot
        try:
            self._on_frame(self._elapsed.elapsed() / 1000.0)
        except Exception as e:
            ErrorHandler.log_exception(e, "Settle animation frame failed")
            self.stop()


class SpringJob(QObject):
    """Handle to one running spring animation of a viewport state.

    Emits `finished(cancelled)` exactly once, either when the spring comes to
    rest, when `cancel()` is called or when a frame fails.
    """

    finished = pyqtSignal(bool)

    def __init__(self, state: ZoomableViewportState, clock: FrameClockProtocol, spring_spec: SpringSpec) -> None:
        super().__init__()
        self._state = state
        self._clock = clock
        self._spring_spec = spring_spec
        self._animation: Optional[SpringAnimation] = None
        self.is_active = False
        self.is_cancelled = False

    def cancel(self) -> None:
        """Stop mid-flight, leaving the transformation at its last computed value."""
        if not self.is_active:
            return
        self.is_cancelled = True
        self._finish()

    def _run(self) -> None:
        self._animation = SpringAnimation(start=0.0, target=1.0, spec=self._spring_spec)
        self.is_active = True
        self._clock.start(self._on_frame)

    def _on_frame(self, elapsed: float) -> None:
        if not self.is_active:
            return

        if self._state.gesture_state is None:
            # Content position was reset while animating
            self.cancel()
            return

        is_done = self._animation.is_finished_at(elapsed)
        fraction = 1.0 if is_done else float(self._animation.state_at(elapsed)[0])
        try:
            self._apply(fraction)
        except Exception as e:
            ErrorHandler.log_exception(e, f"{type(self).__name__} frame failed")
            self.cancel()
            return

        if is_done:
            self._finish()

    def _apply(self, fraction: float) -> None:
        """Move the state to where it should be `fraction` of the way through."""
        raise NotImplementedError

    def _finish(self) -> None:
        self.is_active = False
        self._clock.stop()
        logger.debug("%s %s", type(self).__name__, "cancelled" if self.is_cancelled else "finished")
        self.finished.emit(self.is_cancelled)


class SettleJob(SpringJob):
    """Animates an out-of-range viewport zoom back into the zoom range."""

    def __init__(
        self,
        state: ZoomableViewportState,
        start: Optional[GestureState],
        clock: FrameClockProtocol,
        spring_spec: SpringSpec,
    ) -> None:
        super().__init__(state, clock, spring_spec)
        self._start = start
        self._end_viewport_zoom: Optional[float] = None

    @property
    def end_viewport_zoom(self) -> Optional[float]:
        """Viewport zoom this job animates towards, None if there was nothing to settle."""
        return self._end_viewport_zoom

    def start(self) -> None:
        if self._start is None:
            logger.debug("Nothing to settle: no gesture has been applied yet")
            self.finished.emit(False)
            return

        self._end_viewport_zoom = self._start.zoom.coerced_in(self._state.zoom_range).viewport_zoom
        if self._end_viewport_zoom == self._start.zoom.viewport_zoom:
            self.finished.emit(False)
            return

        logger.debug(
            "Settling viewport zoom from %.4f to %.4f",
            self._start.zoom.viewport_zoom, self._end_viewport_zoom,
        )
        self._run()

    def _apply(self, fraction: float) -> None:
        start_zoom = self._start.zoom.viewport_zoom
        target_viewport_zoom = start_zoom + (self._end_viewport_zoom - start_zoom) * fraction
        self._state.on_gesture(
            centroid=self._start.last_centroid,
            pan_delta=Offset.ZERO,
            zoom_delta=target_viewport_zoom / self._state.gesture_state.zoom.viewport_zoom,
            cancel_ongoing_settle=False,
        )


class GestureAnimationJob(SpringJob):
    """Spreads a zoom and pan requested from code over several frames.

    Every frame applies the part of the zoom and pan that the spring has
    covered since the previous frame, so the totals add up to the request.
    """

    def __init__(
        self,
        state: ZoomableViewportState,
        centroid: Offset,
        pan_delta: Offset,
        zoom_delta: float,
        clock: FrameClockProtocol,
        spring_spec: SpringSpec,
    ) -> None:
        super().__init__(state, clock, spring_spec)
        self.centroid = centroid
        self.pan_delta = pan_delta
        self.zoom_delta = zoom_delta
        self._applied_fraction = 0.0

    def start(self) -> None:
        logger.debug("Animating zoom by %.4f and pan by %s", self.zoom_delta, self.pan_delta)
        self._run()

    def _apply(self, fraction: float) -> None:
        step = fraction - self._applied_fraction
        self._applied_fraction = fraction
        self._state.on_gesture(
            centroid=self.centroid,
            pan_delta=self.pan_delta * step,
            zoom_delta=self.zoom_delta ** step,
            cancel_ongoing_settle=False,
        )


class SettleAnimator:
    """Runs at most one animation at a time for a viewport state."""

    def __init__(
        self,
        state: ZoomableViewportState,
        clock_factory: Optional[FrameClockFactory] = None,
        spring_spec: Optional[SpringSpec] = None,
    ) -> None:
        self._state = state
        self._clock_factory = clock_factory or QtFrameClock
        self._spring_spec = spring_spec or SpringSpec.from_config(config.get_settle_config())
        self._job: Optional[SpringJob] = None

    @property
    def is_animating(self) -> bool:
        return self._job is not None and self._job.is_active

    @property
    def is_settling(self) -> bool:
        return self.is_animating and isinstance(self._job, SettleJob)

    def settle(self) -> SettleJob:
        """Start animating the zoom back into range, cancelling any running animation."""
        self.cancel()
        job = SettleJob(
            state=self._state,
            start=self._state.gesture_state,
            clock=self._clock_factory(),
            spring_spec=self._spring_spec,
        )
        self._job = job
        job.start()
        return job

    def animate_gesture(self, centroid: Offset, pan_delta: Offset, zoom_delta: float) -> GestureAnimationJob:
        """Start applying a zoom and pan over several frames, cancelling any running animation."""
        self.cancel()
        job = GestureAnimationJob(
            state=self._state,
            centroid=centroid,
            pan_delta=pan_delta,
            zoom_delta=zoom_delta,
            clock=self._clock_factory(),
            spring_spec=self._spring_spec,
        )
        self._job = job
        job.start()
        return job

    def cancel(self) -> None:
        if self._job is not None:
            self._job.cancel()
            self._job = None
