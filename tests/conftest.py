"""
conftest.py - Shared pytest fixtures for viewport tests

This module provides standardized test fixtures for use across all tests.
It includes fixtures for:
- Path setup and Python path configuration
- Configuration management
- Deterministic animation frame clocks
- Viewport states with known geometry
"""
import os
import sys
import json
import pathlib
import pytest

# Qt must not need a display when tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the src/python directory to the Python path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src" / "python"))

# Imports from viewport modules (now that path is configured)
from config_manager import ConfigManager
from content_location import ContentLocation
from geometry import Alignment, Rect, Size
from viewport_state import ZoomableViewportState
from zoom_range import ZoomRange


# Configuration Fixtures
# ---------------------

@pytest.fixture
def test_config_data():
    """Create minimal test configuration data."""
    return {
        "zoom": {
            "minZoomFactor": 1.0,
            "maxZoomFactor": 3.0
        },
        "gestures": {
            "overzoomResistance": 250,
            "underzoomResistance": 500
        },
        "settle": {
            "stiffness": 1500,
            "dampingRatio": 1.0,
            "visibilityThreshold": 0.01,
            "frameIntervalMs": 16
        },
        "logging": {
            "level": "DEBUG",
            "console": False,
            "raiseOnError": False
        }
    }


@pytest.fixture
def test_config_file(tmp_path, test_config_data):
    """Create a temporary config file."""
    config_file = tmp_path / "test_config.json"
    with open(config_file, 'w') as f:
        json.dump(test_config_data, f)
    return config_file


@pytest.fixture
def test_config_manager(test_config_file):
    """Create a ConfigManager instance with test configuration."""
    return ConfigManager(cfg_path=test_config_file, exit_on_error=False)


# Animation Fixtures
# ------------------

class ManualFrameClock:
    """Frame clock that only delivers frames when the test advances it."""

    def __init__(self):
        self.on_frame = None
        self.elapsed = 0.0
        self.is_running = False
        self.frame_count = 0

    def start(self, on_frame):
        self.on_frame = on_frame
        self.elapsed = 0.0
        self.is_running = True

    def stop(self):
        self.is_running = False
        self.on_frame = None

    def advance(self, seconds=1 / 60):
        self.elapsed += seconds
        if self.is_running:
            self.frame_count += 1
            self.on_frame(self.elapsed)

    def run_to_completion(self, frame=1 / 60, max_frames=600):
        for _ in range(max_frames):
            if not self.is_running:
                return
            self.advance(frame)
        raise AssertionError(f"Animation still running after {max_frames} frames")


@pytest.fixture
def frame_clocks():
    """Every ManualFrameClock handed out by `clock_factory`, in creation order."""
    return []


@pytest.fixture
def clock_factory(frame_clocks):
    def create():
        clock = ManualFrameClock()
        frame_clocks.append(clock)
        return clock
    return create


# Viewport Fixtures
# -----------------

VIEWPORT = Rect(0, 0, 1000, 1000)
IMAGE_SIZE = Size(2000, 1000)


def make_ready_state(clock_factory, zoom_range=ZoomRange(min=1.0, max=4.0), **kwargs):
    """A 2:1 image fitted into a square viewport, content position reset."""
    state = ZoomableViewportState(zoom_range=zoom_range, clock_factory=clock_factory, **kwargs)
    state.viewport_bounds = VIEWPORT
    state.content_layout_bounds = VIEWPORT
    state.content_alignment = Alignment.CENTER
    state.set_content_location(ContentLocation.scaled_inside_and_center_aligned(IMAGE_SIZE))
    state.reset_content_position()
    return state


@pytest.fixture
def ready_state(clock_factory):
    return make_ready_state(clock_factory)
