import json
import pathlib
import sys
import logging
from typing import Any

from custom_types import GestureConfig, SettleConfig, ZoomConfig

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("zoom", "gestures", "settle")


class ConfigManager:
    """Manages viewport configuration: zoom limits, gesture elasticity and settle animation"""

    zoom: dict[str, Any]
    gestures: dict[str, Any]
    settle: dict[str, Any]
    exit_on_error: bool
    _cfg: dict[str, Any]
    cfg_path: str | pathlib.Path

    def __init__(
        self,
        cfg_path: str | pathlib.Path | None = None,
        exit_on_error: bool = True
    ) -> None:
        """Initialize the ConfigManager with an optional custom path.

        Args:
            cfg_path: Path to the config.json file (defaults to standard location if None)
            exit_on_error: Whether to exit the program on configuration errors
        """
        self.zoom = {}
        self.gestures = {}
        self.settle = {}
        self.exit_on_error = exit_on_error
        self._cfg = {}

        self.cfg_path = cfg_path if cfg_path is not None else self._default_config_path()

        self.load_config()

    def _default_config_path(self) -> pathlib.Path:
        """Get the default path to the config.json file."""
        base = pathlib.Path(__file__).parent.parent.parent
        return base / "config" / "config.json"

    def load_config(self) -> None:
        """Load configuration from the configured path."""
        try:
            with open(self.cfg_path, 'r') as f:
                self._cfg = json.load(f)
        except Exception as e:
            error_msg = "Critical error loading configuration '%s': %s"
            logger.error(error_msg, self.cfg_path, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise RuntimeError(f"Critical error loading configuration '{self.cfg_path}': {e}")

        # Validate and assign sections
        try:
            for section in REQUIRED_SECTIONS:
                setattr(self, section, self._cfg[section])
        except KeyError as e:
            error_msg = "Configuration missing key: %s"
            logger.error(error_msg, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise KeyError(f"Configuration missing key: {e}")

        logger.debug("Loaded configuration from %s", self.cfg_path)

    def get_setting(self, section: str, key: str, default: Any = None) -> Any:
        """Get a generic setting from the master config"""
        try:
            return self._cfg.get(section, {}).get(key, default)
        except Exception:
            return default

    def set_setting(self, section: str, key: str, value: Any) -> None:
        """Set a setting in memory (does not persist to file).

        Args:
            section: Configuration section (e.g., 'zoom', 'settle')
            key: Setting key within the section
            value: Value to set
        """
        if section not in self._cfg:
            self._cfg[section] = {}
        self._cfg[section][key] = value

    def get_logging_setting(self, key: str, default: Any = None) -> Any:
        """Get a logging configuration setting"""
        try:
            return self._cfg.get("logging", {}).get(key, default)
        except Exception:
            return default

    # ============================================================================
    # Viewport Configuration Accessors
    # ============================================================================

    def get_zoom_config(self) -> ZoomConfig:
        """Get zoom limits.

        Returns:
            dict: Zoom configuration with keys:
                - minZoomFactor: Minimum zoom, relative to the content's fit scale
                - maxZoomFactor: Maximum zoom, as an absolute scale factor
        """
        return {
            "minZoomFactor": self.zoom.get("minZoomFactor", 1.0),
            "maxZoomFactor": self.zoom.get("maxZoomFactor", 1.0),
        }

    def get_gesture_config(self) -> GestureConfig:
        """Get gesture elasticity configuration.

        Returns:
            dict: Gesture configuration with keys:
                - overzoomResistance: Damping divisor once zoomed past the maximum
                - underzoomResistance: Damping divisor once zoomed past the minimum
        """
        return {
            "overzoomResistance": self.gestures.get("overzoomResistance", 250.0),
            "underzoomResistance": self.gestures.get("underzoomResistance", 500.0),
        }

    def get_settle_config(self) -> SettleConfig:
        """Get settle animation configuration.

        Returns:
            dict: Settle configuration with keys:
                - stiffness: Spring stiffness
                - dampingRatio: Spring damping ratio, 1.0 is critically damped
                - visibilityThreshold: Distance from the target at which the spring stops
                - frameIntervalMs: Interval between animation frames
        """
        return {
            "stiffness": self.settle.get("stiffness", 1500.0),
            "dampingRatio": self.settle.get("dampingRatio", 1.0),
            "visibilityThreshold": self.settle.get("visibilityThreshold", 0.01),
            "frameIntervalMs": self.settle.get("frameIntervalMs", 16),
        }


# Create a singleton instance
config = ConfigManager()
