"""Navigation tuning values.

Navigation preferences live in memory only; the host builds a
NavigationConfig at startup and may adjust it while running.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from qnav.app.app_settings_manager import AppSettingsManager


class RotationCenterMode(str, Enum):
    """Where an orbit drag pivots."""
    WINDOW_CENTER = "window_center"
    FOCAL_POINT_AT_CURSOR = "focal_point_at_cursor"
    SCENE_POINT_AT_CURSOR = "scene_point_at_cursor"

    def __str__(self):
        return self.value


# ----------------------
# Defaults
# ----------------------
DEFAULTS: dict[str, Any] = {
    "double_click_interval": 0.4,     # seconds
    "spin_enabled": True,
    "spin_velocity_threshold": 0.05,  # rad/s
    "spin_stop_time": 0.1,            # seconds between last motion and release
    "spin_max_sample_time": 0.3,      # seconds spanned by the velocity samples
    "spin_sample_span": 3,
    "motion_log_size": 16,
    "zoom_step": 0.2,
    "zoom_step_drag": 10.0,
    "invert_zoom": False,
    "zoom_at_cursor": True,
    "sensitivity": 1.0,
    "rotation_center_mode": RotationCenterMode.WINDOW_CENTER,
    "animation_enabled": False,
    "animation_duration": 0.25,       # seconds
    "seek_duration": 2.0,             # seconds
    "seek_distance_percent": 50.0,
    "popup_menu_enabled": True,
    "raise_errors": False,
}


# ----------------------
# Validation
# ----------------------
def _validate_positive(v: Any, default: float) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return default
    return f if f > 0.0 else default


def _validate_non_negative(v: Any, default: float) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return default
    return f if f >= 0.0 else default


def _validate_int(v: Any, default: int, minimum: int) -> int:
    try:
        i = int(v)
    except (TypeError, ValueError):
        return default
    return i if i >= minimum else default


def _validate_percent(v: Any, default: float) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return default
    return f if 0.0 < f <= 100.0 else default


def _validate_rotation_center_mode(v: Any) -> RotationCenterMode:
    if isinstance(v, RotationCenterMode):
        return v
    try:
        return RotationCenterMode(str(v).strip().lower())
    except ValueError:
        return DEFAULTS["rotation_center_mode"]


@dataclass
class NavigationConfig:
    """
    Tuning values for the navigation styles.

    Out of range values fall back to the defaults instead of raising, the
    same way application settings are validated.
    """
    double_click_interval: float = DEFAULTS["double_click_interval"]
    spin_enabled: bool = DEFAULTS["spin_enabled"]
    spin_velocity_threshold: float = DEFAULTS["spin_velocity_threshold"]
    spin_stop_time: float = DEFAULTS["spin_stop_time"]
    spin_max_sample_time: float = DEFAULTS["spin_max_sample_time"]
    spin_sample_span: int = DEFAULTS["spin_sample_span"]
    motion_log_size: int = DEFAULTS["motion_log_size"]
    zoom_step: float = DEFAULTS["zoom_step"]
    zoom_step_drag: float = DEFAULTS["zoom_step_drag"]
    invert_zoom: bool = DEFAULTS["invert_zoom"]
    zoom_at_cursor: bool = DEFAULTS["zoom_at_cursor"]
    sensitivity: float = DEFAULTS["sensitivity"]
    rotation_center_mode: RotationCenterMode = DEFAULTS["rotation_center_mode"]
    animation_enabled: bool = DEFAULTS["animation_enabled"]
    animation_duration: float = DEFAULTS["animation_duration"]
    seek_duration: float = DEFAULTS["seek_duration"]
    seek_distance_percent: float = DEFAULTS["seek_distance_percent"]
    popup_menu_enabled: bool = DEFAULTS["popup_menu_enabled"]
    raise_errors: bool = DEFAULTS["raise_errors"]

    def __post_init__(self) -> None:
        d = DEFAULTS
        self.double_click_interval = _validate_positive(self.double_click_interval, d["double_click_interval"])
        self.spin_velocity_threshold = _validate_non_negative(self.spin_velocity_threshold,
                                                              d["spin_velocity_threshold"])
        self.spin_stop_time = _validate_positive(self.spin_stop_time, d["spin_stop_time"])
        self.spin_max_sample_time = _validate_positive(self.spin_max_sample_time, d["spin_max_sample_time"])
        self.motion_log_size = _validate_int(self.motion_log_size, d["motion_log_size"], minimum=3)
        self.spin_sample_span = _validate_int(self.spin_sample_span, d["spin_sample_span"], minimum=2)
        if self.spin_sample_span > self.motion_log_size:
            self.spin_sample_span = self.motion_log_size
        self.zoom_step = _validate_positive(self.zoom_step, d["zoom_step"])
        self.zoom_step_drag = _validate_positive(self.zoom_step_drag, d["zoom_step_drag"])
        self.sensitivity = _validate_positive(self.sensitivity, d["sensitivity"])
        self.rotation_center_mode = _validate_rotation_center_mode(self.rotation_center_mode)
        self.animation_duration = _validate_positive(self.animation_duration, d["animation_duration"])
        self.seek_duration = _validate_positive(self.seek_duration, d["seek_duration"])
        self.seek_distance_percent = _validate_percent(self.seek_distance_percent, d["seek_distance_percent"])
        for name in ("spin_enabled", "invert_zoom", "zoom_at_cursor", "animation_enabled",
                     "popup_menu_enabled", "raise_errors"):
            setattr(self, name, bool(getattr(self, name)))

    @classmethod
    def from_settings(cls, settings: AppSettingsManager, **overrides: Any) -> NavigationConfig:
        """
        Build a config for the application's run mode.

        Development mode re-raises navigation errors after logging them.
        """
        overrides.setdefault("raise_errors", settings.dev_mode)
        return cls(**overrides)

    def to_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["rotation_center_mode"] = self.rotation_center_mode.value
        return data
