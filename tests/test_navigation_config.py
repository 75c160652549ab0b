import pytest

from qnav.core.navigation_config import DEFAULTS, NavigationConfig, RotationCenterMode


def test_defaults():
    config = NavigationConfig()

    assert config.double_click_interval == DEFAULTS["double_click_interval"]
    assert config.spin_enabled is True
    assert config.rotation_center_mode is RotationCenterMode.WINDOW_CENTER
    assert config.raise_errors is False


@pytest.mark.parametrize("name, value", [
    ("double_click_interval", 0.0),
    ("double_click_interval", "abc"),
    ("spin_velocity_threshold", -1.0),
    ("zoom_step", -0.2),
    ("sensitivity", None),
    ("seek_distance_percent", 0.0),
    ("seek_distance_percent", 150.0),
    ("motion_log_size", 2),
    ("spin_sample_span", 1),
])
def test_out_of_range_falls_back_to_default(name, value):
    """範囲外の値はデフォルトへフォールバック"""
    config = NavigationConfig(**{name: value})
    assert getattr(config, name) == DEFAULTS[name]


def test_sample_span_capped_by_log_size():
    config = NavigationConfig(motion_log_size=4, spin_sample_span=10)
    assert config.spin_sample_span == 4


def test_rotation_center_mode_from_string():
    config = NavigationConfig(rotation_center_mode=" Scene_Point_At_Cursor ")
    assert config.rotation_center_mode is RotationCenterMode.SCENE_POINT_AT_CURSOR

    assert NavigationConfig(rotation_center_mode="nowhere").rotation_center_mode \
        is RotationCenterMode.WINDOW_CENTER


class _Settings:
    def __init__(self, dev_mode):
        self.dev_mode = dev_mode


def test_from_settings_follows_run_mode():
    assert NavigationConfig.from_settings(_Settings(True)).raise_errors is True
    assert NavigationConfig.from_settings(_Settings(False)).raise_errors is False
    overridden = NavigationConfig.from_settings(_Settings(True), raise_errors=False, zoom_step=0.5)
    assert overridden.raise_errors is False
    assert overridden.zoom_step == 0.5


def test_to_dict():
    data = NavigationConfig(invert_zoom=True).to_dict()

    assert data["invert_zoom"] is True
    assert data["rotation_center_mode"] == "window_center"
    assert set(data) == set(DEFAULTS)
