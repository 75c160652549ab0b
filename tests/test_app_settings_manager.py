from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from qnav.app.app_settings_manager import AppSettingsManager, RunMode


@pytest.fixture
def tmp_settings(qapp, tmp_path: Path):
    """QSettings を INI + 一時フォルダに切り替え、テスト間の汚染を防ぐ。"""
    s = QSettings(str(tmp_path / "qnav.ini"), QSettings.IniFormat)
    s.clear()
    yield s
    s.clear()


def test_defaults(tmp_settings):
    mgr = AppSettingsManager(settings=tmp_settings)

    assert mgr.run_mode is RunMode.PRODUCTION
    assert mgr.dev_mode is False
    assert mgr.logging_level == "INFO"
    assert mgr.frame_interval_ms == 16


def test_setters_persist(tmp_settings):
    mgr = AppSettingsManager(settings=tmp_settings)
    mgr.set_run_mode("Development")
    mgr.set_logging_level("debug")
    mgr.set_frame_interval_ms(33)

    reloaded = AppSettingsManager(settings=tmp_settings)
    assert reloaded.dev_mode is True
    assert reloaded.logging_level == "DEBUG"
    assert reloaded.frame_interval_ms == 33


def test_invalid_stored_values_fall_back(tmp_settings):
    tmp_settings.setValue("general/run_mode", "turbo")
    tmp_settings.setValue("general/logging_level", "LOUD")
    tmp_settings.setValue("viewer/frame_interval_ms", "5000")

    mgr = AppSettingsManager(settings=tmp_settings)

    assert mgr.run_mode is RunMode.PRODUCTION
    assert mgr.logging_level == "INFO"
    assert mgr.frame_interval_ms == 16


def test_reset_section_and_all(tmp_settings):
    mgr = AppSettingsManager(settings=tmp_settings)
    mgr.set_run_mode(RunMode.VERBOSE)
    mgr.set_frame_interval_ms(40)

    mgr.reset_section("viewer")
    assert mgr.frame_interval_ms == 16
    assert mgr.run_mode is RunMode.VERBOSE

    mgr.reset_all_to_default()
    assert mgr.run_mode is RunMode.PRODUCTION

    with pytest.raises(ValueError):
        mgr.reset_section("shortcuts")


def test_to_dict(tmp_settings):
    data = AppSettingsManager(settings=tmp_settings).to_dict()
    assert data == {
        "general": {"run_mode": "production", "logging_level": "INFO"},
        "viewer": {"frame_interval_ms": 16},
    }
