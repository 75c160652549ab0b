from __future__ import annotations
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict
from PySide6.QtCore import QSettings
import logging

logger = logging.getLogger(__name__)


class RunMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    VERBOSE = "verbose"

    def __str__(self):
        return self.value

    def __repr__(self):
        return self.value


# ----------------------
# デフォルト設定
# ----------------------
DEFAULTS: Dict[str, Any] = {
    "general": {
        "run_mode": RunMode.PRODUCTION.value,
        "logging_level": "INFO",  # "DEBUG", "INFO", "WARNING", "ERROR"
    },
    "viewer": {
        "frame_interval_ms": 16,
    },
}

SECTIONS = tuple(DEFAULTS)


# ---------------------
# Data model
# ---------------------
@dataclass
class GeneralConfig:
    run_mode: RunMode = RunMode.PRODUCTION
    logging_level: str = "INFO"


@dataclass
class ViewerConfig:
    frame_interval_ms: int = 16


@dataclass
class AppSettingsData:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)


# ----------------------
# Utility
# ----------------------
def _validate_run_mode(v: Any) -> RunMode:
    if isinstance(v, RunMode):
        return v
    try:
        return RunMode(str(v).strip().lower())
    except ValueError:
        return RunMode(DEFAULTS["general"]["run_mode"])


def _validate_logging_level(v: Any) -> str:
    v = str(v).strip().upper()
    return v if v in ("DEBUG", "INFO", "WARNING", "ERROR") else DEFAULTS["general"]["logging_level"]


def _validate_frame_interval(v: Any) -> int:
    try:
        i = int(v)
    except (TypeError, ValueError):
        return DEFAULTS["viewer"]["frame_interval_ms"]
    return i if 1 <= i <= 1000 else DEFAULTS["viewer"]["frame_interval_ms"]


# ---------------------
# AppSettingManager
# ---------------------
class AppSettingsManager:
    """
    アプリケーションの一般設定を管理するクラス。
    コード内の DEFAULTS をベースに QSettings の値で上書きする。
    読み込み時に検証し、範囲外の値はデフォルトへフォールバック。
    set_* は設定すると QSettings に即時保存される。

    Navigation preferences are not stored here; see NavigationConfig.
    """
    def __init__(self, org_domain: str = "qnav.org", app_name: str = "QNav",
                 settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings(org_domain, app_name)
        self._data = self._load_effective()

    # 読み取り
    @property
    def data(self) -> AppSettingsData:
        return self._data

    @property
    def run_mode(self) -> RunMode:
        return self._data.general.run_mode

    @property
    def dev_mode(self) -> bool:
        """True when errors should surface instead of being logged and dropped."""
        return self.run_mode is RunMode.DEVELOPMENT

    @property
    def logging_level(self) -> str:
        return self._data.general.logging_level

    @property
    def frame_interval_ms(self) -> int:
        return self._data.viewer.frame_interval_ms

    # 書き込み
    def set_run_mode(self, v: str | RunMode) -> None:
        mode = _validate_run_mode(v)
        self._settings.setValue("general/run_mode", mode.value)
        self._data.general.run_mode = mode

    def set_logging_level(self, v: str) -> None:
        level = _validate_logging_level(v)
        self._settings.setValue("general/logging_level", level)
        self._data.general.logging_level = level

    def set_frame_interval_ms(self, v: int) -> None:
        interval = _validate_frame_interval(v)
        self._settings.setValue("viewer/frame_interval_ms", interval)
        self._data.viewer.frame_interval_ms = interval

    # Reset
    def reset_all_to_default(self) -> None:
        """ユーザー設定を全削除"""
        for section in SECTIONS:
            self._settings.remove(section)
        self._data = self._load_effective()

    def reset_section(self, section: str) -> None:
        """特定のセクションのみを規定値へ"""
        if section not in SECTIONS:
            raise ValueError(f"Invalid section: {section}")
        self._settings.remove(section)
        self._data = self._load_effective()

    def to_dict(self) -> dict[str, Any]:
        data = {
            "general": asdict(self._data.general),
            "viewer": asdict(self._data.viewer),
        }
        data["general"]["run_mode"] = self._data.general.run_mode.value
        return data

    # ---------- 内部実装 ---------------
    def _load_effective(self) -> AppSettingsData:
        """DEFAULTS をベースに QSettings の上書きを反映、検証、モデル化"""
        g = dict(DEFAULTS["general"])
        v = self._settings.value("general/run_mode", None)
        if v is not None:
            g["run_mode"] = v
        v = self._settings.value("general/logging_level", None)
        if v is not None:
            g["logging_level"] = v

        vw = dict(DEFAULTS["viewer"])
        v = self._settings.value("viewer/frame_interval_ms", None)
        if v is not None:
            vw["frame_interval_ms"] = v

        data = AppSettingsData(
            general=GeneralConfig(
                run_mode=_validate_run_mode(g["run_mode"]),
                logging_level=_validate_logging_level(g["logging_level"]),
            ),
            viewer=ViewerConfig(
                frame_interval_ms=_validate_frame_interval(vw["frame_interval_ms"]),
            ),
        )
        logger.debug("Effective settings: %s", data)
        return data
