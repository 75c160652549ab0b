from __future__ import annotations

import logging
import logging.config
import os
import queue
import sys
import traceback
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

import faulthandler

from qnav.app.app_settings_manager import AppSettingsManager, RunMode
from qnav.utils.log_util import level_from_name

LOG_FORMAT = "%(asctime)s.%(msecs)03dZ %(levelname)s %(process)d %(threadName)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


@dataclass(frozen=True)
class LogPaths:
    log_file: Path
    crash_file: Path
    log_dir: Path


def _app_base_dir() -> Path:
    """
    In frozen mode, the directory of the executable.
    In development, the project root (qnav/app/logging_setup.py -> parents[2]).
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def _find_writable_log_dir(app_name: str) -> Path:
    """
    First, app_base_dir/logs
    Second, user's home directory
    Finally, current directory.
    """
    candidates = [
        _app_base_dir() / "logs",
        Path.home() / f".{app_name.lower()}" / "logs",
    ]
    for d in candidates:
        try:
            d.mkdir(parents=True, exist_ok=True)
            test = d / ".write_test"
            test.write_text("ok", encoding="utf-8")
            test.unlink(missing_ok=True)
            return d
        except OSError:
            continue
    d = Path.cwd() / "logs"
    d.mkdir(parents=True, exist_ok=True)
    return d


def default_log_dir(app_name: str) -> Path:
    return _find_writable_log_dir(app_name)


def setup_startup_logging(
        app_name: str,
        *,
        level_file: int = logging.DEBUG,
        level_console: int = logging.INFO,
        max_bytes: int = 2_000_000,
        backup_count: int = 5,
        log_dir: Path | None = None,
    ) -> LogPaths:
    """
    Startup logging setup, before the QApplication exists.
    - Rotating file handler
    - uncaught exception logging
    - faulthandler (crash logging)
    """
    log_dir = log_dir or default_log_dir(app_name)
    log_file = log_dir / f"{app_name}.log"
    crash_file = log_dir / f"{app_name}.crash.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Prevent duplicate registration of handlers.
    if root.handlers:
        root.handlers.clear()

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    fh = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    fh.setLevel(level_file)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level_console)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    # crash log
    try:
        f = open(crash_file, "w", encoding="utf-8")
        faulthandler.enable(file=f)
        # Keep the file object alive as long as faulthandler writes to it.
        root._qnav_crash_fh = f
    except OSError:
        logging.warning("Crash log %s is not writable.", crash_file)

    def _excepthook(exc_type, exc, tb):
        logging.critical(
            "Uncaught exception: \n%s",
            "".join(traceback.format_exception(exc_type, exc, tb)),
        )

    sys.excepthook = _excepthook

    logging.info("=================================================")
    logging.info("%s starting...", app_name)
    logging.info("frozen=%s", getattr(sys, "frozen", False))
    logging.info("sys.executable=%s", sys.executable)
    logging.info("cwd=%s", os.getcwd())
    logging.info("log_file=%s", log_file)
    logging.info("crash_file=%s", crash_file)
    logging.info("=================================================")

    return LogPaths(log_file=log_file, crash_file=crash_file, log_dir=log_dir)


def build_config(app_name: str, root_level: int | str | None = None,
                 console_level: int | str | None = None, log_dir: Path | None = None) -> dict:
    """
    Build a logging config dict.

    The file handler is not part of the dictConfig; it is described under
    "_file_settings" and attached to the QueueListener by LogSystem.
    """
    if root_level is None:
        root_level = os.getenv("QNAV_LOG_LEVEL", "INFO")
    root_level = logging.getLevelName(level_from_name(root_level))
    console_level = logging.getLevelName(level_from_name(console_level, default=logging.INFO))
    log_dir = log_dir or default_log_dir(app_name)
    log_file = str(log_dir / f"{app_name}.log")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": LOG_FORMAT, "datefmt": LOG_DATEFMT,
            },
        },
        "handlers": {
            # キューを使う
            "queue": {"class": "logging.handlers.QueueHandler", "queue": queue.Queue(-1)},
            "console": {"class": "logging.StreamHandler", "formatter": "standard", "level": console_level},
        },
        "root": {"level": root_level, "handlers": ["queue", "console"]},
        # キュー先でファイルに書き込む
        "_file_settings": {
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": int(os.getenv("QNAV_LOG_BACKUP_COUNT", 5)),
            "encoding": "utf-8",
            "format": LOG_FORMAT,
            "datefmt": LOG_DATEFMT,
        },
    }


class LogSystem:
    """QueueListener を持つ薄いラッパ"""
    def __init__(self, app_name: str, level: int | str | None = None,
                 console_level: int | str | None = None, log_dir: Path | None = None):
        cfg = build_config(app_name, level, console_level, log_dir)
        file_settings = cfg.pop("_file_settings")
        logging.config.dictConfig(cfg)

        root_logger = logging.getLogger()
        qh: QueueHandler | None = None
        self._console_handler: logging.Handler | None = None
        for h in root_logger.handlers:
            if qh is None and isinstance(h, QueueHandler):
                qh = h
            elif self._console_handler is None and isinstance(h, logging.StreamHandler):
                self._console_handler = h
        if qh is None:
            raise RuntimeError("QueueHandler not found.")

        # ファイル側ハンドラを準備する
        self._file_handler = RotatingFileHandler(
            file_settings["filename"],
            maxBytes=file_settings["maxBytes"],
            backupCount=file_settings["backupCount"],
            encoding=file_settings["encoding"],
        )
        self._file_handler.setFormatter(
            logging.Formatter(file_settings["format"], file_settings["datefmt"]))
        self.log_file = Path(file_settings["filename"])

        self.listener = QueueListener(qh.queue, self._file_handler, respect_handler_level=True)
        self.listener.start()
        self._stopped = False

    @classmethod
    def from_levels(cls, app_name: str, root_level: int, console_level: int,
                    log_dir: Path | None = None) -> LogSystem:
        return cls(app_name, level=root_level, console_level=console_level, log_dir=log_dir)

    def apply_levels(self, root_level: int, console_level: int | None = None,
                     file_level: int | None = None) -> None:
        """起動後にログレベルを更新する"""
        logging.getLogger().setLevel(root_level)
        if self._console_handler is not None and console_level is not None:
            self._console_handler.setLevel(console_level)
        if file_level is not None:
            self._file_handler.setLevel(file_level)

    def stop(self) -> None:
        """Flush the queue and close the log file; safe to call twice."""
        if self._stopped:
            return
        self._stopped = True
        self.listener.stop()
        self._file_handler.close()


def apply_logging_policy(logs: LogSystem, settings: AppSettingsManager) -> None:
    """Run mode に応じて、ログの出力レベルを切り替える"""
    mode = settings.run_mode

    if mode in (RunMode.DEVELOPMENT, RunMode.VERBOSE):
        logs.apply_levels(root_level=logging.DEBUG, console_level=logging.DEBUG,
                          file_level=logging.DEBUG)
    else:
        level = level_from_name(settings.logging_level)
        logs.apply_levels(root_level=logging.DEBUG, console_level=level,
                          file_level=logging.DEBUG)


def install_qt_message_handler() -> None:
    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    qt_logger = logging.getLogger("Qt")
    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def handler(msg_type, context, message):
        qt_logger.log(levels.get(msg_type, logging.ERROR), message)

    qInstallMessageHandler(handler)
    qt_logger.info("Qt message handler installed.")
