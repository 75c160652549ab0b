# NOTE:
# Startup diagnostics (logging / Qt message handler) must be set up
#  before creating the QApplication instance.

import logging
import sys

from PySide6 import QtWidgets

from qnav.app.app_settings_manager import AppSettingsManager
from qnav.app.logging_setup import (
    LogSystem, apply_logging_policy, install_qt_message_handler, setup_startup_logging,
)

logger = logging.getLogger(__name__)


def main():
    setup_startup_logging(app_name="qnav")
    install_qt_message_handler()
    logs = LogSystem("qnav")

    # 既存の QApplication インスタンスを取得。なければ新規作成。
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(sys.argv)

    logger.info("App start")
    settings_mgr = AppSettingsManager()
    apply_logging_policy(logs, settings_mgr)

    from qnav.ui.mainwindow import MainWindow
    main_window = MainWindow(settings_mgr)

    # Qt 終了時にログを確実に止める
    app.aboutToQuit.connect(logs.stop)
    try:
        rc = app.exec()
        logger.info("App exit (rc=%s)", rc)
        sys.exit(rc)
    finally:
        logs.stop()


if __name__ == "__main__":
    main()
