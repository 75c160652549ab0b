"""VTK viewer widget driven by an Inventor style navigation."""
from __future__ import annotations

import logging
from typing import Sequence

import vtk
from PySide6 import QtCore, QtGui, QtWidgets

from qnav.app.app_settings_manager import AppSettingsManager
from qnav.core.navigation_config import NavigationConfig
from qnav.navigation.fallback_handler import DefaultEventHandler
from qnav.navigation.inventor_style import InventorNavigationStyle
from qnav.utils import vtk_helpers
from qnav.viewers.camera.camera_adapter import CameraAdapter
from qnav.viewers.controllers.interaction_controller import NavigationMode
from qnav.viewers.interactor_styles.navigation_interactor_style import NavigationInteractorStyle

logger = logging.getLogger(__name__)

CURSORS: dict[NavigationMode, QtCore.Qt.CursorShape] = {
    NavigationMode.DRAGGING: QtCore.Qt.CursorShape.ClosedHandCursor,
    NavigationMode.SPINNING: QtCore.Qt.CursorShape.OpenHandCursor,
    NavigationMode.PANNING: QtCore.Qt.CursorShape.SizeAllCursor,
    NavigationMode.ZOOMING: QtCore.Qt.CursorShape.SizeVerCursor,
    NavigationMode.SEEK_WAIT: QtCore.Qt.CursorShape.CrossCursor,
}


class NavigationViewer(QtWidgets.QWidget):
    """
    Render window with Inventor style camera navigation.

    Provides the viewer side of the navigation: viewport size, viewing and
    editing flags, the context menu and a frame timer that advances spins
    and seek animations.
    """

    # Signals
    modeChanged = QtCore.Signal(object, object)

    def __init__(
            self,
            settings_manager: AppSettingsManager | None = None,
            config: NavigationConfig | None = None,
            parent: QtWidgets.QWidget | None = None,
    ) -> None:
        """
        Initialize the viewer.
        :param settings_manager: Application settings manager
        :param config: Navigation tuning, derived from the settings when omitted
        :param parent: Parent widget
        """
        super().__init__(parent)
        self.setting = settings_manager or AppSettingsManager()
        self.config = config or NavigationConfig.from_settings(
            self.setting, double_click_interval=self._platform_double_click_interval())

        self._editing = False
        self._viewing = False

        self._setup_ui()
        self._setup_vtk_rendering()
        self._setup_navigation()

        self._frame_timer = QtCore.QTimer(self)
        self._frame_timer.setInterval(self.setting.frame_interval_ms)
        self._frame_timer.timeout.connect(self._on_frame)
        self._frame_timer.start()

        self.interactor.Initialize()

    @staticmethod
    def _platform_double_click_interval() -> float:
        app = QtGui.QGuiApplication.instance()
        if app is None:
            return NavigationConfig().double_click_interval
        return app.styleHints().mouseDoubleClickInterval() / 1000.0

    def _setup_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        from vtkmodules.qt.QVTKRenderWindowInteractor import QVTKRenderWindowInteractor
        self.vtk_widget = QVTKRenderWindowInteractor(self)
        layout.addWidget(self.vtk_widget)
        self.setLayout(layout)

    def _setup_vtk_rendering(self) -> None:
        self.render_window = self.vtk_widget.GetRenderWindow()
        self.renderer = vtk.vtkRenderer()
        self.renderer.SetBackground(0.18, 0.2, 0.25)
        self.render_window.AddRenderer(self.renderer)
        self.interactor = self.render_window.GetInteractor()
        logger.debug("VTK rendering components initialized.")

    def _setup_navigation(self) -> None:
        self.camera = CameraAdapter(self.renderer.GetActiveCamera(), self.renderer,
                                    self.viewport_size())
        self.picker = vtk_helpers.VtkScenePicker(self.renderer)
        self.fallback = DefaultEventHandler(self.camera, self.config)
        self.navigation = InventorNavigationStyle(
            self.camera, self,
            picker=self.picker,
            fallback=self.fallback,
            popup_menu=self,
            config=self.config,
        )
        self.navigation.controller.add_mode_changed_callback(self._on_mode_changed)

        style = NavigationInteractorStyle(self.navigation, on_handled=self.render)
        self.interactor.SetInteractorStyle(style)
        self._style = style

    # =====================================================
    # Viewer context
    # =====================================================

    def is_editing(self) -> bool:
        return self._editing

    def set_editing(self, on: bool) -> None:
        self._editing = bool(on)
        logger.info(f"Editing {'on' if self._editing else 'off'}")

    def is_viewing(self) -> bool:
        return self._viewing

    def set_viewing(self, on: bool) -> None:
        self._viewing = bool(on)

    def viewport_size(self) -> tuple[int, int]:
        return vtk_helpers.render_window_size(self.render_window)

    # =====================================================
    # Popup menu
    # =====================================================

    def open_menu(self, screen_pos: Sequence[int]) -> None:
        """Show the context menu at a VTK display position."""
        height = self.viewport_size()[1]
        # VTK display coordinates start at the bottom.
        local = QtCore.QPoint(int(screen_pos[0]), max(height - 1 - int(screen_pos[1]), 0))
        ratio = self.vtk_widget.devicePixelRatioF() or 1.0
        local = QtCore.QPoint(int(local.x() / ratio), int(local.y() / ratio))

        menu = QtWidgets.QMenu(self)
        seek_action = menu.addAction("Seek")
        seek_action.triggered.connect(lambda: self.navigation.set_seek_mode(True))
        reset_action = menu.addAction("Reset view")
        reset_action.triggered.connect(self.reset_view)
        spin_action = menu.addAction("Spin after drag")
        spin_action.setCheckable(True)
        spin_action.setChecked(self.config.spin_enabled)
        spin_action.toggled.connect(self._set_spin_enabled)
        menu.exec(self.vtk_widget.mapToGlobal(local))

    def _set_spin_enabled(self, on: bool) -> None:
        self.config.spin_enabled = on

    # =====================================================
    # Rendering
    # =====================================================

    def add_actor(self, actor: vtk.vtkProp) -> None:
        self.renderer.AddActor(actor)

    def reset_view(self) -> None:
        self.navigation.controller.reset()
        self.renderer.ResetCamera()
        self.render()

    def render(self) -> None:
        self.render_window.Render()

    def _on_frame(self) -> None:
        if self.navigation.tick():
            self.render()

    def _on_mode_changed(self, old_mode: NavigationMode, new_mode: NavigationMode) -> None:
        self.vtk_widget.setCursor(CURSORS.get(new_mode, QtCore.Qt.CursorShape.ArrowCursor))
        self.modeChanged.emit(old_mode, new_mode)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self._frame_timer.stop()
        self.vtk_widget.Finalize()
        super().closeEvent(event)
