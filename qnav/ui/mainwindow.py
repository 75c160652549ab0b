import logging

import vtk
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QLabel, QMainWindow

from qnav.app.app_settings_manager import AppSettingsManager
from qnav.utils.log_util import log_io
from qnav.viewers.controllers.interaction_controller import NavigationMode
from qnav.viewers.navigation_viewer import NavigationViewer

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main window holding one navigation viewer with a demo scene."""

    def __init__(self, settings_mgr: AppSettingsManager | None = None):
        """
        Initialize the main window.

        :param settings_mgr: Application settings manager.
        """
        super().__init__()

        self.setting = settings_mgr or AppSettingsManager()

        self.setWindowTitle("QNav - Inventor Navigation")
        self._setup_ui()
        self._setup_menus()
        self._setup_status_bar()

        self.show()

    def _setup_ui(self) -> None:
        """Setup the main UI layout"""
        self.viewer = NavigationViewer(settings_manager=self.setting, parent=self)
        self.setCentralWidget(self.viewer)
        self.setGeometry(100, 100, 1200, 800)

        self.viewer.modeChanged.connect(self._on_mode_changed)
        self._load_demo_scene()

    def _load_demo_scene(self) -> None:
        source = vtk.vtkConeSource()
        source.SetResolution(32)
        mapper = vtk.vtkPolyDataMapper()
        mapper.SetInputConnection(source.GetOutputPort())
        actor = vtk.vtkActor()
        actor.SetMapper(mapper)
        self.viewer.add_actor(actor)
        self.viewer.reset_view()

    def _setup_menus(self) -> None:
        """Create the menus for the main window."""
        menubar = self.menuBar()

        view_menu = menubar.addMenu("&View")
        view_menu.addAction("&Reset View", self.viewer.reset_view)
        view_menu.addAction("&Seek", self._start_seek)

        edit_menu = menubar.addMenu("&Edit")
        self.editing_action = QAction("&Editing", self)
        self.editing_action.setCheckable(True)
        self.editing_action.toggled.connect(self.viewer.set_editing)
        edit_menu.addAction(self.editing_action)

        file_menu = menubar.addMenu("&File")
        file_menu.addAction("&Quit", self.close)

    def _setup_status_bar(self) -> None:
        """Setup the status bar."""
        self._mode_label = QLabel("", self)
        self._hint_label = QLabel("", self)
        self.statusBar().addPermanentWidget(self._hint_label)
        self.statusBar().addPermanentWidget(self._mode_label)
        self._show_mode(self.viewer.navigation.current_mode)

    # =====================================================
    # Menu Actions
    # =====================================================

    @log_io(level=logging.INFO)
    def _start_seek(self) -> None:
        self.viewer.navigation.set_seek_mode(True)

    # =====================================================
    # Signal Handlers
    # =====================================================

    def _on_mode_changed(self, old_mode: NavigationMode, new_mode: NavigationMode) -> None:
        self._show_mode(new_mode)

    def _show_mode(self, mode: NavigationMode) -> None:
        navigation = self.viewer.navigation
        self._mode_label.setText(f"{navigation.user_friendly_name()}: {mode.name.lower()}")
        self._hint_label.setText(navigation.mouse_buttons(mode))
