import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
import vtk
from PySide6 import QtWidgets

from qnav.core.events import ButtonEvent, KeyboardEvent, MouseButton, PointerMoveEvent
from qnav.core.navigation_config import NavigationConfig
from qnav.navigation.inventor_style import InventorNavigationStyle
from qnav.viewers.camera.camera_adapter import CameraAdapter

VIEWPORT = (401, 301)  # normalized position = pixel / (400, 300)
CENTER = (200, 150)


class FakeViewer:
    def __init__(self, size=VIEWPORT):
        self.size = size
        self.editing = False
        self.viewing = False

    def is_editing(self):
        return self.editing

    def is_viewing(self):
        return self.viewing

    def set_viewing(self, on):
        self.viewing = on

    def viewport_size(self):
        return self.size


class FakePicker:
    def __init__(self, hit=None):
        self.hit = hit
        self.calls = []

    def pick(self, screen_pos):
        self.calls.append(tuple(screen_pos))
        return self.hit


class RecordingHandler:
    """Fallback / foreground stand-in that records what it is given."""
    def __init__(self, result=False):
        self.result = result
        self.events = []

    def forward(self, event):
        self.events.append(event)
        return self.result

    def try_handle(self, event):
        self.events.append(event)
        return self.result


class FakeMenu:
    def __init__(self):
        self.opened = []

    def open_menu(self, screen_pos):
        self.opened.append(tuple(screen_pos))


@pytest.fixture(scope="session")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(sys.argv)
    return app


@pytest.fixture
def camera():
    cam = vtk.vtkCamera()
    cam.SetPosition(0.0, 0.0, 10.0)
    cam.SetFocalPoint(0.0, 0.0, 0.0)
    cam.SetViewUp(0.0, 1.0, 0.0)
    return cam


@pytest.fixture
def adapter(camera):
    return CameraAdapter(camera, viewport_size=VIEWPORT)


@pytest.fixture
def viewer():
    return FakeViewer()


@pytest.fixture
def picker():
    return FakePicker()


@pytest.fixture
def fallback():
    return RecordingHandler()


@pytest.fixture
def menu():
    return FakeMenu()


@pytest.fixture
def config():
    return NavigationConfig()


@pytest.fixture
def style(adapter, viewer, picker, fallback, menu, config):
    return InventorNavigationStyle(
        adapter, viewer,
        picker=picker,
        fallback=fallback,
        popup_menu=menu,
        config=config,
    )


# ----------------------
# Event helpers
# ----------------------
def press(button=MouseButton.LEFT, pos=CENTER, t=0.0, ctrl=False, shift=False):
    return ButtonEvent(position=pos, timestamp=t, ctrl_down=ctrl, shift_down=shift,
                       button=button, pressed=True)


def release(button=MouseButton.LEFT, pos=CENTER, t=0.0, ctrl=False, shift=False):
    return ButtonEvent(position=pos, timestamp=t, ctrl_down=ctrl, shift_down=shift,
                       button=button, pressed=False)


def move(pos, t=0.0, ctrl=False, shift=False):
    return PointerMoveEvent(position=pos, timestamp=t, ctrl_down=ctrl, shift_down=shift)


def key(name, pressed=True, pos=CENTER, t=0.0, ctrl=False, shift=False):
    return KeyboardEvent(position=pos, timestamp=t, ctrl_down=ctrl, shift_down=shift,
                         key=name, pressed=pressed)
