"""Collaborators a navigation style talks to."""
from __future__ import annotations

from typing import Protocol, Sequence

from qnav.core.events import NavigationEvent


class ViewerContext(Protocol):
    """The viewer hosting the navigation style."""

    def is_editing(self) -> bool:
        """True while an object is being edited in the scene."""
        ...

    def is_viewing(self) -> bool:
        ...

    def set_viewing(self, on: bool) -> None:
        ...

    def viewport_size(self) -> tuple[int, int]:
        """Viewport size in pixels (width, height)."""
        ...


class ScenePicker(Protocol):
    def pick(self, screen_pos: Sequence[int]) -> tuple[float, float, float] | None:
        """World point of the nearest scene hit under a viewport pixel, None on a miss."""
        ...


class ForegroundHandler(Protocol):
    """Scene content that may claim an event before navigation sees it."""

    def try_handle(self, event: NavigationEvent) -> bool:
        ...


class FallbackHandler(Protocol):
    """Handler receiving the events navigation does not consume."""

    def forward(self, event: NavigationEvent) -> bool:
        ...


class PopupMenu(Protocol):
    def open_menu(self, screen_pos: Sequence[int]) -> None:
        ...
