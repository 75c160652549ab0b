"""Transition table from button/modifier combinations to navigation modes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from qnav.core.navigation_state import NavigationState
from qnav.viewers.controllers.interaction_controller import NavigationMode


@dataclass(frozen=True)
class ButtonCombo:
    """Which buttons and modifiers are held down."""
    button1: bool = False
    button2: bool = False
    button3: bool = False
    ctrl: bool = False
    shift: bool = False

    @classmethod
    def from_state(cls, state: NavigationState) -> ButtonCombo:
        return cls(
            button1=state.buttons.button1_down,
            button2=state.buttons.button2_down,
            button3=state.buttons.button3_down,
            ctrl=state.modifiers.ctrl_down,
            shift=state.modifiers.shift_down,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.button1 or self.button2 or self.button3 or self.ctrl or self.shift)


NO_BUTTONS = ButtonCombo()
BUTTON1_ONLY = ButtonCombo(button1=True)

# Combos with a fixed target mode. NO_BUTTONS and BUTTON1_ONLY depend on
# the current mode and are resolved in resolve_mode().
TRANSITIONS: dict[ButtonCombo, NavigationMode] = {
    ButtonCombo(button3=True): NavigationMode.PANNING,
    ButtonCombo(ctrl=True, shift=True): NavigationMode.PANNING,
    ButtonCombo(button1=True, ctrl=True, shift=True): NavigationMode.PANNING,

    ButtonCombo(ctrl=True): NavigationMode.SELECTION,
    ButtonCombo(button1=True, ctrl=True): NavigationMode.SELECTION,
    ButtonCombo(shift=True): NavigationMode.SELECTION,
    ButtonCombo(button1=True, shift=True): NavigationMode.SELECTION,

    ButtonCombo(button1=True, button3=True): NavigationMode.ZOOMING,
    ButtonCombo(button3=True, ctrl=True): NavigationMode.ZOOMING,
    ButtonCombo(button2=True, ctrl=True, shift=True): NavigationMode.ZOOMING,
}


def resolve_mode(current: NavigationMode, combo: ButtonCombo,
                 proposed: NavigationMode | None = None,
                 should_spin: Callable[[], bool] | None = None) -> NavigationMode:
    """
    Next mode for a combo.

    :param current: Mode before the event
    :param combo: Buttons and modifiers after the event
    :param proposed: Mode the event handler asked for, defaults to `current`;
        kept whenever the table has no opinion
    :param should_spin: Asked only when a drag ends with nothing held down
    :return: The next mode
    """
    if proposed is None:
        proposed = current

    if combo == NO_BUTTONS:
        if current is NavigationMode.SPINNING:
            return proposed
        if current is NavigationMode.DRAGGING and should_spin is not None and should_spin():
            return NavigationMode.SPINNING
        return NavigationMode.IDLE

    if combo == BUTTON1_ONLY:
        if current is NavigationMode.SELECTION:
            return proposed
        return NavigationMode.DRAGGING

    return TRANSITIONS.get(combo, proposed)
