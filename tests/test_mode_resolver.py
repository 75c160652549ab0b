import pytest

from qnav.core.navigation_state import NavigationState
from qnav.navigation.mode_resolver import ButtonCombo, TRANSITIONS, resolve_mode
from qnav.viewers.controllers.interaction_controller import NavigationMode as M


def _never_spin():
    raise AssertionError("spin check must only run when a drag ends")


@pytest.mark.parametrize("combo, expected", [
    (ButtonCombo(button3=True), M.PANNING),
    (ButtonCombo(ctrl=True, shift=True), M.PANNING),
    (ButtonCombo(button1=True, ctrl=True, shift=True), M.PANNING),
    (ButtonCombo(ctrl=True), M.SELECTION),
    (ButtonCombo(button1=True, ctrl=True), M.SELECTION),
    (ButtonCombo(shift=True), M.SELECTION),
    (ButtonCombo(button1=True, shift=True), M.SELECTION),
    (ButtonCombo(button1=True, button3=True), M.ZOOMING),
    (ButtonCombo(button3=True, ctrl=True), M.ZOOMING),
    (ButtonCombo(button2=True, ctrl=True, shift=True), M.ZOOMING),
])
@pytest.mark.parametrize("current", [M.IDLE, M.DRAGGING, M.SELECTION, M.SPINNING])
def test_fixed_transitions_ignore_current_mode(current, combo, expected):
    """Tests table entries whose target does not depend on the current mode"""
    assert resolve_mode(current, combo, should_spin=_never_spin) is expected


def test_no_buttons_goes_idle():
    for mode in (M.IDLE, M.SELECTION, M.PANNING, M.ZOOMING):
        assert resolve_mode(mode, ButtonCombo(), should_spin=_never_spin) is M.IDLE


def test_spinning_keeps_proposed_mode_when_nothing_is_held():
    assert resolve_mode(M.SPINNING, ButtonCombo()) is M.SPINNING
    assert resolve_mode(M.SPINNING, ButtonCombo(), proposed=M.IDLE) is M.IDLE


def test_drag_release_spins_only_when_asked_function_agrees():
    assert resolve_mode(M.DRAGGING, ButtonCombo(), should_spin=lambda: True) is M.SPINNING
    assert resolve_mode(M.DRAGGING, ButtonCombo(), should_spin=lambda: False) is M.IDLE
    assert resolve_mode(M.DRAGGING, ButtonCombo()) is M.IDLE


def test_button1_drags_unless_selecting():
    combo = ButtonCombo(button1=True)
    assert resolve_mode(M.IDLE, combo) is M.DRAGGING
    assert resolve_mode(M.PANNING, combo) is M.DRAGGING
    assert resolve_mode(M.SELECTION, combo) is M.SELECTION


@pytest.mark.parametrize("combo", [
    ButtonCombo(button2=True),
    ButtonCombo(button1=True, button2=True),
    ButtonCombo(button2=True, shift=True),
    ButtonCombo(button1=True, button2=True, button3=True, ctrl=True, shift=True),
])
def test_unknown_combo_keeps_mode(combo):
    assert combo not in TRANSITIONS
    assert resolve_mode(M.PANNING, combo) is M.PANNING
    assert resolve_mode(M.PANNING, combo, proposed=M.IDLE) is M.IDLE


def test_combo_from_state():
    state = NavigationState()
    state.buttons.button1_down = True
    state.buttons.button3_down = True
    state.modifiers.shift_down = True

    combo = ButtonCombo.from_state(state)

    assert combo == ButtonCombo(button1=True, button3=True, shift=True)
    assert not combo.is_empty
    assert ButtonCombo().is_empty
