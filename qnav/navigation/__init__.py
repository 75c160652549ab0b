from qnav.navigation.base_style import Dispatch, NavigationStyle
from qnav.navigation.click_handler import ClickHandler
from qnav.navigation.fallback_handler import DefaultEventHandler
from qnav.navigation.inventor_style import InventorNavigationStyle
from qnav.navigation.mode_resolver import ButtonCombo, TRANSITIONS, resolve_mode
__all__ = [
    "Dispatch",
    "NavigationStyle",
    "ClickHandler",
    "DefaultEventHandler",
    "InventorNavigationStyle",
    "ButtonCombo",
    "TRANSITIONS",
    "resolve_mode",
]
