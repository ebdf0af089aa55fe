"""
WorkbenchLib - Working image management

This module provides the headless filter workbench (open, grab, save,
undo, revert), the live color range preview, the edit menu catalog,
image I/O helpers and preference persistence.
"""

from FT_Libs.WorkbenchLib.preferences_store import PreferencesStore, get_default_preferences_path
from FT_Libs.WorkbenchLib.image_io import fetch_image, load_image, save_image, to_pil_image
from FT_Libs.WorkbenchLib.workbench import FilterWorkbench
from FT_Libs.WorkbenchLib.color_range_session import ColorRangeSession, clamp_channel_value
from FT_Libs.WorkbenchLib.filter_menu import MenuItem, build_edit_menu, find_menu_item

__all__ = [
    "PreferencesStore",
    "get_default_preferences_path",
    "fetch_image",
    "load_image",
    "save_image",
    "to_pil_image",
    "FilterWorkbench",
    "ColorRangeSession",
    "clamp_channel_value",
    "MenuItem",
    "build_edit_menu",
    "find_menu_item",
]
