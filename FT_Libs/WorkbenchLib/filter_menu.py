"""
Edit menu catalog for Filter Tool.

Describes the filters offered by the tool as plain data: each entry pairs a
sub-menu and a label with a ready-to-use filter instance. Entries are
addressed by their "Menu/Label" path, e.g. "Blur/3x3" or "Gray Scale".

Classes:
    MenuItem: One filter entry

Functions:
    build_edit_menu: Build the full list of edit menu entries
    find_menu_item: Look up an entry by path
"""

from dataclasses import dataclass
from typing import Any, List, Sequence

from FT_Libs.constants import (
    BLUR_SIZES,
    BRIGHTNESS_BIASES,
    CONTRAST_GAINS,
    MENU_BLACK_WHITE,
    MENU_BLUR,
    MENU_BRIGHTNESS,
    MENU_COLOR_RANGE,
    MENU_COLOR_SPACE,
    MENU_CONTOURS,
    MENU_CONTRAST,
    MENU_DILATE,
    MENU_EDIT,
    MENU_ERODE,
    MENU_GRAY_SCALE,
    MENU_REMOVE_CHANNELS,
    MENU_SEPARATOR,
    MORPHOLOGY_SIZES,
    REMOVABLE_CHANNELS,
)
from FT_Libs.FiltersLib.color_range_filter import ColorRangeFilter
from FT_Libs.FiltersLib.cv_filters import (
    BlackWhite,
    Blur,
    ColorSpace,
    Contours,
    ContrastBrightness,
    Dilate,
    Erode,
    FillChannel,
    GrayScale,
)


@dataclass
class MenuItem:
    """
    A filter entry of the edit menu.

    Attributes:
        menu: Sub-menu name ("Edit" for top level entries)
        label: Entry label inside the sub-menu
        image_filter: Object with a ``process(image) -> image`` method
    """
    menu: str
    label: str
    image_filter: Any

    @property
    def path(self) -> str:
        if self.menu == MENU_EDIT:
            return self.label
        return f"{self.menu}{MENU_SEPARATOR}{self.label}"


def _size_label(size: int) -> str:
    return f"{size}x{size}"


def build_edit_menu(color_range: ColorRangeFilter) -> List[MenuItem]:
    """
    Build the edit menu entries in display order.

    Args:
        color_range: The shared color range filter offered as "Color Range"

    Returns:
        List of MenuItem objects
    """
    items: List[MenuItem] = []

    color_spaces = [
        ColorSpace.bgr_to_hsv(),
        ColorSpace.hsv_to_bgr(),
        ColorSpace.rgb_to_hsv(),
        ColorSpace.hsv_to_rgb(),
        ColorSpace.bgr_to_xyz(),
        ColorSpace.xyz_to_bgr(),
        ColorSpace.rgb_to_xyz(),
        ColorSpace.xyz_to_rgb(),
    ]
    items.extend(MenuItem(MENU_COLOR_SPACE, space.name, space) for space in color_spaces)

    items.append(MenuItem(MENU_EDIT, MENU_COLOR_RANGE, color_range))

    items.extend(
        MenuItem(MENU_CONTRAST, str(gain), ContrastBrightness(gain, 0.0))
        for gain in CONTRAST_GAINS
    )
    items.extend(
        MenuItem(MENU_BRIGHTNESS, str(bias), ContrastBrightness(1.0, bias))
        for bias in BRIGHTNESS_BIASES
    )
    items.extend(
        MenuItem(MENU_REMOVE_CHANNELS, f"Channel {channel}", FillChannel(channel))
        for channel in REMOVABLE_CHANNELS
    )
    items.extend(
        MenuItem(MENU_BLUR, _size_label(size), Blur(size, size))
        for size in BLUR_SIZES
    )

    items.append(MenuItem(MENU_EDIT, MENU_GRAY_SCALE, GrayScale()))
    items.append(MenuItem(MENU_EDIT, MENU_BLACK_WHITE, BlackWhite()))

    items.extend(MenuItem(MENU_DILATE, _size_label(size), Dilate(size)) for size in MORPHOLOGY_SIZES)
    items.extend(MenuItem(MENU_ERODE, _size_label(size), Erode(size)) for size in MORPHOLOGY_SIZES)

    items.append(MenuItem(MENU_EDIT, MENU_CONTOURS, Contours()))
    return items


def find_menu_item(items: Sequence[MenuItem], path: str) -> MenuItem:
    """
    Find a menu entry by its path (case-insensitive).

    Raises:
        KeyError: If no entry has the given path
    """
    wanted = path.strip().lower()
    for item in items:
        if item.path.lower() == wanted:
            return item

    available = ", ".join(item.path for item in items)
    raise KeyError(f"No menu entry '{path}'. Available entries: {available}")
