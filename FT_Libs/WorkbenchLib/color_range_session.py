"""
Live color range preview for Filter Tool.

A session takes a copy of the workbench image as its base, shows the color
range result and re-renders the preview from a fresh copy of the base each
time the range controls change.
"""

import logging
from typing import Optional, Sequence

from FT_Libs.constants import (
    CHANNEL_MAX_VALUE,
    CHANNEL_MIN_VALUE,
    DEFAULT_RANGE_KEEP,
    DEFAULT_RANGE_MAXIMUMS,
    DEFAULT_RANGE_MINIMUMS,
)
from FT_Libs.FiltersLib.color_range_filter import ColorRangeFilter
from FT_Libs.FiltersLib.image_models import ImageArray
from FT_Libs.WorkbenchLib.workbench import FilterWorkbench

logger = logging.getLogger(__name__)


def clamp_channel_value(value: int) -> int:
    """Clamp a control value into the 0-255 sample range."""
    return int(max(CHANNEL_MIN_VALUE, min(CHANNEL_MAX_VALUE, int(value))))


class ColorRangeSession:
    def __init__(
        self,
        workbench: FilterWorkbench,
        color_range: Optional[ColorRangeFilter] = None,
    ) -> None:
        self.workbench = workbench
        self.color_range = color_range or ColorRangeFilter(
            DEFAULT_RANGE_MINIMUMS, DEFAULT_RANGE_MAXIMUMS, DEFAULT_RANGE_KEEP
        )
        self.base_image: Optional[ImageArray] = None

    @property
    def active(self) -> bool:
        return self.base_image is not None

    def start(self) -> ImageArray:
        """
        Begin previewing against the current workbench image.

        Returns:
            The first preview image

        Raises:
            RuntimeError: If the workbench has no image loaded
        """
        if self.workbench.image is None:
            raise RuntimeError("No image loaded to preview the color range on")

        if not self.active:
            self.color_range.add_listener(self._refresh_preview)
        self.base_image = self.workbench.image.copy()
        preview = self.color_range.process(self.workbench.image.copy())
        self.workbench.set_image(preview)
        return preview

    def update_controls(
        self,
        keep: bool,
        minimums: Sequence[int],
        maximums: Sequence[int],
    ) -> None:
        """
        Transfer control values into the filter and notify listeners.

        Values are clamped into 0-255 the way the range sliders are.

        Raises:
            InvalidConfiguration: If the sequences are empty or differ in length
        """
        self.color_range.configure(
            [clamp_channel_value(value) for value in minimums],
            [clamp_channel_value(value) for value in maximums],
            keep,
        )
        self.color_range.notify_listeners()

    def stop(self) -> None:
        """Stop following control changes; the last preview stays on the workbench."""
        self.color_range.remove_listener(self._refresh_preview)
        self.base_image = None

    def _refresh_preview(self) -> None:
        if self.base_image is None:
            return
        self.workbench.set_image(self.color_range.process(self.base_image.copy()))
        logger.debug(f"Preview refreshed for {self.color_range.settings}")
