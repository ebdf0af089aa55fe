"""
FiltersLib - Image filters

This module provides the color range keep/remove filter and the
OpenCV backed filters offered by the Filter Tool edit menu.
"""

from FT_Libs.FiltersLib.image_models import ChannelValues, ImageArray, channel_count
from FT_Libs.FiltersLib.color_range_filter import (
    ColorRangeFilter,
    ColorRangeSettings,
    InvalidConfiguration,
)
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

__all__ = [
    "ChannelValues",
    "ImageArray",
    "channel_count",
    "ColorRangeFilter",
    "ColorRangeSettings",
    "InvalidConfiguration",
    "BlackWhite",
    "Blur",
    "ColorSpace",
    "Contours",
    "ContrastBrightness",
    "Dilate",
    "Erode",
    "FillChannel",
    "GrayScale",
]
